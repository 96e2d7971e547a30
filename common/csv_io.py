from functools import reduce

from pyspark.errors import AnalysisException
from pyspark.sql import DataFrame, SparkSession
from pyspark.sql import functions as F
from pyspark.sql.types import DecimalType, StringType, StructField, StructType

from common.errors import DuplicateKeyError, SchemaValidationError, SourceNotFoundError
from common.log import get_logger
from common.schema import TableSchema

logger = get_logger(__name__)

SAMPLE_SIZE = 5
CORRUPT_RECORD = "_corrupt_record"


def _try_cast(name, data_type):
    return F.expr(f"try_cast(`{name}` AS {data_type.simpleString()})")


def _decimal_pattern(data_type: DecimalType):
    # trailing zeros past the scale are lossless, any other extra digit is not
    return rf"^\s*[+-]?\d*(\.\d{{0,{data_type.scale}}}0*)?\s*$"


def _bad_record_condition(table_schema: TableSchema):
    # too few or too many fields
    checks = [F.col(CORRUPT_RECORD).isNotNull()]
    for name, data_type in table_schema.columns:
        raw = F.col(name)
        if name in table_schema.required:
            checks.append(raw.isNull())
        if data_type.simpleString() != "string":
            checks.append(raw.isNotNull() & _try_cast(name, data_type).isNull())
        if isinstance(data_type, DecimalType):
            checks.append(raw.isNotNull() & ~raw.rlike(_decimal_pattern(data_type)))
    for name in table_schema.date_columns:
        checks.append(F.col(name).isNotNull() & F.expr(f"try_cast(`{name}` AS date)").isNull())
    return reduce(lambda left, right: left | right, checks)


def _check_unique(df: DataFrame, table_schema: TableSchema):
    for name in table_schema.unique:
        dupes = df.groupBy(name).count().where(F.col("count") > 1)
        dupe_count = dupes.count()
        if dupe_count:
            samples = [row[name] for row in dupes.orderBy(name).limit(SAMPLE_SIZE).collect()]
            logger.error("Rejected %s: %d duplicated %s value(s)", table_schema.name, dupe_count, name)
            raise DuplicateKeyError(table_schema.name, name, dupe_count, samples)


def load_table(spark: SparkSession, path: str, table_schema: TableSchema) -> DataFrame:
    """
    Read a headerless CSV source and coerce it to the declared schema.

    Every field is read as a string first; records with the wrong number of
    fields, or a value that does not coerce exactly to its declared type,
    fail the whole load.
    """
    read_schema = StructType(table_schema.raw_struct().fields + [StructField(CORRUPT_RECORD, StringType(), True)])
    try:
        raw = (
            spark.read
            .option("header", False)
            .option("mode", "PERMISSIVE")
            .option("columnNameOfCorruptRecord", CORRUPT_RECORD)
            .schema(read_schema)
            .csv(path)
        )
    except AnalysisException as e:
        if "PATH_NOT_FOUND" in str(e) or "Path does not exist" in str(e):
            raise SourceNotFoundError(path) from e
        raise

    bad = raw.where(_bad_record_condition(table_schema))
    bad_count = bad.count()
    if bad_count:
        samples = [
            row[CORRUPT_RECORD] or tuple(row[name] for name in table_schema.column_names)
            for row in bad.limit(SAMPLE_SIZE).collect()
        ]
        logger.error("Rejected %s: %d malformed record(s)", table_schema.name, bad_count)
        raise SchemaValidationError(table_schema.name, bad_count, samples)

    typed = raw.select([
        _try_cast(name, data_type).alias(name) if data_type.simpleString() != "string" else F.col(name)
        for name, data_type in table_schema.columns
    ])
    _check_unique(typed, table_schema)
    return typed


def write_single_csv(df: DataFrame, path: str, order_by=()):
    """Replace whatever is at path with a single header-first CSV part file."""
    if df.isEmpty():
        # the CSV writer may leave no header behind for zero rows
        header = ",".join(df.columns)
        (
            df.sparkSession.createDataFrame([(header,)], "value string")
            .coalesce(1)
            .write
            .mode("overwrite")
            .text(path)
        )
        return

    out = df.coalesce(1)
    if order_by:
        out = out.sortWithinPartitions(*order_by)

    (
        out.write
        .mode("overwrite")
        .option("header", True)
        .csv(path)
    )
