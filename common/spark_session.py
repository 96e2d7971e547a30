from dataclasses import dataclass, field
from typing import Optional, Tuple

from pyspark.sql import SparkSession


@dataclass(frozen=True)
class SparkConfig:
    """Static settings used to build the SparkSession for a job run."""

    app_name: str = "EMR Pipeline"
    master: Optional[str] = None
    shuffle_partitions: Optional[int] = None
    log_level: str = "WARN"
    extra: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)


def get_spark(config=None):
    """
    Create or get an existing SparkSession.

    Args:
        config: SparkConfig for the application (default: SparkConfig())

    Returns:
        SparkSession object
    """
    config = config or SparkConfig()

    builder = SparkSession.builder.appName(config.app_name)
    if config.master:
        builder = builder.master(config.master)
    if config.shuffle_partitions:
        builder = builder.config("spark.sql.shuffle.partitions", str(config.shuffle_partitions))
    for key, value in config.extra:
        builder = builder.config(key, value)

    spark = builder.getOrCreate()
    spark.sparkContext.setLogLevel(config.log_level)
    return spark
