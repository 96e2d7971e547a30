from dataclasses import dataclass
from typing import Tuple

from pyspark.sql.types import DataType, StringType, StructField, StructType


@dataclass(frozen=True)
class TableSchema:
    """
    Ordered (name, type) declaration for a headerless delimited source.

    required: columns that may not be empty.
    date_columns: string columns whose values must parse as dates.
    unique: columns whose values may appear only once.
    """

    name: str
    columns: Tuple[Tuple[str, DataType], ...]
    required: Tuple[str, ...] = ()
    date_columns: Tuple[str, ...] = ()
    unique: Tuple[str, ...] = ()

    def __post_init__(self):
        names = self.column_names
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate column in schema {self.name}: {names}")
        unknown = set(self.required) | set(self.date_columns) | set(self.unique)
        unknown -= set(names)
        if unknown:
            raise ValueError(f"Unknown column(s) {sorted(unknown)} in schema {self.name}")

    @property
    def column_names(self):
        return [name for name, _ in self.columns]

    def struct(self) -> StructType:
        return StructType([
            StructField(name, data_type, name not in self.required)
            for name, data_type in self.columns
        ])

    def raw_struct(self) -> StructType:
        """All-string view of the source, used to read before coercion."""
        return StructType([StructField(name, StringType(), True) for name in self.column_names])
