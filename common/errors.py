class PipelineError(Exception):
    """Base class for errors that fail a pipeline run."""


class ConfigError(PipelineError):
    pass


class SourceNotFoundError(PipelineError):
    def __init__(self, path):
        super().__init__(f"Source path does not exist: {path}")
        self.path = path


class SchemaValidationError(PipelineError):
    """Raised when source records cannot be coerced to the declared schema."""

    def __init__(self, table, bad_records, samples=(), reason="malformed record(s)"):
        message = f"{bad_records} {reason} in {table}"
        if samples:
            message += "; e.g. " + "; ".join(str(s) for s in samples)
        super().__init__(message)
        self.table = table
        self.bad_records = bad_records
        self.samples = list(samples)


class DuplicateKeyError(SchemaValidationError):
    def __init__(self, table, column, duplicate_keys, samples=()):
        super().__init__(table, duplicate_keys, samples, reason=f"duplicated {column} value(s)")
        self.column = column
