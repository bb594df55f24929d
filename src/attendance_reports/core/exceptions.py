class DomainError(Exception):
    """Base exception for reporting rule violations."""


class ValidationError(DomainError):
    """Raised when arguments are invalid (negative precision, zero weeks, ...)."""


class ColumnSpecError(ValidationError):
    """Raised when a table sort references a column nobody declared."""


class KeyExtractionError(DomainError):
    """Raised when a grouping key function fails; the whole grouping is aborted."""


class MalformedRecordError(DomainError):
    """Raised when a single record cannot be parsed.

    Aggregations catch this, skip the record and report a count instead.
    """


class DataSourceError(DomainError):
    """Raised when the REST backend cannot deliver a complete collection."""
