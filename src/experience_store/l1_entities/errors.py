"""Domain error types."""


class ExperienceStoreError(Exception):
    """Base class for every failure an operation reports to its caller."""

    code = 'EXPERIENCE_STORE_ERROR'


class InvalidIdentifierError(ExperienceStoreError):
    """Raised when a session id is empty or could escape the storage root."""

    code = 'INVALID_IDENTIFIER'


class StorageError(ExperienceStoreError):
    """Raised when a directory or file cannot be created, written, or read."""

    code = 'STORAGE_ERROR'


class StagingMissingError(ExperienceStoreError):
    """Raised when finalize runs on a session that was never initialized."""

    code = 'STAGING_MISSING'


class AggregationError(ExperienceStoreError):
    """Raised when a file consumed by finalize cannot be parsed."""

    code = 'AGGREGATION_ERROR'

    def __init__(self, message: str, filename: str) -> None:
        super().__init__(message)
        self.filename = filename


class SchemaError(ExperienceStoreError):
    """Raised when a request or a persisted object misses required fields."""

    code = 'SCHEMA_ERROR'
