"""Persistence errors."""


class ApplicationError(Exception):
    """Base error carrying the underlying exception, if any."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ConfigurationError(ApplicationError):
    """Raised for programming or configuration defects.

    Missing table name, missing key, unconnected DAO. Never retried.
    """

    pass


class StoreOperationError(ApplicationError):
    """Raised when a DynamoDB call fails."""

    pass
