"""
Error taxonomy shared by the service layer and the HTTP layer.

Services raise these exceptions; ``app.main`` translates them into
HTTP responses.  Messages of ``InvalidArgumentError`` and
``CarerNotFoundError`` are shown to end users as is.
"""


class AppError(Exception):
    """Base class for all application errors."""


class InvalidArgumentError(AppError, ValueError):
    """The caller supplied missing, malformed or out-of-range input."""


class CarerNotFoundError(AppError, LookupError):
    """No carer matches the requested key."""


class StorageError(AppError):
    """The database failed or refused an operation."""
