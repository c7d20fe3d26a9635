"""Error taxonomy for the data-access layer.

Errors are returned inside ``Err`` results rather than raised from the
public operations. ``translate_driver_error`` is the only place where
cassandra-driver exceptions are mapped onto this hierarchy.
"""

from cassandra import (
    CoordinationFailure,
    DriverException,
    OperationTimedOut,
    Timeout,
    Unavailable,
)
from cassandra.cluster import NoHostAvailable
from cassandra.protocol import ErrorMessage


# ==============================================================================
# Error Hierarchy
# ==============================================================================


class DataAccessError(Exception):
    """Base data-access error."""

    retryable: bool = False

    def __init__(self, message: str, code: str = "data_access_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(DataAccessError):
    """Caller-supplied input violates a precondition."""

    def __init__(self, message: str = "Invalid input", field: str | None = None):
        super().__init__(message, "validation_error")
        self.field = field


class NotFoundError(DataAccessError):
    """Lookup by key found nothing."""

    def __init__(self, message: str = "Not found", key: str | None = None):
        super().__init__(message, "not_found")
        self.key = key


class PersistenceError(DataAccessError):
    """The storage layer rejected or failed to acknowledge a request."""

    def __init__(self, message: str, code: str = "persistence_error"):
        super().__init__(message, code)


class DuplicateKeyError(PersistenceError):
    """Insert collided with an existing primary key."""

    def __init__(self, message: str = "Duplicate key", key: str | None = None):
        super().__init__(message, "duplicate_key")
        self.key = key


class MalformedIdentifierError(PersistenceError):
    """Identifier cannot be converted to a storage key."""

    def __init__(self, value: object):
        super().__init__(f"Malformed identifier: {value!r}", "malformed_identifier")
        self.value = value


class StorageUnavailableError(PersistenceError):
    """Transient failure: replicas unavailable or the request timed out."""

    retryable = True

    def __init__(self, message: str = "Storage temporarily unavailable"):
        super().__init__(message, "storage_unavailable")


# ==============================================================================
# Driver Translation
# ==============================================================================

TRANSIENT_DRIVER_ERRORS = (
    Unavailable,
    Timeout,
    CoordinationFailure,
    OperationTimedOut,
    NoHostAvailable,
)

# Exceptions the driver raises for a failed request (server or client side)
DRIVER_ERRORS = (DriverException, ErrorMessage, NoHostAvailable)


def translate_driver_error(error: Exception) -> PersistenceError:
    """Map a cassandra-driver exception onto the persistence taxonomy."""
    if isinstance(error, TRANSIENT_DRIVER_ERRORS):
        return StorageUnavailableError(f"{type(error).__name__}: {error}")
    return PersistenceError(f"{type(error).__name__}: {error}")
