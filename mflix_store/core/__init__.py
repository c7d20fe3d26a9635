# Core infrastructure
from mflix_store.core.context import (
    RequestContext,
    clear_context,
    get_context,
    get_request_id,
    get_user_id,
    set_request_id,
    set_user_id,
)
from mflix_store.core.errors import (
    DataAccessError,
    DuplicateKeyError,
    MalformedIdentifierError,
    NotFoundError,
    PersistenceError,
    StorageUnavailableError,
    ValidationError,
)
from mflix_store.core.logging import configure_structlog, get_logger
from mflix_store.core.results import (
    DeleteAcknowledgement,
    Err,
    Ok,
    Result,
    WriteOutcome,
)


__all__ = [
    "DataAccessError",
    "DeleteAcknowledgement",
    "DuplicateKeyError",
    "Err",
    "MalformedIdentifierError",
    "NotFoundError",
    "Ok",
    "PersistenceError",
    "RequestContext",
    "Result",
    "StorageUnavailableError",
    "ValidationError",
    "WriteOutcome",
    "clear_context",
    "configure_structlog",
    "get_context",
    "get_logger",
    "get_request_id",
    "get_user_id",
    "set_request_id",
    "set_user_id",
]
