"""Data-access layer for the mflix movie catalog.

Comments, user accounts and login sessions stored in Cassandra.
"""

from mflix_store.comments import Comment, CommentStore, Critic, new_comment
from mflix_store.core import (
    DataAccessError,
    DeleteAcknowledgement,
    DuplicateKeyError,
    Err,
    MalformedIdentifierError,
    NotFoundError,
    Ok,
    PersistenceError,
    Result,
    StorageUnavailableError,
    ValidationError,
    WriteOutcome,
)
from mflix_store.core.database import StoreConfig
from mflix_store.sessions import Session, SessionStore
from mflix_store.store import MflixStore
from mflix_store.users import User, UserStore


__version__ = "0.1.0"

__all__ = [
    "Comment",
    "CommentStore",
    "Critic",
    "DataAccessError",
    "DeleteAcknowledgement",
    "DuplicateKeyError",
    "Err",
    "MalformedIdentifierError",
    "MflixStore",
    "NotFoundError",
    "Ok",
    "PersistenceError",
    "Result",
    "Session",
    "SessionStore",
    "StorageUnavailableError",
    "StoreConfig",
    "User",
    "UserStore",
    "ValidationError",
    "WriteOutcome",
    "new_comment",
]
