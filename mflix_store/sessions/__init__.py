"""Login sessions module."""

from .models import SESSIONS_TABLES_CQL, Session
from .store import SessionStore


__all__ = [
    "SESSIONS_TABLES_CQL",
    "Session",
    "SessionStore",
]
