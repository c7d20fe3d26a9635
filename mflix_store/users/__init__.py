"""User accounts module."""

from .models import USERS_TABLES_CQL, User
from .store import UserStore


__all__ = [
    "USERS_TABLES_CQL",
    "User",
    "UserStore",
]
