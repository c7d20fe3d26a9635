"""Database models for login sessions.

A session row exists while the user is logged in. ``user_id`` is the
primary key, so a user can never hold more than one session row.
"""

from dataclasses import dataclass
from typing import Any


SESSION_SCHEMA_VERSION = 1


SESSION_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.sessions (
    user_id TEXT PRIMARY KEY,
    jwt TEXT,
    schema_version INT
)
"""

SESSIONS_TABLES_CQL = [
    SESSION_TABLE_CQL,
]


@dataclass
class Session:
    """Login session of a user."""

    user_id: str
    jwt: str

    @classmethod
    def from_row(cls, row: Any) -> "Session":
        """Create Session from Cassandra row."""
        return cls(user_id=row.user_id, jwt=row.jwt)
