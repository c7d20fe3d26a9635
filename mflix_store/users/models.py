"""Database models for user accounts.

Cassandra table definitions for:
- Users: keyed by normalised email, so the insert condition enforces
  email uniqueness

Note: Uses cassandra-driver directly (not an object mapper). Preferences
are an arbitrary JSON document stored as text and always replaced whole.
"""

import json
from typing import Any

from mflix_store.core.identifiers import normalize_email


USER_SCHEMA_VERSION = 1


USER_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.users (
    email TEXT PRIMARY KEY,
    name TEXT,
    password_hash TEXT,
    preferences TEXT,
    schema_version INT
)
"""

USERS_TABLES_CQL = [
    USER_TABLE_CQL,
]


def dump_preferences(preferences: dict[str, Any] | None) -> str | None:
    """Serialize preferences for storage."""
    if preferences is None:
        return None
    return json.dumps(preferences, sort_keys=True, default=str)


def load_preferences(raw: str | None) -> dict[str, Any]:
    """Deserialize stored preferences (missing column means no preferences)."""
    if not raw:
        return {}
    return json.loads(raw)


class User:
    """User account.

    Attributes:
        email: Unique email address (normalised to lower case)
        name: Display name
        password_hash: Hashed password, produced by the authentication layer
        preferences: Free-form user preferences
        schema_version: Version of the stored row layout
    """

    def __init__(
        self,
        email: str = "",
        name: str = "",
        password_hash: str = "",
        preferences: dict[str, Any] | None = None,
        schema_version: int = USER_SCHEMA_VERSION,
    ):
        self.email = normalize_email(email)
        self.name = name
        self.password_hash = password_hash
        self.preferences = preferences if preferences is not None else {}
        self.schema_version = schema_version

    @classmethod
    def from_row(cls, row: Any) -> "User":
        """Create User instance from Cassandra row."""
        return cls(
            email=row.email,
            name=row.name or "",
            password_hash=row.password_hash or "",
            preferences=load_preferences(row.preferences),
            schema_version=getattr(row, "schema_version", None) or USER_SCHEMA_VERSION,
        )

    def to_dict(self, include_password: bool = False) -> dict[str, Any]:
        """Convert to dictionary (excludes password_hash by default)."""
        data = {
            "email": self.email,
            "name": self.name,
            "preferences": self.preferences,
        }
        if include_password:
            data["password_hash"] = self.password_hash
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.to_dict(include_password=True) == other.to_dict(
            include_password=True
        )

    def __repr__(self) -> str:
        return f"User(email={self.email!r}, name={self.name!r})"
