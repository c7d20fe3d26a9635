"""Database models for movie comments.

Cassandra table definitions for:
- Comments: one row per comment, keyed by the caller-supplied identifier
- Movie index: secondary index for listing a movie's comments

Ownership is recorded in ``author_email`` (normalised to lower case) and
enforced by the conditional writes in the store.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, NamedTuple
from uuid import uuid4

from mflix_store.core.identifiers import from_storage_id, normalize_email


COMMENT_SCHEMA_VERSION = 1


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

COMMENT_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.comments (
    id UUID PRIMARY KEY,
    movie_id TEXT,
    author_email TEXT,
    author_name TEXT,
    text TEXT,
    date TIMESTAMP,
    schema_version INT
)
"""

COMMENT_MOVIE_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS comments_movie_idx
ON {keyspace}.comments (movie_id)
"""

COMMENTS_TABLES_CQL = [
    COMMENT_TABLE_CQL,
    COMMENT_MOVIE_INDEX_CQL,
]


def ensure_utc_aware(dt: datetime | None) -> datetime | None:
    """Ensure datetime is UTC-aware (Cassandra returns naive datetimes)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


# ==============================================================================
# Entity Classes
# ==============================================================================


@dataclass
class Comment:
    """A user's comment on a movie."""

    id: str | None
    movie_id: str | None
    author_email: str
    text: str
    date: datetime | None = None
    author_name: str | None = None
    schema_version: int = COMMENT_SCHEMA_VERSION

    @classmethod
    def from_row(cls, row: Any) -> "Comment":
        """Create Comment from Cassandra row."""
        return cls(
            id=from_storage_id(row.id),
            movie_id=row.movie_id,
            author_email=row.author_email or "",
            text=row.text or "",
            date=ensure_utc_aware(row.date),
            author_name=getattr(row, "author_name", None),
            schema_version=getattr(row, "schema_version", None)
            or COMMENT_SCHEMA_VERSION,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "movie_id": self.movie_id,
            "author_email": self.author_email,
            "author_name": self.author_name,
            "text": self.text,
            "date": self.date.isoformat() if self.date else None,
        }


class Critic(NamedTuple):
    """Leaderboard entry: an author and how many comments they wrote."""

    user_identity: str
    comment_count: int


# ==============================================================================
# Factory Functions
# ==============================================================================


def new_comment(
    movie_id: str,
    author_email: str,
    text: str,
    author_name: str | None = None,
) -> Comment:
    """Create a new comment with a fresh identifier and the current date."""
    return Comment(
        id=str(uuid4()),
        movie_id=movie_id,
        author_email=normalize_email(author_email),
        text=text,
        date=datetime.now(UTC),
        author_name=author_name,
    )
