"""Comment store.

Create/read/update/delete of movie comments. Mutations are lightweight
transactions whose condition includes the author, so the ownership check
and the write are a single atomic step on the row.
"""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

import structlog

from mflix_store.core.database.base import CassandraStore, StoreConfig
from mflix_store.core.errors import (
    DataAccessError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from mflix_store.core.identifiers import normalize_email, to_storage_id
from mflix_store.core.results import Err, Ok, Result, WriteOutcome

from .leaderboard import LeaderboardAggregator
from .models import COMMENT_SCHEMA_VERSION, Comment, Critic


logger = structlog.get_logger(__name__)

_EPOCH = datetime.min.replace(tzinfo=UTC)


class CommentStore(CassandraStore):
    """Store for movie comments, enforcing author ownership on mutation."""

    DEFAULT_MOVIE_LIMIT = 50

    def __init__(self, session, config: StoreConfig):
        super().__init__(session, config)
        self.leaderboard = LeaderboardAggregator(session, config)

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for efficient queries."""
        self._select_comment = self._prepare_read(
            f"SELECT * FROM {self.keyspace}.comments WHERE id = ?"
        )
        self._select_by_movie = self._prepare_read(
            f"SELECT * FROM {self.keyspace}.comments WHERE movie_id = ?"
        )

        self._insert_comment = self._prepare_write(f"""
            INSERT INTO {self.keyspace}.comments
            (id, movie_id, author_email, author_name, text, date, schema_version)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            IF NOT EXISTS
        """)

        # Ownership is part of the condition, not a prior read
        self._update_owned_comment = self._prepare_write(f"""
            UPDATE {self.keyspace}.comments
            SET text = ?, date = ?
            WHERE id = ?
            IF author_email = ?
        """)

        # Upsert branch of update: only when no row holds the id yet
        self._insert_absent_comment = self._prepare_write(f"""
            INSERT INTO {self.keyspace}.comments
            (id, author_email, text, date, schema_version)
            VALUES (?, ?, ?, ?, ?)
            IF NOT EXISTS
        """)

        self._delete_owned_comment = self._prepare_write(f"""
            DELETE FROM {self.keyspace}.comments
            WHERE id = ?
            IF author_email = ?
        """)

    # ==========================================================================
    # Reads
    # ==========================================================================

    async def get(self, comment_id: str | UUID) -> Result[Comment]:
        """Fetch a comment by identifier."""
        try:
            rows = await self._execute(
                self._select_comment, [to_storage_id(comment_id)]
            )
        except DataAccessError as e:
            return Err(e)

        row = rows.one()
        if row is None:
            return Err(NotFoundError("Comment not found", key=str(comment_id)))
        return Ok(Comment.from_row(row))

    async def list_for_movie(
        self, movie_id: str, limit: int = DEFAULT_MOVIE_LIMIT
    ) -> Result[list[Comment]]:
        """List a movie's comments, newest first."""
        if limit < 1:
            return Err(ValidationError("Limit must be at least 1", field="limit"))

        try:
            rows = await self._fetch_all(self._select_by_movie, [movie_id])
        except DataAccessError as e:
            return Err(e)

        comments = [Comment.from_row(row) for row in rows]
        comments.sort(key=lambda c: c.date or _EPOCH, reverse=True)
        return Ok(comments[:limit])

    async def most_active_commenters(self) -> Result[list[Critic]]:
        """Top commenters by number of comments (see ``LeaderboardAggregator``)."""
        return await self.leaderboard.most_active_commenters()

    # ==========================================================================
    # Writes
    # ==========================================================================

    async def add(self, comment: Comment) -> Result[Comment]:
        """Insert a comment whose identifier was assigned by the caller.

        Returns:
            Ok with the stored comment, or Err with ``ValidationError`` when
            the id or author is missing, ``DuplicateKeyError`` when the id
            is taken, or another ``PersistenceError``
        """
        if comment.id is None or not str(comment.id).strip():
            return Err(ValidationError("Comment id cannot be null", field="id"))
        if not comment.author_email:
            return Err(
                ValidationError("Comment author cannot be empty", field="author_email")
            )

        stored = replace(comment, author_email=normalize_email(comment.author_email))
        try:
            result = await self._execute(
                self._insert_comment,
                [
                    to_storage_id(stored.id),
                    stored.movie_id,
                    stored.author_email,
                    stored.author_name,
                    stored.text,
                    stored.date,
                    stored.schema_version,
                ],
            )
        except DataAccessError as e:
            return Err(e)

        if not result.was_applied:
            logger.warning("comment_insert_duplicate", comment_id=stored.id)
            return Err(DuplicateKeyError("Comment id already exists", key=stored.id))

        logger.info(
            "comment_added",
            comment_id=stored.id,
            movie_id=stored.movie_id,
        )
        return Ok(stored)

    async def update(
        self,
        comment_id: str | UUID,
        text: str,
        requester_email: str,
    ) -> Result[WriteOutcome]:
        """Replace a comment's text when the requester is its author.

        The text and date are set only if the stored author matches. When no
        comment holds the id, one is created with the requester as author.
        Otherwise the comment belongs to someone else and nothing changes.

        Returns:
            Ok(UPDATED), Ok(DENIED), or Err on invalid input/storage failure
        """
        if not requester_email:
            return Err(ValidationError("Requester email is required", field="email"))
        if text is None:
            return Err(ValidationError("Comment text cannot be null", field="text"))

        owner = normalize_email(requester_email)
        now = datetime.now(UTC)
        try:
            key = to_storage_id(comment_id)
            result = await self._execute(
                self._update_owned_comment, [text, now, key, owner]
            )
            if result.was_applied:
                logger.info("comment_updated", comment_id=str(comment_id))
                return Ok(WriteOutcome.UPDATED)

            result = await self._execute(
                self._insert_absent_comment,
                [key, owner, text, now, COMMENT_SCHEMA_VERSION],
            )
        except DataAccessError as e:
            return Err(e)

        if result.was_applied:
            logger.info("comment_upserted", comment_id=str(comment_id))
            return Ok(WriteOutcome.UPDATED)

        logger.warning(
            "comment_update_denied",
            comment_id=str(comment_id),
            requester=owner,
        )
        return Ok(WriteOutcome.DENIED)

    async def delete(
        self, comment_id: str | UUID, requester_email: str
    ) -> Result[WriteOutcome]:
        """Delete a comment owned by the requester.

        Wrong id, wrong owner and an already deleted comment all yield
        ``DENIED``; the caller cannot tell them apart.
        """
        if not requester_email:
            return Err(ValidationError("Requester email is required", field="email"))

        try:
            result = await self._execute(
                self._delete_owned_comment,
                [to_storage_id(comment_id), normalize_email(requester_email)],
            )
        except DataAccessError as e:
            return Err(e)

        if not result.was_applied:
            logger.warning(
                "comment_delete_denied",
                comment_id=str(comment_id),
                requester=normalize_email(requester_email),
            )
            return Ok(WriteOutcome.DENIED)

        logger.info("comment_deleted", comment_id=str(comment_id))
        return Ok(WriteOutcome.DELETED)
