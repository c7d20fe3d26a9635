"""User store.

Business logic for:
- Account creation with unique email
- Account lookup
- Preference replacement
- Account deletion, cascading to the user's session first
"""

from collections.abc import Mapping
from typing import Any

import structlog

from mflix_store.core.database.base import CassandraStore, StoreConfig
from mflix_store.core.errors import (
    DataAccessError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from mflix_store.core.identifiers import normalize_email
from mflix_store.core.results import Err, Ok, Result, WriteOutcome
from mflix_store.sessions.store import SessionStore

from .models import User, dump_preferences


logger = structlog.get_logger(__name__)


class UserStore(CassandraStore):
    """Store for user accounts."""

    def __init__(
        self,
        session,
        config: StoreConfig,
        sessions: SessionStore | None = None,
    ):
        """Initialize with Cassandra session.

        Args:
            session: Cassandra driver session
            config: Store configuration
            sessions: Session store used for the delete cascade; one sharing
                the same session is created when omitted
        """
        super().__init__(session, config)
        self.sessions = sessions or SessionStore(session, config)

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for better performance."""
        self._select_user = self._prepare_read(
            f"SELECT * FROM {self.keyspace}.users WHERE email = ?"
        )
        self._insert_user = self._prepare_write(f"""
            INSERT INTO {self.keyspace}.users
            (email, name, password_hash, preferences, schema_version)
            VALUES (?, ?, ?, ?, ?)
            IF NOT EXISTS
        """)
        self._update_preferences = self._prepare_write(f"""
            UPDATE {self.keyspace}.users
            SET preferences = ?
            WHERE email = ?
            IF EXISTS
        """)
        self._delete_user = self._prepare_write(f"""
            DELETE FROM {self.keyspace}.users
            WHERE email = ?
            IF EXISTS
        """)

    # ==========================================================================
    # User Operations
    # ==========================================================================

    async def add_user(self, user: User) -> Result[WriteOutcome]:
        """Insert a new user.

        Returns:
            Ok(CREATED), or Err with ``DuplicateKeyError`` when the email is
            already registered
        """
        if not user.email:
            return Err(ValidationError("User email is required", field="email"))

        try:
            result = await self._execute(
                self._insert_user,
                [
                    user.email,
                    user.name,
                    user.password_hash,
                    dump_preferences(user.preferences),
                    user.schema_version,
                ],
            )
        except DataAccessError as e:
            return Err(e)

        if not result.was_applied:
            logger.warning("user_insert_duplicate", email=user.email)
            return Err(DuplicateKeyError("Email already registered", key=user.email))

        logger.info("user_added", email=user.email)
        return Ok(WriteOutcome.CREATED)

    async def get_user(self, email: str) -> Result[User]:
        """Find user by email address."""
        try:
            rows = await self._execute(self._select_user, [normalize_email(email)])
        except DataAccessError as e:
            return Err(e)

        row = rows.one()
        if row is None:
            return Err(NotFoundError("User not found", key=email))
        return Ok(User.from_row(row))

    async def update_user_preferences(
        self, email: str, preferences: Mapping[str, Any] | None
    ) -> Result[WriteOutcome]:
        """Replace the stored preferences of a user.

        The whole map is replaced: keys absent from ``preferences`` are
        dropped. ``None`` is rejected before anything is written.
        """
        if preferences is None:
            return Err(
                ValidationError("Preferences cannot be null", field="preferences")
            )
        if not isinstance(preferences, Mapping):
            return Err(
                ValidationError("Preferences must be a mapping", field="preferences")
            )

        key = normalize_email(email)
        try:
            result = await self._execute(
                self._update_preferences, [dump_preferences(dict(preferences)), key]
            )
        except DataAccessError as e:
            return Err(e)

        if not result.was_applied:
            logger.warning("user_preferences_target_missing", email=key)
            return Err(NotFoundError("User not found", key=key))

        logger.info("user_preferences_updated", email=key, keys=len(preferences))
        return Ok(WriteOutcome.UPDATED)

    async def delete_user(self, email: str) -> Result[WriteOutcome]:
        """Delete a user after deleting their session.

        The session goes first: a crash between the two steps leaves a user
        without a session, never a session without a user. A cascade the
        replicas did not acknowledge keeps the user (``DENIED``); a user who
        had no session is deleted normally.
        """
        key = normalize_email(email)

        cascade = await self.sessions.delete_user_sessions(key)
        if isinstance(cascade, Err):
            logger.error("user_delete_cascade_failed", email=key, code=cascade.error.code)
            return cascade
        if not cascade.value.acknowledged:
            logger.warning("user_delete_blocked_by_session_cascade", email=key)
            return Ok(WriteOutcome.DENIED)

        try:
            result = await self._execute(self._delete_user, [key])
        except DataAccessError as e:
            return Err(e)

        if not result.was_applied:
            logger.warning("user_not_found_for_delete", email=key)
            return Err(NotFoundError("User not found", key=key))

        logger.info(
            "user_deleted",
            email=key,
            sessions_deleted=cascade.value.deleted_count,
        )
        return Ok(WriteOutcome.DELETED)
