"""Session store: one login session per user.

Sessions are keyed by the user's normalised email, the same key the user
store cascades on.
"""

import structlog
from cassandra import WriteTimeout

from mflix_store.core.database.base import CassandraStore
from mflix_store.core.errors import DataAccessError, NotFoundError, ValidationError
from mflix_store.core.identifiers import normalize_email
from mflix_store.core.results import (
    DeleteAcknowledgement,
    Err,
    Ok,
    Result,
    WriteOutcome,
)

from .models import SESSION_SCHEMA_VERSION, Session


logger = structlog.get_logger(__name__)


class SessionStore(CassandraStore):
    """Upsert, lookup and deletion of user sessions."""

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for better performance."""
        # CQL UPDATE inserts the row when the key is absent
        self._upsert_session = self._prepare_write(f"""
            UPDATE {self.keyspace}.sessions
            SET jwt = ?, schema_version = ?
            WHERE user_id = ?
        """)
        self._select_session = self._prepare_read(
            f"SELECT * FROM {self.keyspace}.sessions WHERE user_id = ?"
        )
        self._delete_session = self._prepare_write(f"""
            DELETE FROM {self.keyspace}.sessions
            WHERE user_id = ?
            IF EXISTS
        """)

    async def create_user_session(self, user_id: str, jwt: str) -> Result[WriteOutcome]:
        """Create or replace the session of ``user_id``.

        Idempotent: calling it again keeps a single row holding the latest
        token.
        """
        if not user_id or not user_id.strip():
            return Err(ValidationError("User id is required", field="user_id"))
        if not jwt:
            return Err(ValidationError("Session token is required", field="jwt"))

        user_id = normalize_email(user_id)

        try:
            await self._execute(
                self._upsert_session, [jwt, SESSION_SCHEMA_VERSION, user_id]
            )
        except DataAccessError as e:
            return Err(e)

        logger.info("session_created", user_id=user_id)
        return Ok(WriteOutcome.CREATED)

    async def get_user_session(self, user_id: str) -> Result[Session]:
        """Return the session of ``user_id``; ``NotFoundError`` if logged out."""
        user_id = normalize_email(user_id)
        try:
            rows = await self._execute(self._select_session, [user_id])
        except DataAccessError as e:
            return Err(e)

        row = rows.one()
        if row is None:
            return Err(NotFoundError("Session not found", key=user_id))
        return Ok(Session.from_row(row))

    async def delete_user_sessions(
        self, user_id: str
    ) -> Result[DeleteAcknowledgement]:
        """Delete the session of ``user_id``.

        A user without a session is acknowledged with ``deleted_count=0``.
        A write timeout means the replicas did not confirm the delete and
        is reported as ``acknowledged=False``; any other storage failure is
        returned as ``Err``.
        """
        user_id = normalize_email(user_id)
        try:
            result = await self._execute(self._delete_session, [user_id])
        except DataAccessError as e:
            if isinstance(e.__cause__, WriteTimeout):
                logger.warning("session_delete_unacknowledged", user_id=user_id)
                return Ok(DeleteAcknowledgement(acknowledged=False))
            return Err(e)

        if not result.was_applied:
            logger.info("session_not_found_for_delete", user_id=user_id)
            return Ok(DeleteAcknowledgement(acknowledged=True, deleted_count=0))

        logger.info("session_deleted", user_id=user_id)
        return Ok(DeleteAcknowledgement(acknowledged=True, deleted_count=1))
