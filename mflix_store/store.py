"""Operation surface of the data-access layer.

``MflixStore`` wires the comment, user and session stores around one
Cassandra session and exposes the operations the API layer calls, one
per request.
"""

from collections.abc import Mapping
from typing import Any, Self
from uuid import UUID

import structlog

from mflix_store.comments.models import Comment, Critic
from mflix_store.comments.store import CommentStore
from mflix_store.config.settings import Settings
from mflix_store.core.database.base import StoreConfig
from mflix_store.core.database.cassandra import CassandraConnection, init_schema
from mflix_store.core.logging import configure_structlog
from mflix_store.core.results import DeleteAcknowledgement, Result, WriteOutcome
from mflix_store.sessions.models import Session
from mflix_store.sessions.store import SessionStore
from mflix_store.users.models import User
from mflix_store.users.store import UserStore


logger = structlog.get_logger(__name__)


class MflixStore:
    """Comments, users and sessions behind a single set of operations."""

    def __init__(
        self,
        session,
        config: StoreConfig,
        connection: CassandraConnection | None = None,
    ):
        self.config = config
        self.connection = connection
        self.comments = CommentStore(session, config)
        self.sessions = SessionStore(session, config)
        self.users = UserStore(session, config, sessions=self.sessions)

    @classmethod
    async def open(
        cls,
        settings: Settings,
        create_schema: bool = False,
        configure_logging: bool = True,
    ) -> Self:
        """Connect to Cassandra and build the stores.

        Args:
            settings: Application settings
            create_schema: Create keyspace and tables before preparing statements
            configure_logging: Configure structlog from ``settings`` first;
                pass False when the host application owns logging
        """
        if configure_logging:
            configure_structlog(settings)

        connection = CassandraConnection(settings)
        session = connection.connect()
        try:
            if create_schema:
                await init_schema(session, settings)
            session.set_keyspace(settings.cassandra_keyspace)
            store = cls(session, StoreConfig.from_settings(settings), connection)
        except Exception:
            connection.disconnect()
            raise

        logger.info("mflix_store_opened", keyspace=settings.cassandra_keyspace)
        return store

    def close(self) -> None:
        """Shut down the connection opened by ``open``."""
        if self.connection is not None:
            self.connection.disconnect()
            self.connection = None

    # ==========================================================================
    # Comments
    # ==========================================================================

    async def get_comment(self, comment_id: str | UUID) -> Result[Comment]:
        return await self.comments.get(comment_id)

    async def add_comment(self, comment: Comment) -> Result[Comment]:
        return await self.comments.add(comment)

    async def update_comment(
        self, comment_id: str | UUID, text: str, requester_email: str
    ) -> Result[WriteOutcome]:
        return await self.comments.update(comment_id, text, requester_email)

    async def delete_comment(
        self, comment_id: str | UUID, requester_email: str
    ) -> Result[WriteOutcome]:
        return await self.comments.delete(comment_id, requester_email)

    async def list_movie_comments(
        self, movie_id: str, limit: int = CommentStore.DEFAULT_MOVIE_LIMIT
    ) -> Result[list[Comment]]:
        return await self.comments.list_for_movie(movie_id, limit)

    async def most_active_commenters(self) -> Result[list[Critic]]:
        return await self.comments.most_active_commenters()

    # ==========================================================================
    # Users
    # ==========================================================================

    async def add_user(self, user: User) -> Result[WriteOutcome]:
        return await self.users.add_user(user)

    async def get_user(self, email: str) -> Result[User]:
        return await self.users.get_user(email)

    async def update_user_preferences(
        self, email: str, preferences: Mapping[str, Any] | None
    ) -> Result[WriteOutcome]:
        return await self.users.update_user_preferences(email, preferences)

    async def delete_user(self, email: str) -> Result[WriteOutcome]:
        return await self.users.delete_user(email)

    # ==========================================================================
    # Sessions
    # ==========================================================================

    async def create_user_session(self, user_id: str, jwt: str) -> Result[WriteOutcome]:
        return await self.sessions.create_user_session(user_id, jwt)

    async def get_user_session(self, user_id: str) -> Result[Session]:
        return await self.sessions.get_user_session(user_id)

    async def delete_user_sessions(
        self, user_id: str
    ) -> Result[DeleteAcknowledgement]:
        return await self.sessions.delete_user_sessions(user_id)
