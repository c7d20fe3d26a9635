"""Shared fixtures for the data-access tests."""

from unittest.mock import AsyncMock, Mock

import pytest
from cassandra.cluster import Session
from fakes import FakeCassandraSession

from mflix_store.comments.store import CommentStore
from mflix_store.core.database.base import StoreConfig
from mflix_store.sessions.store import SessionStore
from mflix_store.store import MflixStore
from mflix_store.users.store import UserStore


@pytest.fixture
def store_config() -> StoreConfig:
    """Store configuration used by every test store."""
    return StoreConfig(keyspace="test_keyspace", leaderboard_page_size=2)


@pytest.fixture
def fake_session() -> FakeCassandraSession:
    """In-memory Cassandra session (two rows per page to exercise paging)."""
    return FakeCassandraSession(page_size=2)


@pytest.fixture
def mock_session():
    """Mock Cassandra session."""
    session = Mock(spec=Session)
    # Mock prepare to avoid actual statement preparation
    session.prepare = Mock(side_effect=lambda query: Mock(query_string=query))
    # Make aexecute awaitable (cassandra-asyncio-driver)
    session.aexecute = AsyncMock(return_value=Mock())
    return session


@pytest.fixture
def comment_store(fake_session, store_config) -> CommentStore:
    return CommentStore(fake_session, store_config)


@pytest.fixture
def session_store(fake_session, store_config) -> SessionStore:
    return SessionStore(fake_session, store_config)


@pytest.fixture
def user_store(fake_session, store_config, session_store) -> UserStore:
    return UserStore(fake_session, store_config, sessions=session_store)


@pytest.fixture
def mflix_store(fake_session, store_config) -> MflixStore:
    return MflixStore(fake_session, store_config)
