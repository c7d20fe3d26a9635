"""Tests for connection management and schema creation."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from mflix_store.config.settings import Settings
from mflix_store.core.database.cassandra import (
    ALL_TABLES_CQL,
    CassandraConnection,
    init_schema,
    keyspace_cql,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        cassandra_keyspace="catalog",
        cassandra_username="cassandra",
        cassandra_password="cassandra",
    )


class TestCassandraConnection:
    def test_connect_and_disconnect(self, settings):
        cluster = Mock()
        with patch(
            "mflix_store.core.database.cassandra.Cluster", return_value=cluster
        ) as cluster_cls:
            connection = CassandraConnection(settings)
            session = connection.connect()

        assert session is cluster.connect.return_value
        assert connection.connect() is session
        cluster_cls.assert_called_once()
        assert cluster_cls.call_args.kwargs["auth_provider"] is not None

        connection.disconnect()

        session.shutdown.assert_called_once()
        cluster.shutdown.assert_called_once()
        assert not connection.is_connected()

    def test_connect_failure(self, settings):
        cluster = Mock()
        cluster.connect.side_effect = RuntimeError("no route to host")
        with patch(
            "mflix_store.core.database.cassandra.Cluster", return_value=cluster
        ), pytest.raises(ConnectionError):
            CassandraConnection(settings).connect()

        cluster.shutdown.assert_called_once()


class TestSchema:
    def test_development_keyspace_uses_single_replica(self, settings):
        cql = keyspace_cql(settings)

        assert "CREATE KEYSPACE IF NOT EXISTS catalog" in cql
        assert "'replication_factor': 1" in cql

    def test_production_keyspace_uses_datacenter_replication(self):
        settings = Settings(
            _env_file=None,
            environment="production",
            cassandra_datacenter="dc1",
            cassandra_replication_factor=3,
        )

        cql = keyspace_cql(settings)

        assert "NetworkTopologyStrategy" in cql
        assert "'dc1': 3" in cql

    @pytest.mark.asyncio
    async def test_init_schema_creates_every_table(self, settings):
        session = Mock()
        session.aexecute = AsyncMock()

        await init_schema(session, settings)

        statements = [call.args[0] for call in session.aexecute.await_args_list]
        assert len(statements) == 1 + len(ALL_TABLES_CQL)
        assert all("{keyspace}" not in statement for statement in statements)
        assert any("catalog.comments" in statement for statement in statements)
        assert any("catalog.sessions" in statement for statement in statements)
        assert any("catalog.users" in statement for statement in statements)
