"""Cassandra connection and schema management.

Provides:
- Cluster/session lifecycle owned by a ``CassandraConnection`` instance
- Keyspace and table initialization
"""

import structlog
from cassandra.auth import PlainTextAuthProvider
from cassandra.policies import DCAwareRoundRobinPolicy, TokenAwarePolicy
from cassandra_asyncio.cluster import Cluster

from mflix_store.comments.models import COMMENTS_TABLES_CQL
from mflix_store.config.settings import Settings
from mflix_store.sessions.models import SESSIONS_TABLES_CQL
from mflix_store.users.models import USERS_TABLES_CQL


logger = structlog.get_logger(__name__)


ALL_TABLES_CQL = [
    *COMMENTS_TABLES_CQL,
    *USERS_TABLES_CQL,
    *SESSIONS_TABLES_CQL,
]


class CassandraConnection:
    """Cassandra connection manager.

    One instance per process, created at start-up from settings and
    handed to whoever needs a session. Connecting is synchronous; the
    resulting session supports ``aexecute()``.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._cluster: Cluster | None = None
        self._session = None

    def connect(self):
        """Establish connection to the Cassandra cluster.

        Returns:
            Active Cassandra session with ``aexecute()`` support

        Raises:
            ConnectionError: If connection fails
        """
        if self._session is not None:
            return self._session

        settings = self.settings

        auth_provider = None
        if settings.cassandra_username and settings.cassandra_password:
            auth_provider = PlainTextAuthProvider(
                username=settings.cassandra_username,
                password=settings.cassandra_password,
            )

        self._cluster = Cluster(
            contact_points=settings.cassandra_hosts,
            port=settings.cassandra_port,
            auth_provider=auth_provider,
            protocol_version=settings.cassandra_protocol_version,
            load_balancing_policy=TokenAwarePolicy(
                DCAwareRoundRobinPolicy(local_dc=settings.cassandra_datacenter)
            ),
            connect_timeout=settings.cassandra_connect_timeout,
        )

        try:
            self._session = self._cluster.connect()
            logger.info(
                "cassandra_connected",
                hosts=settings.cassandra_hosts,
                port=settings.cassandra_port,
                protocol_version=settings.cassandra_protocol_version,
            )
        except Exception as e:
            logger.error("cassandra_connection_failed", error=str(e))
            self._cluster.shutdown()
            self._cluster = None
            raise ConnectionError(f"Failed to connect to Cassandra: {e}") from e

        return self._session

    @property
    def session(self):
        """Active session, connecting if necessary."""
        if self._session is None:
            return self.connect()
        return self._session

    def disconnect(self) -> None:
        """Close connection to Cassandra."""
        if self._session is not None:
            self._session.shutdown()
            self._session = None
            logger.info("cassandra_session_closed")

        if self._cluster is not None:
            self._cluster.shutdown()
            self._cluster = None
            logger.info("cassandra_cluster_closed")

    def is_connected(self) -> bool:
        """Check if connection is active."""
        return self._session is not None and not self._session.is_shutdown


def keyspace_cql(settings: Settings) -> str:
    """Build the CREATE KEYSPACE statement for the configured environment."""
    if settings.is_production:
        # Multi-replica so QUORUM reads and writes mean a real majority
        replication = (
            f"'class': 'NetworkTopologyStrategy', "
            f"'{settings.cassandra_datacenter}': {settings.cassandra_replication_factor}"
        )
    else:
        replication = "'class': 'SimpleStrategy', 'replication_factor': 1"

    return f"""
        CREATE KEYSPACE IF NOT EXISTS {settings.cassandra_keyspace}
        WITH replication = {{{replication}}}
        AND durable_writes = true
    """


async def init_schema(session, settings: Settings) -> None:
    """Create keyspace and tables if they don't exist.

    Args:
        session: Active Cassandra session with ``aexecute()``
        settings: Application settings (keyspace, replication)
    """
    keyspace = settings.cassandra_keyspace

    await session.aexecute(keyspace_cql(settings))
    logger.info("keyspace_created", keyspace=keyspace)

    for cql_template in ALL_TABLES_CQL:
        await session.aexecute(cql_template.format(keyspace=keyspace))

    logger.info("tables_created", keyspace=keyspace, statements=len(ALL_TABLES_CQL))
