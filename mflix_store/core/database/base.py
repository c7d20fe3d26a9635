"""Shared plumbing for the Cassandra-backed stores.

Provides:
- ``StoreConfig``: immutable per-store configuration passed to constructors
- ``CassandraStore``: statement preparation with consistency levels and
  request execution with driver error translation
"""

from typing import TYPE_CHECKING, Any, Literal, Self

import structlog
from cassandra import ConsistencyLevel
from pydantic import BaseModel, ConfigDict, Field

from mflix_store.config.settings import MajorityConsistency, Settings
from mflix_store.core.errors import DRIVER_ERRORS, translate_driver_error


if TYPE_CHECKING:
    from cassandra.cluster import Session
    from cassandra.query import PreparedStatement


logger = structlog.get_logger(__name__)


def consistency_level(name: str) -> int:
    """Resolve a consistency level name (``"QUORUM"``) to the driver value."""
    return ConsistencyLevel.name_to_value[name]


class StoreConfig(BaseModel):
    """Configuration handed to every store at construction time."""

    model_config = ConfigDict(frozen=True)

    keyspace: str
    write_consistency: MajorityConsistency = "QUORUM"
    read_consistency: MajorityConsistency = "QUORUM"
    serial_consistency: Literal["SERIAL", "LOCAL_SERIAL"] = "SERIAL"
    leaderboard_consistency: MajorityConsistency = "QUORUM"
    leaderboard_size: int = Field(default=20, ge=1)
    leaderboard_page_size: int = Field(default=1000, ge=1)
    request_timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Build the store configuration from application settings."""
        return cls(
            keyspace=settings.cassandra_keyspace,
            write_consistency=settings.cassandra_write_consistency,
            read_consistency=settings.cassandra_read_consistency,
            serial_consistency=settings.cassandra_serial_consistency,
            leaderboard_consistency=settings.leaderboard_consistency,
            leaderboard_size=settings.leaderboard_size,
            leaderboard_page_size=settings.leaderboard_page_size,
            request_timeout=settings.cassandra_request_timeout,
        )


class CassandraStore:
    """Base class for stores backed by one Cassandra session."""

    def __init__(self, session: "Session", config: StoreConfig):
        """Initialize with Cassandra session and store configuration.

        Args:
            session: Cassandra driver session with ``aexecute()`` support
            config: Store configuration (keyspace, consistency levels)
        """
        self.session = session
        self.config = config
        self.keyspace = config.keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        raise NotImplementedError

    def _prepare_read(
        self, query: str, consistency: str | None = None
    ) -> "PreparedStatement":
        statement = self.session.prepare(query)
        statement.consistency_level = consistency_level(
            consistency or self.config.read_consistency
        )
        return statement

    def _prepare_write(self, query: str) -> "PreparedStatement":
        """Prepare a write; conditional (``IF ...``) writes use the serial level."""
        statement = self.session.prepare(query)
        statement.consistency_level = consistency_level(self.config.write_consistency)
        statement.serial_consistency_level = consistency_level(
            self.config.serial_consistency
        )
        return statement

    async def _execute(
        self,
        statement: Any,
        parameters: list[Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Execute a statement, translating driver failures.

        Raises:
            PersistenceError: the request failed or was not acknowledged
        """
        try:
            return await self.session.aexecute(
                statement,
                parameters,
                timeout=self.config.request_timeout,
                **kwargs,
            )
        except DRIVER_ERRORS as e:
            error = translate_driver_error(e)
            logger.warning(
                "cassandra_request_failed",
                store=type(self).__name__,
                code=error.code,
                error=str(e),
            )
            raise error from e

    async def _fetch_all(
        self, statement: Any, parameters: list[Any] | None = None
    ) -> list[Any]:
        """Read every page of a query using explicit paging state."""
        rows: list[Any] = []
        paging_state = None
        while True:
            result = await self._execute(
                statement, parameters, paging_state=paging_state
            )
            rows.extend(result.current_rows)
            paging_state = result.paging_state
            if not paging_state:
                return rows
