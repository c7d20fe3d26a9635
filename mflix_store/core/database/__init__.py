"""Database plumbing for mflix-store.

The connection manager lives in ``mflix_store.core.database.cassandra``
and is imported from there, since it depends on every table module.
"""

from mflix_store.core.database.base import CassandraStore, StoreConfig


__all__ = [
    "CassandraStore",
    "StoreConfig",
]
