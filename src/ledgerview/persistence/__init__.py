"""Persistence layer for projected state."""

from ledgerview.persistence.connection import close_all_pools, close_postgres_pool, get_postgres_pool
from ledgerview.persistence.factory import create_sink, detect_backend
from ledgerview.persistence.memory import InMemoryStateSink
from ledgerview.persistence.store import StateSink

__all__ = [
    "StateSink",
    "InMemoryStateSink",
    "get_postgres_pool",
    "close_postgres_pool",
    "close_all_pools",
    "create_sink",
    "detect_backend",
]
