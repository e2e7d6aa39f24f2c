"""
Database connections for the SQL sinks.

PostgreSQL sinks pointed at the same DSN share one psycopg pool, kept in a
process-wide registry until closed. SQLite connections are not shared:
each SqliteStateSink opens its own, one per thread, through
connect_sqlite().
"""

from __future__ import annotations

import sqlite3
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from psycopg_pool import ConnectionPool

_pools: dict[str, ConnectionPool] = {}
_pools_lock = threading.Lock()

SQLITE_TIMEOUT_SECONDS = 30


def sqlite_path(connection_string: str) -> str:
    """
    Extract the database path from a sqlite:// URL.

    sqlite:///./ledgerview.db -> ./ledgerview.db, sqlite:///:memory: -> :memory:.
    Anything without the scheme is taken as a path already.
    """
    for scheme in ("sqlite:///", "sqlite://"):
        if connection_string.startswith(scheme):
            return connection_string[len(scheme) :]
    return connection_string


def connect_sqlite(db_path: str) -> sqlite3.Connection:
    """Open a SQLite connection with named-column rows, in WAL mode for file databases."""
    conn = sqlite3.connect(db_path, timeout=SQLITE_TIMEOUT_SECONDS, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    if db_path != ":memory:":
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute(f"PRAGMA busy_timeout = {SQLITE_TIMEOUT_SECONDS * 1000}")
    return conn


def get_postgres_pool(dsn: str, min_size: int = 1, max_size: int = 4) -> ConnectionPool:
    """
    Return the pool for a DSN, opening it on first use.

    Sizes only apply when the pool is created.
    """
    with _pools_lock:
        pool = _pools.get(dsn)
        if pool is None:
            from psycopg.rows import dict_row
            from psycopg_pool import ConnectionPool

            pool = ConnectionPool(
                dsn,
                min_size=min_size,
                max_size=max_size,
                open=True,
                kwargs={"row_factory": dict_row},
            )
            _pools[dsn] = pool
        return pool


def close_postgres_pool(dsn: str) -> None:
    """Close and forget the pool for a DSN, if one is open."""
    with _pools_lock:
        pool = _pools.pop(dsn, None)
    if pool is not None:
        pool.close()


def close_all_pools() -> None:
    """Close every open pool, for shutdown and between tests."""
    with _pools_lock:
        pools = list(_pools.values())
        _pools.clear()
    for pool in pools:
        pool.close()
