"""Postgres-backed store."""

import logging
import os
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from ..errors import StoreError
from .base import LocalStore

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS feed_cache (
    key TEXT PRIMARY KEY,
    value BYTEA NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""


_pool: Optional[ConnectionPool] = None


def conninfo(config: Dict[str, Any]) -> str:
    """libpq connection string for a Postgres config dict.

    ``password_env`` names an environment variable that takes precedence
    over a literal ``password``.
    """
    password = config.get("password") or ""
    if config.get("password_env"):
        password = os.environ.get(config["password_env"], password)
    return make_conninfo(
        host=config.get("host", "localhost"),
        port=config.get("port", 5432),
        dbname=config.get("database", "dailyfeed"),
        user=config.get("user", "dailyfeed_user"),
        password=password or None,
    )


@contextmanager
def get_connection(config: Dict[str, Any]) -> Iterator[psycopg.Connection]:
    """Borrow a connection from the process-wide pool, opening it on first use."""
    global _pool
    if _pool is None:
        _pool = ConnectionPool(
            conninfo(config),
            min_size=1,
            max_size=4,
            kwargs={"row_factory": dict_row},
            open=True,
        )
    with _pool.connection() as conn:
        yield conn


def close_pool() -> None:
    global _pool
    if _pool is not None:
        _pool.close()
        _pool = None


class PostgresStore(LocalStore):
    """Store values in the ``feed_cache`` table."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        """Initialize store with a database configuration dict."""
        self.db_config = db_config

    def get(self, key: str) -> Optional[bytes]:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT value FROM feed_cache WHERE key = %s", (key,))
                    row = cur.fetchone()
        except psycopg.Error as e:
            raise StoreError(f"Failed to read {key!r} from Postgres: {e}", key=key) from e
        return bytes(row["value"]) if row else None

    def set(self, key: str, value: bytes) -> None:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO feed_cache (key, value)
                        VALUES (%s, %s)
                        ON CONFLICT (key) DO UPDATE SET
                            value = EXCLUDED.value,
                            updated_at = CURRENT_TIMESTAMP
                        """,
                        (key, value),
                    )
                conn.commit()
        except psycopg.Error as e:
            raise StoreError(f"Failed to write {key!r} to Postgres: {e}", key=key) from e

    def delete(self, key: str) -> None:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute("DELETE FROM feed_cache WHERE key = %s", (key,))
                conn.commit()
        except psycopg.Error as e:
            raise StoreError(f"Failed to delete {key!r} from Postgres: {e}", key=key) from e

    def close(self) -> None:
        close_pool()


def validate_connection(config: Dict[str, Any]) -> bool:
    """Validate database connection."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 AS ok")
                result = cur.fetchone()
                return result is not None and result["ok"] == 1
    except Exception as e:
        logger.warning("Database connection failed: %s", e)
        return False


def init_schema(config: Dict[str, Any]) -> None:
    """Create the cache table if it does not exist."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
            conn.commit()
    except psycopg.Error as e:
        raise StoreError(f"Failed to initialize cache schema: {e}") from e
