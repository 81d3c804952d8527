"""Local storage for the synchronized item set."""

from ..config import Config
from .base import LocalStore
from .cache import ITEMS_KEY, SYNCED_AT_KEY, FeedCache
from .file import FileStore
from .memory import MemoryStore
from .postgres import PostgresStore, init_schema, validate_connection


def create_store(config: Config) -> LocalStore:
    """Build the store backend selected in configuration."""
    backend = config.config.store.backend
    if backend == "postgres":
        return PostgresStore(config.get_db_config())
    if backend == "memory":
        return MemoryStore()
    return FileStore(config.cache_dir)


__all__ = [
    "LocalStore",
    "MemoryStore",
    "FileStore",
    "PostgresStore",
    "FeedCache",
    "ITEMS_KEY",
    "SYNCED_AT_KEY",
    "create_store",
    "init_schema",
    "validate_connection",
]
