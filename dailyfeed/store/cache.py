"""Cache record: the persisted item set and its sync timestamp."""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

import pendulum
from pydantic import TypeAdapter, ValidationError

from ..errors import StoreError
from ..models import FeedItem
from .base import LocalStore

logger = logging.getLogger(__name__)

ITEMS_KEY = "cachedItems"
SYNCED_AT_KEY = "lastSyncedAt"

_items_adapter = TypeAdapter(List[FeedItem])


class FeedCache:
    """Read and write the cache record through a local store."""

    def __init__(self, store: LocalStore) -> None:
        self.store = store

    def save(self, items: Sequence[FeedItem], synced_at: datetime) -> None:
        """Persist items and the sync timestamp together."""
        payload = _items_adapter.dump_json(list(items))
        stamp = synced_at.isoformat().encode("utf-8")
        self.store.set(ITEMS_KEY, payload)
        self.store.set(SYNCED_AT_KEY, stamp)
        logger.debug("Cached %d items (synced at %s)", len(items), synced_at.isoformat())

    def load_items(self) -> Optional[List[FeedItem]]:
        """Return cached items in stored order, or None if nothing is cached."""
        raw = self.store.get(ITEMS_KEY)
        if raw is None:
            return None
        try:
            return _items_adapter.validate_json(raw)
        except ValidationError as e:
            raise StoreError(f"Cached items are corrupt: {e.error_count()} errors", key=ITEMS_KEY) from e

    def last_synced_at(self) -> Optional[pendulum.DateTime]:
        """Return the timestamp of the last successful network sync."""
        raw = self.store.get(SYNCED_AT_KEY)
        if raw is None:
            return None
        try:
            parsed = pendulum.parse(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise StoreError(f"Cached sync timestamp is corrupt: {raw!r}", key=SYNCED_AT_KEY) from e
        if not isinstance(parsed, pendulum.DateTime):
            raise StoreError(f"Cached sync timestamp is not a datetime: {raw!r}", key=SYNCED_AT_KEY)
        return parsed

    def reset(self) -> None:
        """Delete both keys; both deletes are attempted even if one fails."""
        failure: Optional[StoreError] = None
        for key in (ITEMS_KEY, SYNCED_AT_KEY):
            try:
                self.store.delete(key)
            except StoreError as e:
                logger.warning("Failed to delete cache key %s: %s", key, e)
                failure = failure or e
        if failure is not None:
            raise failure
