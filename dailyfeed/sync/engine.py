"""Feed synchronization engine."""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Tuple

import pendulum

from ..config import Config, FeedConfig
from ..errors import StoreError, SyncError
from ..ingestion import FeedTransport
from ..models import FeedItem, SortOrder, SyncResult, SyncSource
from ..store import FeedCache, create_store
from .paginator import Paginator
from .query import sort_items
from .state import SyncState

logger = logging.getLogger(__name__)


def is_same_day(moment: datetime, now: pendulum.DateTime) -> bool:
    """Whether ``moment`` falls on the same calendar day as ``now``, in ``now``'s zone."""
    return pendulum.instance(moment).in_timezone(now.tzinfo).date() == now.date()


class SyncEngine:
    """Keep a local copy of the paginated feed in step with the remote source.

    The engine owns the committed item set. A sync attempt either replaces
    that set (and the cache) wholesale or leaves both untouched: pages
    fetched by a failed or cancelled attempt are discarded.

    Only one sync runs at a time. A ``synchronize()`` issued while another
    is in flight joins it; ``force_refresh()`` cancels it and starts over.
    """

    def __init__(
        self,
        transport: FeedTransport,
        cache: FeedCache,
        settings: Optional[FeedConfig] = None,
        clock: Callable[[], pendulum.DateTime] = pendulum.now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize sync engine.

        Args:
            transport: Feed transport used for page requests
            cache: Cache record over the local store
            settings: Page size, retry and cache policy
            clock: Source of the current time (for staleness and timestamps)
            sleep: Awaitable used for the retry delay
        """
        self.transport = transport
        self.cache = cache
        self.settings = settings or FeedConfig()
        self._clock = clock
        self._sleep = sleep
        self._state = SyncState()
        self._inflight: Optional[asyncio.Task] = None
        self._inflight_forced = False

    @classmethod
    def from_config(cls, config: Config) -> "SyncEngine":
        """Build an engine with the transport and store named in configuration."""
        feed = config.config.feed
        transport = FeedTransport(feed.base_url, timeout=feed.timeout, user_agent=feed.user_agent)
        return cls(transport, FeedCache(create_store(config)), settings=feed)

    @property
    def items(self) -> Tuple[FeedItem, ...]:
        """Snapshot of the committed item set."""
        return self._state.all_items

    @property
    def visible_items(self) -> Tuple[FeedItem, ...]:
        """Snapshot of the filtered and ordered view."""
        return self._state.visible_items

    @property
    def query(self) -> str:
        return self._state.query

    @property
    def is_syncing(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def synchronize(self) -> SyncResult:
        """Use today's cache if it is good enough, otherwise refresh from the network.

        Raises:
            SyncError: The network refresh failed; committed state is unchanged.
        """
        if self.is_syncing:
            logger.info("Sync already in progress, joining it")
            return await asyncio.shield(self._inflight)
        return await self._start(force=False)

    async def force_refresh(self) -> SyncResult:
        """Refresh from the network regardless of the cache.

        A running plain sync is cancelled and replaced; a running forced
        refresh is joined instead.
        """
        previous = self._inflight if self.is_syncing else None
        if previous is not None:
            if self._inflight_forced:
                logger.info("Forced refresh already in progress, joining it")
                return await asyncio.shield(previous)
            logger.info("Superseding in-flight sync")
            previous.cancel()
        return await self._start(force=True, supersedes=previous)

    async def cancel(self) -> None:
        """Cancel the in-flight sync, if any, and wait for it to unwind."""
        task = self._inflight
        if task is None or task.done():
            return
        logger.info("Cancelling in-flight sync")
        task.cancel()
        await asyncio.wait([task])

    async def reset_cache(self) -> None:
        """Drop the committed items and delete the cache record.

        Raises:
            StoreError: The store could not delete the record. The in-memory
                state is cleared regardless.
        """
        await self.cancel()
        self._state.clear()
        self.cache.reset()
        logger.info("Cache reset")

    def filter(self, query: str) -> Tuple[FeedItem, ...]:
        """Show the committed items matching ``query``; empty shows everything."""
        return self._state.apply_query(query)

    def sort(self, order: SortOrder) -> Tuple[FeedItem, ...]:
        """Reorder the visible items by publication date."""
        return self._state.apply_sort(order)

    def run(self, force: bool = False) -> SyncResult:
        """Synchronous wrapper for synchronize and force_refresh."""
        return asyncio.run(self.force_refresh() if force else self.synchronize())

    async def _start(self, force: bool, supersedes: Optional[asyncio.Task] = None) -> SyncResult:
        # Registered before the first await so no other sync can start in between
        task = asyncio.ensure_future(self._synchronize(force, supersedes))
        self._inflight = task
        self._inflight_forced = force
        try:
            return await task
        finally:
            if self._inflight is task:
                self._inflight = None

    async def _synchronize(self, force: bool, supersedes: Optional[asyncio.Task] = None) -> SyncResult:
        if supersedes is not None:
            # Let the cancelled attempt unwind before touching state
            await asyncio.wait([supersedes])

        warnings: List[str] = []

        if not force:
            cached = self._load_fresh_cache(warnings)
            if cached is not None:
                items, synced_at = cached
                self._state.replace(items)
                logger.info("Loaded %d items from cache", len(items))
                return SyncResult(
                    source=SyncSource.CACHE,
                    item_count=len(items),
                    synced_at=synced_at,
                    warnings=warnings,
                )

        return await self._refresh(warnings)

    def _load_fresh_cache(
        self, warnings: List[str]
    ) -> Optional[Tuple[List[FeedItem], pendulum.DateTime]]:
        """Cached items if they were synced today and are numerous enough."""
        try:
            synced_at = self.cache.last_synced_at()
        except StoreError as e:
            logger.warning("Cache unreadable, refreshing: %s", e)
            return None

        if synced_at is None:
            logger.info("No previous sync recorded, refreshing")
            return None

        if not is_same_day(synced_at, self._clock()):
            logger.info("Cache last synced %s, refreshing", synced_at.to_date_string())
            return None

        try:
            items = self.cache.load_items()
        except StoreError as e:
            logger.warning("Cache unreadable, refreshing: %s", e)
            return None

        if items is None:
            logger.info("Sync timestamp present but no cached items, refreshing")
            return None

        if len(items) < self.settings.min_cached_items:
            logger.info(
                "Only %d cached items (minimum %d), clearing cache and refreshing",
                len(items), self.settings.min_cached_items,
            )
            # Shown until the refresh commits; kept if the refresh fails
            self._state.replace(items)
            try:
                self.cache.reset()
            except StoreError as e:
                logger.warning("Failed to clear insufficient cache: %s", e)
                warnings.append(f"Cache clear failed: {e}")
            return None

        return items, synced_at

    async def _refresh(self, warnings: List[str]) -> SyncResult:
        paginator = Paginator(
            self.transport,
            page_size=self.settings.page_size,
            max_retries=self.settings.max_retries,
            retry_delay=self.settings.retry_delay,
            sleep=self._sleep,
        )

        try:
            run = await paginator.run()
        except SyncError as e:
            logger.error(
                "Sync failed, keeping %d committed items: %s", len(self._state.all_items), e
            )
            raise

        items = sort_items(run.items, SortOrder.DESCENDING)
        synced_at = self._clock()
        self._state.replace(items)

        try:
            self.cache.save(items, synced_at)
        except StoreError as e:
            logger.warning("Synced %d items but the cache write failed: %s", len(items), e)
            warnings.append(f"Cache write failed: {e}")

        logger.info(
            "Synced %d items from %d pages (%d requests, %d retries)",
            len(items), run.pages, run.requests, run.retries,
        )
        return SyncResult(
            source=SyncSource.NETWORK,
            item_count=len(items),
            pages_fetched=run.pages,
            requests_made=run.requests,
            retries=run.retries,
            synced_at=synced_at,
            warnings=warnings,
        )
