"""Shared test fixtures for dailyfeed tests."""

import asyncio
import json
from datetime import date, timedelta
from typing import List, Optional, Sequence

import pendulum
import pytest

from dailyfeed.config import FeedConfig
from dailyfeed.models import FeedItem
from dailyfeed.store import FeedCache, MemoryStore
from dailyfeed.sync import SyncEngine

BASE_DATE = date(2026, 1, 1)


def item_date(item_id: int) -> date:
    """Deterministic, deliberately unordered publication date for an id."""
    return BASE_DATE + timedelta(days=(item_id * 7) % 30)


def make_record(
    item_id: int,
    title: Optional[str] = None,
    time: Optional[str] = None,
    introduce: Optional[str] = "Daily digest entry",
) -> dict:
    """One entry in the feed API's wire format."""
    return {
        "id": item_id,
        "attributes": {
            "title": title or f"Entry {item_id}",
            "url": f"https://example.com/entries/{item_id}",
            "time": time or item_date(item_id).isoformat(),
            "introduce": introduce,
        },
    }


def make_page(records: Sequence[dict], page: int = 1, page_size: int = 100, total: int = 0) -> bytes:
    """A successful response body."""
    return json.dumps({
        "data": list(records),
        "meta": {
            "pagination": {
                "page": page,
                "pageSize": page_size,
                "pageCount": max(1, -(-total // page_size)),
                "total": total,
            }
        },
    }).encode()


def error_page(status: int = 500, name: str = "InternalServerError", message: str = "Internal Server Error") -> bytes:
    """An application-level error response body."""
    return json.dumps({
        "data": None,
        "error": {"status": status, "name": name, "message": message},
    }).encode()


def feed_pages(sizes: Sequence[int], page_size: int = 100, start_id: int = 1) -> List[bytes]:
    """Consecutive pages with the given item counts and unique ids."""
    total = sum(sizes)
    pages = []
    next_id = start_id
    for number, size in enumerate(sizes, start=1):
        records = [make_record(i) for i in range(next_id, next_id + size)]
        next_id += size
        pages.append(make_page(records, page=number, page_size=page_size, total=total))
    return pages


def make_items(count: int, start_id: int = 1) -> List[FeedItem]:
    """Domain items matching what ``feed_pages`` would produce."""
    return [
        FeedItem(
            id=i,
            title=f"Entry {i}",
            url=f"https://example.com/entries/{i}",
            published_date=item_date(i),
            summary="Daily digest entry",
        )
        for i in range(start_id, start_id + count)
    ]


class ScriptedTransport:
    """Transport double replaying canned responses in order.

    A response may be raw bytes, an exception to raise, or an
    ``asyncio.Event`` to wait on before the next response is consumed.
    """

    def __init__(self, responses: Sequence) -> None:
        self.responses = list(responses)
        self.calls: List[tuple] = []

    async def fetch_page(self, page: int, page_size: int) -> bytes:
        self.calls.append((page, page_size))
        if not self.responses:
            raise AssertionError(f"Unexpected request for page {page}")
        response = self.responses.pop(0)
        if isinstance(response, asyncio.Event):
            await response.wait()
            return await self.fetch_page(page, page_size)
        if isinstance(response, Exception):
            raise response
        return response


class Clock:
    """Settable clock for staleness decisions."""

    def __init__(self, now: pendulum.DateTime) -> None:
        self.now = now

    def __call__(self) -> pendulum.DateTime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now.add(**kwargs)


@pytest.fixture
def clock():
    """Clock fixed at a morning in February 2026."""
    return Clock(pendulum.datetime(2026, 2, 13, 9, 30, tz="UTC"))


@pytest.fixture
def store():
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def cache(store):
    """Cache record over the in-memory store."""
    return FeedCache(store)


@pytest.fixture
def sleeps():
    """Delays passed to the engine's sleep function."""
    return []


@pytest.fixture
def make_engine(cache, clock, sleeps):
    """Build an engine over a scripted transport."""

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    def _make(responses: Sequence, **settings):
        settings.setdefault("retry_delay", 5.0)
        transport = ScriptedTransport(responses)
        engine = SyncEngine(
            transport,
            cache,
            settings=FeedConfig(**settings),
            clock=clock,
            sleep=fake_sleep,
        )
        return engine, transport

    return _make
