"""Sequential page fetch loop with bounded retry."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List

from ..errors import ApiResponseError, RetriesExhaustedError
from ..ingestion import FeedTransport, decode_page
from ..models import FeedItem

logger = logging.getLogger(__name__)

SERVER_ERROR = 500


class LoopState(str, Enum):
    """States of the page loop."""

    FETCHING = "fetching"
    RETRYING = "retrying"
    DONE = "done"


@dataclass
class PageRun:
    """Everything a completed page loop accumulated."""

    items: List[FeedItem] = field(default_factory=list)
    pages: int = 0
    requests: int = 0
    retries: int = 0


class Paginator:
    """Fetch pages one at a time until a short page ends the feed.

    A full page (``page_size`` items) is taken to mean more data follows.
    Server errors (status 500) are retried after ``retry_delay`` seconds; the
    retry budget is shared by the whole run, not reset per page. Any other
    failure ends the run by raising, and the caller discards what was fetched.
    """

    def __init__(
        self,
        transport: FeedTransport,
        page_size: int = 100,
        max_retries: int = 3,
        retry_delay: float = 5.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.transport = transport
        self.page_size = page_size
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    async def run(self) -> PageRun:
        """Run the loop to completion.

        Raises:
            TransportError: The endpoint could not be reached.
            DecodeError: A response body was malformed.
            ApiResponseError: The API reported a non-retryable error.
            RetriesExhaustedError: Server errors outlasted the retry budget.
        """
        run = PageRun()
        page = 1
        page_attempts = 0
        state = LoopState.FETCHING

        while state is not LoopState.DONE:
            if state is LoopState.RETRYING:
                await self._sleep(self.retry_delay)

            raw = await self.transport.fetch_page(page, self.page_size)
            run.requests += 1
            page_attempts += 1
            envelope = decode_page(raw)

            if envelope.error is not None:
                error = envelope.error
                if error.status != SERVER_ERROR:
                    raise ApiResponseError(error.status, error.name, error.message)
                if run.retries >= self.max_retries:
                    raise RetriesExhaustedError(error.status, error.name, error.message, page_attempts)
                run.retries += 1
                logger.warning(
                    "Page %d: server error %d (%s), retry %d/%d in %.1fs",
                    page, error.status, error.message, run.retries, self.max_retries, self.retry_delay,
                )
                state = LoopState.RETRYING
                continue

            items = envelope.feed_items()
            run.items.extend(items)
            run.pages += 1

            if envelope.meta is not None:
                pagination = envelope.meta.pagination
                logger.debug(
                    "Pagination: page %d of %d, pageSize %d, total %d",
                    pagination.page, pagination.pageCount, pagination.pageSize, pagination.total,
                )
            logger.info("Fetched page %d: %d items (%d so far)", page, len(items), len(run.items))

            if len(items) == self.page_size:
                page += 1
                page_attempts = 0
                state = LoopState.FETCHING
            else:
                state = LoopState.DONE

        return run
