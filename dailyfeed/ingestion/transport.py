"""HTTP transport for the paginated feed endpoint."""

import logging
from typing import Dict, Optional

import httpx

from ..errors import TransportError

logger = logging.getLogger(__name__)

PAGE_PARAM = "pagination[page]"
PAGE_SIZE_PARAM = "pagination[pageSize]"


def page_params(page: int, page_size: int) -> Dict[str, int]:
    """Query parameters selecting one page."""
    if page < 1 or page_size < 1:
        raise ValueError(f"page and page_size must be >= 1, got {page}/{page_size}")
    return {PAGE_PARAM: page, PAGE_SIZE_PARAM: page_size}


class FeedTransport:
    """Fetch raw pages from the feed endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        user_agent: str = "dailyfeed/0.1 (daily news sync)",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize feed transport.

        Args:
            base_url: Feed endpoint URL
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            transport: Custom httpx transport (for testing)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    async def fetch_page(self, page: int, page_size: int) -> bytes:
        """Fetch one page and return the raw body.

        Non-2xx responses are returned as-is: the feed API reports its errors
        in the JSON body, which the decoder interprets.

        Raises:
            TransportError: If the endpoint is unreachable or the request times out.
        """
        params = page_params(page, page_size)
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request for page {page} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error fetching page {page}: {e}") from e
        except httpx.InvalidURL as e:
            raise TransportError(f"Invalid feed URL {self.base_url!r}: {e}") from e

        logger.debug(
            "GET %s -> %d (%d bytes)", response.url, response.status_code, len(response.content)
        )
        return response.content
