"""In-memory filtering and ordering of feed items."""

from typing import Iterable, List

from ..models import FeedItem, SortOrder


def matches(item: FeedItem, query: str) -> bool:
    """Case-insensitive substring match over title and summary."""
    needle = query.casefold()
    return needle in item.title.casefold() or needle in item.summary.casefold()


def filter_items(items: Iterable[FeedItem], query: str) -> List[FeedItem]:
    """Items matching ``query`` in their original order; all items if it is empty."""
    if not query:
        return list(items)
    return [item for item in items if matches(item, query)]


def sort_items(items: Iterable[FeedItem], order: SortOrder) -> List[FeedItem]:
    """Stable sort by publication date; equal dates keep their relative order."""
    return sorted(
        items,
        key=lambda item: item.published_date,
        reverse=SortOrder(order) is SortOrder.DESCENDING,
    )
