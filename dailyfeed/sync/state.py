"""Process-held synchronization state."""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..models import FeedItem, SortOrder
from .query import filter_items, sort_items


@dataclass
class SyncState:
    """The committed item set and the view derived from it.

    Item sequences are tuples so that readers always hold a snapshot.
    """

    all_items: Tuple[FeedItem, ...] = ()
    visible_items: Tuple[FeedItem, ...] = ()
    query: str = ""
    sort_order: Optional[SortOrder] = None

    def replace(self, items: Sequence[FeedItem]) -> None:
        """Swap in a new committed item set and re-derive the view."""
        self.all_items = tuple(items)
        self.sort_order = None
        self.visible_items = tuple(filter_items(self.all_items, self.query))

    def apply_query(self, query: str) -> Tuple[FeedItem, ...]:
        """Filter the committed set; any previous sort order is dropped."""
        self.query = query
        self.sort_order = None
        self.visible_items = tuple(filter_items(self.all_items, query))
        return self.visible_items

    def apply_sort(self, order: SortOrder) -> Tuple[FeedItem, ...]:
        """Reorder the current view."""
        self.sort_order = SortOrder(order)
        self.visible_items = tuple(sort_items(self.visible_items, self.sort_order))
        return self.visible_items

    def clear(self) -> None:
        self.all_items = ()
        self.visible_items = ()
        self.sort_order = None
