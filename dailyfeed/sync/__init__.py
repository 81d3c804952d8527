"""Feed synchronization: page loop, state, query layer and engine."""

from .engine import SyncEngine, is_same_day
from .paginator import LoopState, PageRun, Paginator
from .query import filter_items, matches, sort_items
from .state import SyncState

__all__ = [
    "SyncEngine",
    "SyncState",
    "Paginator",
    "PageRun",
    "LoopState",
    "filter_items",
    "sort_items",
    "matches",
    "is_same_day",
]
