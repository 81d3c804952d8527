"""Data models for the daily feed synchronizer."""

from .item import FeedItem
from .sync import SortOrder, SyncResult, SyncSource

__all__ = ["FeedItem", "SortOrder", "SyncResult", "SyncSource"]
