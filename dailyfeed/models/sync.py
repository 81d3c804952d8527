"""Models describing synchronization outcomes."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SortOrder(str, Enum):
    """Ordering of items by publication date."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class SyncSource(str, Enum):
    """Where the committed item set came from."""

    CACHE = "cache"
    NETWORK = "network"


class SyncResult(BaseModel):
    """Outcome of a successful sync attempt."""

    source: SyncSource = Field(..., description="Cache hit or network refresh")
    item_count: int = Field(..., description="Number of items now committed", ge=0)
    pages_fetched: int = Field(0, description="Pages fetched from the network", ge=0)
    requests_made: int = Field(0, description="HTTP requests issued, retries included", ge=0)
    retries: int = Field(0, description="Retries after server errors", ge=0)
    synced_at: Optional[datetime] = Field(None, description="Timestamp of the last network sync")
    warnings: List[str] = Field(default_factory=list, description="Non-fatal problems, e.g. cache write failures")
