"""Feed item model."""

from datetime import date

from pydantic import Field

from .base import ValueModel


class FeedItem(ValueModel):
    """One news entry of the daily feed."""

    id: int = Field(..., description="Item identifier assigned by the feed API")
    title: str = Field(..., description="Item title")
    url: str = Field(..., description="Target link")
    published_date: date = Field(..., description="Publication date (no time of day)")
    summary: str = Field("", description="Short introduction, possibly empty")
