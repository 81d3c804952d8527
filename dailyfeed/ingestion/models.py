"""Wire models for feed API responses."""

import re
from datetime import date
from typing import List, Optional

import pendulum
from pydantic import BaseModel, Field, field_validator

from ..models import FeedItem

DATE_FORMAT = "YYYY-MM-DD"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ItemAttributes(BaseModel):
    """Attributes block of a feed entry."""

    title: str = Field(..., description="Entry title")
    url: str = Field(..., description="Entry link")
    time: date = Field(..., description="Publication date, YYYY-MM-DD on the wire")
    introduce: Optional[str] = Field(None, description="Short introduction")

    @field_validator("time", mode="before")
    @classmethod
    def parse_time(cls, v):
        """Parse the fixed YYYY-MM-DD wire format strictly."""
        if isinstance(v, str):
            if not DATE_PATTERN.match(v):
                raise ValueError(f"time must be {DATE_FORMAT}, got {v!r}")
            try:
                return pendulum.from_format(v, DATE_FORMAT).date()
            except ValueError:
                raise ValueError(f"time must be {DATE_FORMAT}, got {v!r}")
        return v


class ItemRecord(BaseModel):
    """A feed entry as returned by the API."""

    id: int = Field(..., description="Entry identifier")
    attributes: ItemAttributes

    def to_feed_item(self) -> FeedItem:
        """Flatten into the domain model."""
        return FeedItem(
            id=self.id,
            title=self.attributes.title,
            url=self.attributes.url,
            published_date=self.attributes.time,
            summary=self.attributes.introduce or "",
        )


class ApiError(BaseModel):
    """Application-level error reported in the response body."""

    status: int = Field(..., description="HTTP-like status code")
    name: str = Field(..., description="Error name")
    message: str = Field(..., description="Error message")


class Pagination(BaseModel):
    """Pagination metadata."""

    page: int
    pageSize: int
    pageCount: int
    total: int


class PageMeta(BaseModel):
    """Response metadata."""

    pagination: Pagination


class PageEnvelope(BaseModel):
    """One parsed response page."""

    data: Optional[List[ItemRecord]] = Field(None, description="Entries on this page")
    error: Optional[ApiError] = Field(None, description="Error, if the page fetch failed")
    meta: Optional[PageMeta] = Field(None, description="Pagination metadata")

    def feed_items(self) -> List[FeedItem]:
        """Entries of this page as domain items, in response order."""
        return [record.to_feed_item() for record in self.data or []]
