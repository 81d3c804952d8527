"""Feed transport and response decoding."""

from .decoder import decode_page
from .models import ApiError, ItemAttributes, ItemRecord, PageEnvelope, PageMeta, Pagination
from .transport import FeedTransport, page_params

__all__ = [
    "FeedTransport",
    "decode_page",
    "page_params",
    "ApiError",
    "ItemAttributes",
    "ItemRecord",
    "PageEnvelope",
    "PageMeta",
    "Pagination",
]
