"""Response decoder for feed API pages."""

from pydantic import ValidationError

from ..errors import DecodeError
from .models import PageEnvelope


def decode_page(raw: bytes) -> PageEnvelope:
    """Parse a raw response body into a page envelope.

    Raises:
        DecodeError: If the body is not JSON or does not match the page schema.
    """
    try:
        return PageEnvelope.model_validate_json(raw)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "body"
        raise DecodeError(
            f"Malformed feed response ({e.error_count()} errors, first at {location}: {first['msg']})"
        ) from e
