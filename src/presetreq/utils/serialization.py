"""utils/serialization.py

Serialization utilities for Presetreq (JSON bodies in both directions).
"""

import json
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from presetreq.client.response import Response

logger = logging.getLogger(__name__)


def to_json(data: Any) -> str:
    """Serializes data to a JSON string."""
    return json.dumps(data)


def is_json_content_type(content_type: str) -> bool:
    """True for ``application/json`` and ``+json`` suffixed media types."""
    media_type = content_type.split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def parse_json_body(response: "Response") -> Any:
    """
    Decode the response body when its content type announces JSON.

    Malformed JSON is not an error here: the raw text is returned.

    Args:
        response: Response whose body should be decoded.

    Returns:
        Parsed JSON value, or the raw decoded text.
    """
    raw = response.text()
    if not is_json_content_type(response.headers.get("Content-Type", "")):
        return raw

    try:
        return json.loads(raw)
    except ValueError:
        logger.debug(f"Keeping raw body, invalid JSON from {response.url}")
        return raw
