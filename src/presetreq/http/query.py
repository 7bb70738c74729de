"""src/presetreq/http/query.py

Query string serialization for Presetreq.
"""

import urllib.parse
from typing import Any, List, Mapping, Optional

__all__ = ["encode_query", "append_query"]

# Characters encodeURIComponent leaves alone besides the unreserved set.
_SAFE = "!~*'()"

_MULTI_VALUE_TYPES = (list, tuple, set, frozenset)


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _pair(key: str, value: Any) -> str:
    return f"{key}={urllib.parse.quote(_to_str(value), safe=_SAFE)}"


def encode_query(params: Optional[Mapping[str, Any]]) -> str:
    """
    Serialize a mapping into a urlencoded query string.

    Entries keep their insertion order and ``None`` values are skipped.
    Lists, tuples and sets produce one ``key=value`` pair per element
    with the key repeated. Keys are emitted as given.

    Args:
        params: Mapping of query parameters.

    Returns:
        Query string without a leading ``?`` ("" for empty input).
    """
    if not params:
        return ""

    pairs: List[str] = []
    for key, value in params.items():
        if value is None:
            continue

        if isinstance(value, _MULTI_VALUE_TYPES):
            for element in value:
                if element is not None:
                    pairs.append(_pair(key, element))
            continue

        pairs.append(_pair(key, value))

    return "&".join(pairs)


def append_query(url: str, params: Any) -> str:
    """Append ``params`` to ``url`` when it is a mapping that encodes to something."""
    if not isinstance(params, Mapping):
        return url

    query = encode_query(params)
    if query == "":
        return url
    return f"{url}?{query}"
