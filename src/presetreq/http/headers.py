"""src/presetreq/http/headers.py

Case-insensitive header mapping for responses.
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

__all__ = ["Headers", "has_header"]


class Headers(Mapping[str, str]):
    """
    Case-insensitive mapping of response headers.

    Keys are stored lower-cased. A header received several times keeps
    every value; item access joins them with a comma (except Set-Cookie,
    which returns the first one). Raw lists are available via get_all().
    """

    __slots__ = ("_headers",)

    def __init__(
        self, headers: Optional[Mapping[str, Union[str, List[str]]]] = None
    ) -> None:
        self._headers: Dict[str, List[str]] = {}
        if headers:
            for k, v in headers.items():
                if isinstance(v, list):
                    self._headers.setdefault(k.lower(), []).extend(v)
                else:
                    self._headers.setdefault(k.lower(), []).append(v)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "Headers":
        """
        Build Headers from ``(name, value)`` pairs, keeping repeated names.

        Args:
            pairs: Iterable of header name/value tuples.

        Returns:
            A new Headers instance.
        """
        headers = cls()
        for name, value in pairs:
            headers._headers.setdefault(name.lower(), []).append(value)
        return headers

    def __getitem__(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get header value.

        Args:
            key: Header name (case-insensitive).
            default: Default value if header not found.

        Returns:
            Comma-joined string for multiple values (except Set-Cookie
            which returns first), or default if not found.
        """
        values = self._headers.get(key.lower())
        if not values:
            return default

        if key.lower() == "set-cookie":
            return values[0]

        return ", ".join(values)

    def get_all(self, key: str) -> List[str]:
        """Get all values of a header, empty list if not found."""
        return list(self._headers.get(key.lower(), []))


def has_header(headers: Mapping[str, Any], name: str) -> bool:
    """Check a plain dict of outgoing headers for ``name``, ignoring case."""
    name = name.lower()
    return any(key.lower() == name for key in headers)
