"""src/presetreq/transport/base.py

The contract between the request builder and whatever performs HTTP.
"""

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Dict,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)

if TYPE_CHECKING:  # pragma: no cover
    from presetreq.client.response import Response

__all__ = ["Transport", "TransportOptions"]


@dataclass
class TransportOptions:
    """
    Everything a transport needs besides the url.

    Attributes:
        method: HTTP method in upper case.
        body: Serialized body (or the raw value for ``form``/plain sends).
        headers: Final header values, all strings.
        format: Send mode that produced the body (None, text, json, form).
    """

    method: str
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    format: Optional[str] = None


@runtime_checkable
class Transport(Protocol):
    """
    Anything able to perform the HTTP exchange.

    ``send`` may be a coroutine function or a plain function; either way it
    returns a :class:`~presetreq.client.response.Response`.
    """

    def send(
        self, url: str, options: TransportOptions
    ) -> Union["Response", Awaitable["Response"]]:
        ...  # pragma: no cover
