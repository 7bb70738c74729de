"""src/presetreq/client/dispatcher.py

Sends a configured request through the transport and fans the response
out to the callbacks whose status rules match.
"""

import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

from presetreq.client.response import Response
from presetreq.exceptions import ConfigurationError, PresetreqError, TransportError
from presetreq.http.status import match_status
from presetreq.transport.base import TransportOptions
from presetreq.utils.serialization import parse_json_body

if TYPE_CHECKING:  # pragma: no cover
    from presetreq.client.request import RequestInstance
    from presetreq.transport.base import Transport

__all__ = ["Dispatcher", "resolve_headers"]

logger = logging.getLogger(__name__)


def _accepts_argument(func: Callable[..., Any]) -> bool:
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(
        p.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
        for p in params
    )


def resolve_headers(header_map: Mapping[str, Any], body: Any) -> Dict[str, str]:
    """
    Compute outgoing header values.

    Callable values are evaluated now: with the outgoing body when they
    take a positional argument, without arguments otherwise. Headers that
    resolve to None are left out.

    Args:
        header_map: Header names to values or callables.
        body: Serialized body about to be sent.

    Returns:
        Dictionary of final string header values.
    """
    headers: Dict[str, str] = {}
    for name, value in header_map.items():
        if callable(value):
            value = value(body) if _accepts_argument(value) else value()
        if value is None:
            continue
        headers[name] = str(value)
    return headers


class Dispatcher:
    """
    Performs the HTTP exchange for one request instance.

    Attributes:
        transport: Transport that executes the request.
    """

    __slots__ = ("transport",)

    def __init__(self, transport: Optional["Transport"]) -> None:
        self.transport = transport

    async def dispatch(self, request: "RequestInstance", body: Any) -> Response:
        """
        Send ``request`` with ``body`` and run the matching callbacks.

        Args:
            request: Configured request instance.
            body: Serialized body.

        Returns:
            Response received from the transport.

        Raises:
            ConfigurationError: If no transport is configured.
            TransportError: If the transport failed.
        """
        if self.transport is None:
            raise ConfigurationError("transport is required")

        options = TransportOptions(
            method=request.method,
            body=body,
            headers=resolve_headers(request.header_map, body),
            format=request.format,
        )
        logger.debug(f"Request: {options.method} {request.url}")

        try:
            response = self.transport.send(request.url, options)
            if inspect.isawaitable(response):
                response = await response
        except PresetreqError:
            raise
        except Exception as exc:
            raise TransportError(
                f"{options.method} {request.url} failed: {exc}"
            ) from exc

        logger.debug(f"Response: {response.status_code} for {request.url}")

        response.request = request
        response.method = request.method
        if response.url is None:
            response.url = request.url
        response.body = parse_json_body(response)

        await self.notify(request, response)
        return response

    async def notify(self, request: "RequestInstance", response: Response) -> None:
        """
        Call every callback whose status rule matches the response code.

        Callbacks run in registration order as ``callback(body, response)``;
        a callback without a status rule of the same name never fires.
        """
        for name, callback in list(request.callback_map.items()):
            if name not in request.status_map:
                continue
            if not match_status(request.status_map[name], response.status_code):
                continue

            logger.debug(f"Callback {name!r} matched status {response.status_code}")
            result = callback(response.body, response)
            if inspect.isawaitable(result):
                await result
