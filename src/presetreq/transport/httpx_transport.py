"""src/presetreq/transport/httpx_transport.py

Transport backed by ``httpx.AsyncClient``.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from presetreq.client.response import Response
from presetreq.exceptions import ConnectTimeout, NetworkError, ReadTimeout, TimeoutError
from presetreq.http.headers import Headers
from presetreq.transport.base import TransportOptions
from presetreq.utils.timing import Timeout
from presetreq.version import __version__

__all__ = ["HttpxTransport"]

logger = logging.getLogger(__name__)

USER_AGENT = f"presetreq/{__version__}"

# pylint: disable=redefined-builtin


class HttpxTransport:
    """
    Performs requests with an ``httpx.AsyncClient``.

    Mapping bodies are sent as form data (httpx encodes them), any other
    body is sent as raw content. httpx errors are translated into the
    Presetreq exception hierarchy.

    Attributes:
        client: The underlying ``httpx.AsyncClient``.
    """

    __slots__ = ("client", "_owns_client")

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Union[Timeout, float, None] = 5,
        headers: Optional[Dict[str, str]] = None,
        follow_redirects: bool = True,
    ) -> None:
        """
        Initialize the transport.

        Args:
            client: Existing client to use. It is not closed by :meth:`aclose`.
            base_url: Base URL prefix for relative URLs.
            timeout: Seconds or a :class:`Timeout` for every request.
            headers: Headers sent with every request.
            follow_redirects: Whether redirects are followed.
        """
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                base_url=base_url or "",
                timeout=Timeout.coerce(timeout).to_httpx(),
                headers={"User-Agent": USER_AGENT, **(headers or {})},
                follow_redirects=follow_redirects,
            )
        self.client = client

    async def send(self, url: str, options: TransportOptions) -> Response:
        """
        Perform the request.

        Args:
            url: Absolute URL, or relative to the client's base_url.
            options: Method, body and headers.

        Returns:
            Response built from the httpx response.

        Raises:
            ConnectTimeout: Connection could not be established in time.
            ReadTimeout: Server did not answer in time.
            TimeoutError: Any other timeout.
            NetworkError: Any other httpx transport failure.
        """
        kwargs: Dict[str, Any] = {"headers": options.headers}
        if isinstance(options.body, Mapping):
            kwargs["data"] = options.body
        elif options.body is not None:
            kwargs["content"] = options.body

        logger.debug(f"httpx {options.method} {url}")
        try:
            resp = await self.client.request(options.method, url, **kwargs)
        except httpx.ConnectTimeout as exc:
            raise ConnectTimeout(str(exc) or "Connect timed out") from exc
        except httpx.ReadTimeout as exc:
            raise ReadTimeout(str(exc) or "Read timed out") from exc
        except httpx.TimeoutException as exc:
            raise TimeoutError(str(exc) or "Operation timed out") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(str(exc)) from exc

        return Response(
            resp.status_code,
            headers=Headers.from_pairs(resp.headers.multi_items()),
            content=resp.content,
            url=str(resp.url),
        )

    async def aclose(self) -> None:
        """Close the client if this transport created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
