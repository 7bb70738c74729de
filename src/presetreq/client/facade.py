"""src/presetreq/client/facade.py

Single entry point building the root template of an application.

Example::

    import asyncio
    from presetreq import create_client

    api = create_client(
        base_url="https://api.example.com",
        status={"ok": "2xx", "failed": "!2xx"},
    )
    users = api.preset(headers={"Accept": "application/json"})

    async def main():
        await users.get("/users", {"page": 1}).on("ok", print).send()

    asyncio.run(main())
"""

from typing import Any, Callable, Dict, Mapping, Optional, Union

from presetreq.client.template import Template
from presetreq.transport.base import Transport
from presetreq.transport.httpx_transport import HttpxTransport
from presetreq.utils.timing import Timeout

__all__ = ["create_client"]

# pylint: disable=too-many-arguments


def create_client(
    transport: Optional[Transport] = None,
    *,
    base_url: Optional[str] = None,
    timeout: Union[Timeout, float, None] = 5,
    headers: Optional[Mapping[str, Any]] = None,
    status: Optional[Mapping[str, Any]] = None,
    on: Optional[Mapping[str, Callable[..., Any]]] = None,
) -> Template:
    """
    Create a root template.

    Args:
        transport: Transport to use. Defaults to a new :class:`HttpxTransport`
            configured with ``base_url`` and ``timeout``.
        base_url: Base URL for the default transport.
        timeout: Timeout for the default transport.
        headers: Default headers of the root template.
        status: Default status rules of the root template.
        on: Default callbacks of the root template.

    Returns:
        Root Template; derive presets from it with :meth:`Template.preset`.
    """
    if transport is None:
        transport = HttpxTransport(base_url=base_url, timeout=timeout)
    elif base_url is not None:
        raise ValueError("base_url only applies to the default transport")

    options: Dict[str, Any] = {"headers": headers, "status": status, "on": on}
    return Template.root(transport, **options)
