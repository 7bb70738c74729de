"""src/presetreq/__init__.py

Presetreq - Preset-able fluent HTTP request builder for asyncio.

Requests are configured through chained calls, sent through an injected
transport, and their responses routed to callbacks chosen by status rules.
Presets (templates) capture headers, status rules, callbacks, a body
transform and an async prepare hook, and can be derived from each other.

Key Features:
    - Immutable presets with parent/child merging
    - ``post``/``pre`` composition of transform and prepare hooks
    - Status rules: ``"all"``, ``"4xx"``, ``"!200"``, ``404`` and lists of them
    - Raw, urlencoded, JSON and form sends
    - Pluggable transport, httpx by default

Example:
    Basic usage::

        import asyncio
        from presetreq import create_client

        root = create_client(base_url="https://api.example.com")
        api = root.preset(
            headers={"Authorization": lambda: f"Bearer {tokens.current}"},
            status={"success": "2xx", "error": ["4xx", "5xx"]},
            on={"error": lambda body, response: log_failure(response)},
        )

        async def main():
            response = await api.post("/items").send_json({"name": "x"})
            print(response.body)

        asyncio.run(main())
"""

from presetreq.client.facade import create_client
from presetreq.client.hooks import MergeStrategy
from presetreq.client.request import RequestInstance, SendMode
from presetreq.client.response import Response
from presetreq.client.template import PresetSpec, Template, derive
from presetreq.exceptions import (
    BodyParseError,
    ConfigurationError,
    PresetreqError,
    TransportError,
)
from presetreq.http.query import encode_query
from presetreq.http.status import match_status
from presetreq.transport import HttpxTransport, Transport, TransportOptions
from presetreq.version import __version__

__all__ = [
    "Template",
    "PresetSpec",
    "derive",
    "RequestInstance",
    "SendMode",
    "MergeStrategy",
    "Response",
    "create_client",
    "encode_query",
    "match_status",
    "Transport",
    "TransportOptions",
    "HttpxTransport",
    "PresetreqError",
    "ConfigurationError",
    "TransportError",
    "BodyParseError",
    "__version__",
]
