"""src/presetreq/transport/__init__.py

Transport layer module for Presetreq.

The request builder never performs HTTP itself: it hands the url and
:class:`TransportOptions` to a transport. :class:`HttpxTransport` is the
bundled implementation; anything with a matching ``send`` works.
"""

from .base import Transport, TransportOptions
from .httpx_transport import HttpxTransport

__all__ = ["Transport", "TransportOptions", "HttpxTransport"]
