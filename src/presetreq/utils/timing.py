"""utils/timing.py

Timeouts configuration.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx


@dataclass
class Timeout:
    """
    Timeout configuration handed to the transport.

    Attributes:
        connect: Maximum time to wait for connection establishment.
        read: Maximum time to wait for data to be received.
        total: Fallback for every phase not set explicitly.
    """

    connect: Optional[float] = None
    read: Optional[float] = None
    total: Optional[float] = None

    @classmethod
    def from_float(cls, timeout: Optional[float]) -> "Timeout":
        """Create a Timeout instance from a single float (total timeout fallback)."""
        if timeout is None:
            return cls()
        return cls(connect=timeout, read=timeout, total=timeout)

    @classmethod
    def coerce(cls, timeout: Union["Timeout", float, None]) -> "Timeout":
        """Accept either a Timeout or a plain number of seconds."""
        if isinstance(timeout, Timeout):
            return timeout
        return cls.from_float(timeout)

    def to_httpx(self) -> httpx.Timeout:
        """Convert to ``httpx.Timeout``, unset phases falling back to ``total``."""
        overrides: Dict[str, Any] = {}
        if self.connect is not None:
            overrides["connect"] = self.connect
        if self.read is not None:
            overrides["read"] = self.read
        return httpx.Timeout(self.total, **overrides)
