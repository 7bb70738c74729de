"""tests/conftest.py

Shared fakes for request builder tests.
"""

from typing import Any, Callable, List, Optional, Tuple

import pytest

from presetreq.client.response import Response
from presetreq.client.template import Template
from presetreq.transport.base import TransportOptions


class RecordingTransport:
    """Transport double that records calls and answers with a canned response."""

    def __init__(
        self,
        status_code: int = 200,
        content: Any = "",
        headers: Optional[dict] = None,
        error: Optional[BaseException] = None,
        on_send: Optional[Callable[[str, TransportOptions], None]] = None,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.error = error
        self.on_send = on_send
        self.calls: List[Tuple[str, TransportOptions]] = []

    async def send(self, url: str, options: TransportOptions) -> Response:
        self.calls.append((url, options))
        if self.on_send is not None:
            self.on_send(url, options)
        if self.error is not None:
            raise self.error
        return Response(
            self.status_code, headers=self.headers, content=self.content, url=url
        )

    @property
    def last(self) -> Tuple[str, TransportOptions]:
        return self.calls[-1]


@pytest.fixture
def transport() -> RecordingTransport:
    """Transport answering 200 with an empty body."""
    return RecordingTransport()


@pytest.fixture
def root(transport: RecordingTransport) -> Template:
    """Root template bound to the recording transport."""
    return Template.root(transport)


@pytest.fixture
def transport_factory() -> Callable[..., RecordingTransport]:
    """Build recording transports with custom canned responses."""
    return RecordingTransport
