"""src/presetreq/client/response.py

HTTP Response handling module.

Transports build a :class:`Response` from whatever their HTTP client
returned; the dispatcher then fills in the decoded ``body`` and the
``request`` that produced it before handing it to callbacks.
"""

import json as std_json
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Union, cast

from presetreq.exceptions import BodyParseError
from presetreq.http.headers import Headers

if TYPE_CHECKING:  # pragma: no cover
    from presetreq.client.request import RequestInstance

__all__ = ["Response"]


class Response:
    """
    Represents a completed HTTP exchange.

    Attributes:
        status_code: HTTP status code as integer.
        headers: Case-insensitive response headers.
        content: Raw body exactly as the transport delivered it.
        body: Decoded body: parsed JSON for JSON responses, text otherwise.
        url: Final URL of the response, or the request url when the
            transport did not report one.
        method: HTTP method of the request that produced this response.
        request: Request instance that was sent, set during dispatch. The
            instance is reset once the send settles, so its url, method and
            message are only meaningful inside callbacks.
    """

    __slots__ = (
        "status_code",
        "headers",
        "content",
        "body",
        "url",
        "method",
        "request",
    )

    def __init__(
        self,
        status_code: int,
        headers: Union[Headers, Mapping[str, Union[str, List[str]]], None] = None,
        content: Union[str, bytes] = "",
        url: Optional[str] = None,
    ) -> None:
        """
        Initialize a Response.

        Args:
            status_code: HTTP status code.
            headers: Response headers (plain mapping or Headers).
            content: Raw response body.
            url: Final URL of the response.
        """
        self.status_code: int = int(status_code)
        self.headers: Headers = (
            headers if isinstance(headers, Headers) else Headers(headers)
        )
        self.content: Union[str, bytes] = content
        self.body: Any = None
        self.url: Optional[str] = url
        self.method: Optional[str] = None
        self.request: Optional["RequestInstance"] = None

    @property
    def status(self) -> int:
        """Alias for status_code for compatibility."""
        return self.status_code

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status_code < 300

    def text(self, encoding: Optional[str] = None) -> str:
        """
        Return the body as text, decoding bytes with the declared charset.

        Charsets Python does not know fall back to utf-8.
        """
        if isinstance(self.content, str):
            return self.content

        if encoding is None:
            content_type = cast(str, self.headers.get("Content-Type", ""))
            if "charset=" in content_type:
                charset = content_type.split("charset=")[-1].split(";")[0]
                encoding = charset.strip().strip("\"'")
            else:
                encoding = "utf-8"

        try:
            return self.content.decode(encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """
        Returns JSON-decoded body.

        Raises:
            BodyParseError: If the body is not valid JSON.
        """
        try:
            return std_json.loads(self.text())
        except (std_json.JSONDecodeError, LookupError, TypeError, ValueError) as exc:
            raise BodyParseError("Failed to decode JSON response") from exc

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
