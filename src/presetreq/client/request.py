"""src/presetreq/client/request.py

Fluent request builder and sender.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Tuple

from presetreq.client.dispatcher import Dispatcher
from presetreq.client.hooks import PrepareHook, TransformHook, run_prepare, run_transform
from presetreq.client.response import Response
from presetreq.exceptions import ConfigurationError
from presetreq.http.headers import has_header
from presetreq.http.query import append_query, encode_query
from presetreq.utils.serialization import to_json
from presetreq.utils.validators import is_status_rule, validate_method

if TYPE_CHECKING:  # pragma: no cover
    from presetreq.client.template import Template

__all__ = ["RequestInstance", "SendMode"]

logger = logging.getLogger(__name__)

FORM_URLENCODED = "application/x-www-form-urlencoded"
APPLICATION_JSON = "application/json"


class SendMode(str, Enum):
    """How the transformed data is serialized before dispatch."""

    RAW = "raw"
    TEXT = "text"
    JSON = "json"
    FORM = "form"


class RequestInstance:
    """
    HTTP request builder and sender.

    An instance starts from copies of its template's maps and stages.
    Every chain call mutates the instance and returns it. Once sent, the
    instance is reset to its template's state and can be reused.

    Attributes:
        template: Template the instance was created from.
        url: Request URL including the query string.
        method: HTTP method (upper case).
        message: Free-form description attached with :meth:`descr`.
        format: Send mode of the ongoing send (None, text, json or form).
        header_map: Headers for this request.
        status_map: Status rules for this request.
        callback_map: Callbacks for this request.
        transform_stages: Transform hooks for this request.
        prepare_stages: Prepare hooks for this request.
    """

    __slots__ = (
        "template",
        "url",
        "method",
        "message",
        "format",
        "header_map",
        "status_map",
        "callback_map",
        "transform_stages",
        "prepare_stages",
    )

    def __init__(self, template: "Template") -> None:
        self.template = template
        self.reset()

    def reset(self) -> None:
        """Drop per-request state and copy the template's defaults again."""
        self.url: str = ""
        self.method: str = ""
        self.message: Any = ""
        self.format: Optional[str] = None
        self.header_map: Dict[str, Any] = dict(self.template.default_headers)
        self.status_map: Dict[str, Any] = dict(self.template.default_status)
        self.callback_map: Dict[str, Callable[..., Any]] = dict(
            self.template.default_callbacks
        )
        self.transform_stages: Tuple[TransformHook, ...] = (
            self.template.transform_stages
        )
        self.prepare_stages: Tuple[PrepareHook, ...] = self.template.prepare_stages

    # -- Configuration ---------------------------------------------------------

    def headers(self, headers: Optional[Mapping[str, Any]]) -> "RequestInstance":
        """
        Set request headers.

        Values are strings or callables evaluated at send time; a callable
        taking one argument receives the serialized body (useful for
        signatures).

        Args:
            headers: Headers to merge over the current ones.

        Returns:
            This instance.
        """
        if headers:
            self.header_map = {**self.header_map, **headers}
        return self

    def _set_url_and_method(
        self, method: str, url: str, params: Any
    ) -> "RequestInstance":
        self.method = validate_method(method)
        self.url = append_query(url, params)
        return self

    def get(self, url: str, params: Any = None) -> "RequestInstance":
        """
        Set method and url. Do not put a query in ``url`` when passing ``params``.

        Args:
            url: Url without query parameters.
            params: Mapping encoded as the query string, e.g. ``/api?key=value``.

        Returns:
            This instance.
        """
        return self._set_url_and_method("GET", url, params)

    def post(self, url: str, params: Any = None) -> "RequestInstance":
        """Set POST method and url."""
        return self._set_url_and_method("POST", url, params)

    def put(self, url: str, params: Any = None) -> "RequestInstance":
        """Set PUT method and url."""
        return self._set_url_and_method("PUT", url, params)

    def patch(self, url: str, params: Any = None) -> "RequestInstance":
        """Set PATCH method and url."""
        return self._set_url_and_method("PATCH", url, params)

    def delete(self, url: str, params: Any = None) -> "RequestInstance":
        """Set DELETE method and url."""
        return self._set_url_and_method("DELETE", url, params)

    def status(self, statuses: Mapping[str, Any]) -> "RequestInstance":
        """
        Set the response statuses that trigger each callback.

        Example::

            {"success": [200, 201], "error": ["!200", "!201"], "anyway": "all"}

        Raises:
            ConfigurationError: If a rule is not a valid status rule.
        """
        for name, rule in statuses.items():
            if not is_status_rule(rule):
                raise ConfigurationError(
                    f"Invalid status rule for {name!r}: {rule!r}"
                )
        self.status_map.update(statuses)
        return self

    def on(self, name: str, callback: Callable[..., Any]) -> "RequestInstance":
        """Set the callback ``callback(body, response)`` for a status name."""
        self.callback_map[name] = callback
        return self

    def descr(self, message: Any) -> "RequestInstance":
        """Attach any data describing the request to :attr:`message`."""
        self.message = message
        return self

    def preset(self) -> "Template":
        """
        Capture the current configuration as a new template.

        The snapshot uses this instance's live headers, statuses, callbacks
        and stages, not its template's original ones.
        """
        from presetreq.client.template import (  # pylint: disable=import-outside-toplevel
            Template,
        )

        return Template(
            headers=self.header_map,
            status=self.status_map,
            callbacks=self.callback_map,
            transform_stages=self.transform_stages,
            prepare_stages=self.prepare_stages,
            transport=self.template.transport,
        )

    # -- Sending ---------------------------------------------------------------

    async def send(self, data: Any = None) -> Response:
        """
        Send already serialized data with the headers set so far.

        Args:
            data: Body, passed through the preset transforms first.

        Returns:
            The response.
        """
        return await self.send_with(SendMode.RAW, data)

    async def send_text(self, data: Any = None) -> Response:
        """
        Send a key-value mapping as urlencoded text.

        Sets ``Content-Type: application/x-www-form-urlencoded`` unless a
        Content-Type was set explicitly.
        """
        return await self.send_with(SendMode.TEXT, data)

    async def send_json(self, data: Any = None) -> Response:
        """
        Send JSON-serializable data.

        Sets ``Content-Type: application/json`` unless a Content-Type was
        set explicitly.
        """
        return await self.send_with(SendMode.JSON, data)

    async def send_form(self, data: Any = None) -> Response:
        """Send form data as is. The transport must know how to encode it."""
        return await self.send_with(SendMode.FORM, data)

    async def send_with(self, mode: SendMode, data: Any = None) -> Response:
        """
        Run prepare hooks, transform and serialize ``data``, then dispatch.

        Args:
            mode: Serialization applied after the transforms.
            data: Data to send.

        Returns:
            The response.

        Raises:
            ConfigurationError: If no url was set.
            TransportError: If the transport failed.
        """
        mode = SendMode(mode)
        self.format = None if mode is SendMode.RAW else mode.value

        if not self.url:
            raise ConfigurationError("url is required")

        logger.debug(f"Sending {self.method} {self.url} ({mode.value})")

        if mode is SendMode.TEXT:
            self._default_content_type(FORM_URLENCODED)
        elif mode is SendMode.JSON:
            self._default_content_type(APPLICATION_JSON)

        try:
            await run_prepare(self.prepare_stages, self)
            value = run_transform(self.transform_stages, self, data)
            value = self._serialize(mode, value)
            return await Dispatcher(self.template.transport).dispatch(self, value)
        finally:
            self.reset()

    def _default_content_type(self, content_type: str) -> None:
        if not has_header(self.header_map, "Content-Type"):
            self.header_map["Content-Type"] = content_type

    @staticmethod
    def _serialize(mode: SendMode, value: Any) -> Any:
        if mode is SendMode.TEXT:
            if isinstance(value, (str, bytes)):
                return value
            return encode_query(value)
        if mode is SendMode.JSON:
            return to_json(value)
        return value

    def __repr__(self) -> str:
        return f"<RequestInstance {self.method or '-'} {self.url or '-'}>"
