"""src/presetreq/client/template.py

Presets: immutable request templates and their derivation.

A :class:`Template` holds default headers, status rules, callbacks and the
composed transform/prepare stages. Templates never change once built; every
request is a :class:`RequestInstance` created from one, and new templates are
derived from a parent with :func:`derive` (or :meth:`Template.preset`).
"""

import logging
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from presetreq.client.hooks import (
    MergeStrategy,
    PrepareHook,
    TransformHook,
    compose_stages,
)
from presetreq.exceptions import ConfigurationError
from presetreq.utils.validators import is_status_rule

if TYPE_CHECKING:  # pragma: no cover
    from presetreq.client.request import RequestInstance
    from presetreq.transport.base import Transport

__all__ = ["PresetSpec", "Template", "derive"]

logger = logging.getLogger(__name__)

# pylint: disable=too-many-arguments


@dataclass(frozen=True)
class PresetSpec:
    """
    Description of one preset layer.

    Attributes:
        headers: Default headers (values may be callables, see
            :meth:`RequestInstance.headers`).
        status: Status rules keyed by callback name.
        on: Callbacks keyed by name, called as ``fn(body, response)``.
        prepare: Hook ``prepare(request)`` awaited before each send.
        send: Transform ``send(request, value) -> value`` applied to data.
        prepare_merge_strategy: ``"post"`` (parent first) or ``"pre"``.
        send_merge_strategy: ``"post"`` (parent first) or ``"pre"``.
        transport: Transport to use; inherited from the parent when None.
    """

    headers: Optional[Mapping[str, Any]] = None
    status: Optional[Mapping[str, Any]] = None
    on: Optional[Mapping[str, Callable[..., Any]]] = None
    prepare: Optional[PrepareHook] = None
    send: Optional[TransformHook] = None
    prepare_merge_strategy: Union[MergeStrategy, str, None] = None
    send_merge_strategy: Union[MergeStrategy, str, None] = None
    transport: Optional["Transport"] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "PresetSpec":
        """Build a spec from a plain dict, rejecting unknown keys."""
        known = {field.name for field in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown preset option(s): {', '.join(sorted(unknown))}"
            )
        return cls(**options)


def _check_status_rules(status: Mapping[str, Any]) -> None:
    for name, rule in status.items():
        if not is_status_rule(rule):
            raise ConfigurationError(f"Invalid status rule for {name!r}: {rule!r}")


class Template:
    """
    Immutable request preset.

    Attributes:
        default_headers: Read-only view of the default headers.
        default_status: Read-only view of the status rules.
        default_callbacks: Read-only view of the callbacks.
        transform_stages: Transform hooks in execution order.
        prepare_stages: Prepare hooks in execution order.
        transport: Transport used by instances of this template.
        parent: Template this one was derived from, if any.
    """

    __slots__ = (
        "_headers",
        "_status",
        "_callbacks",
        "_transform_stages",
        "_prepare_stages",
        "_transport",
        "_parent",
    )

    def __init__(
        self,
        *,
        headers: Optional[Mapping[str, Any]] = None,
        status: Optional[Mapping[str, Any]] = None,
        callbacks: Optional[Mapping[str, Callable[..., Any]]] = None,
        transform_stages: Tuple[TransformHook, ...] = (),
        prepare_stages: Tuple[PrepareHook, ...] = (),
        transport: Optional["Transport"] = None,
        parent: Optional["Template"] = None,
    ) -> None:
        self._headers: Dict[str, Any] = dict(headers or {})
        self._status: Dict[str, Any] = dict(status or {})
        self._callbacks: Dict[str, Callable[..., Any]] = dict(callbacks or {})
        self._transform_stages = tuple(transform_stages)
        self._prepare_stages = tuple(prepare_stages)
        self._transport = transport
        self._parent = parent

    @classmethod
    def root(
        cls, transport: Optional["Transport"] = None, **options: Any
    ) -> "Template":
        """
        Create a template with no parent.

        Args:
            transport: Transport for every instance derived from it.
            **options: Any other :class:`PresetSpec` field.

        Returns:
            A new root Template.
        """
        return derive(None, PresetSpec(transport=transport, **options))

    @property
    def default_headers(self) -> Mapping[str, Any]:
        return MappingProxyType(self._headers)

    @property
    def default_status(self) -> Mapping[str, Any]:
        return MappingProxyType(self._status)

    @property
    def default_callbacks(self) -> Mapping[str, Callable[..., Any]]:
        return MappingProxyType(self._callbacks)

    @property
    def transform_stages(self) -> Tuple[TransformHook, ...]:
        return self._transform_stages

    @property
    def prepare_stages(self) -> Tuple[PrepareHook, ...]:
        return self._prepare_stages

    @property
    def transport(self) -> Optional["Transport"]:
        return self._transport

    @property
    def parent(self) -> Optional["Template"]:
        return self._parent

    def preset(
        self,
        spec: Union[PresetSpec, Mapping[str, Any], None] = None,
        **options: Any,
    ) -> "Template":
        """
        Derive a child template from this one.

        Accepts either a :class:`PresetSpec`, a mapping of its fields, or
        the fields as keyword arguments.
        """
        if spec is None:
            spec = PresetSpec(**options)
        elif options:
            raise TypeError("Pass either a spec or keyword options, not both")
        return derive(self, spec)

    # -- Instance creation ---------------------------------------------------

    def new(self) -> "RequestInstance":
        """Create a blank request instance bound to this template."""
        from presetreq.client.request import (  # pylint: disable=import-outside-toplevel
            RequestInstance,
        )

        return RequestInstance(self)

    def headers(self, headers: Mapping[str, Any]) -> "RequestInstance":
        """Start a request with extra headers."""
        return self.new().headers(headers)

    def get(self, url: str, params: Any = None) -> "RequestInstance":
        """Start a GET request."""
        return self.new().get(url, params)

    def post(self, url: str, params: Any = None) -> "RequestInstance":
        """Start a POST request."""
        return self.new().post(url, params)

    def put(self, url: str, params: Any = None) -> "RequestInstance":
        """Start a PUT request."""
        return self.new().put(url, params)

    def patch(self, url: str, params: Any = None) -> "RequestInstance":
        """Start a PATCH request."""
        return self.new().patch(url, params)

    def delete(self, url: str, params: Any = None) -> "RequestInstance":
        """Start a DELETE request."""
        return self.new().delete(url, params)

    def status(self, statuses: Mapping[str, Any]) -> "RequestInstance":
        """Start a request with extra status rules."""
        return self.new().status(statuses)

    def on(self, name: str, callback: Callable[..., Any]) -> "RequestInstance":
        """Start a request with an extra callback."""
        return self.new().on(name, callback)

    def descr(self, message: Any) -> "RequestInstance":
        """Start a request carrying a description."""
        return self.new().descr(message)

    def __repr__(self) -> str:
        return (
            f"<Template headers={list(self._headers)} "
            f"status={list(self._status)} callbacks={list(self._callbacks)}>"
        )


def derive(
    parent: Optional[Template],
    spec: Union[PresetSpec, Mapping[str, Any], None] = None,
) -> Template:
    """
    Build a new template from an optional parent and a preset spec.

    Header, status and callback maps are merged with the spec winning on
    key conflicts. Transform and prepare hooks are composed with the
    parent's stages according to the spec's merge strategies; without a
    parent the spec's hooks are used as they are.

    Args:
        parent: Template to inherit from, or None.
        spec: Preset layer to apply.

    Returns:
        The derived Template.

    Raises:
        ConfigurationError: If a strategy or status rule is invalid.
    """
    if spec is None:
        spec = PresetSpec()
    elif not isinstance(spec, PresetSpec):
        spec = PresetSpec.from_mapping(spec)

    send_strategy = MergeStrategy.coerce(spec.send_merge_strategy)
    prepare_strategy = MergeStrategy.coerce(spec.prepare_merge_strategy)
    _check_status_rules(spec.status or {})

    if parent is None:
        template = Template(
            headers=spec.headers,
            status=spec.status,
            callbacks=spec.on,
            transform_stages=(spec.send,) if spec.send is not None else (),
            prepare_stages=(spec.prepare,) if spec.prepare is not None else (),
            transport=spec.transport,
        )
    else:
        template = Template(
            headers={**parent.default_headers, **(spec.headers or {})},
            status={**parent.default_status, **(spec.status or {})},
            callbacks={**parent.default_callbacks, **(spec.on or {})},
            transform_stages=compose_stages(
                parent.transform_stages, spec.send, send_strategy
            ),
            prepare_stages=compose_stages(
                parent.prepare_stages, spec.prepare, prepare_strategy
            ),
            transport=(
                spec.transport if spec.transport is not None else parent.transport
            ),
            parent=parent,
        )

    logger.debug(f"Derived {template!r}")
    return template
