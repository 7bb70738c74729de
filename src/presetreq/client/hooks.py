"""src/presetreq/client/hooks.py

Composition of preset hooks.

Two kinds of hooks travel with a preset:

    - transform (``send``): ``hook(request, value) -> value``, applied to the
      outgoing data before serialization.
    - prepare: ``hook(request)``, sync or async, awaited before every send
      (token refresh and similar work).

Each preset layer contributes at most one hook of each kind. Layers are kept
as an ordered tuple of stages; the merge strategy of the child decides
whether its stage runs after (``post``) or before (``pre``) the stages it
inherited.
"""

import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Tuple, Union

from presetreq.exceptions import ConfigurationError

if TYPE_CHECKING:  # pragma: no cover
    from presetreq.client.request import RequestInstance

__all__ = [
    "MergeStrategy",
    "TransformHook",
    "PrepareHook",
    "compose_stages",
    "run_transform",
    "run_prepare",
]

TransformHook = Callable[["RequestInstance", Any], Any]
PrepareHook = Callable[["RequestInstance"], Union[None, Awaitable[None]]]


class MergeStrategy(str, Enum):
    """Position of a child's hook relative to its parent's hooks."""

    POST = "post"
    PRE = "pre"

    @classmethod
    def coerce(cls, value: Union["MergeStrategy", str, None]) -> "MergeStrategy":
        """Resolve a strategy name, ``None`` meaning the default ``post``."""
        if value is None:
            return cls.POST
        try:
            return cls(value)
        except ValueError as exc:
            raise ConfigurationError(
                f"Unknown merge strategy {value!r}, expected 'post' or 'pre'"
            ) from exc


def compose_stages(
    parent_stages: Tuple[Callable[..., Any], ...],
    stage: Optional[Callable[..., Any]],
    strategy: MergeStrategy,
) -> Tuple[Callable[..., Any], ...]:
    """
    Place a child's hook among the stages inherited from its parent.

    Args:
        parent_stages: Stages of the parent preset, in execution order.
        stage: The child's own hook, or None when it has none.
        strategy: ``POST`` runs the parent stages first, ``PRE`` the child.

    Returns:
        New tuple of stages in execution order.
    """
    if stage is None:
        return parent_stages
    if strategy is MergeStrategy.PRE:
        return (stage,) + parent_stages
    return parent_stages + (stage,)


def run_transform(
    stages: Tuple[TransformHook, ...], request: "RequestInstance", value: Any
) -> Any:
    """Fold ``value`` through every transform stage in order."""
    for stage in stages:
        value = stage(request, value)
    return value


async def run_prepare(
    stages: Tuple[PrepareHook, ...], request: "RequestInstance"
) -> None:
    """Run prepare stages one after another, awaiting async ones."""
    for stage in stages:
        result = stage(request)
        if inspect.isawaitable(result):
            await result
