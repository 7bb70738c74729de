"""src/presetreq/client/__init__.py"""

from .response import Response
from .hooks import MergeStrategy
from .template import PresetSpec, Template, derive
from .request import RequestInstance, SendMode
from .dispatcher import Dispatcher
from .facade import create_client

__all__ = [
    "Response",
    "MergeStrategy",
    "PresetSpec",
    "Template",
    "derive",
    "RequestInstance",
    "SendMode",
    "Dispatcher",
    "create_client",
]
