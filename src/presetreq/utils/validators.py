"""utils/validators.py

Validation utilities for Presetreq.
"""

import re
from typing import Any

from presetreq.http.status import MULTI_RULE_TYPES

_STATUS_PATTERN = re.compile(r"^!?[0-9x]{3}$", re.IGNORECASE)

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def is_status_rule(rule: Any) -> bool:
    """Check a status rule against the ``"all" | "!4xx" | 404 | [...]`` grammar."""
    if isinstance(rule, MULTI_RULE_TYPES):
        return all(
            not isinstance(item, MULTI_RULE_TYPES) and is_status_rule(item)
            for item in rule
        )
    if isinstance(rule, bool):
        return False
    if isinstance(rule, int):
        return True
    if isinstance(rule, str):
        return rule.lower() == "all" or _STATUS_PATTERN.match(rule) is not None
    return False


def validate_method(method: str) -> str:
    """Normalize an HTTP method name, raising ValueError for unsupported ones."""
    normalized = method.upper()
    if normalized not in HTTP_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")
    return normalized
