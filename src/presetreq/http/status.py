"""src/presetreq/http/status.py

Response status rule matching.

A status rule decides whether a named callback fires for a response:

    - ``"all"`` matches every code.
    - ``"404"``, ``"4xx"``, ``"42x"`` match codes starting with that
      pattern, ``x`` standing for any single digit.
    - ``"!200"`` negates the pattern that follows the ``!``.
    - ``404`` (an int) matches that exact code.
    - A list, tuple or set matches when any of its members does.
"""

import functools
import re
from typing import Any, Pattern

__all__ = ["match_status", "status_to_regex", "MULTI_RULE_TYPES"]

MULTI_RULE_TYPES = (list, tuple, set, frozenset)


@functools.lru_cache(maxsize=128)
def status_to_regex(pattern: str) -> Pattern[str]:
    """
    Compile a status pattern such as ``"5xx"`` to a regular expression.

    Only the first three characters take part. ``x`` (any case) becomes a
    single digit wildcard, every other character is matched literally.
    """
    parts = []
    for char in pattern[:3]:
        if char in "xX":
            parts.append("[0-9]")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts))


def _match_pattern(pattern: str, code: int) -> bool:
    return status_to_regex(pattern).match(str(code)) is not None


def match_status(rule: Any, code: int) -> bool:
    """
    Check whether a response status code satisfies a status rule.

    Args:
        rule: Status rule (string pattern, int or collection of them).
        code: Response status code.

    Returns:
        True if the rule matches the code.
    """
    if isinstance(rule, MULTI_RULE_TYPES):
        return any(match_status(item, code) for item in rule)

    if isinstance(rule, bool):
        return False

    if isinstance(rule, int):
        return rule == code

    if not isinstance(rule, str):
        return False

    text = rule.strip()
    if text.lower() == "all":
        return True

    if text.startswith("!"):
        return not _match_pattern(text[1:], code)

    return _match_pattern(text, code)
