"""Permissive coercion of query-string values.

Query parameters arrive as strings. These helpers turn them into typed
values without raising: booleans fall back to ``False`` and numbers to
``None`` (or a caller-supplied default) when the input is not recognized.
"""

import math
from typing import Any

TRUTHY_STRINGS = frozenset({"1", "true", "yes", "on", "y", "t"})


def parse_bool(value: Any) -> bool:
    """Parse a truthy string such as ``"true"``, ``"1"`` or ``"yes"``.

    Anything that is not a recognized truthy value, including ``None``
    and garbage like ``"maybe"``, is ``False``.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY_STRINGS


def parse_float(value: Any) -> float | None:
    """Parse a float, returning ``None`` for unparseable or non-finite input."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_int(value: Any, default: int) -> int:
    """Parse an integer, returning ``default`` when ``value`` is not one."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default
