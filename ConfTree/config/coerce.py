"""
Type coercion for ConfTree.

Each function takes a resolved tree value and converts it to one scalar type,
raising CoercionError when the value has the wrong kind. Numbers in the tree
are floats, so the integer conversions truncate toward zero.
"""

import math
import re
from typing import Any, List, Optional

from ConfTree.config.defaults import LIST_SEPARATOR
from ConfTree.config.nodes import NodeKind, kind_of
from ConfTree.exceptions import CoercionError

TRUE_TOKENS = frozenset(["1", "t", "T", "true", "TRUE", "True", "y", "Y", "yes", "YES", "Yes", "on", "ON", "On"])
FALSE_TOKENS = frozenset(["0", "f", "F", "false", "FALSE", "False", "n", "N", "no", "NO", "No", "off", "OFF", "Off"])

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_DECIMAL_INT = re.compile(r"[+-]?[0-9]+\Z")


def parse_bool(value: Any) -> bool:
    """
    Parse a boolean from its common representations.

    Accepts native booleans, the numbers 1 and 0, and the token spellings in
    TRUE_TOKENS / FALSE_TOKENS.

    Raises:
        CoercionError: If the value is not a recognised boolean representation.
    """
    kind = kind_of(value)
    if kind is NodeKind.BOOL:
        return value
    if kind is NodeKind.NUMBER:
        if value == 1:
            return True
        if value == 0:
            return False
    elif kind is NodeKind.STRING:
        if value in TRUE_TOKENS:
            return True
        if value in FALSE_TOKENS:
            return False
    raise CoercionError(f"parsing {value!r}: invalid syntax for a boolean")


def _truncate(value: Any) -> int:
    if isinstance(value, float) and not math.isfinite(value):
        raise CoercionError(f"{value!r} is not a finite number")
    result = int(value)
    if not INT64_MIN <= result <= INT64_MAX:
        raise CoercionError(f"{value!r} is out of range for a 64-bit integer")
    return result


def to_int(value: Any) -> int:
    """Numbers truncate toward zero; strings must be plain base-10 integers."""
    kind = kind_of(value)
    if kind is NodeKind.NUMBER:
        return _truncate(value)
    if kind is NodeKind.STRING:
        if not _DECIMAL_INT.match(value):
            raise CoercionError(f"parsing {value!r}: invalid syntax for an integer")
        return _truncate(int(value))
    raise CoercionError("not valid value")


def to_int64(value: Any) -> int:
    if kind_of(value) is NodeKind.NUMBER:
        return _truncate(value)
    raise CoercionError("not int64 value")


def to_float(value: Any) -> float:
    if kind_of(value) is NodeKind.NUMBER:
        return float(value)
    raise CoercionError("not float64 value")


def to_string(value: Any) -> str:
    """Return string values unchanged and "" for every other kind."""
    if kind_of(value) is NodeKind.STRING:
        return value
    return ""


def to_strings(value: Any) -> Optional[List[str]]:
    """Split a string value on ";". Empty or non-string values give None."""
    text = to_string(value)
    if not text:
        return None
    return text.split(LIST_SEPARATOR)
