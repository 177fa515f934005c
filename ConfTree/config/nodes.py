"""
Tree node kinds for ConfTree.

A configuration tree is built from plain Python values produced by the JSON
decoder: None, bool, float, str, list and dict. NodeKind names those six
shapes and kind_of() is the one place that maps a value onto its kind, so the
coercion and decoding code can dispatch on an explicit tag.
"""

import enum
from typing import Any


class NodeKind(enum.Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: Any) -> NodeKind:
    """
    Classify a tree value.

    bool is checked before the numeric types because it is a subclass of int.
    Integers are accepted as numbers so that values written programmatically
    behave like values decoded from a document.

    Raises:
        TypeError: If the value is not something a JSON document can hold.
    """
    if value is None:
        return NodeKind.NULL
    if isinstance(value, bool):
        return NodeKind.BOOL
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, list):
        return NodeKind.SEQUENCE
    if isinstance(value, dict):
        return NodeKind.MAPPING
    raise TypeError(f"unsupported tree value of type {type(value).__name__}")
