"""
Path resolution for ConfTree.

Keys address values in the tree with segments joined by "::", for example
"database::pool::size". Resolution walks the tree one segment at a time.
"""

from typing import Any, Dict, List

from ConfTree.config.defaults import KEY_DELIMITER
from ConfTree.config.nodes import NodeKind, kind_of
from ConfTree.exceptions import KeyNotFoundError


def split_key(key: str) -> List[str]:
    """Split a key into its path segments."""
    return key.split(KEY_DELIMITER)


def _is_index(segment: str) -> bool:
    return segment.isascii() and segment.isdigit()


def resolve(root: Dict[str, Any], key: str) -> Any:
    """
    Resolve a key against a root mapping.

    The empty key resolves to the root itself. Mappings are descended by key
    and sequences by decimal index. When the walk reaches a scalar, or a
    sequence with a non-numeric segment, the remaining segments are skipped
    and that value is returned. A key missing from a mapping, or an index
    past the end of a sequence, stops the walk immediately.

    Args:
        root: The root mapping of a container
        key: A key such as "name" or "section::name"

    Returns:
        The resolved value, which may be any tree node (including None).

    Raises:
        KeyNotFoundError: If a segment does not exist in the node being walked.

    Examples:
        >>> resolve({"a": {"b": 1.0}}, "a::b")
        1.0
        >>> resolve({"a": "leaf"}, "a::b::c")
        'leaf'
        >>> resolve({"rootArray": ["x", "y"]}, "rootArray::1")
        'y'
    """
    if not key:
        return root

    segments = split_key(key)
    if segments[0] not in root:
        raise KeyNotFoundError(key)
    current = root[segments[0]]

    for segment in segments[1:]:
        kind = kind_of(current)
        if kind is NodeKind.MAPPING:
            if segment not in current:
                raise KeyNotFoundError(key)
            current = current[segment]
        elif kind is NodeKind.SEQUENCE and _is_index(segment):
            index = int(segment)
            if index >= len(current):
                raise KeyNotFoundError(key)
            current = current[index]

    return current
