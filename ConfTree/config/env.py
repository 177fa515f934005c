"""
Environment variable expansion for ConfTree.

A string value that is exactly a placeholder of the form "${NAME}" or
"${NAME||default}" is replaced with the value of the environment variable
NAME, or with the default when the variable is unset or empty. Strings that
merely contain a placeholder are left alone.
"""

import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ConfTree.utils.logging import get_logger

logger = get_logger(__name__)


def expand_value_env(value: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Expand a single "${NAME||default}" placeholder.

    Examples:
        >>> expand_value_env("${HOME}", {"HOME": "/root"})
        '/root'
        >>> expand_value_env("${MISSING||fallback}", {})
        'fallback'
        >>> expand_value_env("plain", {})
        'plain'
    """
    if len(value) < 3 or not value.startswith("${") or not value.endswith("}"):
        return value

    body = value[2:-1]
    bars = body.find("||")
    brace = body.find("}")
    if bars != -1 and (brace == -1 or bars < brace):
        name, default = body[:bars], body[bars + 2:]
    else:
        # the name ends at the first closing brace
        name, default = body if brace == -1 else body[:brace], ""

    environ = os.environ if environ is None else environ
    return environ.get(name) or default


def _expand_map(data: Dict[str, Any], environ: Optional[Mapping[str, str]]) -> Dict[str, Any]:
    # Walks with an explicit stack so that any depth the JSON decoder accepts
    # can be expanded
    expanded: Dict[str, Any] = {}
    pending: List[Tuple[Any, Any]] = [(data, expanded)]

    while pending:
        source, copied = pending.pop()
        items = source.items() if isinstance(source, dict) else enumerate(source)
        for key, value in items:
            if isinstance(value, dict):
                child: Any = {}
                pending.append((value, child))
                value = child
            elif isinstance(value, list):
                child = [None] * len(value)
                pending.append((value, child))
                value = child
            elif isinstance(value, str):
                value = expand_value_env(value, environ)
            copied[key] = value

    return expanded


def expand_value_env_for_map(data: Dict[str, Any], environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Return a copy of a mapping with every string leaf expanded.

    Nested mappings and sequences are copied as they are walked.
    """
    expanded = _expand_map(data, environ)
    logger.debug("Expanded environment placeholders", extra={'keys': len(expanded)})
    return expanded
