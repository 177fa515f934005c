"""
Utility functions for the ConfTree package.

This module provides output helpers shared by the CLI.
"""

import json
from typing import Any

from ConfTree.utils.logging import get_logger

logger = get_logger(__name__)


def format_json(data: Any, indent: int = 2, sort_keys: bool = False) -> str:
    """
    Format data as a JSON string.

    Non-ASCII characters are kept as-is and values that JSON cannot represent
    are rendered with str().

    Example:
        >>> print(format_json({'server': {'port': 8080.0}}))
        {
          "server": {
            "port": 8080.0
          }
        }
    """
    return json.dumps(
        data,
        indent=indent,
        ensure_ascii=False,
        sort_keys=sort_keys,
        default=str,
    )


def format_scalar(value: Any) -> str:
    """Render a single configuration value for terminal output."""
    if isinstance(value, (dict, list)):
        return format_json(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)
