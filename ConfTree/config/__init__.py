"""
ConfTree Configuration System.

This package provides the in-memory configuration container with support for
"::"-delimited hierarchical keys, typed accessors, sub-tree extraction and
decoding onto dataclasses.

Usage:
    from ConfTree.config import new_config_data

    config = new_config_data("json", b'{"database": {"port": 5432}}')

    # Get a typed value
    port = config.get_int("database::port")

    # Fall back to a default on any error
    timeout = config.default_float("database::timeout", 30.0)

    # Work with a section as its own container
    database = config.sub("database")
"""

from ConfTree.config.container import ConfigContainer
from ConfTree.config.decode import decode
from ConfTree.config.parser import JSONConfig
from ConfTree.config.registry import FormatRegistry, default_registry, new_config_data

__all__ = [
    "ConfigContainer",
    "JSONConfig",
    "FormatRegistry",
    "default_registry",
    "new_config_data",
    "decode",
]
