"""
ConfTree - an in-memory, hierarchical configuration store.

ConfTree parses a JSON document into a tree and exposes typed accessors over
"::"-delimited keys, safe concurrent reads and writes, sub-tree extraction and
decoding of sub-trees onto dataclasses.

Key Components:
- ConfigContainer: The store, with get/set and typed accessors
- JSONConfig: Adapter that parses JSON bytes into a ConfigContainer
- FormatRegistry: Explicit registry of format adapters
- CLI: Command-line interface for inspecting configuration files

Usage Examples:
    from ConfTree import new_config_data

    config = new_config_data("json", b'{"server": {"port": 8080, "debug": "true"}}')
    config.get_int("server::port")           # 8080
    config.get_bool("server::debug")         # True
    config.default_int("server::workers", 4) # 4

    # Setting the log level
    from ConfTree import set_log_level
    set_log_level('debug')
"""

__version__ = '1.0.0'

from ConfTree.utils.logging import get_logger, set_log_level, configure_logging
from ConfTree.config import (
    ConfigContainer,
    JSONConfig,
    FormatRegistry,
    default_registry,
    new_config_data,
    decode,
)

__all__ = [
    'ConfigContainer',
    'JSONConfig',
    'FormatRegistry',
    'default_registry',
    'new_config_data',
    'decode',
    'get_logger',
    'set_log_level',
    'configure_logging',
]
