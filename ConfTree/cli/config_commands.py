"""
Configuration commands for the ConfTree CLI.

Each function loads a document, performs one operation on the resulting
container and returns a process exit code. File reading and writing happen
here so that the container itself never touches the filesystem.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
import yaml

from ConfTree.config import ConfigContainer, FormatRegistry, default_registry
from ConfTree.config.coerce import parse_bool
from ConfTree.config.defaults import LIST_SEPARATOR
from ConfTree.exceptions import ConfTreeError
from ConfTree.utils import format_json, format_scalar
from ConfTree.utils.logging import get_logger

logger = get_logger(__name__)

VALUE_TYPES = ('raw', 'string', 'strings', 'bool', 'int', 'int64', 'float')

# How a --default given on the command line is converted for each value type
_DEFAULT_CONVERTERS: Dict[str, Callable[[str], Any]] = {
    'raw': str,
    'string': str,
    'strings': lambda text: text.split(LIST_SEPARATOR),
    'bool': parse_bool,
    'int': int,
    'int64': int,
    'float': float,
}


def load_container(path: str, adapter: str = 'json',
                   registry: Optional[FormatRegistry] = None) -> ConfigContainer:
    """Read a configuration file and parse it with the named adapter."""
    registry = registry or default_registry()
    data = Path(path).read_bytes()
    logger.debug(f"Loaded {len(data)} bytes from {path}")
    return registry.get(adapter).parse_data(data)


def _report(error: ConfTreeError, action: str) -> int:
    logger.error(f"Error {action}: {error.message}")
    click.echo(f"Error: {error.user_message} ({error.message})", err=True)
    return 1


def config_show(path: str, key: str = '', format_type: str = 'yaml', adapter: str = 'json') -> int:
    """
    Display a whole document or the sub-tree at key.

    Args:
        path: Configuration file to read
        key: Optional "::"-delimited key of the sub-tree to display
        format_type: Output format (yaml or json)
        adapter: Registered format name used to parse the file

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        container = load_container(path, adapter)
        data = container.get_all() if not key else container.get_raw(key)

        if format_type.lower() == 'json':
            click.echo(format_json(data))
        else:
            click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), nl=False)
        return 0
    except ConfTreeError as e:
        return _report(e, "displaying configuration")


def config_get(path: str, key: str, value_type: str = 'raw', default: Optional[str] = None,
               adapter: str = 'json') -> int:
    """
    Print a single value converted to value_type.

    When a default is given, the default_* accessor is used and the command
    never fails on a missing or mistyped key.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        container = load_container(path, adapter)

        if default is not None:
            try:
                fallback = _DEFAULT_CONVERTERS[value_type](default)
            except (ValueError, ConfTreeError):
                click.echo(f"Error: default {default!r} is not a valid {value_type} value", err=True)
                return 2
            value = getattr(container, f"default_{value_type}")(key, fallback)
        else:
            value = getattr(container, f"get_{value_type}")(key)

        if value_type == 'strings':
            for item in value or []:
                click.echo(item)
        else:
            click.echo(format_scalar(value))
        return 0
    except ConfTreeError as e:
        return _report(e, f"reading key '{key}'")


def config_section(path: str, name: str, adapter: str = 'json') -> int:
    """Print a flat string section as key = value lines."""
    try:
        container = load_container(path, adapter)
        for key, value in container.get_section(name).items():
            click.echo(f"{key} = {value}")
        return 0
    except ConfTreeError as e:
        return _report(e, f"reading section '{name}'")


def config_set(path: str, key: str, value: str, output: Optional[str] = None,
               adapter: str = 'json') -> int:
    """
    Set a top-level string value and write the document back out.

    Args:
        path: Configuration file to read
        key: Top-level key to set (used literally)
        value: String value to store
        output: File to write; defaults to overwriting path

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        container = load_container(path, adapter)
        container.set(key, value)

        destination = Path(output or path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(container.serialize())

        logger.info(f"Set '{key}' and wrote configuration to {destination}")
        click.echo(f"Configuration written to: {destination}")
        return 0
    except ConfTreeError as e:
        return _report(e, f"setting key '{key}'")


def config_formats() -> int:
    """List the registered format adapters."""
    for name in default_registry().names():
        click.echo(name)
    return 0
