"""
Format registry for ConfTree.

Adapters are registered on an explicit FormatRegistry object rather than at
import time. default_registry() builds a registry with the built-in JSON
adapter, and new_config_data() is the factory most callers use.

Usage:
    from ConfTree.config import new_config_data

    config = new_config_data("json", b'{"app": {"name": "demo"}}')
    config.get_string("app::name")
"""

from typing import Dict, List, Optional, Protocol, Union

from ConfTree.config.container import ConfigContainer
from ConfTree.config.defaults import DEFAULT_FORMAT
from ConfTree.config.parser import JSONConfig
from ConfTree.exceptions import UnknownFormatError


class FormatAdapter(Protocol):
    def parse_data(self, data: Union[bytes, str]) -> ConfigContainer:
        ...


class FormatRegistry:
    """Maps format names to adapters, remembering registration order."""

    def __init__(self) -> None:
        self._adapters: Dict[str, FormatAdapter] = {}

    def register(self, name: str, adapter: FormatAdapter) -> None:
        """
        Register an adapter under a name.

        Raises:
            ValueError: If the adapter is None or the name is already taken.
        """
        if adapter is None:
            raise ValueError("config: register adapter is nil")
        if name in self._adapters:
            raise ValueError(f"config: register called twice for adapter {name}")
        self._adapters[name] = adapter

    def get(self, name: str) -> FormatAdapter:
        try:
            return self._adapters[name]
        except KeyError:
            raise UnknownFormatError(
                f"config: unknown adaptername {name!r} (forgotten import?)",
                context={"format": name, "available": self.names()},
            ) from None

    def names(self) -> List[str]:
        return list(self._adapters)

    def __contains__(self, name: object) -> bool:
        return name in self._adapters


def default_registry() -> FormatRegistry:
    """Create a registry holding the built-in adapters."""
    registry = FormatRegistry()
    registry.register(DEFAULT_FORMAT, JSONConfig())
    return registry


def new_config_data(adapter_name: str, data: Union[bytes, str],
                    registry: Optional[FormatRegistry] = None) -> ConfigContainer:
    """
    Parse a document with the adapter registered under adapter_name.

    Raises:
        UnknownFormatError: If no adapter has that name.
        ParseError: If the adapter cannot parse the document.
    """
    registry = registry or default_registry()
    return registry.get(adapter_name).parse_data(data)
