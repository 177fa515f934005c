"""
Configuration container for ConfTree.

This module implements the ConfigContainer class: an in-memory configuration
tree with typed accessors over "::"-delimited keys, guarded by a per-instance
reader/writer lock.

Keys:
    Reads walk the tree one segment at a time ("database::pool::size").
    Writes only ever touch the top level: set("a::b", "1") stores a literal
    key "a::b" rather than creating nested mappings.

Lock scope:
    Each container owns its own lock. A container returned by sub() shares
    the underlying mapping with its parent but not the parent's lock, so
    concurrent writes through one and reads through the other are not
    synchronized with each other. get(), get_raw() and get_all() hand out
    copies of mappings and sequences, so only sub() exposes the live tree.
"""

import copy
import json
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar, Union

from ConfTree.config import coerce
from ConfTree.config.decode import decode
from ConfTree.config.defaults import SERIALIZE_INDENT
from ConfTree.config.nodes import NodeKind, kind_of
from ConfTree.config.path import resolve
from ConfTree.config.rwlock import ReadWriteLock
from ConfTree.exceptions import (
    ConfTreeError,
    KeyNotFoundError,
    NodeTypeError,
    SectionError,
    UnsupportedOperationError,
)
from ConfTree.utils.logging import get_logger

T = TypeVar('T')

logger = get_logger(__name__)


class ConfigContainer:
    """
    A hierarchical configuration store.

    Containers are normally created by a format adapter (see
    ConfTree.config.parser.JSONConfig) rather than directly.

    Attributes:
        _data (Dict[str, Any]): The root mapping
        _lock (ReadWriteLock): Guards _data and everything reachable from it
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data = {} if data is None else data
        self._lock = ReadWriteLock()

    def _lookup(self, key: str, detach: bool = False) -> Any:
        """
        Resolve a key under the read lock. JSON null counts as absent.

        With detach, mappings and sequences are deep-copied before the lock is
        released so the caller never holds a reference into the tree.
        """
        with self._lock.read_locked():
            value = resolve(self._data, key)
            if detach and isinstance(value, (dict, list)):
                value = copy.deepcopy(value)
        if value is None:
            raise KeyNotFoundError(key)
        return value

    def get(self, key: str) -> Any:
        """
        Get the raw value for a key, or None if it does not resolve.

        Mappings and sequences are returned as copies.

        Examples:
            >>> container.get("database::pool::size")
            10.0
        """
        try:
            return self._lookup(key, detach=True)
        except KeyNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        """
        Store a string under a top-level key.

        The key is used literally; "::" in it does not create nested mappings.
        """
        with self._lock.write_locked():
            self._data[key] = value

    def get_raw(self, key: str) -> Any:
        """
        Return the value for a key unconverted. Mappings and sequences are
        returned as copies.

        Raises:
            KeyNotFoundError: If the key does not resolve.
        """
        return self._lookup(key, detach=True)

    def default_raw(self, key: str, default_val: Any) -> Any:
        try:
            return self.get_raw(key)
        except ConfTreeError:
            return default_val

    def get_bool(self, key: str) -> bool:
        """
        Return the boolean value for a key.

        Raises:
            KeyNotFoundError: If the key does not resolve.
            CoercionError: If the value is not a recognised boolean representation.
        """
        return coerce.parse_bool(self._lookup(key))

    def default_bool(self, key: str, default_val: bool) -> bool:
        try:
            return self.get_bool(key)
        except ConfTreeError:
            return default_val

    def get_int(self, key: str) -> int:
        """
        Return the integer value for a key.

        Numbers are truncated toward zero; strings are parsed as base-10.

        Raises:
            KeyNotFoundError: If the key does not resolve.
            CoercionError: If the value is neither a number nor an integer string.
        """
        return coerce.to_int(self._lookup(key))

    def default_int(self, key: str, default_val: int) -> int:
        try:
            return self.get_int(key)
        except ConfTreeError:
            return default_val

    def get_int64(self, key: str) -> int:
        """
        Return the 64-bit integer value for a key. Only numbers are accepted.

        Raises:
            KeyNotFoundError: If the key does not resolve.
            CoercionError: If the value is not a number.
        """
        return coerce.to_int64(self._lookup(key))

    def default_int64(self, key: str, default_val: int) -> int:
        try:
            return self.get_int64(key)
        except ConfTreeError:
            return default_val

    def get_float(self, key: str) -> float:
        """
        Return the floating point value for a key. Only numbers are accepted.

        Raises:
            KeyNotFoundError: If the key does not resolve.
            CoercionError: If the value is not a number.
        """
        return coerce.to_float(self._lookup(key))

    def default_float(self, key: str, default_val: float) -> float:
        try:
            return self.get_float(key)
        except ConfTreeError:
            return default_val

    def get_string(self, key: str) -> str:
        """Return the string value for a key, or "" if it is missing or not a string."""
        return coerce.to_string(self.get(key))

    def default_string(self, key: str, default_val: str) -> str:
        """Return the string value for a key, or default_val if it is empty."""
        return self.get_string(key) or default_val

    def get_strings(self, key: str) -> Optional[List[str]]:
        """
        Return the value for a key split on ";".

        Returns None, not an empty list, when the value is missing or empty.
        """
        return coerce.to_strings(self.get(key))

    def default_strings(self, key: str, default_val: List[str]) -> List[str]:
        values = self.get_strings(key)
        return default_val if values is None else values

    def get_section(self, section: str) -> Dict[str, str]:
        """
        Return a copy of a top-level section whose values are all strings.

        Raises:
            SectionError: If the section is missing, is not a mapping, or holds
                non-string values.
        """
        with self._lock.read_locked():
            if section not in self._data:
                raise SectionError(f"nonexist section {section}", context={"section": section})
            value = self._data[section]
            if kind_of(value) is not NodeKind.MAPPING:
                raise SectionError(f"section {section} is not a mapping", context={"section": section})
            if not all(kind_of(v) is NodeKind.STRING for v in value.values()):
                raise SectionError(f"section {section} holds non-string values", context={"section": section})
            return dict(value)

    def serialize(self) -> bytes:
        """Render the whole tree as an indented JSON document."""
        with self._lock.read_locked():
            return json.dumps(self._data, indent=SERIALIZE_INDENT, ensure_ascii=False).encode("utf-8")

    def get_all(self) -> Dict[str, Any]:
        """Return a deep copy of the whole tree."""
        with self._lock.read_locked():
            return copy.deepcopy(self._data)

    def _sub(self, key: str) -> Dict[str, Any]:
        with self._lock.read_locked():
            value = resolve(self._data, key)
        if kind_of(value) is not NodeKind.MAPPING:
            raise NodeTypeError(f"the type of value is invalid, key: {key}", context={"key": key})
        return value

    def sub(self, key: str) -> 'ConfigContainer':
        """
        Return a container rooted at the mapping found at key.

        The new container shares the mapping with this one (no copy is made)
        but has its own lock. The empty key returns a view of the whole tree.

        Raises:
            KeyNotFoundError: If the key does not resolve.
            NodeTypeError: If the value at key is not a mapping.
        """
        sub = ConfigContainer(self._sub(key))
        logger.debug(f"Extracted sub-container at '{key}'")
        return sub

    def unmarshal(self, key: str, target: Union[Type[T], T]) -> T:
        """
        Decode the mapping found at key onto a dataclass.

        Args:
            key: Key of the mapping to decode ("" for the whole tree)
            target: A dataclass instance to update, or a dataclass type to build

        Raises:
            KeyNotFoundError: If the key does not resolve.
            NodeTypeError: If the value at key is not a mapping.
            DecodeError: If a value does not fit its target field.
        """
        section = self._sub(key)
        with self._lock.read_locked():
            return decode(section, target)

    def on_change(self, key: str, fn: Callable[[str], None]) -> None:
        """
        Change notification is not available for in-memory containers.

        Raises:
            UnsupportedOperationError: Always.
        """
        logger.warning("unsupported operation: on_change")
        raise UnsupportedOperationError(
            f"watching key '{key}' for changes is not supported",
            context={"key": key},
        )
