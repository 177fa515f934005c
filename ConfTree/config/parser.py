"""
JSON document adapter for ConfTree.

JSONConfig turns raw bytes into a ConfigContainer. Objects become the root
mapping directly; arrays are stored under the "rootArray" key so that they can
be reached through the same key-based API: get("rootArray") returns the
whole list and get("rootArray::0") its first element.
"""

import json
from typing import Any, Dict, Union

from ConfTree.config.container import ConfigContainer
from ConfTree.config.defaults import ROOT_ARRAY_KEY
from ConfTree.config.env import expand_value_env_for_map
from ConfTree.exceptions import ParseError
from ConfTree.utils.logging import get_logger

logger = get_logger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal: {name}")


def _loads(text: str) -> Any:
    # Every number is a float, as in the JSON data model; NaN and Infinity
    # are not valid JSON.
    try:
        return json.loads(text, parse_int=float, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("document nests too deeply to decode") from e


class JSONConfig:
    """Adapter that parses JSON documents into ConfigContainer instances."""

    def parse_data(self, data: Union[bytes, str]) -> ConfigContainer:
        """
        Parse a JSON document.

        Args:
            data: UTF-8 encoded bytes, or an already decoded string

        Returns:
            ConfigContainer: A container owning the parsed tree, with every
            "${VAR}" placeholder already expanded.

        Raises:
            ParseError: If the document is neither a JSON object nor a JSON
                array. The error reported is the one from reading the
                document as an object.

        Examples:
            >>> container = JSONConfig().parse_data(b'{"port": 8080}')
            >>> container.get_int("port")
            8080
        """
        if isinstance(data, bytes):
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"document is not valid UTF-8: {e}", cause=e) from e
        else:
            text = data

        try:
            root = self._parse_object(text)
        except ValueError as object_error:
            try:
                root = self._parse_array(text)
            except ValueError:
                raise ParseError(str(object_error), cause=object_error) from object_error
            logger.debug("Document is array-rooted, wrapped under rootArray")

        return ConfigContainer(expand_value_env_for_map(root))

    @staticmethod
    def _parse_object(text: str) -> Dict[str, Any]:
        value = _loads(text)
        # A bare null decodes to an empty tree
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError(f"cannot unmarshal {type(value).__name__} into an object")
        return value

    @staticmethod
    def _parse_array(text: str) -> Dict[str, Any]:
        value = _loads(text)
        if not isinstance(value, list):
            raise ValueError(f"cannot unmarshal {type(value).__name__} into an array")
        return {ROOT_ARRAY_KEY: value}
