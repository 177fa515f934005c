"""
Generic decoding of configuration mappings onto dataclasses.

Decoding is done by a cattrs Converter. The dataclass fields act as the
schema: before a mapping is structured, its keys are folded onto the field
names (exact match first, then case-insensitively) and null values are
dropped. The converter's scalar hooks are strict, so a string never turns
into a number and a number never turns into a bool. cattrs collects every
failing field, and a single DecodeError listing all of them is raised.

Usage:
    @dataclass
    class Pool:
        size: int = 0
        timeout: float = 1.0

    pool = decode({"Size": 5.0}, Pool)   # Pool(size=5, timeout=1.0)
"""

import copy
import dataclasses
import types
import typing
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar, Union

import cattrs
import cattrs.v
from cattrs.cols import list_structure_factory
from cattrs.errors import AttributeValidationNote, BaseValidationError, ClassValidationError
from cattrs.gen import make_dict_structure_fn, make_mapping_structure_fn

from ConfTree.config.coerce import to_int64
from ConfTree.config.nodes import kind_of
from ConfTree.exceptions import ConfTreeError, DecodeError

T = TypeVar('T')

Struct = Callable[[Any, Any], Any]

# "X | None" annotations (Python 3.10+) have their own origin type
_UNION_TYPES = (Union, getattr(types, "UnionType", Union))

# Failures a single field can produce while being structured
_FIELD_ERRORS = (BaseValidationError, ConfTreeError, TypeError, ValueError, KeyError)


class _Mismatch(TypeError):
    """A value whose kind cannot be converted to the requested type."""

    def __init__(self, value: Any, target: Any):
        super().__init__(value, target)
        self.value = value
        self.target = target


def _type_name(tp: Any) -> str:
    return getattr(tp, '__name__', None) or str(tp).replace('typing.', '')


def _value_type_name(value: Any) -> str:
    try:
        return kind_of(value).value
    except TypeError:
        return type(value).__name__


def _format_exception(exc: BaseException, tp: Optional[Type]) -> str:
    if isinstance(exc, _Mismatch):
        return (f"expected type '{_type_name(exc.target)}', got unconvertible type "
                f"'{_value_type_name(exc.value)}', value: '{exc.value}'")
    if isinstance(exc, ConfTreeError):
        return exc.message
    return cattrs.v.format_exception(exc, tp)


def _error_messages(exc: BaseValidationError) -> List[str]:
    """Turn a cattrs validation error into one "'field.path' message" line per failure."""
    messages = []
    for line in cattrs.transform_error(exc, path="$", format_exception=_format_exception):
        message, _, where = line.rpartition(" @ ")
        name = where[2:] if where.startswith("$.") else where.lstrip("$")
        messages.append(f"'{name}' {message}")
    return messages


def _match_key(data: Mapping[str, Any], field_name: str) -> Optional[str]:
    if field_name in data:
        return field_name
    folded = field_name.casefold()
    for key in data:
        if key.casefold() == folded:
            return key
    return None


def _fold_keys(data: Any, cls: type) -> Dict[str, Any]:
    """Rename the keys of data to cls's field names. Unknown keys and nulls are dropped."""
    if not isinstance(data, Mapping):
        raise _Mismatch(data, cls)

    folded = {}
    for field in dataclasses.fields(cls):
        key = _match_key(data, field.name)
        # null leaves the field untouched
        if key is not None and data[key] is not None:
            folded[field.name] = data[key]
    return folded


# Scalar hooks. Only the listed value types are accepted; bool is excluded
# from the numeric types even though it subclasses int.

def _structure_int(value: Any, tp: Type) -> int:
    if type(value) in (int, float):
        return to_int64(value)
    raise _Mismatch(value, tp)


def _structure_float(value: Any, tp: Type) -> float:
    if type(value) in (int, float):
        return float(value)
    raise _Mismatch(value, tp)


def _structure_exact(value: Any, tp: Type) -> Any:
    if type(value) is tp:
        return value
    raise _Mismatch(value, tp)


def _is_list(tp: Any) -> bool:
    return tp is list or typing.get_origin(tp) is list


def _is_dict(tp: Any) -> bool:
    return tp is dict or typing.get_origin(tp) is dict


def _is_union(tp: Any) -> bool:
    return typing.get_origin(tp) in _UNION_TYPES


def _is_dataclass_type(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def _require(kind: type, structure: Struct) -> Struct:
    def hook(value: Any, tp: Any) -> Any:
        if not isinstance(value, kind):
            raise _Mismatch(value, tp)
        return structure(value, tp)
    return hook


def _list_hook(tp: Any, converter: cattrs.Converter) -> Struct:
    if not typing.get_args(tp):
        return _require(list, lambda value, _: list(value))
    return _require(list, list_structure_factory(tp, converter))


def _dict_hook(tp: Any, converter: cattrs.Converter) -> Struct:
    if not typing.get_args(tp):
        return _require(dict, lambda value, _: dict(value))
    return _require(dict, make_mapping_structure_fn(tp, converter, detailed_validation=True))


def _union_hook(tp: Any, converter: cattrs.Converter) -> Struct:
    members = typing.get_args(tp)

    def structure(value: Any, _: Any) -> Any:
        if value is None and type(None) in members:
            return None
        for member in members:
            if member is type(None):
                continue
            try:
                return converter.structure(value, member)
            except _FIELD_ERRORS:
                continue
        raise _Mismatch(value, tp)

    return structure


def _dataclass_hook(cls: type, converter: cattrs.Converter) -> Struct:
    structure = make_dict_structure_fn(cls, converter)

    def hook(value: Any, _: Any) -> Any:
        return structure(_fold_keys(value, cls), cls)

    return hook


def make_converter() -> cattrs.Converter:
    """Build the converter used by decode(), with strict scalar hooks registered."""
    converter = cattrs.Converter(detailed_validation=True)

    converter.register_structure_hook(int, _structure_int)
    converter.register_structure_hook(float, _structure_float)
    converter.register_structure_hook(bool, _structure_exact)
    converter.register_structure_hook(str, _structure_exact)

    converter.register_structure_hook_factory(_is_list, _list_hook)
    converter.register_structure_hook_factory(_is_dict, _dict_hook)
    converter.register_structure_hook_factory(_is_union, _union_hook)
    converter.register_structure_hook_factory(_is_dataclass_type, _dataclass_hook)
    return converter


CONVERTER = make_converter()


def _note_field(exc: BaseException, cls: type, name: str, tp: Any) -> BaseException:
    note = AttributeValidationNote(f"Structuring class {cls.__qualname__} @ attribute {name}", name, tp)
    exc.__notes__ = [*getattr(exc, '__notes__', []), note]
    return exc


def _apply(data: Any, target: Any) -> None:
    """
    Structure each field present in data and assign it onto target.

    Nested dataclass instances already on the target are updated in place
    rather than replaced.
    """
    cls = type(target)
    hints = typing.get_type_hints(cls)
    updates: Dict[str, Any] = {}
    failures: List[BaseException] = []

    for name, value in _fold_keys(data, cls).items():
        tp = hints.get(name, Any)
        current = getattr(target, name, None)
        try:
            if dataclasses.is_dataclass(current) and not isinstance(current, type) and isinstance(value, Mapping):
                _apply(value, current)
            else:
                updates[name] = CONVERTER.structure(value, tp)
        except _FIELD_ERRORS as e:
            failures.append(_note_field(e, cls, name, tp))

    if failures:
        raise ClassValidationError(f"While structuring {cls.__name__}", failures, cls)

    for name, value in updates.items():
        setattr(target, name, value)


def decode(data: Mapping[str, Any], target: Union[Type[T], T]) -> T:
    """
    Decode a mapping onto a dataclass.

    Args:
        data: The source mapping, typically a configuration sub-tree
        target: A dataclass instance, updated in place, or a dataclass type,
                from which a new instance is built

    Returns:
        The decoded instance (the target itself when an instance was given).

    Raises:
        DecodeError: If any value cannot be mapped onto its field's type.
        TypeError: If the target is not a dataclass.
    """
    if not dataclasses.is_dataclass(target):
        raise TypeError(f"decode target must be a dataclass or dataclass instance, got {type(target).__name__}")

    try:
        if isinstance(target, type):
            return CONVERTER.structure(data, target)
        # A scratch copy absorbs the first pass so a failed decode leaves the
        # target untouched
        _apply(data, copy.deepcopy(target))
        _apply(data, target)
        return target
    except BaseValidationError as e:
        raise DecodeError(_error_messages(e), cause=e) from e
    except _Mismatch as e:
        raise DecodeError([_format_exception(e, e.target)], cause=e) from e
