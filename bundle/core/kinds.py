"""Value kinds recognized by typed bundle accessors.

Each kind pairs the expected type name reported on mismatch with a membership
predicate. Retrieval matches a stored value against a kind instead of casting
it, so a mismatch is a plain ``False`` rather than an exception.
"""

from __future__ import annotations

import math
from array import array
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass
from typing import cast

_FLOAT32_MAX = 3.4028234663852886e38


@dataclass(frozen=True, slots=True)
class ValueKind[T]:
    """One supported semantic type."""

    name: str
    accepts: Callable[[object], bool]

    def matches(self, value: object) -> bool:
        return self.accepts(value)


def _is_integral(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _signed_range(bits: int) -> Callable[[object], bool]:
    low = -(1 << (bits - 1))
    high = (1 << (bits - 1)) - 1

    def accepts(value: object) -> bool:
        if not _is_integral(value):
            return False
        return low <= cast(int, value) <= high

    return accepts


def _is_single_precision(value: object) -> bool:
    if not isinstance(value, float):
        return False
    return not math.isfinite(value) or abs(value) <= _FLOAT32_MAX


def _is_char(value: object) -> bool:
    return isinstance(value, str) and len(value) == 1


def _is_container(value: object) -> bool:
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    return isinstance(value, Collection)


def _elements(
    element: ValueKind,
    *,
    nullable: bool,
) -> Callable[[object], bool]:
    def accepts(item: object) -> bool:
        if item is None:
            return nullable
        return element.matches(item)

    return accepts


def _shaped(
    shape: Callable[[object], bool],
    element: ValueKind,
    *,
    nullable: bool,
) -> Callable[[object], bool]:
    item_ok = _elements(element, nullable=nullable)

    def accepts(value: object) -> bool:
        if not shape(value):
            return False
        return all(item_ok(item) for item in cast(Collection[object], value))

    return accepts


def _is_array(value: object) -> bool:
    return isinstance(value, (list, tuple, array))


def _is_list(value: object) -> bool:
    return isinstance(value, list)


def _is_byte_array(value: object) -> bool:
    if isinstance(value, (bytes, bytearray)):
        return True
    if not _is_array(value):
        return False
    return all(BYTE.matches(item) for item in cast(Collection[object], value))


def _array_kind(element: ValueKind, *, nullable: bool = False) -> ValueKind:
    return ValueKind(
        name=f"{element.name}[]",
        accepts=_shaped(_is_array, element, nullable=nullable),
    )


def _list_kind(element: ValueKind, *, nullable: bool = False) -> ValueKind:
    return ValueKind(
        name=f"list[{element.name}]",
        accepts=_shaped(_is_list, element, nullable=nullable),
    )


def _collection_kind(element: ValueKind, *, nullable: bool = False) -> ValueKind:
    return ValueKind(
        name=f"collection[{element.name}]",
        accepts=_shaped(_is_container, element, nullable=nullable),
    )


BOOLEAN: ValueKind[bool] = ValueKind("boolean", lambda value: isinstance(value, bool))
BYTE: ValueKind[int] = ValueKind("byte", _signed_range(8))
SHORT: ValueKind[int] = ValueKind("short", _signed_range(16))
INT: ValueKind[int] = ValueKind("int", _signed_range(32))
LONG: ValueKind[int] = ValueKind("long", _signed_range(64))
CHAR: ValueKind[str] = ValueKind("char", _is_char)
FLOAT: ValueKind[float] = ValueKind("float", _is_single_precision)
DOUBLE: ValueKind[float] = ValueKind("double", lambda value: isinstance(value, float))
STRING: ValueKind[str] = ValueKind("string", lambda value: isinstance(value, str))
OBJECT: ValueKind[object] = ValueKind("object", lambda value: value is not None)

BOOLEAN_ARRAY = _array_kind(BOOLEAN)
BYTE_ARRAY: ValueKind = ValueKind("byte[]", _is_byte_array)
SHORT_ARRAY = _array_kind(SHORT)
INT_ARRAY = _array_kind(INT)
LONG_ARRAY = _array_kind(LONG)
CHAR_ARRAY = _array_kind(CHAR)
FLOAT_ARRAY = _array_kind(FLOAT)
DOUBLE_ARRAY = _array_kind(DOUBLE)
STRING_ARRAY = _array_kind(STRING, nullable=True)
OBJECT_ARRAY: ValueKind = ValueKind("object[]", _is_array)

BOOLEAN_LIST = _list_kind(BOOLEAN)
BYTE_LIST = _list_kind(BYTE)
SHORT_LIST = _list_kind(SHORT)
INT_LIST = _list_kind(INT)
LONG_LIST = _list_kind(LONG)
CHAR_LIST = _list_kind(CHAR)
FLOAT_LIST = _list_kind(FLOAT)
DOUBLE_LIST = _list_kind(DOUBLE)
STRING_LIST = _list_kind(STRING, nullable=True)
OBJECT_LIST: ValueKind = ValueKind("list[object]", _is_list)

BOOLEAN_COLLECTION = _collection_kind(BOOLEAN)
BYTE_COLLECTION = _collection_kind(BYTE)
SHORT_COLLECTION = _collection_kind(SHORT)
INT_COLLECTION = _collection_kind(INT)
LONG_COLLECTION = _collection_kind(LONG)
CHAR_COLLECTION = _collection_kind(CHAR)
FLOAT_COLLECTION = _collection_kind(FLOAT)
DOUBLE_COLLECTION = _collection_kind(DOUBLE)
STRING_COLLECTION = _collection_kind(STRING, nullable=True)
OBJECT_COLLECTION: ValueKind = ValueKind("collection[object]", _is_container)


def instance_kind[T](cls: type[T]) -> ValueKind[T]:
    """Build an ad-hoc kind matching instances of ``cls``."""
    return ValueKind(cls.__name__, lambda value: isinstance(value, cls))


__all__ = [
    "BOOLEAN",
    "BOOLEAN_ARRAY",
    "BOOLEAN_COLLECTION",
    "BOOLEAN_LIST",
    "BYTE",
    "BYTE_ARRAY",
    "BYTE_COLLECTION",
    "BYTE_LIST",
    "CHAR",
    "CHAR_ARRAY",
    "CHAR_COLLECTION",
    "CHAR_LIST",
    "DOUBLE",
    "DOUBLE_ARRAY",
    "DOUBLE_COLLECTION",
    "DOUBLE_LIST",
    "FLOAT",
    "FLOAT_ARRAY",
    "FLOAT_COLLECTION",
    "FLOAT_LIST",
    "INT",
    "INT_ARRAY",
    "INT_COLLECTION",
    "INT_LIST",
    "LONG",
    "LONG_ARRAY",
    "LONG_COLLECTION",
    "LONG_LIST",
    "OBJECT",
    "OBJECT_ARRAY",
    "OBJECT_COLLECTION",
    "OBJECT_LIST",
    "SHORT",
    "SHORT_ARRAY",
    "SHORT_COLLECTION",
    "SHORT_LIST",
    "STRING",
    "STRING_ARRAY",
    "STRING_COLLECTION",
    "STRING_LIST",
    "ValueKind",
    "instance_kind",
]
