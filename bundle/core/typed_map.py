"""Typed bundle implementation."""

from __future__ import annotations

import logging
import reprlib
import threading
from collections.abc import Collection, Iterator, Mapping, Sequence
from enum import Enum, auto
from typing import TYPE_CHECKING, Self, cast

from bundle.core import kinds
from bundle.core.errors import BundleValueNotFoundError, InvalidKeyError
from bundle.core.kinds import ValueKind, instance_kind

if TYPE_CHECKING:
    from bundle.api.logging import LoggerPort
    from bundle.api.typed_map import TypedMap

_LOG = logging.getLogger("bundle.typed_map")

# Shared across instances; renders nest when bundles reference each other.
_DESCRIBE_LOCK = threading.RLock()


class _Unset(Enum):
    UNSET = auto()


_UNSET = _Unset.UNSET


class RuntimeBundle:
    """Default bundle based on a dict store with kind-checked getters."""

    def __init__(
        self,
        capacity: int | None = None,
        *,
        logger: LoggerPort | None = None,
    ) -> None:
        if capacity is not None and capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._capacity = capacity
        self._values: dict[str, object] = {}
        self._logger: LoggerPort = logger if logger is not None else _LOG
        self._describe_lock = _DESCRIBE_LOCK

    @classmethod
    def copy_of(cls, other: RuntimeBundle, *, logger: LoggerPort | None = None) -> Self:
        """Return a shallow copy: new association dict, shared value objects."""
        copied = cls(len(other), logger=logger if logger is not None else other._logger)
        copied._values.update(other._values)
        return copied

    @property
    def capacity(self) -> int | None:
        return self._capacity

    def size(self) -> int:
        return len(self._values)

    def is_empty(self) -> bool:
        return not self._values

    def contains_key(self, key: str) -> bool:
        return key in self._values

    def keys(self) -> tuple[str, ...]:
        return tuple(self._values)

    def snapshot(self) -> dict[str, object]:
        """Return a shallow copy of current associations."""
        return dict(self._values)

    def remove(self, key: str) -> object | None:
        return self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def merge(self, other: TypedMap | Mapping[str, object]) -> None:
        """Copy all associations from ``other``; colliding keys take its values."""
        source = other if isinstance(other, Mapping) else other.snapshot()
        validated = {self._validated_key(key): value for key, value in source.items()}
        self._values.update(validated)

    def copy(self) -> RuntimeBundle:
        return RuntimeBundle.copy_of(self)

    def __copy__(self) -> RuntimeBundle:
        return self.copy()

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._values))

    def put(self, key: str, value: object) -> None:
        """Insert or overwrite ``value`` under ``key``."""
        self._values[self._validated_key(key)] = value

    def put_object(self, key: str, value: object) -> None:
        self.put(key, value)

    def put_boolean(self, key: str, value: bool | None) -> None:
        self.put(key, value)

    def put_byte(self, key: str, value: int | None) -> None:
        self.put(key, value)

    def put_char(self, key: str, value: str | None) -> None:
        self.put(key, value)

    def put_double(self, key: str, value: float | None) -> None:
        self.put(key, value)

    def put_float(self, key: str, value: float | None) -> None:
        self.put(key, value)

    def put_int(self, key: str, value: int | None) -> None:
        self.put(key, value)

    def put_long(self, key: str, value: int | None) -> None:
        self.put(key, value)

    def put_short(self, key: str, value: int | None) -> None:
        self.put(key, value)

    def put_string(self, key: str, value: str | None) -> None:
        self.put(key, value)

    def put_boolean_array(self, key: str, value: Sequence[bool] | None) -> None:
        self.put(key, value)

    def put_byte_array(self, key: str, value: bytes | bytearray | Sequence[int] | None) -> None:
        self.put(key, value)

    def put_char_array(self, key: str, value: Sequence[str] | None) -> None:
        self.put(key, value)

    def put_double_array(self, key: str, value: Sequence[float] | None) -> None:
        self.put(key, value)

    def put_float_array(self, key: str, value: Sequence[float] | None) -> None:
        self.put(key, value)

    def put_int_array(self, key: str, value: Sequence[int] | None) -> None:
        self.put(key, value)

    def put_long_array(self, key: str, value: Sequence[int] | None) -> None:
        self.put(key, value)

    def put_short_array(self, key: str, value: Sequence[int] | None) -> None:
        self.put(key, value)

    def put_string_array(self, key: str, value: Sequence[str | None] | None) -> None:
        self.put(key, value)

    def put_object_array(self, key: str, value: Sequence[object] | None) -> None:
        self.put(key, value)

    def put_boolean_list(self, key: str, value: list[bool] | None) -> None:
        self.put(key, value)

    def put_byte_list(self, key: str, value: list[int] | None) -> None:
        self.put(key, value)

    def put_char_list(self, key: str, value: list[str] | None) -> None:
        self.put(key, value)

    def put_double_list(self, key: str, value: list[float] | None) -> None:
        self.put(key, value)

    def put_float_list(self, key: str, value: list[float] | None) -> None:
        self.put(key, value)

    def put_int_list(self, key: str, value: list[int] | None) -> None:
        self.put(key, value)

    def put_long_list(self, key: str, value: list[int] | None) -> None:
        self.put(key, value)

    def put_short_list(self, key: str, value: list[int] | None) -> None:
        self.put(key, value)

    def put_string_list(self, key: str, value: list[str | None] | None) -> None:
        self.put(key, value)

    def put_object_list(self, key: str, value: list[object] | None) -> None:
        self.put(key, value)

    def put_boolean_collection(self, key: str, value: Collection[bool] | None) -> None:
        self.put(key, value)

    def put_byte_collection(self, key: str, value: Collection[int] | None) -> None:
        self.put(key, value)

    def put_char_collection(self, key: str, value: Collection[str] | None) -> None:
        self.put(key, value)

    def put_double_collection(self, key: str, value: Collection[float] | None) -> None:
        self.put(key, value)

    def put_float_collection(self, key: str, value: Collection[float] | None) -> None:
        self.put(key, value)

    def put_int_collection(self, key: str, value: Collection[int] | None) -> None:
        self.put(key, value)

    def put_long_collection(self, key: str, value: Collection[int] | None) -> None:
        self.put(key, value)

    def put_short_collection(self, key: str, value: Collection[int] | None) -> None:
        self.put(key, value)

    def put_string_collection(self, key: str, value: Collection[str | None] | None) -> None:
        self.put(key, value)

    def put_object_collection(self, key: str, value: Collection[object] | None) -> None:
        self.put(key, value)

    def get(self, key: str, default: object = None) -> object:
        """Return stored value unchecked, or ``default`` when absent or None."""
        value = self._values.get(key)
        return default if value is None else value

    def get_as[T, D](self, key: str, kind: ValueKind[T], default: D) -> T | D:
        """Return the value under ``key`` when it matches ``kind``, else ``default``.

        A present value of another type is logged as a mismatch; absence is not.
        """
        found, value = self._lookup(key, kind, default)
        return cast(T, value) if found else default

    def get_instance[T](self, key: str, cls: type[T], default: T | None = None) -> T | None:
        return self.get_as(key, instance_kind(cls), default)

    def get_object(self, key: str, default: object = None) -> object:
        return self.get_as(key, kinds.OBJECT, default)

    def get_boolean(self, key: str, default: bool = False) -> bool:
        return self.get_as(key, kinds.BOOLEAN, default)

    def get_byte(self, key: str, default: int = 0) -> int:
        return self.get_as(key, kinds.BYTE, default)

    def get_char(self, key: str, default: str = "\x00") -> str:
        return self.get_as(key, kinds.CHAR, default)

    def get_double(self, key: str, default: float = 0.0) -> float:
        return self.get_as(key, kinds.DOUBLE, default)

    def get_float(self, key: str, default: float = 0.0) -> float:
        return self.get_as(key, kinds.FLOAT, default)

    def get_int(self, key: str, default: int = 0) -> int:
        return self.get_as(key, kinds.INT, default)

    def get_long(self, key: str, default: int = 0) -> int:
        return self.get_as(key, kinds.LONG, default)

    def get_short(self, key: str, default: int = 0) -> int:
        return self.get_as(key, kinds.SHORT, default)

    def get_string(self, key: str, default: str | None = None) -> str | None:
        return self.get_as(key, kinds.STRING, default)

    def get_string_strict(self, key: str, default: str | None | _Unset = _UNSET) -> str | None:
        """Return the string under ``key``.

        Without ``default`` a missing, None or non-string value raises
        ``BundleValueNotFoundError``. With ``default`` this never raises.
        """
        if default is not _UNSET:
            return self.get_as(key, kinds.STRING, default)
        found, value = self._lookup(key, kinds.STRING, None)
        if not found:
            raise BundleValueNotFoundError(key, kinds.STRING.name)
        return cast(str, value)

    def get_boolean_array(self, key: str, default: Sequence[bool] | None = None) -> Sequence[bool] | None:
        return self.get_as(key, kinds.BOOLEAN_ARRAY, default)

    def get_byte_array(
        self, key: str, default: bytes | bytearray | Sequence[int] | None = None
    ) -> bytes | bytearray | Sequence[int] | None:
        return self.get_as(key, kinds.BYTE_ARRAY, default)

    def get_char_array(self, key: str, default: Sequence[str] | None = None) -> Sequence[str] | None:
        return self.get_as(key, kinds.CHAR_ARRAY, default)

    def get_double_array(self, key: str, default: Sequence[float] | None = None) -> Sequence[float] | None:
        return self.get_as(key, kinds.DOUBLE_ARRAY, default)

    def get_float_array(self, key: str, default: Sequence[float] | None = None) -> Sequence[float] | None:
        return self.get_as(key, kinds.FLOAT_ARRAY, default)

    def get_int_array(self, key: str, default: Sequence[int] | None = None) -> Sequence[int] | None:
        return self.get_as(key, kinds.INT_ARRAY, default)

    def get_long_array(self, key: str, default: Sequence[int] | None = None) -> Sequence[int] | None:
        return self.get_as(key, kinds.LONG_ARRAY, default)

    def get_short_array(self, key: str, default: Sequence[int] | None = None) -> Sequence[int] | None:
        return self.get_as(key, kinds.SHORT_ARRAY, default)

    def get_string_array(
        self, key: str, default: Sequence[str | None] | None = None
    ) -> Sequence[str | None] | None:
        return self.get_as(key, kinds.STRING_ARRAY, default)

    def get_object_array(self, key: str, default: Sequence[object] | None = None) -> Sequence[object] | None:
        return self.get_as(key, kinds.OBJECT_ARRAY, default)

    def get_boolean_list(self, key: str, default: list[bool] | None = None) -> list[bool] | None:
        return self.get_as(key, kinds.BOOLEAN_LIST, default)

    def get_byte_list(self, key: str, default: list[int] | None = None) -> list[int] | None:
        return self.get_as(key, kinds.BYTE_LIST, default)

    def get_char_list(self, key: str, default: list[str] | None = None) -> list[str] | None:
        return self.get_as(key, kinds.CHAR_LIST, default)

    def get_double_list(self, key: str, default: list[float] | None = None) -> list[float] | None:
        return self.get_as(key, kinds.DOUBLE_LIST, default)

    def get_float_list(self, key: str, default: list[float] | None = None) -> list[float] | None:
        return self.get_as(key, kinds.FLOAT_LIST, default)

    def get_int_list(self, key: str, default: list[int] | None = None) -> list[int] | None:
        return self.get_as(key, kinds.INT_LIST, default)

    def get_long_list(self, key: str, default: list[int] | None = None) -> list[int] | None:
        return self.get_as(key, kinds.LONG_LIST, default)

    def get_short_list(self, key: str, default: list[int] | None = None) -> list[int] | None:
        return self.get_as(key, kinds.SHORT_LIST, default)

    def get_string_list(
        self, key: str, default: list[str | None] | None = None
    ) -> list[str | None] | None:
        return self.get_as(key, kinds.STRING_LIST, default)

    def get_object_list(self, key: str, default: list[object] | None = None) -> list[object] | None:
        return self.get_as(key, kinds.OBJECT_LIST, default)

    def get_boolean_collection(
        self, key: str, default: Collection[bool] | None = None
    ) -> Collection[bool] | None:
        return self.get_as(key, kinds.BOOLEAN_COLLECTION, default)

    def get_byte_collection(self, key: str, default: Collection[int] | None = None) -> Collection[int] | None:
        return self.get_as(key, kinds.BYTE_COLLECTION, default)

    def get_char_collection(self, key: str, default: Collection[str] | None = None) -> Collection[str] | None:
        return self.get_as(key, kinds.CHAR_COLLECTION, default)

    def get_double_collection(
        self, key: str, default: Collection[float] | None = None
    ) -> Collection[float] | None:
        return self.get_as(key, kinds.DOUBLE_COLLECTION, default)

    def get_float_collection(
        self, key: str, default: Collection[float] | None = None
    ) -> Collection[float] | None:
        return self.get_as(key, kinds.FLOAT_COLLECTION, default)

    def get_int_collection(self, key: str, default: Collection[int] | None = None) -> Collection[int] | None:
        return self.get_as(key, kinds.INT_COLLECTION, default)

    def get_long_collection(self, key: str, default: Collection[int] | None = None) -> Collection[int] | None:
        return self.get_as(key, kinds.LONG_COLLECTION, default)

    def get_short_collection(
        self, key: str, default: Collection[int] | None = None
    ) -> Collection[int] | None:
        return self.get_as(key, kinds.SHORT_COLLECTION, default)

    def get_string_collection(
        self, key: str, default: Collection[str | None] | None = None
    ) -> Collection[str | None] | None:
        return self.get_as(key, kinds.STRING_COLLECTION, default)

    def get_object_collection(
        self, key: str, default: Collection[object] | None = None
    ) -> Collection[object] | None:
        return self.get_as(key, kinds.OBJECT_COLLECTION, default)

    def describe(self) -> str:
        """Render associations sorted by key for debugging."""
        with self._describe_lock:
            return self._render()

    @reprlib.recursive_repr(fillvalue="RuntimeBundle{...}")
    def _render(self) -> str:
        items = sorted(self._values.items(), key=lambda item: item[0])
        body = ", ".join(f"{key}={value!r}" for key, value in items)
        return f"{type(self).__name__}{{{body}}}"

    def __repr__(self) -> str:
        return self.describe()

    __str__ = __repr__

    def _lookup(self, key: str, kind: ValueKind, default: object) -> tuple[bool, object]:
        value = self._values.get(key)
        if value is None:
            return False, None
        if kind.matches(value):
            return True, value
        self._logger.warning(
            "bundle_type_mismatch key=%s expected=%s actual=%s default=%r",
            key,
            kind.name,
            type(value).__name__,
            default,
            extra={"bundle_key": key, "expected": kind.name, "actual": type(value).__name__},
        )
        return False, None

    @staticmethod
    def _validated_key(key: object) -> str:
        if key is None:
            raise InvalidKeyError("key must not be None")
        if not isinstance(key, str):
            raise InvalidKeyError(f"key must be a string, got {type(key).__name__}")
        if not key.strip():
            raise InvalidKeyError("key must not be empty")
        return key


__all__ = ["RuntimeBundle"]
