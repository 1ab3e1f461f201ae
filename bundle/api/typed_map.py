"""Public typed-bundle API contracts."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from bundle.api.logging import LoggerPort
    from bundle.core.kinds import ValueKind
    from bundle.core.typed_map import RuntimeBundle


class BundleValue(Protocol):
    """Opaque bundle payload contract."""


class TypedMap(Protocol):
    """Heterogeneous string-keyed storage with kind-checked getters.

    Only the generic surface is listed here; concrete bundles also expose the
    ``put_<kind>``/``get_<kind>`` family for every supported value kind.
    """

    def put(self, key: str, value: "BundleValue | None") -> None:
        """Insert or overwrite value; invalid keys raise InvalidKeyError."""

    def get(self, key: str, default: "BundleValue | None" = None) -> "BundleValue | None":
        """Return stored value unchecked, or default when absent or None."""

    def get_as[T, D](self, key: str, kind: "ValueKind[T]", default: D) -> T | D:
        """Return value matching kind, or default on absence or mismatch."""

    def get_string_strict(self, key: str, default: str | None = ...) -> str | None:
        """Return stored string.

        Without default, raise BundleValueNotFoundError when no string is
        stored; with default, return it instead.
        """

    def remove(self, key: str) -> "BundleValue | None":
        """Remove key and return previous value if present."""

    def clear(self) -> None:
        """Remove every association."""

    def merge(self, other: "TypedMap | Mapping[str, BundleValue]") -> None:
        """Copy associations from other, overwriting on collision."""

    def size(self) -> int:
        """Return number of associations."""

    def is_empty(self) -> bool:
        """Return whether no associations are stored."""

    def contains_key(self, key: str) -> bool:
        """Return whether key exists."""

    def snapshot(self) -> dict[str, "BundleValue"]:
        """Return a shallow copy of current associations."""

    def copy(self) -> "TypedMap":
        """Return a shallow copy of this bundle."""

    def describe(self) -> str:
        """Render associations for debugging."""

    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[str]: ...


def create_bundle(
    capacity: int | None = None,
    *,
    logger: "LoggerPort | None" = None,
) -> "RuntimeBundle":
    """Create default bundle implementation."""
    from bundle.core.typed_map import RuntimeBundle

    return RuntimeBundle(capacity, logger=logger)


def copy_bundle(other: TypedMap, *, logger: "LoggerPort | None" = None) -> "RuntimeBundle":
    """Create a shallow copy of another bundle."""
    from bundle.core.typed_map import RuntimeBundle

    if isinstance(other, RuntimeBundle):
        return RuntimeBundle.copy_of(other, logger=logger)
    copied = RuntimeBundle(other.size(), logger=logger)
    copied.merge(other.snapshot())
    return copied
