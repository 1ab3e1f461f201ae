"""Bundle container implementations."""

from bundle.core.errors import BundleError, BundleValueNotFoundError, InvalidKeyError
from bundle.core.kinds import ValueKind, instance_kind
from bundle.core.typed_map import RuntimeBundle

__all__ = [
    "BundleError",
    "BundleValueNotFoundError",
    "InvalidKeyError",
    "RuntimeBundle",
    "ValueKind",
    "instance_kind",
]
