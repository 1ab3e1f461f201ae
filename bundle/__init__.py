"""Typed key-value bundle with kind-checked accessors."""

from bundle.api import (
    BundleError,
    BundleValueNotFoundError,
    InvalidKeyError,
    TypedMap,
    copy_bundle,
    create_bundle,
    kinds,
)

__all__ = [
    "BundleError",
    "BundleValueNotFoundError",
    "InvalidKeyError",
    "TypedMap",
    "copy_bundle",
    "create_bundle",
    "kinds",
]
