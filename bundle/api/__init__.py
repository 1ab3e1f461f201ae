"""Public bundle API contracts."""

from bundle.api.logging import BundleLoggingConfig, JsonFormatter, LoggerPort, TextFormatter
from bundle.api.typed_map import BundleValue, TypedMap, copy_bundle, create_bundle
from bundle.core import kinds
from bundle.core.errors import BundleError, BundleValueNotFoundError, InvalidKeyError
from bundle.core.kinds import ValueKind, instance_kind

__all__ = [
    "BundleError",
    "BundleLoggingConfig",
    "BundleValue",
    "BundleValueNotFoundError",
    "InvalidKeyError",
    "JsonFormatter",
    "LoggerPort",
    "TextFormatter",
    "TypedMap",
    "ValueKind",
    "copy_bundle",
    "create_bundle",
    "instance_kind",
    "kinds",
]
