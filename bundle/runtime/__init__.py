"""Bundle runtime modules."""

from bundle.runtime.config import BundleRuntimeConfig, load_bundle_config, resolve_log_level_name
from bundle.runtime.logging import (
    configure_bundle_logging,
    get_bundle_logger,
    reset_bundle_logging,
    setup_bundle_logging,
    shutdown_bundle_logging,
)

__all__ = [
    "BundleRuntimeConfig",
    "configure_bundle_logging",
    "get_bundle_logger",
    "load_bundle_config",
    "reset_bundle_logging",
    "resolve_log_level_name",
    "setup_bundle_logging",
    "shutdown_bundle_logging",
]
