"""Bundle runtime configuration sourced from environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from bundle.api.logging import BundleLoggingConfig

_LOG_FORMATS = frozenset({"text", "json"})


@dataclass(frozen=True, slots=True)
class BundleRuntimeConfig:
    """Immutable logging configuration for bundle consumers."""

    log_level: str
    log_console_format: str
    log_file_path: str | None
    log_file_format: str
    log_propagate: bool = False

    def logging_config(self) -> BundleLoggingConfig:
        return BundleLoggingConfig(
            level_name=self.log_level,
            console_format=self.log_console_format,
            file_path=self.log_file_path,
            file_format=self.log_file_format,
            propagate=self.log_propagate,
        )


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _log_format(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    value = _text(name, default, env=env).lower()
    return value if value in _LOG_FORMATS else default


def resolve_log_level_name(
    default: str = "INFO",
    *,
    env: Mapping[str, str] | None = None,
) -> str:
    """Resolve log level with bundle-prefixed override."""
    value = _raw("BUNDLE_LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = _raw("LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = default
    return value.strip().upper()


def load_bundle_config(*, env: Mapping[str, str] | None = None) -> BundleRuntimeConfig:
    """Load immutable bundle configuration from env vars."""
    file_path = _text("BUNDLE_LOG_FILE", "", env=env)
    return BundleRuntimeConfig(
        log_level=resolve_log_level_name(env=env),
        log_console_format=_log_format("BUNDLE_LOG_CONSOLE_FORMAT", "text", env=env),
        log_file_path=file_path or None,
        log_file_format=_log_format("BUNDLE_LOG_FILE_FORMAT", "json", env=env),
        log_propagate=_flag("BUNDLE_LOG_PROPAGATE", False, env=env),
    )


__all__ = [
    "BundleRuntimeConfig",
    "load_bundle_config",
    "resolve_log_level_name",
]
