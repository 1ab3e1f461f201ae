"""Public bundle logging API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from bundle.diagnostics.json_codec import dumps_text

BUNDLE_LOGGER_NAME = "bundle"

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


@dataclass(frozen=True, slots=True)
class BundleLoggingConfig:
    """Handlers installed on the ``bundle`` logger tree."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json
    propagate: bool = False


class LoggerPort(Protocol):
    """Minimal logger surface injected into bundles."""

    def debug(self, message: "LogValue", *args: "LogValue", **kwargs: "LogValue") -> None: ...

    def info(self, message: "LogValue", *args: "LogValue", **kwargs: "LogValue") -> None: ...

    def warning(self, message: "LogValue", *args: "LogValue", **kwargs: "LogValue") -> None: ...

    def error(self, message: "LogValue", *args: "LogValue", **kwargs: "LogValue") -> None: ...


class LogValue(Protocol):
    """Opaque logging argument boundary contract."""


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` values land under ``fields``.

    Mismatch warnings attach ``bundle_key``, ``expected`` and ``actual``, so a
    JSON sink can be filtered by key without parsing the message text.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {
            name: value
            for name, value in record.__dict__.items()
            if name not in _RECORD_ATTRIBUTES
        }
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dumps_text(payload, sort_keys=True)


class TextFormatter(logging.Formatter):
    """Plain-text formatter that appends ``extra=`` values as ``name=value``."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = sorted(
            (
                (name, value)
                for name, value in record.__dict__.items()
                if name not in _RECORD_ATTRIBUTES
            ),
            key=lambda item: item[0],
        )
        if not fields:
            return line
        return line + " | " + " ".join(f"{name}={value}" for name, value in fields)


def formatter_for(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return TextFormatter()
