"""Handler setup for the ``bundle`` logger tree.

Only the ``bundle`` logger is touched: handlers this module installs are
tagged so a reconfigure replaces them while leaving handlers added by the host
application, and the root logger, alone.
"""

from __future__ import annotations

import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from bundle.api.logging import BUNDLE_LOGGER_NAME, BundleLoggingConfig, formatter_for
from bundle.runtime.config import load_bundle_config

_OWNED_ATTR = "_bundle_owned"
_QUEUE_LISTENER: QueueListener | None = None


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.strip().upper(), logging.INFO)


def _owned(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED_ATTR, True)
    return handler


def _sinks(config: BundleLoggingConfig) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(formatter_for(config.console_format))
    sinks: list[logging.Handler] = [console]
    if config.file_path:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(formatter_for(config.file_format))
        sinks.append(file_handler)
    return sinks


def _release_owned_handlers(logger: logging.Logger) -> None:
    for handler in [h for h in logger.handlers if getattr(h, _OWNED_ATTR, False)]:
        logger.removeHandler(handler)
        handler.close()


def configure_bundle_logging(config: BundleLoggingConfig) -> logging.Logger:
    """Install console (and optional file) handlers on the ``bundle`` logger.

    With a file sink both handlers are fed from a queue on a listener thread.
    Returns the configured ``bundle`` logger.
    """
    global _QUEUE_LISTENER

    shutdown_bundle_logging()
    logger = logging.getLogger(BUNDLE_LOGGER_NAME)
    _release_owned_handlers(logger)
    logger.setLevel(_level(config.level_name))
    logger.propagate = config.propagate

    sinks = _sinks(config)
    if len(sinks) == 1:
        logger.addHandler(_owned(sinks[0]))
        return logger

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    logger.addHandler(_owned(QueueHandler(log_queue)))
    _QUEUE_LISTENER = QueueListener(log_queue, *sinks, respect_handler_level=True)
    _QUEUE_LISTENER.start()
    return logger


def shutdown_bundle_logging() -> None:
    """Stop the queue listener, flushing and closing its sinks."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is None:
        return
    listener = _QUEUE_LISTENER
    _QUEUE_LISTENER = None
    listener.stop()
    for handler in listener.handlers:
        handler.close()


def reset_bundle_logging() -> None:
    """Remove installed handlers and restore default propagation."""
    shutdown_bundle_logging()
    logger = logging.getLogger(BUNDLE_LOGGER_NAME)
    _release_owned_handlers(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def setup_bundle_logging() -> None:
    """Configure from env unless the bundle tree or the root logger already logs."""
    logger = logging.getLogger(BUNDLE_LOGGER_NAME)
    if logger.handlers or logging.getLogger().handlers:
        return
    configure_bundle_logging(load_bundle_config().logging_config())


def get_bundle_logger(name: str) -> logging.Logger:
    """Return logger namespaced under ``bundle``."""
    if name == BUNDLE_LOGGER_NAME or name.startswith(f"{BUNDLE_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{BUNDLE_LOGGER_NAME}.{name}")
