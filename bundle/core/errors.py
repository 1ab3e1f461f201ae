"""Bundle exception taxonomy."""

from __future__ import annotations


class BundleError(Exception):
    """Base class for bundle failures surfaced to callers."""


class InvalidKeyError(BundleError, ValueError):
    """Raised when a put receives a missing, non-string or blank key."""


class BundleValueNotFoundError(BundleError, KeyError):
    """Raised by strict getters when no value of the requested kind is stored."""

    def __init__(self, key: str, expected: str) -> None:
        super().__init__(f"no {expected} value under key: {key!r}")
        self.key = key
        self.expected = expected

    def __str__(self) -> str:
        return str(self.args[0])
