"""Exceptions raised inside a sync attempt.

All of them are caught by the engine's top-level handler and forwarded to the
configured error reporter; none reach the host's save flow.
"""

from __future__ import annotations

from typing import Optional


class ShlinkifyError(Exception):
    """Generic base class for shlinkify errors."""


class MissingShortUrlError(ShlinkifyError):
    """Raised when a create/update response carries no ``shortUrl``."""

    def __init__(self, message: str = "shlinkify: missing short URL in API response") -> None:
        super().__init__(message)


class ShlinkApiError(ShlinkifyError):
    """Raised when the remote call fails or returns an error status."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class PermalinkError(ShlinkifyError):
    """Raised when a slug cannot be derived for a permalink prediction."""
