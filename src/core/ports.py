"""Ports (interfaces) used by the sync engine.

Ports define the minimal contracts for the remote shortener, the metadata
store and the host site so that the core can be reused with different
backends.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

from core.models import PostRecord, ShlinkRequest

PermalinkFn = Callable[[PostRecord], str]
SlugSanitizer = Callable[[str], str]


class ShortenerPort(Protocol):
    """Remote short-link operations.

    Both calls return the decoded response body, expected to contain
    ``longUrl``, ``shortUrl`` and ``shortCode``.
    """

    def create_short_url(self, request: ShlinkRequest) -> dict[str, Any]:
        ...

    def update_short_url(self, short_code: str, request: ShlinkRequest) -> dict[str, Any]:
        ...


class MetadataStorePort(Protocol):
    """Per-post key/value storage."""

    def get_meta(self, post_id: int, key: str) -> Optional[str]:
        ...

    def set_meta(self, post_id: int, key: str, value: str) -> None:
        ...


class PostRepositoryPort(Protocol):
    """Read access to host posts."""

    def get_post(self, post_id: int) -> Optional[PostRecord]:
        ...


class HostSitePort(Protocol):
    """Host lookups used for tag aggregation."""

    def site_url(self) -> Optional[str]:
        ...

    def current_user_login(self) -> Optional[str]:
        ...


class ErrorReporterPort(Protocol):
    """Sink for errors raised during a sync attempt."""

    def capture(self, error: Exception) -> None:
        ...
