"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any host-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

STATUS_PUBLISH = "publish"
STATUS_FUTURE = "future"
STATUS_DRAFT = "draft"
STATUS_PENDING = "pending"
STATUS_AUTO_DRAFT = "auto-draft"


@dataclass(frozen=True)
class PostRecord:
    """Minimal view of a host post used by the sync engine."""

    post_id: int
    post_type: str
    title: str
    status: str
    slug: str = ""
    date: Optional[datetime] = None


@dataclass(frozen=True)
class ShlinkAssociation:
    """Persisted link between one post and one short URL."""

    long_url: str
    short_url: str
    short_code: str


@dataclass(frozen=True)
class ShlinkRequest:
    """Payload for a create or update call.

    ``tags=None`` means the field is omitted entirely, which makes the remote
    service keep whatever tags it already stores. An empty list clears them.
    """

    long_url: str
    title: str
    tags: Optional[list[str]] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"longUrl": self.long_url, "title": self.title}
        if self.tags is not None:
            payload["tags"] = list(self.tags)
        return payload
