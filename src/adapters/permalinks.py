"""Permalink construction for the local site.

Mirrors the host CMS rules: only published posts with a slug get a pretty
permalink; everything else falls back to the ``?p=<id>`` query form. That is
why the core predicts permalinks from a published copy of the post. Non-ASCII
slugs are percent-encoded as UTF-8.
"""

from __future__ import annotations

from datetime import datetime, timezone
from urllib.parse import quote

from core.models import STATUS_AUTO_DRAFT, STATUS_DRAFT, STATUS_FUTURE, STATUS_PENDING, PostRecord

_PLAIN_PERMALINK_STATUSES = {STATUS_DRAFT, STATUS_PENDING, STATUS_AUTO_DRAFT, STATUS_FUTURE}


class PermalinkBuilder:
    """Builds post URLs from a structure such as ``/%year%/%postname%/``."""

    def __init__(self, home_url: str, structure: str) -> None:
        self._home_url = home_url.rstrip("/")
        self._structure = structure

    def __call__(self, post: PostRecord) -> str:
        return self.get_permalink(post)

    def get_permalink(self, post: PostRecord) -> str:
        if not self._structure or post.status in _PLAIN_PERMALINK_STATUSES or not post.slug:
            return f"{self._home_url}/?p={post.post_id}"

        date = post.date or datetime.now(timezone.utc)
        replacements = {
            "%year%": f"{date.year:04d}",
            "%monthnum%": f"{date.month:02d}",
            "%day%": f"{date.day:02d}",
            "%postname%": quote(post.slug, safe="%"),
            "%post_id%": str(post.post_id),
        }
        path = self._structure
        for tag, value in replacements.items():
            path = path.replace(tag, value)
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self._home_url}{path}"
