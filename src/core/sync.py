"""Core save-sync pipeline.

This module is host-agnostic. It only relies on ports for posts, metadata,
the remote shortener and error reporting, enabling other hosts or adapters
without changes here.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.associations import get_association, save_response
from core.config import ShlinkConfig
from core.filters import FilterChain
from core.models import PostRecord, ShlinkAssociation, ShlinkRequest
from core.permalinks import resolve_long_url
from core.ports import (
    ErrorReporterPort,
    MetadataStorePort,
    PermalinkFn,
    PostRepositoryPort,
    ShortenerPort,
    SlugSanitizer,
)
from core.tags import base_tags

LOGGER = logging.getLogger(__name__)


class SaveSyncEngine:
    """Decides whether a saved post needs a short link and syncs it."""

    def __init__(
        self,
        config: ShlinkConfig,
        posts: PostRepositoryPort,
        store: MetadataStorePort,
        shortener: ShortenerPort,
        get_permalink: PermalinkFn,
        sanitize_title: SlugSanitizer,
        error_reporter: ErrorReporterPort,
        long_url_filter: Optional[FilterChain[str]] = None,
        tags_filter: Optional[FilterChain[list]] = None,
    ) -> None:
        self._config = config
        self._posts = posts
        self._store = store
        self._shortener = shortener
        self._get_permalink = get_permalink
        self._sanitize_title = sanitize_title
        self._error_reporter = error_reporter
        self.long_url_filter = long_url_filter if long_url_filter is not None else FilterChain("long_url")
        self.tags_filter = tags_filter if tags_filter is not None else FilterChain("tags")

    def on_content_saved(self, post_id: int) -> None:
        """Save-event handler; never raises."""

        try:
            self.sync_post(post_id)
        except Exception as err:
            # A failed sync must not interrupt the host's save flow.
            self._error_reporter.capture(err)

    def sync_post(self, post_id: int, force: bool = False) -> Optional[ShlinkAssociation]:
        """Run one sync attempt and return the stored association.

        Returns None when the post is skipped. ``force`` bypasses only the
        generate-on-save switch, for manual syncs. Errors propagate.
        """

        if not self._config.is_complete:
            LOGGER.debug("Shlink base URL or API key missing; skipping post %s", post_id)
            return None

        if not force and not self._config.generate_on_save:
            return None

        post = self._posts.get_post(post_id)
        if post is None or post.post_type != self._config.post_type:
            return None

        long_url = resolve_long_url(
            post,
            self._get_permalink,
            self._sanitize_title,
            self._config.real_permalink_statuses,
        )
        if not long_url:
            LOGGER.debug("No long URL resolved for post %s; skipping", post_id)
            return None

        request = self._build_request(post, long_url)

        # Existing association means the short code is stable and only its
        # destination/metadata change.
        existing = get_association(self._store, post.post_id)
        if existing is None:
            response = self._shortener.create_short_url(request)
        else:
            response = self._shortener.update_short_url(existing.short_code, request)

        association = save_response(self._store, post.post_id, response)
        LOGGER.info(
            "Post %s %s as %s",
            post.post_id,
            "linked" if existing is None else "relinked",
            association.short_url,
        )
        return association

    def _build_request(self, post: PostRecord, long_url: str) -> ShlinkRequest:
        tags = self.tags_filter.apply(base_tags(post.post_id))
        return ShlinkRequest(
            long_url=self.long_url_filter.apply(long_url),
            title=post.title,
            # Anything but a list means "leave remote tags alone".
            tags=tags if isinstance(tags, list) else None,
        )
