"""Long URL resolution for posts that may not be published yet."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import AbstractSet, Optional

from core.errors import PermalinkError
from core.models import STATUS_AUTO_DRAFT, STATUS_PUBLISH, PostRecord
from core.ports import PermalinkFn, SlugSanitizer

LOGGER = logging.getLogger(__name__)


def predict_permalink(
    post: PostRecord,
    get_permalink: PermalinkFn,
    sanitize_title: SlugSanitizer,
) -> Optional[str]:
    """Return the permalink ``post`` would get if it were published now.

    The host only builds pretty permalinks for published posts, so we ask it
    about a published copy. Without a slug one is derived from the title;
    without a title there is nothing to predict and None is returned.
    """

    expected = replace(post, status=STATUS_PUBLISH)
    if not expected.slug:
        if not expected.title:
            return None
        slug = sanitize_title(expected.title)
        if not slug:
            raise PermalinkError(f"Could not derive a slug for post {post.post_id} from its title")
        expected = replace(expected, slug=slug)
    return get_permalink(expected)


def resolve_long_url(
    post: PostRecord,
    get_permalink: PermalinkFn,
    sanitize_title: SlugSanitizer,
    real_permalink_statuses: AbstractSet[str] = frozenset(),
) -> Optional[str]:
    """Pick the long URL to associate with ``post``, or None to skip the sync."""

    if post.status in real_permalink_statuses:
        return get_permalink(post)
    if post.status != STATUS_AUTO_DRAFT:
        return predict_permalink(post, get_permalink, sanitize_title)
    LOGGER.debug("Post %s is an auto-draft; no long URL", post.post_id)
    return None
