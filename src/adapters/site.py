"""Local host site adapter.

Plays the publishing platform's role for a standalone process: stores posts,
builds permalinks, knows the site URL and acting user, and dispatches
"post saved" events to listeners registered at startup.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from adapters.permalinks import PermalinkBuilder
from adapters.sqlite_storage import SQLiteStorage
from core.models import PostRecord

LOGGER = logging.getLogger(__name__)

SaveListener = Callable[[int], None]


class LocalSite:
    """Host facade satisfying PostRepositoryPort and HostSitePort."""

    def __init__(
        self,
        storage: SQLiteStorage,
        site_url: Optional[str],
        permalink_structure: str,
        user_login: Optional[str] = None,
    ) -> None:
        self._storage = storage
        self._site_url = site_url or None
        self._user_login = user_login or None
        self._permalinks = PermalinkBuilder(site_url or "", permalink_structure)
        self._save_listeners: List[SaveListener] = []

    def on_post_saved(self, listener: SaveListener) -> None:
        """Register a callback invoked with the post id after every save."""

        self._save_listeners.append(listener)

    def save_post(self, post: PostRecord) -> None:
        """Persist ``post`` and notify save listeners in registration order."""

        self._storage.upsert_post(post)
        LOGGER.info("Saved post %s (%s)", post.post_id, post.status)
        for listener in self._save_listeners:
            listener(post.post_id)

    def get_post(self, post_id: int) -> Optional[PostRecord]:
        return self._storage.get_post(post_id)

    def get_permalink(self, post: PostRecord) -> str:
        return self._permalinks.get_permalink(post)

    def site_url(self) -> Optional[str]:
        return self._site_url

    def current_user_login(self) -> Optional[str]:
        return self._user_login
