"""Tag helpers attached to every short link (core domain)."""

from __future__ import annotations

from typing import Iterable, List, Optional
from urllib.parse import urlparse

from core.ports import HostSitePort

TAG_PREFIX = "shlinkify"
TAG_ON_SAVE = f"{TAG_PREFIX}-onsave"


def post_tag(post_id: int) -> str:
    return f"{TAG_PREFIX}-post:{post_id}"


def site_tag(hostname: str) -> str:
    return f"{TAG_PREFIX}-site:{hostname}"


def user_tag(login: str) -> str:
    return f"{TAG_PREFIX}-user:{login}"


def base_tags(post_id: int) -> List[str]:
    """Tags every on-save sync starts from."""

    return [TAG_ON_SAVE, post_tag(post_id)]


class TagAggregator:
    """Appends site and user tags to a tag list.

    Registered as the default member of the engine's tags filter chain.
    """

    def __init__(self, site: HostSitePort) -> None:
        self._site = site

    def augment_tags(self, tags: Optional[Iterable[str]]) -> Optional[List[str]]:
        """Return ``tags`` plus site and user tags, or None to omit tags.

        Unattended saves (cron, CLI without a configured user) may have no
        resolvable site URL or acting user. Returning None rather than an
        empty list matters: omitting tags keeps those already stored remotely,
        while an empty list would clear them.
        """

        hostname = self._hostname()
        login = self._site.current_user_login()
        if not hostname or not login:
            return None

        combined = list(tags or [])
        combined.append(site_tag(hostname))
        combined.append(user_tag(login))
        return combined

    def _hostname(self) -> Optional[str]:
        site_url = self._site.site_url()
        if not site_url:
            return None
        return urlparse(site_url).hostname
