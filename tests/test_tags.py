from __future__ import annotations

from typing import Optional

from core.tags import TAG_ON_SAVE, TagAggregator, base_tags


class FakeSite:
    def __init__(self, site_url: Optional[str], user_login: Optional[str]) -> None:
        self._site_url = site_url
        self._user_login = user_login

    def site_url(self) -> Optional[str]:
        return self._site_url

    def current_user_login(self) -> Optional[str]:
        return self._user_login


def test_base_tags_mark_on_save_and_post_id() -> None:
    assert base_tags(7) == [TAG_ON_SAVE, "shlinkify-post:7"]


def test_augment_tags_appends_site_then_user() -> None:
    aggregator = TagAggregator(FakeSite("https://www.example.org/blog", "dphiffer"))
    assert aggregator.augment_tags(["base"]) == [
        "base",
        "shlinkify-site:www.example.org",
        "shlinkify-user:dphiffer",
    ]


def test_augment_tags_without_hostname_returns_none() -> None:
    assert TagAggregator(FakeSite(None, "editor")).augment_tags(["base"]) is None
    assert TagAggregator(FakeSite("", "editor")).augment_tags(["base"]) is None
    # Scheme-less values have no parseable hostname.
    assert TagAggregator(FakeSite("example.org", "editor")).augment_tags(["base"]) is None


def test_augment_tags_without_user_returns_none() -> None:
    assert TagAggregator(FakeSite("https://example.org", None)).augment_tags(["base"]) is None
    assert TagAggregator(FakeSite("https://example.org", "")).augment_tags(["base"]) is None


def test_augment_tags_does_not_mutate_input() -> None:
    tags = ["base"]
    TagAggregator(FakeSite("https://example.org", "editor")).augment_tags(tags)
    assert tags == ["base"]
