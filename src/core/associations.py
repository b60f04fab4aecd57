"""Association lookup and persistence for post short links."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from core.errors import MissingShortUrlError
from core.models import ShlinkAssociation
from core.ports import MetadataStorePort

META_LONG_URL = "shlink_long_url"
META_SHORT_URL = "shlink_short_url"
META_SHORT_CODE = "shlink_short_code"


def get_association(store: MetadataStorePort, post_id: int) -> Optional[ShlinkAssociation]:
    """Return the stored association, or None unless all three fields are set."""

    long_url = store.get_meta(post_id, META_LONG_URL)
    short_url = store.get_meta(post_id, META_SHORT_URL)
    short_code = store.get_meta(post_id, META_SHORT_CODE)
    if not long_url or not short_url or not short_code:
        return None
    return ShlinkAssociation(long_url=long_url, short_url=short_url, short_code=short_code)


def save_response(
    store: MetadataStorePort,
    post_id: int,
    response: Optional[Mapping[str, Any]],
) -> ShlinkAssociation:
    """Persist a create/update response for a post.

    Nothing is written unless the response carries a ``shortUrl``; previous
    values are overwritten unconditionally.
    """

    if not response or not response.get("shortUrl"):
        raise MissingShortUrlError()

    association = ShlinkAssociation(
        long_url=str(response.get("longUrl") or ""),
        short_url=str(response["shortUrl"]),
        short_code=str(response.get("shortCode") or ""),
    )
    store.set_meta(post_id, META_LONG_URL, association.long_url)
    store.set_meta(post_id, META_SHORT_URL, association.short_url)
    store.set_meta(post_id, META_SHORT_CODE, association.short_code)
    return association
