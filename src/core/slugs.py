"""Slug sanitization helpers (core domain)."""

from __future__ import annotations

import re
import unicodedata

_TAG_RE = re.compile(r"<[^>]*>")
_QUOTES_RE = re.compile(r"['’‘\"]")
_SEPARATOR_RE = re.compile(r"\W+")


def _fold_accent(ch: str) -> str:
    """Return the ASCII base of an accented Latin letter, else ``ch`` itself."""

    decomposed = unicodedata.normalize("NFKD", ch)
    base = "".join(part for part in decomposed if not unicodedata.combining(part))
    if base and base.isascii():
        return base
    return ch


def sanitize_title(title: str) -> str:
    """Return a URL-safe slug for free text.

    HTML tags are stripped, accented Latin letters folded to ASCII, quotes
    dropped, and every run of non-word characters collapsed to a single
    ``-``. Letters of other scripts (Cyrillic, CJK, ...) are kept; the
    permalink builder percent-encodes them.
    """

    text = _TAG_RE.sub("", title)
    text = unicodedata.normalize("NFC", text)
    text = "".join(_fold_accent(ch) for ch in text).lower()
    text = _QUOTES_RE.sub("", text)
    text = _SEPARATOR_RE.sub("-", text)
    return text.strip("-")
