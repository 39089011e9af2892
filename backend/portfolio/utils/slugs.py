from __future__ import annotations

import re
import unicodedata


_TAG_RE = re.compile(r"<[^>]+>")
_NON_WORD_RE = re.compile(r"[^a-z0-9]+")


def strip_tags(value: str) -> str:
    return _TAG_RE.sub("", value or "")


def slugify(value: str, fallback: str = "") -> str:
    text = unicodedata.normalize("NFKD", strip_tags(value)).encode("ascii", "ignore").decode("ascii")
    slug = _NON_WORD_RE.sub("-", text.lower()).strip("-")
    return slug or fallback
