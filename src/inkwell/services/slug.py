"""Slug derivation for post titles."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

_NON_WORD = re.compile(r"[^a-z0-9]+")
MAX_SLUG_LENGTH = 200


def slugify(title: str) -> str:
    """Return a lowercase ASCII slug for ``title`` (``"Hello World!"`` -> ``"hello-world"``)."""
    normalized = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode()
    slug = _NON_WORD.sub("-", normalized.lower()).strip("-")
    return slug[:MAX_SLUG_LENGTH].rstrip("-") or "post"


def slug_candidates(title: str) -> Iterator[str]:
    """Yield ``base``, ``base-1``, ``base-2``, ... for ``title``."""
    base = slugify(title)
    yield base
    suffix = 1
    while True:
        yield f"{base}-{suffix}"
        suffix += 1
