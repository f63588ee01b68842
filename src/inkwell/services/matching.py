"""Locate the text around a search hit inside a post.

Fields are checked in priority order (title, summary, then the structured
content document) and the first case-insensitive occurrence wins. The content
is a JSON document; only its string leaves are searched and the walk stops at
``max_depth`` nested containers.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from inkwell.models.post import Post

__all__ = ["matching_span", "text_window", "search_document", "document_strings", "document_text"]


def text_window(text: str | None, query: str, context: int) -> str | None:
    """Return ``context`` characters on each side of the first hit in ``text``."""
    if not text or not query:
        return None
    match = re.search(re.escape(query), text, flags=re.IGNORECASE)
    if match is None:
        return None
    return text[max(0, match.start() - context) : match.end() + context]


def document_strings(document: Any, max_depth: int) -> Iterator[str]:
    """Yield the string leaves of a JSON document depth-first.

    Keys are not yielded. Containers nested deeper than ``max_depth`` are skipped.
    """
    if max_depth < 0:
        return
    if isinstance(document, str):
        yield document
    elif isinstance(document, dict):
        for child in document.values():
            yield from document_strings(child, max_depth - 1)
    elif isinstance(document, list):
        for child in document:
            yield from document_strings(child, max_depth - 1)


def document_text(document: Any, max_depth: int) -> str | None:
    """Return the string leaves of ``document`` joined by newlines, or None without any."""
    text = "\n".join(document_strings(document, max_depth))
    return text or None


def search_document(document: Any, query: str, context: int, max_depth: int) -> str | None:
    """Depth-first search of a JSON document for the first string containing ``query``."""
    for text in document_strings(document, max_depth):
        span = text_window(text, query, context)
        if span is not None:
            return span
    return None


def matching_span(post: Post, query: str, *, context: int = 50, max_depth: int = 32) -> str | None:
    """Return the window around the first hit of ``query`` in ``post``, or None."""
    for text in (post.title, post.summary):
        span = text_window(text, query, context)
        if span is not None:
            return span
    return search_document(post.content, query, context, max_depth)
