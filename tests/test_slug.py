# mypy: ignore-errors
# tests/test_slug.py
"""Tests for slug derivation."""

from itertools import islice

from inkwell.services.slug import MAX_SLUG_LENGTH, slug_candidates, slugify


def test_slugify_basic_title() -> None:
    assert slugify("Hello World!") == "hello-world"


def test_slugify_strips_accents_and_punctuation() -> None:
    assert slugify("  Crème brûlée -- à la carte  ") == "creme-brulee-a-la-carte"


def test_slugify_falls_back_for_symbol_only_titles() -> None:
    assert slugify("!!!") == "post"
    assert slugify("日本語") == "post"


def test_slugify_truncates_long_titles() -> None:
    slug = slugify("word " * 100)
    assert len(slug) <= MAX_SLUG_LENGTH
    assert not slug.endswith("-")


def test_slug_candidates_append_increasing_suffixes() -> None:
    assert list(islice(slug_candidates("Hello World"), 4)) == [
        "hello-world",
        "hello-world-1",
        "hello-world-2",
        "hello-world-3",
    ]
