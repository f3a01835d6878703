"""Tests for core.slugs — URL-safe slug shape and suffix uniqueness."""

import re
from random import Random

from app.core.slugs import (
    SLUG_MAX_LENGTH, SUFFIX_ALPHABET, SUFFIX_LENGTH, generate_slug, slugify,
)

SLUG_SHAPE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def test_slugify_lowercases_and_hyphenates():
    assert slugify("My Title") == "my-title"
    assert slugify("  Hello,   World!  ") == "hello-world"
    assert slugify("How to train your dragon 2") == "how-to-train-your-dragon-2"


def test_slugify_empty_title_falls_back():
    assert slugify("") == "untitled"
    assert slugify("!!!") == "untitled"


def test_generated_slug_has_title_prefix_and_base36_suffix():
    slug = generate_slug("My Title")
    prefix, suffix = slug.rsplit("-", 1)
    assert prefix == "my-title"
    assert len(suffix) == SUFFIX_LENGTH
    assert set(suffix) <= set(SUFFIX_ALPHABET)
    assert SLUG_SHAPE.match(slug)


def test_alphabet_is_base36():
    assert len(SUFFIX_ALPHABET) == 36


def test_seeded_rng_is_deterministic():
    assert generate_slug("t", Random(7)) == generate_slug("t", Random(7))


def test_ten_thousand_identical_titles_do_not_collide():
    slugs = {generate_slug("Same Title") for _ in range(10_000)}
    assert len(slugs) == 10_000


def test_longest_title_fits_the_slug_column():
    slug = generate_slug("a" * 255)
    assert len(slug) == SLUG_MAX_LENGTH
    assert SLUG_SHAPE.match(slug)


def test_truncation_does_not_leave_a_double_hyphen():
    # cut point lands right after a word boundary
    title = "a" * (SLUG_MAX_LENGTH - SUFFIX_LENGTH - 2) + " bcd"
    slug = generate_slug(title)
    assert len(slug) <= SLUG_MAX_LENGTH
    assert "--" not in slug
    assert SLUG_SHAPE.match(slug)
