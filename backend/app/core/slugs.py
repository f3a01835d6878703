"""Slugs — URL-safe, collision-resistant identifiers derived from article titles.

Invariants:
    - Output matches ^[a-z0-9]+(-[a-z0-9]+)*$
    - The 6-symbol base-36 suffix gives 36**6 (~2.17e9) variants per title
    - Generated exactly once per article; callers never regenerate on title edits
    - Never longer than SLUG_MAX_LENGTH (the articles.slug column width)

Design Decisions:
    - Random suffix instead of a uniqueness re-check: no read-before-write,
      the unique index on articles.slug is the backstop
"""

import re
import secrets
import string
from random import Random

SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 6
EMPTY_TITLE_SLUG = "untitled"
SLUG_MAX_LENGTH = 255
PREFIX_MAX_LENGTH = SLUG_MAX_LENGTH - SUFFIX_LENGTH - 1

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Lowercase and hyphenate title into a URL-safe token."""
    normalized = _NON_SLUG_CHARS.sub("-", (title or "").lower()).strip("-")
    return normalized or EMPTY_TITLE_SLUG


def random_suffix(rng: Random | None = None) -> str:
    choice = rng.choice if rng is not None else secrets.choice
    return "".join(choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))


def generate_slug(title: str, rng: Random | None = None) -> str:
    """slugify(title) plus a random base-36 disambiguation suffix."""
    prefix = slugify(title)[:PREFIX_MAX_LENGTH].rstrip("-")
    return f"{prefix}-{random_suffix(rng)}"
