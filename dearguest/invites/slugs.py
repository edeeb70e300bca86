"""Normalize event slugs."""
import re

from dearguest.core.errors import InvalidSlug

MIN_SLUG_LENGTH = 2


def normalize_slug(value: str) -> str:
    """
    Turn free text into a URL-safe slug.

    Lowercases, turns each run of whitespace into a hyphen, and strips
    anything outside ``[a-z0-9-]``:

        "Raphael & Christine!" -> "raphael-christine"

    Applying it twice gives the same result as applying it once.
    """
    slug = value.strip().lower()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    # Stripping "&" between two spaces leaves a double hyphen
    return re.sub(r"-{2,}", "-", slug)


def validate_slug(value: str) -> str:
    """Normalize ``value`` and raise InvalidSlug if it is too short."""
    slug = normalize_slug(value)
    if len(slug) < MIN_SLUG_LENGTH:
        raise InvalidSlug()
    return slug
