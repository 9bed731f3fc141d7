"""URL slugs for sport names."""

import re

DEFAULT_SPORT_SLUG = "sport"


def slugify(text: str | None) -> str:
    """Lowercase, hyphenate whitespace, drop anything that isn't a word character.

    "Pickleball " -> "pickleball", "Table  Tennis!" -> "table-tennis", "!!!" -> "".
    Only ASCII letters, digits and underscores survive, so "網球 Tennis" -> "tennis".
    """
    if not text or not isinstance(text, str):
        return ""
    slug = text.lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def sport_slug(name: str) -> str:
    """Slug for a sport, falling back to a fixed value when nothing survives."""
    return slugify(name) or DEFAULT_SPORT_SLUG
