"""Text helpers for slugs and form values."""

import re

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# Matches the width of films.slug
MAX_SLUG_LENGTH = 200


def slugify(text: str) -> str:
    """
    Convert a film title to a URL-safe slug.

    Examples:
        "The Director's Cut!"  →  "the-directors-cut"
        "  Night   Train - Part 2 "  →  "night-train-part-2"

    Args:
        text: Title to slugify

    Returns:
        Lowercase slug containing only ``[a-z0-9-]``, with no leading,
        trailing or repeated hyphens. Empty when the title has no usable
        characters. Never longer than ``MAX_SLUG_LENGTH``; long titles are
        cut at the limit without leaving a trailing hyphen.
    """
    text = text.lower().strip()

    # Drop punctuation before collapsing whitespace so "Cut !" doesn't
    # leave a dangling hyphen
    text = re.sub(r"[^a-z0-9\s-]", "", text)

    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text)

    return text.strip("-")[:MAX_SLUG_LENGTH].rstrip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug))


def blank_to_none(value: str | None) -> str | None:
    """Strip a form value and map empty strings to ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None
