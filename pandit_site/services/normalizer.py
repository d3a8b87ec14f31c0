"""Slug generation for admin-created records."""

import re
import unicodedata


def generate_slug(title: str) -> str:
    """Generate a URL slug from *title*.

    The slug is lowercased, ASCII-only, and uses hyphens as separators.
    """
    # Normalise unicode, keep only ASCII
    slug = unicodedata.normalize("NFKD", title)
    slug = slug.encode("ascii", "ignore").decode("ascii")

    # Lowercase and replace runs of non-alphanumeric chars with a single hyphen
    slug = re.sub(r"[^a-z0-9]+", "-", slug.lower())
    slug = slug.strip("-")

    return slug or "page"
