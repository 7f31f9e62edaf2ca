"""Slug derivation shared by projects and pages."""

import re

_NON_SLUG_CHARS = re.compile(r"[^\w-]+", re.ASCII)


def slugify(name: str) -> str:
    """Derive a URL-safe slug from a human-readable name.

    Lower-cases, turns each space into ``-`` and strips every character that
    is not an ASCII word character or ``-``. May return an empty string,
    which callers reject.

    >>> slugify("Acme API")
    'acme-api'
    """
    return _NON_SLUG_CHARS.sub("", name.lower().replace(" ", "-"))
