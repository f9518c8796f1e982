"""
Free-text search input sanitization.
"""

import re

# Stripped outright before escaping.
_DANGEROUS_CHARS = re.compile(r"[<>'\"\\;]")


def sanitize(raw: str) -> str:
    """
    Strip dangerous characters, HTML-escape the rest and trim.

    Removes ``< > ' " \\ ;``, then escapes ``&``, ``<`` and ``>`` as HTML
    entities. Never fails; may return an empty string.
    """
    cleaned = _DANGEROUS_CHARS.sub("", raw)
    cleaned = cleaned.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return cleaned.strip()
