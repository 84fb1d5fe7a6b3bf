"""Free-text order notes (``Not: zili çalmayın``)."""

import re

from .normalize import collapse_spaces

# The value may wrap onto one following line.
_NOTES_RE = re.compile(
    r"\b(?:notlar|notu|note|not|[öo]zel\s*istek"
    r"|a[cç][ıi]klamas[ıi]|a[cç][ıi]klama)\b\s*[:\-]?\s*"
    r"([^\n]+(?:\n[^\n]+)?)",
    re.IGNORECASE,
)


def extract_notes(text: str) -> str | None:
    """Return the text following the first notes label, or ``None``."""
    match = _NOTES_RE.search(text)
    if not match:
        return None
    return collapse_spaces(match.group(1)) or None
