"""Text canonicalization shared by every order slip extractor.

OCR transcripts of receipts arrive with mixed line endings, typographic
quotes, and Turkish casing that defeats naive ``str.lower()`` keyword
tests. Everything here is pure and never raises.
"""

import re

# Letter class used by shape heuristics (names, item lines).
TR_LETTERS = "a-zA-ZçğıöşüÇĞİÖŞÜ"

_FOLD_TABLE = str.maketrans(
    {
        "ç": "c",
        "ğ": "g",
        "ı": "i",
        "ö": "o",
        "ş": "s",
        "ü": "u",
    }
)

# Horizontal whitespace only: a blank line stays a paragraph break, so a
# note never continues across it.
_TRAILING_SPACE_RE = re.compile(r"[^\S\n]+\n")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize_text(text: str) -> str:
    """Canonicalize a raw OCR transcript.

    Converts carriage returns to newlines, straightens curly quotes,
    maps stray ``|`` glyphs to ``I``, strips whitespace before line
    breaks, and collapses runs of blank lines to a single blank line.

    Args:
        text: Raw OCR output.

    Returns:
        Normalized text, possibly empty.
    """
    result = text.replace("\r\n", "\n").replace("\r", "\n")
    result = result.replace("“", '"').replace("”", '"')
    result = result.replace("‘", "'").replace("’", "'")
    result = result.replace("|", "I")
    result = _TRAILING_SPACE_RE.sub("\n", result)
    result = _BLANK_RUN_RE.sub("\n\n", result)
    return result.strip()


def fold_turkish(value: str) -> str:
    """Lower-case with Turkish rules and strip diacritics.

    ``"MÜŞTERİ Adı"`` becomes ``"musteri adi"``.

    Args:
        value: Text to fold.

    Returns:
        ASCII-leaning lower-case text suitable for keyword tests.
    """
    lowered = value.replace("İ", "i").replace("I", "ı").lower()
    return lowered.translate(_FOLD_TABLE)


def split_lines(text: str) -> list[str]:
    """Split text into trimmed, non-empty lines."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def contains_any(folded: str, keywords: tuple[str, ...] | frozenset[str]) -> bool:
    """Return whether any keyword occurs as a substring of ``folded``."""
    return any(keyword in folded for keyword in keywords)


def collapse_spaces(value: str) -> str:
    """Collapse internal whitespace runs to single spaces and trim."""
    return re.sub(r"\s+", " ", value).strip()
