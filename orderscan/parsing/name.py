"""Customer name extraction.

Two strategies are tried in order: a labeled line (``Müşteri: ...``,
``Name - ...``) with a next-line fallback, then the first free line shaped
like a first and last name.
"""

import re
from collections.abc import Callable

from orderscan.utils.logger import get_logger

from .keywords import NAME_LABELS, STOPWORDS
from .normalize import TR_LETTERS, collapse_spaces, contains_any, fold_turkish

logger = get_logger(__name__)

_LABEL_PREFIX_RE = re.compile(
    r"^(?:m[üu][sş]ter[iı]|musteri|isim|ad\s*soyad[iı]?|ad|name|customer)\b\s*",
    re.IGNORECASE,
)
_SEPARATOR_RE = re.compile(r"[:\-]")
_DIGIT_RE = re.compile(r"\d")
_TWO_WORDS_RE = re.compile(rf"^[{TR_LETTERS}]+\s+[{TR_LETTERS}]+")

# Folded leading tokens that are labels rather than part of a name.
_LABEL_TOKENS = frozenset(
    {"musteri", "isim", "ad", "adi", "soyad", "soyadi", "name", "customer"}
)

NameStrategy = Callable[[list[str], int, int], str | None]


def _inline_value(line: str) -> str:
    """Return the value written on the same line as a name label."""
    parts = _SEPARATOR_RE.split(line)
    inline = " ".join(parts[1:]).strip()
    if inline:
        return inline

    inline = _LABEL_PREFIX_RE.sub("", line.strip()).strip()
    if inline:
        return inline

    return " ".join(line.split()[1:]).strip()


def _is_plain_text(value: str, min_length: int, max_length: int | None = None) -> bool:
    if not value or _DIGIT_RE.search(value):
        return False
    if len(value) < min_length:
        return False
    return max_length is None or len(value) <= max_length


def from_labeled_line(lines: list[str], min_length: int, max_length: int) -> str | None:
    """Find a name next to a customer/name label.

    Args:
        lines: Trimmed non-empty transcript lines.
        min_length: Minimum accepted name length.
        max_length: Maximum accepted length for a next-line name.

    Returns:
        Raw name text, or ``None``.
    """
    for i, line in enumerate(lines):
        folded = fold_turkish(line)
        if not folded.startswith(NAME_LABELS):
            continue

        inline = _inline_value(line)
        if _is_plain_text(inline, min_length):
            return inline

        if i + 1 < len(lines):
            next_line = lines[i + 1].strip()
            if _is_plain_text(next_line, min_length, max_length):
                return next_line
    return None


def from_free_line(lines: list[str], min_length: int, max_length: int) -> str | None:
    """Pick the first unlabeled line that looks like a first and last name."""
    for line in lines:
        if not _is_plain_text(line, min_length, max_length):
            continue
        if contains_any(fold_turkish(line), STOPWORDS):
            continue
        if _TWO_WORDS_RE.match(line):
            return line
    return None


STRATEGIES: tuple[NameStrategy, ...] = (from_labeled_line, from_free_line)


def clean_name(name: str) -> str:
    """Drop residual label tokens and collapse whitespace."""
    tokens = collapse_spaces(name).split(" ")
    while len(tokens) > 1 and fold_turkish(tokens[0]).strip(":-") in _LABEL_TOKENS:
        tokens = tokens[1:]
    return _LABEL_PREFIX_RE.sub("", " ".join(tokens)).strip() or " ".join(tokens)


def extract_customer_name(
    lines: list[str], min_length: int = 4, max_length: int = 45
) -> str | None:
    """Extract the customer name from transcript lines.

    Args:
        lines: Trimmed non-empty transcript lines.
        min_length: Minimum accepted name length.
        max_length: Maximum accepted name length for unlabeled lines.

    Returns:
        Cleaned customer name, or ``None`` when no strategy matched.
    """
    for strategy in STRATEGIES:
        candidate = strategy(lines, min_length, max_length)
        if candidate:
            name = clean_name(candidate)
            logger.debug("Name found by %s: %s", strategy.__name__, name)
            return name or None
    return None
