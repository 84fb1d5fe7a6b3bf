"""Delivery and pickup address extraction.

Receipts rarely print an address on one line. The labeled strategy
absorbs the lines that follow an ``Adres:`` label until something that
looks like a total, a price, or an order line shows up. When no label is
present, Turkish address vocabulary (``Mah.``, ``Sk.``, ``No:``) is used
to spot an address line.
"""

import re

from orderscan.utils.logger import get_logger

from .keywords import STOPWORDS
from .normalize import TR_LETTERS, collapse_spaces, contains_any, fold_turkish

logger = get_logger(__name__)

_DELIVERY_LABEL_RE = re.compile(
    r"(teslimat\s*adresi|adresi?|teslimat|delivery\s*address|address)\s*[:\-]?\s*(.*)",
    re.IGNORECASE,
)
_PICKUP_LABEL_RE = re.compile(
    r"(al[ıi][şs]\s*adresi|al[ıi]nacak\s*adres|pick-?up\s*address|restoran\s*adresi)"
    r"\s*[:\-]?\s*(.*)",
    re.IGNORECASE,
)
_CURRENCY_AMOUNT_RE = re.compile(r"\d+[.,]?\d*\s*(?:₺|tl)", re.IGNORECASE)
_ITEM_LIKE_RE = re.compile(
    rf"(?:\b\d+\s*x\b|\bx\s*\d+|[{TR_LETTERS}]{{2,}}\s*\d{{2,}}[.,]?\d*)",
    re.IGNORECASE,
)

_ADDRESS_VOCABULARY = (
    r"(?:mahalle|mah\.|sokak|sk\.|cadde|cd\.|apartman|apt\.|site|blok|daire|no\s*:?)"
)
_ADDRESS_LINE_RE = re.compile(rf"{_ADDRESS_VOCABULARY}\b", re.IGNORECASE)


def _ends_address(line: str) -> bool:
    """Return whether a line following an address label is no longer address."""
    if not line:
        return True
    if contains_any(fold_turkish(line), STOPWORDS):
        return True
    if _CURRENCY_AMOUNT_RE.search(line):
        return True
    return bool(_ITEM_LIKE_RE.search(line))


def _collect_labeled(
    lines: list[str],
    label_re: re.Pattern[str],
    lookahead: int,
    skip_re: re.Pattern[str] | None = None,
) -> str | None:
    for i, line in enumerate(lines):
        if skip_re is not None and skip_re.search(line):
            continue
        match = label_re.search(line)
        if not match:
            continue

        chunks: list[str] = []
        if match.group(2).strip():
            chunks.append(match.group(2).strip())

        for next_line in lines[i + 1 : i + 1 + lookahead]:
            next_line = next_line.strip()
            if _ends_address(next_line):
                break
            chunks.append(next_line)

        if chunks:
            return collapse_spaces(" ".join(chunks))
    return None


def from_labeled_lines(lines: list[str], lookahead: int = 3) -> str | None:
    """Aggregate an address written under or after a delivery label."""
    return _collect_labeled(lines, _DELIVERY_LABEL_RE, lookahead, skip_re=_PICKUP_LABEL_RE)


def from_vocabulary_line(lines: list[str]) -> str | None:
    """Return the first line that uses Turkish address vocabulary."""
    for line in lines:
        if _ADDRESS_LINE_RE.search(line):
            return line.strip()
    return None


def from_inline_text(text: str, context: int = 24, min_tail: int = 8) -> str | None:
    """Search the whole text for address vocabulary with surrounding context."""
    pattern = rf"[^\n]{{0,{context}}}{_ADDRESS_VOCABULARY}\s*[^\n]{{{min_tail},}}"
    match = re.search(pattern, text, re.IGNORECASE)
    return match.group(0).strip() if match else None


def extract_delivery_address(
    text: str,
    lines: list[str],
    lookahead: int = 3,
    inline_context: int = 24,
    inline_min_tail: int = 8,
) -> str | None:
    """Extract the delivery address.

    Args:
        text: Normalized OCR text.
        lines: Trimmed non-empty lines of ``text``.
        lookahead: Maximum number of lines absorbed after a label.
        inline_context: Characters allowed before the vocabulary word
            in the whole-text fallback.
        inline_min_tail: Characters required after the vocabulary word
            in the whole-text fallback.

    Returns:
        Address text, or ``None`` when nothing looks like an address.
    """
    address = (
        from_labeled_lines(lines, lookahead)
        or from_vocabulary_line(lines)
        or from_inline_text(text, inline_context, inline_min_tail)
    )
    if address:
        logger.debug("Delivery address found: %s", address)
    return address or None


def extract_pickup_address(lines: list[str], lookahead: int = 3) -> str | None:
    """Extract a pickup address; only explicitly labeled lines qualify."""
    return _collect_labeled(lines, _PICKUP_LABEL_RE, lookahead)
