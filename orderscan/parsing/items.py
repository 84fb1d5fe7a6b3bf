"""Order line item selection."""

import re

from .keywords import ITEM_STOPWORDS
from .normalize import TR_LETTERS, contains_any, fold_turkish

_PRICE_RE = re.compile(r"\d+[.,]?\d*\s*(?:₺|tl|lira)", re.IGNORECASE)
_QUANTITY_RE = re.compile(r"(?:\b\d+\s*(?:x|adet|ad)\b|x\s*\d+)", re.IGNORECASE)
_NAME_PLUS_NUMBER_RE = re.compile(rf"[{TR_LETTERS}]{{2,}}\s*\d{{2,}}[.,]?\d*")
_BULLET_RE = re.compile(r"^[\-•*\s]+")


def is_item_line(line: str) -> bool:
    """Return whether a line looks like an ordered product.

    A product line carries a price, a quantity marker (``2x``, ``3 adet``,
    ``x2``) or a word followed by a number, and is not a label or total.
    """
    if len(line) <= 2:
        return False
    if contains_any(fold_turkish(line), ITEM_STOPWORDS):
        return False
    return bool(
        _PRICE_RE.search(line)
        or _QUANTITY_RE.search(line)
        or _NAME_PLUS_NUMBER_RE.search(line)
    )


def extract_items(lines: list[str], max_items: int = 25) -> list[str]:
    """Collect item lines in transcript order.

    Args:
        lines: Trimmed non-empty transcript lines.
        max_items: Maximum number of items returned.

    Returns:
        Item strings without leading bullet markers.
    """
    items: list[str] = []
    for line in lines:
        if not is_item_line(line):
            continue
        item = _BULLET_RE.sub("", line).strip()
        if len(item) > 1:
            items.append(item)
        if len(items) >= max_items:
            break
    return items
