"""Monetary total resolution for Turkish receipts.

A receipt can print several totals: a subtotal, one or more discount
lines, a pre-discount ``Toplam`` and a post-discount ``Ödenecek Tutar``.
Lines are classified by folded keywords, then the payable figure is chosen
by a fixed priority:

1. the smallest amount on a payable-labeled total line;
2. otherwise the largest amount on any total line;
3. ``subtotal - discount`` when both exist and the result is smaller;
4. the smallest amount on any payable-keyword line;
5. the largest currency-suffixed amount anywhere in the text.
"""

import math
import re
from dataclasses import dataclass

from orderscan.utils.logger import get_logger

from .keywords import (
    DISCOUNT_KEYWORDS,
    FINAL_KEYWORDS,
    PAYABLE_KEYWORDS,
    SUBTOTAL_KEYWORDS,
)
from .normalize import contains_any, fold_turkish

logger = get_logger(__name__)

_NUMBER_RE = re.compile(r"[\d.,]+")
_NON_NUMERIC_RE = re.compile(r"[^\d.,]")
_LEADING_FLOAT_RE = re.compile(r"^(?:\d+\.?\d*|\.\d+)")
_CURRENCY_MARKER_RE = re.compile(r"₺|tl|lira", re.IGNORECASE)
_DECIMAL_TAIL_RE = re.compile(r"[.,]\d{1,2}")
_CURRENCY_AMOUNT_RE = re.compile(r"[\d.,]+\s*(?:₺|tl|lira)", re.IGNORECASE)


@dataclass(frozen=True)
class TotalCandidate:
    """An amount found on a total-like line, with the folded line as label."""

    amount: float
    label: str

    @property
    def is_payable(self) -> bool:
        return contains_any(self.label, PAYABLE_KEYWORDS)


@dataclass(frozen=True)
class AmountSummary:
    """Resolved monetary fields of an order."""

    order_amount: float | None = None
    subtotal_amount: float | None = None
    discount_amount: float | None = None
    payable_amount: float | None = None


def parse_amount(amount_text: str) -> float:
    """Parse a Turkish or plain formatted number.

    With both separators present ``.`` groups thousands and ``,`` marks
    decimals (``"1.234,56"``); a lone ``,`` is a decimal comma. Parsing
    stops at the first character that cannot continue a number.

    Args:
        amount_text: Text containing a number.

    Returns:
        Parsed value, or ``nan`` when no number can be read.
    """
    cleaned = _NON_NUMERIC_RE.sub("", amount_text)

    if "," in cleaned and "." in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".", 1)
    elif "," in cleaned:
        cleaned = cleaned.replace(",", ".", 1)

    match = _LEADING_FLOAT_RE.match(cleaned)
    if not match:
        return math.nan
    return float(match.group(0))


def _is_usable(amount: float) -> bool:
    return not math.isnan(amount) and amount > 0


def extract_amount_from_line(line: str) -> float | None:
    """Pick the amount printed on a line, scanning right to left.

    Without a currency marker on the line only numbers with a one or two
    digit fractional part are accepted, which keeps quantities and phone
    fragments out.

    Args:
        line: A single transcript line.

    Returns:
        The rightmost acceptable amount, or ``None``.
    """
    has_currency = bool(_CURRENCY_MARKER_RE.search(line))

    for raw in reversed(_NUMBER_RE.findall(line)):
        amount = parse_amount(raw)
        if not _is_usable(amount):
            continue
        if not has_currency and not _DECIMAL_TAIL_RE.search(raw):
            continue
        return amount
    return None


def _classify_lines(
    lines: list[str],
) -> tuple[float | None, float | None, list[TotalCandidate]]:
    subtotal: float | None = None
    discount: float | None = None
    candidates: list[TotalCandidate] = []

    for line in lines:
        folded = fold_turkish(line)
        has_payable = contains_any(folded, PAYABLE_KEYWORDS)

        if contains_any(folded, SUBTOTAL_KEYWORDS):
            amount = extract_amount_from_line(line)
            if amount:
                subtotal = max(subtotal or 0.0, amount)
            continue

        if contains_any(folded, DISCOUNT_KEYWORDS) and not has_payable:
            amount = extract_amount_from_line(line)
            if amount:
                discount = max(discount or 0.0, amount)

        if not contains_any(folded, FINAL_KEYWORDS):
            continue
        # "İndirim: 20 TL" is a discount, not a total.
        if "indirim" in folded and not has_payable:
            continue

        amount = extract_amount_from_line(line)
        if amount:
            candidates.append(TotalCandidate(amount=amount, label=folded))

    return subtotal, discount, candidates


def resolve_amounts(text: str, lines: list[str]) -> AmountSummary:
    """Resolve subtotal, discount and the final payable amount.

    Args:
        text: Normalized OCR text.
        lines: Trimmed non-empty lines of ``text``.

    Returns:
        Amount summary; ``payable_amount`` mirrors ``order_amount``.
    """
    subtotal, discount, candidates = _classify_lines(lines)
    order_amount: float | None = None

    if candidates:
        payable = [c.amount for c in candidates if c.is_payable]
        if payable:
            order_amount = min(payable)
        else:
            order_amount = max(c.amount for c in candidates)

    if subtotal is not None and discount is not None:
        discounted_total = subtotal - discount
        if discounted_total > 0 and (not order_amount or discounted_total < order_amount):
            order_amount = discounted_total

    if not order_amount:
        payable_amounts: list[float] = []
        for line in lines:
            if not contains_any(fold_turkish(line), PAYABLE_KEYWORDS):
                continue
            amount = extract_amount_from_line(line)
            if amount is not None:
                payable_amounts.append(amount)
        if payable_amounts:
            order_amount = min(payable_amounts)

    if not order_amount:
        prices = [parse_amount(p) for p in _CURRENCY_AMOUNT_RE.findall(text)]
        prices = [p for p in prices if _is_usable(p)]
        if prices:
            order_amount = max(prices)

    if not order_amount:
        order_amount = None

    logger.debug(
        "Amounts resolved: order=%s subtotal=%s discount=%s (%d candidates)",
        order_amount,
        subtotal,
        discount,
        len(candidates),
    )
    return AmountSummary(
        order_amount=order_amount,
        subtotal_amount=subtotal,
        discount_amount=discount,
        payable_amount=order_amount,
    )
