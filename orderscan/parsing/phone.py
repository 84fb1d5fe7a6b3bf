"""Turkish mobile number extraction."""

import re

from orderscan.utils.logger import get_logger

logger = get_logger(__name__)

# 05XX XXX XX XX with optional +90 prefix, parentheses, spaces and dashes.
_PHONE_RE = re.compile(
    r"(?:\+?90\s*)?(?:\(?0?5\d{2}\)?[\s-]*\d{3}[\s-]*\d{2}[\s-]*\d{2})"
)

_MIN_PHONE_DIGITS = 10


def normalize_phone(raw: str) -> str:
    """Reduce a matched phone string to a ``0``-prefixed digit string.

    Args:
        raw: Phone text as found in the transcript.

    Returns:
        ``05XXXXXXXXX`` for recognizable numbers, otherwise the bare digits.
    """
    digits = re.sub(r"\D", "", raw)

    if len(digits) == 12 and digits.startswith("90"):
        return f"0{digits[2:]}"
    if len(digits) == 10:
        return f"0{digits}"
    if len(digits) >= 11:
        return digits[-11:]
    return digits


def extract_phone(text: str) -> str | None:
    """Find the first Turkish mobile number in normalized text.

    Args:
        text: Normalized OCR text.

    Returns:
        Normalized phone number, or ``None`` if no match survives.
    """
    for match in _PHONE_RE.finditer(text):
        phone = normalize_phone(match.group(0))
        if len(phone) >= _MIN_PHONE_DIGITS:
            logger.debug("Phone matched: %s", phone)
            return phone
    return None
