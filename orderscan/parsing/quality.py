"""Extraction quality scoring."""

from orderscan.models import REQUIRED_FIELDS, Quality
from orderscan.utils.config import ParsingConfig


def find_missing_fields(
    customer_name: str | None,
    customer_phone: str | None,
    delivery_address: str | None,
    order_amount: float | None,
) -> list[str]:
    """List the required fields that could not be resolved.

    Returns:
        Wire names from :data:`orderscan.models.REQUIRED_FIELDS`, in order.
    """
    present = {
        "customerName": bool(customer_name),
        "customerPhone": bool(customer_phone),
        "deliveryAddress": bool(delivery_address),
        "orderAmount": order_amount is not None and order_amount > 0,
    }
    return [name for name in REQUIRED_FIELDS if not present[name]]


def calculate_quality(
    confidence: float, missing_count: int, config: ParsingConfig | None = None
) -> Quality:
    """Map OCR confidence and unresolved field count to a quality tier.

    Args:
        confidence: OCR confidence on a 0-100 scale.
        missing_count: Number of required fields that failed to resolve.
        config: Threshold overrides; defaults to 82/1 for HIGH, 65/2 for MEDIUM.

    Returns:
        The quality tier.
    """
    config = config or ParsingConfig()

    if confidence >= config.high_confidence and missing_count <= config.high_max_missing:
        return Quality.HIGH
    if (
        confidence >= config.medium_confidence
        and missing_count <= config.medium_max_missing
    ):
        return Quality.MEDIUM
    return Quality.LOW
