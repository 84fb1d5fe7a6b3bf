"""Result types produced by the order slip parsing pipeline."""

from dataclasses import dataclass
from enum import StrEnum


class Quality(StrEnum):
    """Three-tier assessment of how trustworthy an extraction is."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# Wire names of the fields an order cannot be created without.
REQUIRED_FIELDS: tuple[str, ...] = (
    "customerName",
    "customerPhone",
    "deliveryAddress",
    "orderAmount",
)


@dataclass(frozen=True)
class ExtractedOrderData:
    """Structured order record recovered from a receipt transcript.

    Optional fields are ``None`` when no heuristic matched. ``payable_amount``
    always equals ``order_amount`` once the latter is resolved. List-valued
    fields are tuples so the record cannot be changed after parsing.
    """

    raw_text: str
    confidence: float
    quality: Quality
    missing_fields: tuple[str, ...] = ()
    customer_name: str | None = None
    customer_phone: str | None = None
    delivery_address: str | None = None
    pickup_address: str | None = None
    order_amount: float | None = None
    subtotal_amount: float | None = None
    discount_amount: float | None = None
    payable_amount: float | None = None
    items: tuple[str, ...] = ()
    notes: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Return the camelCase mapping used by the JSON surfaces."""
        return {
            "rawText": self.raw_text,
            "confidence": self.confidence,
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "deliveryAddress": self.delivery_address,
            "pickupAddress": self.pickup_address,
            "orderAmount": self.order_amount,
            "subtotalAmount": self.subtotal_amount,
            "discountAmount": self.discount_amount,
            "payableAmount": self.payable_amount,
            "items": list(self.items),
            "notes": self.notes,
            "quality": self.quality.value,
            "missingFields": list(self.missing_fields),
        }
