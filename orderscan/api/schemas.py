"""Pydantic response schemas for the FastAPI endpoints.

Field names are camelCase on the wire so the order form on the client
can be pre-filled without renaming.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from orderscan.models import ExtractedOrderData, Quality


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderDataResponse(_CamelModel):
    """Extracted order data exactly as the parser produced it."""

    raw_text: str
    confidence: float
    customer_name: str | None = None
    customer_phone: str | None = None
    delivery_address: str | None = None
    pickup_address: str | None = None
    order_amount: float | None = None
    subtotal_amount: float | None = None
    discount_amount: float | None = None
    payable_amount: float | None = None
    items: list[str] = []
    notes: str | None = None
    quality: Quality
    missing_fields: list[str] = []

    @classmethod
    def from_order(cls, order: ExtractedOrderData) -> "OrderDataResponse":
        return cls(
            raw_text=order.raw_text,
            confidence=order.confidence,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            delivery_address=order.delivery_address,
            pickup_address=order.pickup_address,
            order_amount=order.order_amount,
            subtotal_amount=order.subtotal_amount,
            discount_amount=order.discount_amount,
            payable_amount=order.payable_amount,
            items=list(order.items),
            notes=order.notes,
            quality=order.quality,
            missing_fields=list(order.missing_fields),
        )


class OrderSuggestions(_CamelModel):
    """Form pre-fill values: absent text becomes ``""`` and absent amounts ``0``."""

    customer_name: str = ""
    customer_phone: str = ""
    delivery_address: str = ""
    pickup_address: str = ""
    order_amount: float = 0.0
    subtotal_amount: float = 0.0
    discount_amount: float = 0.0
    payable_amount: float = 0.0
    items: list[str] = []
    notes: str = ""
    confidence: float
    quality: Quality
    missing_fields: list[str] = []

    @classmethod
    def from_order(cls, order: ExtractedOrderData) -> "OrderSuggestions":
        return cls(
            customer_name=order.customer_name or "",
            customer_phone=order.customer_phone or "",
            delivery_address=order.delivery_address or "",
            pickup_address=order.pickup_address or "",
            order_amount=order.order_amount or 0.0,
            subtotal_amount=order.subtotal_amount or 0.0,
            discount_amount=order.discount_amount or 0.0,
            payable_amount=order.payable_amount or order.order_amount or 0.0,
            items=list(order.items),
            notes=order.notes or "",
            confidence=order.confidence,
            quality=order.quality,
            missing_fields=list(order.missing_fields),
        )


class ExtractOrderResponse(BaseModel):
    """Response schema for an order image extraction request."""

    message: str
    data: OrderDataResponse
    suggestions: OrderSuggestions


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    tesseract_available: bool
