"""Order text parser: raw OCR transcript to :class:`ExtractedOrderData`."""

from orderscan.models import ExtractedOrderData
from orderscan.utils.config import ParsingConfig
from orderscan.utils.logger import get_logger

from .address import extract_delivery_address, extract_pickup_address
from .amounts import resolve_amounts
from .items import extract_items
from .name import extract_customer_name
from .normalize import normalize_text, split_lines
from .notes import extract_notes
from .phone import extract_phone
from .quality import calculate_quality, find_missing_fields

logger = get_logger(__name__)


class OrderTextParser:
    """Stateless parser turning a receipt transcript into an order record.

    Holds only the heuristic thresholds, so one instance can be shared
    across threads.

    Args:
        config: Parsing thresholds. Defaults to :class:`ParsingConfig`.
    """

    def __init__(self, config: ParsingConfig | None = None) -> None:
        self.config = config or ParsingConfig()

    def parse(self, text: str, confidence: float = 0.0) -> ExtractedOrderData:
        """Parse a transcript.

        Never raises; unresolved fields are ``None`` and listed in
        ``missing_fields``.

        Args:
            text: Raw OCR text.
            confidence: OCR confidence on a 0-100 scale.

        Returns:
            The extracted order data with quality assessment.
        """
        cfg = self.config
        normalized = normalize_text(text)
        lines = split_lines(normalized)

        customer_name = extract_customer_name(
            lines, cfg.name_min_length, cfg.name_max_length
        )
        customer_phone = extract_phone(normalized)
        delivery_address = extract_delivery_address(
            normalized,
            lines,
            lookahead=cfg.address_lookahead,
            inline_context=cfg.address_inline_context,
            inline_min_tail=cfg.address_inline_min_tail,
        )
        amounts = resolve_amounts(normalized, lines)

        missing_fields = find_missing_fields(
            customer_name, customer_phone, delivery_address, amounts.order_amount
        )
        quality = calculate_quality(confidence, len(missing_fields), cfg)

        result = ExtractedOrderData(
            raw_text=normalized,
            confidence=confidence,
            quality=quality,
            missing_fields=tuple(missing_fields),
            customer_name=customer_name,
            customer_phone=customer_phone,
            delivery_address=delivery_address,
            pickup_address=extract_pickup_address(lines, cfg.address_lookahead),
            order_amount=amounts.order_amount,
            subtotal_amount=amounts.subtotal_amount,
            discount_amount=amounts.discount_amount,
            payable_amount=amounts.payable_amount,
            items=tuple(extract_items(lines, cfg.max_items)),
            notes=extract_notes(normalized),
        )

        logger.info(
            "Parsed order text: %d lines, %d items, missing=%s, quality=%s",
            len(lines),
            len(result.items),
            ",".join(missing_fields) or "none",
            quality.value,
        )
        return result
