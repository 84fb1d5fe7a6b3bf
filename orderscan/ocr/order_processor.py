"""Order slip processing pipeline.

Runs optional preprocessing, OCR, and order text parsing on an uploaded
receipt photo, then removes the photo whatever the outcome.
"""

from pathlib import Path

import numpy as np

from orderscan.models import ExtractedOrderData
from orderscan.parsing.order_parser import OrderTextParser
from orderscan.preprocessing.pipeline import ReceiptPreprocessor
from orderscan.utils.config import AppConfig
from orderscan.utils.logger import get_logger

from .tesseract_engine import OCRResult, TesseractEngine

logger = get_logger(__name__)


class OrderImageProcessor:
    """End-to-end receipt image to order data pipeline.

    The processor keeps no per-image state, so concurrent calls on
    different files are safe.

    Args:
        config: Application configuration object.
        ocr_engine: OCR collaborator; built from ``config.ocr`` if omitted.
        preprocessor: Image preprocessing collaborator; built from
            ``config.preprocessing`` if omitted.
    """

    def __init__(
        self,
        config: AppConfig,
        ocr_engine: TesseractEngine | None = None,
        preprocessor: ReceiptPreprocessor | None = None,
    ) -> None:
        self.config = config
        self.ocr_engine = ocr_engine or TesseractEngine(
            tesseract_cmd=config.ocr.tesseract_cmd,
            languages=config.ocr.languages,
            psm=config.ocr.psm,
        )
        self.preprocessor = preprocessor or ReceiptPreprocessor(config.preprocessing)
        self.parser = OrderTextParser(config.parsing)

    def extract_text(self, image_path: Path) -> OCRResult:
        """Run OCR on a receipt image, preprocessing it first when enabled.

        A preprocessing failure is logged and OCR runs on the original file.

        Args:
            image_path: Path to the receipt image.

        Returns:
            The OCR transcript and confidence.
        """
        image: Path | np.ndarray = image_path
        if self.config.preprocessing.enabled:
            try:
                image, _ = self.preprocessor.process(image_path)
            except Exception as exc:
                logger.warning(
                    "Preprocessing failed for %s, using original image: %s",
                    image_path.name,
                    exc,
                )
                image = image_path

        return self.ocr_engine.recognize(image, self.config.ocr.languages)

    def process_order_image(self, image_path: Path | str) -> ExtractedOrderData:
        """Extract order data from a receipt image and delete the image.

        Args:
            image_path: Path to the uploaded receipt image. The file is
                removed on every exit path.

        Returns:
            The extracted order data with quality assessment.

        Raises:
            OCRExtractionError: If the OCR engine fails.
        """
        path = Path(image_path)
        logger.info("Processing order image: %s", path.name)
        try:
            ocr_result = self.extract_text(path)
            order = self.parser.parse(ocr_result.text, ocr_result.confidence)
        except Exception as exc:
            logger.error("Order processing failed for %s: %s", path.name, exc)
            raise
        finally:
            _remove_quietly(path)

        logger.info(
            "Extracted order from %s: quality=%s, confidence=%.1f",
            path.name,
            order.quality.value,
            order.confidence,
        )
        return order


def _remove_quietly(path: Path) -> None:
    """Delete a file if it still exists; failures are only logged."""
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove %s: %s", path, exc)
