"""Tesseract OCR engine wrapper.

Returns the full transcript of a receipt together with the mean word
confidence on Tesseract's native 0-100 scale.
"""

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pytesseract
from PIL import Image, UnidentifiedImageError
from pytesseract import TesseractError

from orderscan.utils.logger import get_logger

from .errors import OCRExtractionError

logger = get_logger(__name__)


@dataclass
class OCRResult:
    """Text recognized on a receipt image."""

    text: str
    confidence: float
    language: str
    word_count: int = 0


class TesseractEngine:
    """Wrapper around Tesseract OCR for receipt text extraction.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        languages: Default Tesseract language string, e.g. ``"tur+eng"``.
        psm: Tesseract page segmentation mode.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        languages: str = "tur+eng",
        psm: int = 3,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.languages = languages
        self.psm = psm

    def recognize(
        self, source: Path | np.ndarray, languages: str | None = None
    ) -> OCRResult:
        """Recognize text on an image file or a preprocessed pixel buffer.

        Args:
            source: Image path, or image as a numpy array.
            languages: Tesseract language string. Defaults to the engine default.

        Returns:
            OCRResult with the transcript and a 0-100 confidence.

        Raises:
            OCRExtractionError: If the image cannot be read or Tesseract fails.
        """
        lang = languages or self.languages
        config = f"--psm {self.psm}"

        try:
            pil_image = self._to_pil(source)
            text = pytesseract.image_to_string(pil_image, lang=lang, config=config)
            data = pytesseract.image_to_data(
                pil_image,
                lang=lang,
                config=config,
                output_type=pytesseract.Output.DICT,
            )
        except (TesseractError, OSError, UnidentifiedImageError) as exc:
            logger.error("OCR failed: %s", exc)
            raise OCRExtractionError() from exc

        total_conf = 0.0
        word_count = 0
        for conf, word in zip(data["conf"], data["text"]):
            conf = float(conf)
            if conf > 0 and str(word).strip():
                total_conf += conf
                word_count += 1

        avg_conf = total_conf / word_count if word_count > 0 else 0.0

        logger.info(
            "OCR extracted %d words with average confidence %.1f",
            word_count,
            avg_conf,
        )
        return OCRResult(
            text=text,
            confidence=avg_conf,
            language=lang,
            word_count=word_count,
        )

    @staticmethod
    def _to_pil(source: Path | np.ndarray) -> Image.Image:
        if isinstance(source, np.ndarray):
            return Image.fromarray(source)
        with Image.open(source) as img:
            img.load()
            return img.copy()
