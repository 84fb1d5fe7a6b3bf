"""Receipt image preprocessing ahead of OCR.

Orchestrates orientation, resizing, contrast, sharpening and
binarization steps with quality metrics tracking.
"""

from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np

from orderscan.utils.config import PreprocessingConfig
from orderscan.utils.logger import get_logger

from .adjust import (
    adjust_linear,
    binarize_fixed,
    load_oriented,
    resize_to_width,
    sharpen,
    stretch_contrast,
    to_gray,
)

logger = get_logger(__name__)


@dataclass
class QualityMetrics:
    """Before/after image quality measurements."""

    sharpness_before: float
    sharpness_after: float
    contrast_before: float
    contrast_after: float


def calculate_sharpness(image: np.ndarray) -> float:
    """Calculate image sharpness using Laplacian variance.

    Args:
        image: Input image (RGB or grayscale).

    Returns:
        Sharpness score (higher means sharper).
    """
    return float(cv2.Laplacian(to_gray(image), cv2.CV_64F).var())


def calculate_contrast(image: np.ndarray) -> float:
    """Calculate image contrast as the standard deviation of pixel intensities."""
    return float(to_gray(image).std())


class ReceiptPreprocessor:
    """Prepares a photographed receipt for Tesseract.

    Args:
        config: Preprocessing configuration controlling the steps.
    """

    def __init__(self, config: PreprocessingConfig) -> None:
        self.config = config

    def process(self, path: Path) -> tuple[np.ndarray, QualityMetrics]:
        """Load an image file and run every preprocessing step.

        Args:
            path: Path to the receipt image.

        Returns:
            Tuple of (binarized grayscale image, quality_metrics).
        """
        return self.process_array(load_oriented(path))

    def process_array(self, image: np.ndarray) -> tuple[np.ndarray, QualityMetrics]:
        """Run the preprocessing steps on an already loaded image.

        Args:
            image: Input receipt image (RGB or grayscale).

        Returns:
            Tuple of (processed_image, quality_metrics).
        """
        metrics = QualityMetrics(
            sharpness_before=calculate_sharpness(image),
            contrast_before=calculate_contrast(image),
            sharpness_after=0.0,
            contrast_after=0.0,
        )

        result = resize_to_width(image, self.config.max_width)
        result = stretch_contrast(result)

        if self.config.sharpen_enabled:
            result = sharpen(result)

        result = adjust_linear(
            result, self.config.contrast_alpha, self.config.contrast_beta
        )
        result = binarize_fixed(result, self.config.threshold)

        metrics.sharpness_after = calculate_sharpness(result)
        metrics.contrast_after = calculate_contrast(result)

        logger.info(
            "Preprocessing complete: sharpness %.1f->%.1f, contrast %.1f->%.1f",
            metrics.sharpness_before,
            metrics.sharpness_after,
            metrics.contrast_before,
            metrics.contrast_after,
        )
        return result, metrics
