"""Pixel-level adjustments for photographed receipts.

Phone photos of thermal paper come in rotated, oversized, and low
contrast. These helpers prepare them for Tesseract: orientation, size,
grayscale, contrast stretch, sharpening, and a fixed binarization.
"""

from pathlib import Path

import cv2
import numpy as np
from PIL import Image, ImageOps

from orderscan.utils.logger import get_logger

logger = get_logger(__name__)

_SHARPEN_KERNEL = np.array([[0, -1, 0], [-1, 5, -1], [0, -1, 0]], dtype=np.float32)


def load_oriented(path: Path) -> np.ndarray:
    """Load an image file and apply its EXIF orientation.

    Args:
        path: Path to the image file.

    Returns:
        RGB image as a numpy array.
    """
    with Image.open(path) as img:
        oriented = ImageOps.exif_transpose(img).convert("RGB")
    return np.array(oriented)


def to_gray(image: np.ndarray) -> np.ndarray:
    """Convert an RGB image to grayscale; grayscale input is returned as is."""
    if len(image.shape) == 3:
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
    return image


def resize_to_width(image: np.ndarray, max_width: int) -> np.ndarray:
    """Shrink an image to ``max_width`` pixels wide, never enlarging it.

    Args:
        image: Input image.
        max_width: Target maximum width in pixels.

    Returns:
        The resized image, or the input when it is already narrow enough.
    """
    height, width = image.shape[:2]
    if width <= max_width:
        return image

    scale = max_width / width
    size = (max_width, max(1, round(height * scale)))
    logger.debug("Resizing %dx%d to %dx%d", width, height, size[0], size[1])
    return cv2.resize(image, size, interpolation=cv2.INTER_AREA)


def stretch_contrast(image: np.ndarray) -> np.ndarray:
    """Stretch grayscale intensities to the full 0-255 range."""
    gray = to_gray(image)
    return cv2.normalize(gray, None, 0, 255, cv2.NORM_MINMAX)


def sharpen(image: np.ndarray) -> np.ndarray:
    """Apply a 3x3 sharpening kernel."""
    return cv2.filter2D(image, -1, _SHARPEN_KERNEL)


def adjust_linear(image: np.ndarray, alpha: float, beta: float) -> np.ndarray:
    """Apply ``alpha * pixel + beta`` with clamping to 0-255.

    Args:
        image: Input image.
        alpha: Contrast multiplier.
        beta: Brightness offset.

    Returns:
        Adjusted uint8 image.
    """
    adjusted = image.astype(np.float32) * alpha + beta
    return np.clip(adjusted, 0, 255).astype(np.uint8)


def binarize_fixed(image: np.ndarray, threshold: int = 160) -> np.ndarray:
    """Binarize with a fixed threshold.

    Args:
        image: Input image (RGB or grayscale).
        threshold: Pixels above this become white, the rest black.

    Returns:
        Binary image with pixel values 0 or 255.
    """
    gray = to_gray(image)
    _, binary = cv2.threshold(gray, threshold, 255, cv2.THRESH_BINARY)
    logger.debug("Applied fixed binarization at %d", threshold)
    return binary
