"""Shared test fixtures for the order slip OCR test suite."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

RECEIPT_TEXT = (
    "Musteri: Ahmet Yilmaz\n"
    "Tel: 0532 123 45 67\n"
    "Adres: Atatürk Cad. No:5\n"
    "2x Pizza 45,00 TL\n"
    "Toplam: 90,00 TL"
)


@pytest.fixture
def receipt_text() -> str:
    """Return a complete, cleanly recognized order slip transcript."""
    return RECEIPT_TEXT


@pytest.fixture
def sample_image() -> np.ndarray:
    """Create a simple synthetic grayscale test image."""
    image = np.zeros((200, 300), dtype=np.uint8)
    image[50:150, 50:250] = 255
    return image


@pytest.fixture
def sample_color_image() -> np.ndarray:
    """Create a simple synthetic RGB test image."""
    image = np.zeros((200, 300, 3), dtype=np.uint8)
    image[50:150, 50:250] = (255, 255, 255)
    return image


@pytest.fixture
def receipt_image_file(tmp_path: Path, sample_color_image: np.ndarray) -> Path:
    """Write a synthetic receipt photo to disk and return its path."""
    path = tmp_path / "receipt.png"
    Image.fromarray(sample_color_image).save(path, format="PNG")
    return path


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"
