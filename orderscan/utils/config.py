"""Configuration management for the order slip OCR system.

Loads and validates YAML configuration with sensible defaults
for image preprocessing, OCR, and order text parsing heuristics.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class PreprocessingConfig(BaseModel):
    """Configuration for the receipt image preprocessing step."""

    enabled: bool = True
    max_width: int = 1400
    sharpen_enabled: bool = True
    contrast_alpha: float = 1.1
    contrast_beta: float = -10.0
    threshold: int = 160


class OCRConfig(BaseModel):
    """Configuration for Tesseract OCR engine."""

    tesseract_cmd: str | None = None
    languages: str = "tur+eng"
    psm: int = 3


class ParsingConfig(BaseModel):
    """Empirically tuned thresholds for the order text heuristics."""

    name_min_length: int = 4
    name_max_length: int = 45
    address_lookahead: int = 3
    address_inline_context: int = 24
    address_inline_min_tail: int = 8
    max_items: int = 25
    high_confidence: float = 82.0
    high_max_missing: int = 1
    medium_confidence: float = 65.0
    medium_max_missing: int = 2


class ServerConfig(BaseModel):
    """Bind address and worker count for the API server."""

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1


class AppConfig(BaseModel):
    """Top-level application configuration."""

    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
