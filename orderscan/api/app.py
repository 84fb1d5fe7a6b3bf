"""FastAPI application for the order slip OCR API.

Provides a REST endpoint that turns a photographed order slip into
pre-filled order form values, plus a health check.
"""

import shutil
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from orderscan import __version__
from orderscan.ocr.errors import OCRExtractionError
from orderscan.ocr.order_processor import OrderImageProcessor
from orderscan.utils.config import load_config
from orderscan.utils.logger import get_logger

from .schemas import (
    ExtractOrderResponse,
    HealthResponse,
    OrderDataResponse,
    OrderSuggestions,
)

logger = get_logger(__name__)

app = FastAPI(
    title="Order Slip OCR API",
    description="Extract customer, address, totals and items from receipt photos",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ALLOWED_CONTENT_TYPES = {
    "image/png",
    "image/jpeg",
    "image/webp",
    "image/tiff",
    "image/heic",
    "application/octet-stream",
}


@lru_cache(maxsize=1)
def _get_processor() -> OrderImageProcessor:
    """Build the shared order image processor from configuration."""
    return OrderImageProcessor(load_config())


def _save_upload(upload: UploadFile) -> Path:
    """Copy an upload into its own temporary file and return the path."""
    suffix = Path(upload.filename or "").suffix or ".img"
    with tempfile.NamedTemporaryFile(
        prefix="order-", suffix=suffix, delete=False
    ) as tmp:
        shutil.copyfileobj(upload.file, tmp)
    return Path(tmp.name)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return system health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        tesseract_available=shutil.which("tesseract") is not None,
    )


@app.post("/extract-order", response_model=ExtractOrderResponse)
def extract_order(
    order_image: Annotated[UploadFile, File(alias="orderImage")],
) -> ExtractOrderResponse:
    """Extract order data from an uploaded order slip photo.

    Declared as a plain function so the blocking OCR call runs in
    Starlette's threadpool.

    Args:
        order_image: Uploaded image of the order slip.

    Returns:
        The raw extraction and form suggestions.
    """
    if order_image.content_type and order_image.content_type not in _ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {order_image.content_type}",
        )

    image_path = _save_upload(order_image)
    logger.info("Processing uploaded image: %s", order_image.filename)

    try:
        order = _get_processor().process_order_image(image_path)
    except OCRExtractionError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except Exception as exc:
        logger.error("Order extraction failed: %s", exc)
        raise HTTPException(
            status_code=500,
            detail=str(exc) or "Failed to extract order data from image",
        ) from exc
    finally:
        image_path.unlink(missing_ok=True)

    return ExtractOrderResponse(
        message="Order data extracted successfully",
        data=OrderDataResponse.from_order(order),
        suggestions=OrderSuggestions.from_order(order),
    )
