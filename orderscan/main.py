"""Application entry point for the order slip OCR API server."""

import uvicorn

from orderscan.utils.config import load_config
from orderscan.utils.logger import setup_logging


def main() -> None:
    """Start the FastAPI application server on the configured address."""
    config = load_config()
    setup_logging(config.log_level)
    uvicorn.run(
        "orderscan.api.app:app",
        host=config.server.host,
        port=config.server.port,
        workers=config.server.workers,
    )


if __name__ == "__main__":
    main()
