"""Command-line interface for order slip extraction and CSV export.

Subcommands extract a single image, parse an existing OCR transcript,
or process a folder of images into a CSV file. Images are always
processed from a temporary copy, so the originals are left in place.
"""

import argparse
import csv
import json
import shutil
import sys
import tempfile
import time
from pathlib import Path

from orderscan.models import ExtractedOrderData
from orderscan.ocr.order_processor import OrderImageProcessor
from orderscan.parsing.order_parser import OrderTextParser
from orderscan.utils.config import AppConfig, load_config
from orderscan.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = ("*.png", "*.jpg", "*.jpeg", "*.webp", "*.tiff", "*.tif")
_CSV_COLUMNS = [
    "filename",
    "status",
    "quality",
    "confidence",
    "missingFields",
    "customerName",
    "customerPhone",
    "deliveryAddress",
    "pickupAddress",
    "orderAmount",
    "subtotalAmount",
    "discountAmount",
    "payableAmount",
    "items",
    "notes",
    "processing_time_s",
    "error",
]


def _find_images(input_dir: Path) -> list[Path]:
    """Find all supported image files in a directory.

    Args:
        input_dir: Directory to scan for receipt images.

    Returns:
        Sorted list of image file paths.
    """
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def _process_copy(processor: OrderImageProcessor, file_path: Path) -> ExtractedOrderData:
    """Run the processor on a temporary copy of ``file_path``."""
    with tempfile.NamedTemporaryFile(
        prefix="order-", suffix=file_path.suffix, delete=False
    ) as tmp:
        tmp_path = Path(tmp.name)
    try:
        shutil.copyfile(file_path, tmp_path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return processor.process_order_image(tmp_path)


def extract_single(file_path: Path, config: AppConfig) -> dict[str, object]:
    """Extract order data from a single receipt image.

    Args:
        file_path: Path to the receipt image.
        config: Application configuration.

    Returns:
        The camelCase order mapping.
    """
    processor = OrderImageProcessor(config)
    return _process_copy(processor, file_path).to_dict()


def parse_transcript(
    text_path: Path, config: AppConfig, confidence: float = 0.0
) -> dict[str, object]:
    """Parse an OCR transcript saved as text, without running OCR.

    Args:
        text_path: Path to a UTF-8 text file.
        config: Application configuration.
        confidence: OCR confidence to attach, on a 0-100 scale.

    Returns:
        The camelCase order mapping.
    """
    text = text_path.read_text(encoding="utf-8")
    return OrderTextParser(config.parsing).parse(text, confidence).to_dict()


def process_folder(
    input_dir: Path,
    output_csv: Path,
    config: AppConfig,
    verbose: bool = False,
) -> dict[str, int]:
    """Process every receipt image in a folder and export results to CSV.

    Args:
        input_dir: Directory containing receipt images.
        output_csv: Path for the output CSV file.
        config: Application configuration.
        verbose: Whether to print per-file progress.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    processor = OrderImageProcessor(config)

    files = _find_images(input_dir)
    if not files:
        logger.warning("No images found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d images to process", len(files))

    rows: list[dict[str, object]] = []
    successful = 0
    failed = 0

    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")

        start_time = time.time()
        try:
            order = _process_copy(processor, file_path)
            row = _to_row(order)
            row.update({"filename": file_path.name, "status": "success"})
            successful += 1
        except Exception as exc:
            logger.error("Failed to process %s: %s", file_path.name, exc)
            row = {"filename": file_path.name, "status": "failed", "error": str(exc)}
            failed += 1
        row["processing_time_s"] = round(time.time() - start_time, 2)
        rows.append(row)

    _write_csv(rows, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {"total": len(files), "successful": successful, "failed": failed}
    _print_summary(summary, output_csv)
    return summary


def _to_row(order: ExtractedOrderData) -> dict[str, object]:
    """Flatten an order into CSV cells; list fields are ``|``-joined."""
    row = order.to_dict()
    row.pop("rawText")
    row["items"] = " | ".join(order.items)
    row["missingFields"] = ",".join(order.missing_fields)
    return row


def _write_csv(rows: list[dict[str, object]], output_path: Path) -> None:
    """Write extraction rows to a CSV file.

    Args:
        rows: One dictionary per processed image.
        output_path: Path for the output CSV file.
    """
    if not rows:
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_CSV_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    """Print batch processing summary to stdout."""
    print(f"\n{'=' * 50}")
    print("Batch Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def _emit(result: dict[str, object], output: Path | None) -> None:
    output_str = json.dumps(result, indent=2, ensure_ascii=False)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(output_str, encoding="utf-8")
        print(f"Output written to {output}")
    else:
        print(output_str)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Order slip OCR",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="YAML configuration file"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser("extract", help="Extract one receipt image")
    extract_parser.add_argument("file", type=Path, help="Receipt image to process")
    extract_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    parse_parser = subparsers.add_parser("parse", help="Parse an OCR transcript file")
    parse_parser.add_argument("file", type=Path, help="UTF-8 transcript file")
    parse_parser.add_argument(
        "--confidence",
        type=float,
        default=0.0,
        help="OCR confidence (0-100) to score against (default: 0)",
    )
    parse_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    batch_parser = subparsers.add_parser("batch", help="Process a folder of images")
    batch_parser.add_argument("input_dir", type=Path, help="Input directory with images")
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("orders.csv"),
        help="Output CSV file (default: orders.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.log_level)

    if args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(args.input_dir, args.output, config, args.verbose)
    elif args.command in ("extract", "parse"):
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        if args.command == "extract":
            result = extract_single(args.file, config)
        else:
            result = parse_transcript(args.file, config, args.confidence)
        _emit(result, args.output)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
