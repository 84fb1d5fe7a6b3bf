"""Tests for the command-line interface and CSV export."""

import csv
import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import numpy as np
import pytest
from PIL import Image

from orderscan.cli import (
    _find_images,
    _print_summary,
    _to_row,
    _write_csv,
    extract_single,
    main,
    parse_transcript,
    process_folder,
)
from orderscan.models import ExtractedOrderData, Quality
from orderscan.utils.config import AppConfig


def _make_test_image(path: Path) -> None:
    """Create a minimal test PNG image at the given path."""
    img = Image.fromarray(np.zeros((100, 200, 3), dtype=np.uint8))
    img.save(path, format="PNG")


def _make_order() -> ExtractedOrderData:
    return ExtractedOrderData(
        raw_text="Musteri: Ahmet Yilmaz\nToplam: 90,00 TL",
        confidence=88.0,
        quality=Quality.HIGH,
        missing_fields=("customerPhone",),
        customer_name="Ahmet Yilmaz",
        delivery_address="Atatürk Cad. No:5",
        order_amount=90.0,
        payable_amount=90.0,
        items=("2x Pizza 45,00 TL", "1x Ayran 10,00 TL"),
    )


class TestFindImages:
    """Tests for receipt image discovery."""

    def test_find_png_files(self, tmp_path: Path) -> None:
        (tmp_path / "slip1.png").touch()
        (tmp_path / "slip2.png").touch()
        (tmp_path / "readme.txt").touch()
        files = _find_images(tmp_path)
        assert len(files) == 2
        assert all(f.suffix == ".png" for f in files)

    def test_find_mixed_extensions(self, tmp_path: Path) -> None:
        (tmp_path / "slip.png").touch()
        (tmp_path / "slip.jpg").touch()
        (tmp_path / "slip.webp").touch()
        (tmp_path / "slip.pdf").touch()
        files = _find_images(tmp_path)
        assert len(files) == 3

    def test_find_uppercase_extensions(self, tmp_path: Path) -> None:
        (tmp_path / "SLIP.JPG").touch()
        assert len(_find_images(tmp_path)) == 1


class TestCsvExport:
    """Tests for flattening orders and writing the CSV file."""

    def test_to_row_joins_lists(self) -> None:
        row = _to_row(_make_order())
        assert row["items"] == "2x Pizza 45,00 TL | 1x Ayran 10,00 TL"
        assert row["missingFields"] == "customerPhone"
        assert row["quality"] == "HIGH"
        assert "rawText" not in row

    def test_write_csv_content(self, tmp_path: Path) -> None:
        row = _to_row(_make_order())
        row.update({"filename": "slip.png", "status": "success"})
        output = tmp_path / "orders.csv"
        _write_csv([row], output)

        with open(output, encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 1
        assert rows[0]["filename"] == "slip.png"
        assert rows[0]["customerName"] == "Ahmet Yilmaz"
        assert rows[0]["deliveryAddress"] == "Atatürk Cad. No:5"
        assert rows[0]["orderAmount"] == "90.0"
        assert rows[0]["customerPhone"] == ""

    def test_write_csv_empty_results(self, tmp_path: Path) -> None:
        output = tmp_path / "orders.csv"
        _write_csv([], output)
        assert not output.exists()

    def test_write_csv_creates_parent_dirs(self, tmp_path: Path) -> None:
        output = tmp_path / "subdir" / "orders.csv"
        _write_csv([{"filename": "slip.png", "status": "success"}], output)
        with open(output, encoding="utf-8") as f:
            headers = next(csv.reader(f))
        assert headers[:3] == ["filename", "status", "quality"]


class TestPrintSummary:
    """Tests for summary printing."""

    def test_print_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        summary = {"total": 5, "successful": 4, "failed": 1}
        _print_summary(summary, Path("orders.csv"))
        captured = capsys.readouterr()
        assert "Total:      5" in captured.out
        assert "Successful: 4" in captured.out
        assert "Failed:     1" in captured.out
        assert "orders.csv" in captured.out


class TestProcessFolder:
    """Tests for batch folder processing."""

    @patch("orderscan.cli.OrderImageProcessor")
    def test_process_folder_keeps_originals(
        self, mock_processor_cls: MagicMock, tmp_path: Path
    ) -> None:
        mock_processor_cls.return_value.process_order_image.return_value = _make_order()
        _make_test_image(tmp_path / "slip1.png")
        _make_test_image(tmp_path / "slip2.jpg")
        output_csv = tmp_path / "out" / "orders.csv"

        summary = process_folder(tmp_path, output_csv, AppConfig())

        assert summary == {"total": 2, "successful": 2, "failed": 0}
        assert (tmp_path / "slip1.png").exists()
        assert (tmp_path / "slip2.jpg").exists()
        calls = mock_processor_cls.return_value.process_order_image.call_args_list
        assert all(c.args[0].parent != tmp_path for c in calls)

        with open(output_csv, encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [r["filename"] for r in rows] == ["slip1.png", "slip2.jpg"]
        assert all(r["status"] == "success" for r in rows)

    @patch("orderscan.cli.OrderImageProcessor")
    def test_process_folder_with_failure(
        self, mock_processor_cls: MagicMock, tmp_path: Path
    ) -> None:
        mock_processor_cls.return_value.process_order_image.side_effect = [
            _make_order(),
            RuntimeError("OCR failed"),
        ]
        (tmp_path / "slip1.png").touch()
        (tmp_path / "slip2.png").touch()
        output_csv = tmp_path / "orders.csv"

        summary = process_folder(tmp_path, output_csv, AppConfig())

        assert summary["successful"] == 1
        assert summary["failed"] == 1
        with open(output_csv, encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert rows[1]["status"] == "failed"
        assert rows[1]["error"] == "OCR failed"

    def test_process_folder_empty(self, tmp_path: Path) -> None:
        output_csv = tmp_path / "orders.csv"
        summary = process_folder(tmp_path, output_csv, AppConfig())
        assert summary["total"] == 0
        assert not output_csv.exists()

    @patch("orderscan.cli.OrderImageProcessor")
    def test_process_folder_verbose(
        self,
        mock_processor_cls: MagicMock,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        mock_processor_cls.return_value.process_order_image.return_value = _make_order()
        (tmp_path / "slip1.png").touch()

        process_folder(tmp_path, tmp_path / "orders.csv", AppConfig(), verbose=True)
        captured = capsys.readouterr()
        assert "Processing [1/1]" in captured.out


class TestExtractSingle:
    """Tests for single image extraction."""

    @patch("orderscan.cli.OrderImageProcessor")
    def test_extract_single_returns_camel_case(
        self, mock_processor_cls: MagicMock, tmp_path: Path
    ) -> None:
        mock_processor_cls.return_value.process_order_image.return_value = _make_order()
        image_path = tmp_path / "slip.png"
        _make_test_image(image_path)

        result = extract_single(image_path, AppConfig())

        assert result["customerName"] == "Ahmet Yilmaz"
        assert result["quality"] == "HIGH"
        assert image_path.exists()
        copy_path = mock_processor_cls.return_value.process_order_image.call_args.args[0]
        assert copy_path != image_path
        assert copy_path.suffix == ".png"


class TestParseTranscript:
    """Tests for parsing a saved OCR transcript."""

    def test_parse_transcript(self, tmp_path: Path, receipt_text: str) -> None:
        text_path = tmp_path / "slip.txt"
        text_path.write_text(receipt_text, encoding="utf-8")

        result = parse_transcript(text_path, AppConfig(), confidence=90.0)

        assert result["customerName"] == "Ahmet Yilmaz"
        assert result["customerPhone"] == "05321234567"
        assert result["orderAmount"] == 90.0
        assert result["quality"] == "HIGH"


class TestCLIMain:
    """Tests for the CLI argument parser and main entry point."""

    def test_no_command_shows_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0

    def test_batch_nonexistent_directory(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["batch", "/nonexistent/path"])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "not a directory" in captured.err

    def test_extract_nonexistent_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["extract", "/nonexistent/file.png"])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "does not exist" in captured.err

    @patch("orderscan.cli.process_folder")
    def test_batch_with_options(self, mock_pf: MagicMock, tmp_path: Path) -> None:
        mock_pf.return_value = {"total": 1, "successful": 1, "failed": 0}
        output = tmp_path / "out.csv"
        main(["batch", str(tmp_path), "-o", str(output), "-v"])
        args = mock_pf.call_args.args
        assert args[0] == tmp_path
        assert args[1] == output
        assert isinstance(args[2], AppConfig)
        assert args[3] is True

    def test_parse_to_stdout(
        self,
        tmp_path: Path,
        receipt_text: str,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        text_path = tmp_path / "slip.txt"
        text_path.write_text(receipt_text, encoding="utf-8")

        main(["parse", str(text_path), "--confidence", "90"])

        captured = capsys.readouterr()
        assert '"customerName": "Ahmet Yilmaz"' in captured.out
        assert '"quality": "HIGH"' in captured.out

    def test_parse_to_file(self, tmp_path: Path, receipt_text: str) -> None:
        text_path = tmp_path / "slip.txt"
        text_path.write_text(receipt_text, encoding="utf-8")
        output = tmp_path / "out" / "order.json"

        main(["parse", str(text_path), "-o", str(output)])

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["deliveryAddress"].startswith("Atatürk Cad.")
        assert data["confidence"] == 0.0
        assert data["quality"] == "LOW"

    def test_custom_config_file(self, tmp_path: Path, receipt_text: str) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("parsing:\n  max_items: 1\n", encoding="utf-8")
        text_path = tmp_path / "slip.txt"
        text_path.write_text(receipt_text, encoding="utf-8")
        output = tmp_path / "order.json"

        main(["-c", str(config_file), "parse", str(text_path), "-o", str(output)])

        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["items"]) == 1
