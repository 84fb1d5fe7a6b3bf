"""Tests for amount parsing and payable total resolution."""

import math

import pytest

from orderscan.parsing.amounts import (
    AmountSummary,
    extract_amount_from_line,
    parse_amount,
    resolve_amounts,
)


def _resolve(*lines: str) -> AmountSummary:
    return resolve_amounts("\n".join(lines), list(lines))


class TestParseAmount:
    """Tests for Turkish and plain number parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1.234,56", 1234.56),
            ("12,50", 12.5),
            ("12.50", 12.5),
            ("₺1.250,00", 1250.0),
            ("90", 90.0),
            ("45,00.", 45.0),
        ],
    )
    def test_formats(self, text: str, expected: float) -> None:
        assert parse_amount(text) == pytest.approx(expected)

    def test_no_digits_is_nan(self) -> None:
        assert math.isnan(parse_amount("TL"))
        assert math.isnan(parse_amount("."))


class TestExtractAmountFromLine:
    """Tests for picking the amount printed on a single line."""

    def test_currency_suffixed(self) -> None:
        assert extract_amount_from_line("Toplam: 90,00 TL") == 90.0

    def test_integer_with_currency(self) -> None:
        assert extract_amount_from_line("Toplam 90 TL") == 90.0

    def test_integer_without_currency_rejected(self) -> None:
        assert extract_amount_from_line("Toplam 90") is None

    def test_quantity_without_decimals_rejected(self) -> None:
        assert extract_amount_from_line("2 adet") is None

    def test_rightmost_amount_wins(self) -> None:
        assert extract_amount_from_line("3 x 12.50") == 12.5

    def test_lira_symbol(self) -> None:
        assert extract_amount_from_line("Genel Toplam ₺ 1.234,56") == 1234.56


class TestResolveAmounts:
    """Tests for the payable amount priority rules."""

    def test_discounted_total_wins_when_smaller(self) -> None:
        result = _resolve(
            "Ara Toplam: 100,00 TL",
            "İndirim: 20,00 TL",
            "Toplam: 95,00 TL",
        )
        assert result.subtotal_amount == 100.0
        assert result.discount_amount == 20.0
        assert result.order_amount == 80.0
        assert result.payable_amount == 80.0

    def test_discounted_total_ignored_when_larger(self) -> None:
        result = _resolve(
            "Ara Toplam: 100,00 TL",
            "Kampanya: 10,00 TL",
            "Toplam: 85,00 TL",
        )
        assert result.order_amount == 85.0

    def test_minimum_payable_candidate(self) -> None:
        result = _resolve(
            "Ödenecek Tutar: 150,00 TL",
            "İndirimli Toplam: 120,00 TL",
        )
        assert result.order_amount == 120.0
        assert result.discount_amount is None

    def test_maximum_of_plain_totals(self) -> None:
        result = _resolve("Toplam: 75,00 TL", "Genel Toplam: 85,00 TL")
        assert result.order_amount == 85.0

    def test_payable_beats_larger_plain_total(self) -> None:
        result = _resolve("Toplam: 200,00 TL", "Net Tutar: 180,00 TL")
        assert result.order_amount == 180.0

    def test_discount_line_is_not_a_total(self) -> None:
        result = _resolve("İndirim Tutarı: 30,00 TL", "Toplam: 120,00 TL")
        assert result.discount_amount == 30.0
        assert result.order_amount == 120.0

    def test_subtotal_line_is_not_a_total(self) -> None:
        result = _resolve("Ara Toplam: 140,00 TL", "Toplam: 130,00 TL")
        assert result.subtotal_amount == 140.0
        assert result.order_amount == 130.0

    def test_payable_keyword_fallback(self) -> None:
        result = _resolve("Ara Toplam Net: 50,00 TL")
        assert result.subtotal_amount == 50.0
        assert result.order_amount == 50.0

    def test_currency_amount_fallback(self) -> None:
        result = _resolve("Pizza 45,00 TL", "Kola 15,00 TL")
        assert result.order_amount == 45.0
        assert result.payable_amount == 45.0

    def test_nothing_resolved(self) -> None:
        result = _resolve("Afiyet olsun")
        assert result == AmountSummary()

    def test_payable_mirrors_order_amount(self) -> None:
        for lines in (
            ("Toplam: 90,00 TL",),
            ("Pizza 45,00 TL",),
            ("Ara Toplam: 100,00 TL", "İndirim: 20,00 TL"),
        ):
            result = _resolve(*lines)
            assert result.order_amount is not None
            assert result.payable_amount == result.order_amount
