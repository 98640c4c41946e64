"""Unit tests for amount parsing, micro-unit conversion and display formatting."""

import pytest

from config import MAX_LINK_AMOUNT_CENTS, MAX_PAYMENT_AMOUNT_CENTS
from services.errors import ValidationFailure
from services.money import AmountError, cents_to_micros, format_cents, parse_decimal_to_cents


class TestParseDecimalToCents:
    @pytest.mark.parametrize("raw, cents", [
        ("25.5", 2550),
        ("5.", 500),
        ("5.5", 550),
        ("5.05", 505),
        ("0.01", 1),
        ("  12.34  ", 1234),
        ("007", 700),
        ("1000000", 100_000_000),
    ])
    def test_valid_amounts(self, raw, cents):
        assert parse_decimal_to_cents(raw) == cents

    @pytest.mark.parametrize("raw", ["", "   ", ".", "-5", "abc", "5.555", "1.2.3", "1,000", "+5", ".5", "٥"])
    def test_malformed_amounts(self, raw):
        with pytest.raises(AmountError) as exc:
            parse_decimal_to_cents(raw)
        assert exc.value.message == "Invalid amount format"

    @pytest.mark.parametrize("raw", ["0", "0.", "0.00", "000"])
    def test_zero_is_rejected(self, raw):
        with pytest.raises(AmountError) as exc:
            parse_decimal_to_cents(raw)
        assert exc.value.message == "Amount must be greater than 0"

    def test_none_is_malformed(self):
        with pytest.raises(AmountError):
            parse_decimal_to_cents(None)

    def test_link_ceiling_is_inclusive(self):
        assert parse_decimal_to_cents("2000000.00") == MAX_LINK_AMOUNT_CENTS
        with pytest.raises(AmountError) as exc:
            parse_decimal_to_cents("2000000.01")
        assert exc.value.message == "Amount is too large"

    def test_custom_ceiling(self):
        assert parse_decimal_to_cents("10000000", MAX_PAYMENT_AMOUNT_CENTS) == MAX_PAYMENT_AMOUNT_CENTS
        with pytest.raises(AmountError):
            parse_decimal_to_cents("10000000.01", MAX_PAYMENT_AMOUNT_CENTS)

    def test_huge_digit_strings_are_too_large(self):
        with pytest.raises(AmountError) as exc:
            parse_decimal_to_cents("9" * 5000)
        assert exc.value.message == "Amount is too large"

    def test_leading_zeros_do_not_count_as_magnitude(self):
        assert parse_decimal_to_cents("0" * 40 + "1.00") == 100

    def test_amount_error_is_a_validation_failure(self):
        with pytest.raises(ValidationFailure) as exc:
            parse_decimal_to_cents("abc")
        assert exc.value.status_code == 400


class TestCentsToMicros:
    def test_exact_conversion(self):
        assert cents_to_micros(1) == 10_000
        assert cents_to_micros(2550) == 25_500_000
        assert cents_to_micros(MAX_PAYMENT_AMOUNT_CENTS) == 10_000_000_000_000

    def test_zero(self):
        assert cents_to_micros(0) == 0

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            cents_to_micros(-1)


class TestFormatCents:
    def test_usd(self):
        assert format_cents(123450) == "$1,234.50"
        assert format_cents(5) == "$0.05"
        assert format_cents(0) == "$0.00"

    def test_negative(self):
        assert format_cents(-250) == "-$2.50"

    def test_other_known_symbols(self):
        assert format_cents(100, "eur") == "€1.00"

    def test_unknown_currency_uses_code(self):
        assert format_cents(123450, "XOF") == "XOF 1,234.50"

    @pytest.mark.parametrize("raw, display", [
        ("5.", "$5.00"),
        ("5.5", "$5.50"),
        ("0.01", "$0.01"),
        ("1999999.99", "$1,999,999.99"),
        ("2000000", "$2,000,000.00"),
    ])
    def test_round_trip_with_parser(self, raw, display):
        cents = parse_decimal_to_cents(raw)
        assert format_cents(cents) == display
        assert parse_decimal_to_cents(display.lstrip("$").replace(",", "")) == cents

    def test_round_trip_at_payment_ceiling(self):
        cents = parse_decimal_to_cents("10000000.00", MAX_PAYMENT_AMOUNT_CENTS)
        assert format_cents(cents) == "$10,000,000.00"
        assert parse_decimal_to_cents(format_cents(cents).lstrip("$").replace(",", ""), MAX_PAYMENT_AMOUNT_CENTS) == cents
