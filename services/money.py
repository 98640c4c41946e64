# services/money.py
"""
Money normalisation.

All amounts travel as integer USD cents. User-entered decimal strings are
parsed without floating point, and cents convert exactly to USDC
micro-units (6 decimals, so 1 cent == 10_000 micros).
"""
import re
from decimal import Decimal

from config import MAX_LINK_AMOUNT_CENTS
from services.errors import ValidationFailure

AMOUNT_PATTERN = re.compile(r"\d+(\.\d{0,2})?", re.ASCII)
MICROS_PER_CENT = 10_000
MAX_WHOLE_DIGITS = 15  # far above any ceiling; keeps int() away from huge strings

CURRENCY_SYMBOLS = {
     "USD": "$",
     "USDC": "$",
     "EUR": "€",
     "GBP": "£",
     "NGN": "₦",
}


class AmountError(ValidationFailure):
     """Raised when a user-entered amount cannot be accepted."""


def parse_decimal_to_cents(value: str, max_cents: int = MAX_LINK_AMOUNT_CENTS) -> int:
     """
     Parse a decimal string such as "25.5" into integer cents (2550).

     Accepts digits, an optional dot and at most two fractional digits,
     after trimming whitespace.

     Raises:
          AmountError: On malformed input, a non-positive amount, or an
               amount above `max_cents`.
     """
     raw = (value or "").strip()
     if not AMOUNT_PATTERN.fullmatch(raw):
          raise AmountError("Invalid amount format")

     whole, _, fraction = raw.partition(".")
     if len(whole.lstrip("0")) > MAX_WHOLE_DIGITS:
          raise AmountError("Amount is too large")
     cents = int(whole) * 100 + int((fraction + "00")[:2])

     if cents <= 0:
          raise AmountError("Amount must be greater than 0")
     if cents > max_cents:
          raise AmountError("Amount is too large")
     return cents


def cents_to_micros(cents: int) -> int:
     """Exact conversion of USD cents to USDC micro-units."""
     if cents < 0:
          raise ValueError("cents must be non-negative")
     return cents * MICROS_PER_CENT


def format_cents(cents: int, currency: str = "USD") -> str:
     """
     Display string with exactly two decimals and thousands separators.

     Known currencies get their symbol ("$1,234.50"); anything else is
     prefixed with the code ("XOF 1,234.50").
     """
     amount = Decimal(cents) / 100
     sign = "-" if amount < 0 else ""
     body = f"{abs(amount):,.2f}"
     code = (currency or "USD").upper()
     symbol = CURRENCY_SYMBOLS.get(code)
     if symbol:
          return f"{sign}{symbol}{body}"
     return f"{sign}{code} {body}"
