"""
Domain field parsers (pure).

One parser per field kind. Every parser raises ParseError on malformed
input so the loader has a single failure model to translate.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from .errors import ParseError
from .sale import SaleStatus

SALE_DATE_FORMAT = "%d/%m/%Y"

# Strict dd/MM/yyyy; strptime alone would also accept "1/2/2023".
_SALE_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")

_CURRENCY_PREFIXES = ("R$", "US$", "$", "€", "£")


def parse_sale_date(text: str) -> date:
    """
    Parse a dd/MM/yyyy date.

    Examples:
        >>> parse_sale_date("15/01/2023")
        datetime.date(2023, 1, 15)
    """

    raw = (text or "").strip()
    if not _SALE_DATE_PATTERN.match(raw):
        raise ParseError(f"Invalid sale date {text!r}, expected dd/MM/yyyy", value=text)
    try:
        return datetime.strptime(raw, SALE_DATE_FORMAT).date()
    except ValueError as exc:
        raise ParseError(f"Invalid sale date {text!r}: {exc}", value=text) from exc


# Amount grammars, tried in order; plain comes first so "1,234" reads as a
# decimal comma. Grouping separators split the integer part in threes and
# the decimal separator must differ from them.
_AMOUNT_GROUPED_COMMA = re.compile(r"^\d{1,3}(?:,\d{3})+(?:\.\d+)?$", re.ASCII)
_AMOUNT_GROUPED_DOT = re.compile(r"^\d{1,3}(?:\.\d{3})+(?:,\d+)?$", re.ASCII)
_AMOUNT_PLAIN = re.compile(r"^\d+(?:[.,]\d+)?$", re.ASCII)

MAX_INTEGER_DIGITS = 15
MAX_FRACTION_DIGITS = 10


def _strip_currency(raw: str) -> str:
    for prefix in _CURRENCY_PREFIXES:
        if raw.startswith(prefix):
            return raw[len(prefix):].strip()
    return raw


def _normalize_amount(raw: str) -> Optional[str]:
    """
    Rewrite amount text as a plain "1234.56" string.

    Returns None when the text matches none of the accepted grammars.
    """

    if _AMOUNT_PLAIN.match(raw):
        return raw.replace(",", ".")
    if _AMOUNT_GROUPED_COMMA.match(raw):
        return raw.replace(",", "")
    if _AMOUNT_GROUPED_DOT.match(raw):
        return raw.replace(".", "").replace(",", ".")
    return None


def parse_value(text: str) -> Decimal:
    """
    Parse a monetary amount into an exact Decimal.

    Accepts plain ("1234.56"), grouped ("1,234.56", "1.234,56") and
    decimal-comma ("1234,56") text, with an optional currency prefix.
    A single separator followed by three digits ("1,234") is read as a
    decimal separator.

    Raises:
        ParseError: If the text is empty, negative, malformed (exponents,
            underscores, inner spaces, misplaced separators) or has more than
            MAX_INTEGER_DIGITS integer or MAX_FRACTION_DIGITS fraction digits.
    """

    raw = _strip_currency((text or "").strip())
    if not raw:
        raise ParseError("Empty monetary value", value=text)
    if raw.startswith("-"):
        raise ParseError(f"Negative monetary value {text!r}", value=text)

    normalized = _normalize_amount(raw)
    if normalized is None:
        raise ParseError(f"Invalid monetary value {text!r}", value=text)

    integer_part, _, fraction_part = normalized.partition(".")
    if len(integer_part.lstrip("0")) > MAX_INTEGER_DIGITS or len(fraction_part) > MAX_FRACTION_DIGITS:
        raise ParseError(f"Monetary value out of range {text!r}", value=text)

    return Decimal(normalized)


def parse_number(text: str) -> int:
    """Parse the integer sale identifier."""

    raw = (text or "").strip()
    try:
        return int(raw)
    except ValueError as exc:
        raise ParseError(f"Invalid sale number {text!r}", value=text) from exc


def parse_status(text: str) -> SaleStatus:
    """
    Parse a sale status case-insensitively.

    Unrecognised statuses map to SaleStatus.UNKNOWN; they are still valid
    records, they just never count as Completed or Cancelled.
    """

    status = SaleStatus.lookup(text or "")
    return status if status is not None else SaleStatus.UNKNOWN


__all__ = [
    "SALE_DATE_FORMAT",
    "parse_number",
    "parse_sale_date",
    "parse_status",
    "parse_value",
]
