"""
Domain: Sale records.

A Sale is one row of the input file. Records are loaded once and never
change afterwards, so the entity is frozen.

Invariants:
- Every Sale has exactly one status.
- value is an exact Decimal and is never negative.
- sale_date is a calendar date (no time component).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Optional


class SaleStatus(str, Enum):
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    PENDING = "PENDING"
    UNKNOWN = "UNKNOWN"

    @staticmethod
    def lookup(text: str) -> Optional["SaleStatus"]:
        """
        Resolve a status from its name, ignoring case and surrounding whitespace.

        Returns None when the text names no known status.
        """

        try:
            return SaleStatus(text.strip().upper())
        except ValueError:
            return None


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @staticmethod
    def of(value: date) -> "Month":
        return Month(value.month)

    @staticmethod
    def parse(text: str) -> "Month":
        """
        Resolve a month from a number ("3"), a full name ("March") or a
        three-letter abbreviation ("mar").

        Raises ValueError if the text names no month.
        """

        token = text.strip().upper()
        if token.isdigit():
            number = int(token)
            if 1 <= number <= 12:
                return Month(number)
            raise ValueError(f"Month number out of range: {text!r}")

        for month in Month:
            if month.name == token or (len(token) == 3 and month.name.startswith(token)):
                return month
        raise ValueError(f"Unknown month: {text!r}")


@dataclass(frozen=True, slots=True)
class Sale:
    """
    Immutable record of a single sale.

    number identifies the sale and breaks ties between records that share a
    sale date.
    """

    number: int
    seller: str
    manager: str
    department: str
    value: Decimal
    sale_date: date
    payment_method: str
    status: SaleStatus

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("value must be >= 0")

    @property
    def is_completed(self) -> bool:
        return self.status is SaleStatus.COMPLETED

    @property
    def is_cancelled(self) -> bool:
        return self.status is SaleStatus.CANCELLED
