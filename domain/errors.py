"""
Domain: error taxonomy for loading sales records.

Both errors are fatal. A run that hits either one aborts before any report
is produced.
"""

from __future__ import annotations

from typing import Optional


class SalesReportError(Exception):
    """Base class for all failures surfaced by the sales report tooling."""
    pass


class DataSourceError(SalesReportError):
    """Raised when the input source is missing, unreadable, empty or lacks required columns."""
    pass


class ParseError(SalesReportError):
    """
    Raised when a field of an input row cannot be parsed.

    row_num and field are filled in by the loader once the failing row is
    known; the field parsers only know the raw value.
    """

    def __init__(
        self,
        message: str,
        *,
        value: Optional[str] = None,
        field: Optional[str] = None,
        row_num: Optional[int] = None,
    ) -> None:
        self.reason = message
        self.value = value
        self.field = field
        self.row_num = row_num
        super().__init__(self._compose())

    def _compose(self) -> str:
        parts = []
        if self.row_num is not None:
            parts.append(f"Row {self.row_num}")
        if self.field is not None:
            parts.append(f"column '{self.field}'")
        prefix = ", ".join(parts)
        return f"{prefix}: {self.reason}" if prefix else self.reason

    def at(self, *, row_num: int, field: str) -> "ParseError":
        """Return a copy of this error located at the given row and column."""

        return ParseError(self.reason, value=self.value, field=field, row_num=row_num)
