"""
Sale repository (Record Store).

Reads the delimited sales file once and holds the parsed records for the
rest of the run. It does not aggregate anything; reports live in
services/report_service.py.

File contract:
- `;`-separated, Latin-1 encoded, header row first.
- Columns are bound by name: number, seller, manager, department, value,
  saleDate, paymentMethod, status. Header names are matched ignoring case,
  spaces, underscores and hyphens; extra columns are ignored.
- Dates are dd/MM/yyyy, amounts are locale-style decimal text.

A missing or empty source raises DataSourceError; any malformed row raises
ParseError. No partially loaded store is ever returned.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Mapping, Sequence, Tuple, Union

from domain.errors import DataSourceError, ParseError
from domain.parsing import parse_number, parse_sale_date, parse_status, parse_value
from domain.sale import Sale, SaleStatus

logger = logging.getLogger(__name__)

Source = Union[str, Path]

# Normalized header name -> Sale field name
COLUMN_FIELDS: Mapping[str, str] = {
    "number": "number",
    "seller": "seller",
    "manager": "manager",
    "department": "department",
    "value": "value",
    "saledate": "sale_date",
    "paymentmethod": "payment_method",
    "status": "status",
}


def _parse_text(text: str) -> str:
    return text.strip()


# Sale field name -> parser for that column
FIELD_PARSERS: Mapping[str, Callable[[str], object]] = {
    "number": parse_number,
    "seller": _parse_text,
    "manager": _parse_text,
    "department": _parse_text,
    "value": parse_value,
    "sale_date": parse_sale_date,
    "payment_method": _parse_text,
    "status": parse_status,
}


def normalize_column_name(name: str) -> str:
    """Normalize a header cell so "saleDate", "sale_date" and "Sale Date" compare equal."""

    cleaned = name.replace("\ufeff", "").strip().lower()
    for char in (" ", "_", "-"):
        cleaned = cleaned.replace(char, "")
    return cleaned


def resolve_columns(header: Sequence[str]) -> Dict[str, int]:
    """
    Map each Sale field to its column index in the header.

    Raises:
        DataSourceError: If any required column is missing.
    """

    positions: Dict[str, int] = {}
    for index, name in enumerate(header):
        field = COLUMN_FIELDS.get(normalize_column_name(name))
        if field is not None and field not in positions:
            positions[field] = index

    missing = [column for column, field in COLUMN_FIELDS.items() if field not in positions]
    if missing:
        raise DataSourceError(f"Sales file missing required columns: {', '.join(missing)}")
    return positions


def _is_blank(row: Sequence[str]) -> bool:
    return all(not cell.strip() for cell in row)


def parse_row(row: Sequence[str], positions: Mapping[str, int], row_num: int) -> Sale:
    """
    Build a Sale from one data row.

    Args:
        row: Raw cells of the row
        positions: Field -> column index, from resolve_columns
        row_num: 1-based physical row number, for error reporting

    Raises:
        ParseError: If the row is short or any field is malformed.
    """

    values: Dict[str, object] = {}
    for field, index in positions.items():
        if index >= len(row):
            raise ParseError(
                f"Expected at least {index + 1} columns, found {len(row)}",
                field=field,
                row_num=row_num,
            )
        raw = row[index]
        try:
            values[field] = FIELD_PARSERS[field](raw)
        except ParseError as exc:
            raise exc.at(row_num=row_num, field=field) from exc

    sale = Sale(**values)  # type: ignore[arg-type]
    if sale.status is SaleStatus.UNKNOWN and row[positions["status"]].strip().upper() != "UNKNOWN":
        logger.warning(
            f"Unrecognised status {row[positions['status']]!r} on row {row_num}; treating as UNKNOWN"
        )
    return sale


def _read_rows(path: Path, encoding: str, delimiter: str) -> Iterator[Tuple[int, List[str]]]:
    with path.open("r", encoding=encoding, newline="") as f:
        reader = csv.reader(f, delimiter=delimiter)
        for row in reader:
            yield reader.line_num, row


def load_sales(
    source: Source,
    *,
    encoding: str = "latin-1",
    delimiter: str = ";",
) -> Tuple[Sale, ...]:
    """
    Load every sale from a delimited text file.

    Args:
        source: Path to the sales file
        encoding: File encoding (default: latin-1)
        delimiter: Column separator (default: ;)

    Returns:
        Tuple of Sale records in file order

    Raises:
        DataSourceError: If the file is missing, unreadable, empty, has no data
            rows or lacks required columns
        ParseError: If any row cannot be parsed
    """

    path = Path(source)
    if not path.is_file():
        raise DataSourceError(f"Sales file not found or is empty: {source}")

    sales: List[Sale] = []
    positions: Dict[str, int] = {}
    try:
        for row_num, row in _read_rows(path, encoding, delimiter):
            if _is_blank(row):
                continue
            if not positions:
                positions = resolve_columns(row)
                continue
            sales.append(parse_row(row, positions, row_num))
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise DataSourceError(f"Could not read sales file {source}: {exc}") from exc

    if not sales:
        raise DataSourceError(f"Sales file not found or is empty: {source}")

    logger.info(f"Loaded {len(sales)} sales from {path}")
    return tuple(sales)


@dataclass(frozen=True, slots=True)
class SaleStore:
    """
    Read-only collection of the sales loaded at startup.

    Reports consume the store (or any iterable of Sale); nothing adds or
    removes records after load.
    """

    sales: Tuple[Sale, ...]

    @classmethod
    def load(
        cls,
        source: Source,
        *,
        encoding: str = "latin-1",
        delimiter: str = ";",
    ) -> "SaleStore":
        return cls(load_sales(source, encoding=encoding, delimiter=delimiter))

    def __len__(self) -> int:
        return len(self.sales)

    def __iter__(self) -> Iterator[Sale]:
        return iter(self.sales)


__all__ = [
    "COLUMN_FIELDS",
    "SaleStore",
    "load_sales",
    "normalize_column_name",
    "parse_row",
    "resolve_columns",
]
