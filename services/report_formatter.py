"""
Report formatter: turns report results into printable lines.

The report service computes values; this module only renders them. Each
render_* function returns a list of lines and never prints, so the CLI
decides where output goes.
"""

from __future__ import annotations

import locale
import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_EVEN, Decimal, localcontext
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from domain.sale import Month, Sale, SaleStatus
from services import report_service

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 61

_CENTS = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class NumberFormat:
    """Decimal point and grouping separator used to render amounts."""

    decimal_point: str = "."
    thousands_sep: str = ","

    @classmethod
    def for_locale(cls, name: Optional[str]) -> "NumberFormat":
        """
        Resolve separators for a locale name such as "pt_BR.UTF-8".

        Without a name the process default locale (LC_ALL, LC_NUMERIC, LANG)
        is used. The C/POSIX locale and an unavailable locale both give the
        default format; a named locale that is not installed also logs a
        warning. The process locale is restored afterwards.
        """

        previous = locale.setlocale(locale.LC_NUMERIC)
        try:
            resolved = locale.setlocale(locale.LC_NUMERIC, name or "")
            conv = locale.localeconv()
        except locale.Error:
            if name:
                logger.warning(f"Locale {name!r} is not available; using default number format")
            else:
                logger.debug("Process default locale is not available; using default number format")
            return cls()
        finally:
            locale.setlocale(locale.LC_NUMERIC, previous)

        if resolved == "POSIX" or resolved.split(".")[0] == "C":
            return cls()
        return cls(
            decimal_point=conv["decimal_point"] or ".",
            thousands_sep=conv["thousands_sep"],
        )


def format_currency(value: Decimal, number_format: NumberFormat = NumberFormat()) -> str:
    """
    Render an amount with two fraction digits and digit grouping.

    Rounding runs in a local context wide enough for the value, so large
    totals never overflow the default 28-digit precision.

    Example:
        format_currency(Decimal("1234567.5"))
        # Returns "1,234,567.50"

        format_currency(Decimal("1234567.5"), NumberFormat(",", "."))
        # Returns "1.234.567,50"
    """

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        rounded = value.quantize(_CENTS, rounding=ROUND_HALF_EVEN)
    integer, _, fraction = str(rounded).partition(".")
    grouped = f"{int(integer):,}".replace(",", number_format.thousands_sep)
    return f"{grouped}{number_format.decimal_point}{fraction}"


def format_mapping(counts: Mapping[str, int]) -> str:
    """Render a nested count mapping as {key=count, key=count}."""

    return "{" + ", ".join(f"{key}={count}" for key, count in counts.items()) + "}"


def render_total_completed(sales: Iterable[Sale], number_format: NumberFormat = NumberFormat()) -> List[str]:
    total = report_service.total_completed_sales(sales)
    return [f"Total completed sales: {format_currency(total, number_format)}"]


def render_total_cancelled(sales: Iterable[Sale], number_format: NumberFormat = NumberFormat()) -> List[str]:
    total = report_service.total_cancelled_sales(sales)
    return [f"Total cancelled sales: {format_currency(total, number_format)}"]


def render_most_recent_completed(sales: Iterable[Sale]) -> List[str]:
    sale = report_service.most_recent_completed_sale(sales)
    if sale is None:
        return []
    return [f"Most recent completed sale: {sale.number}"]


def render_days_between_completed(sales: Iterable[Sale]) -> List[str]:
    days = report_service.days_between_first_and_last_completed_sale(sales)
    if days is None:
        return []
    return [f"Days between first and last completed sale: {days}"]


def render_seller_total(
    sales: Iterable[Sale],
    seller: str,
    number_format: NumberFormat = NumberFormat(),
) -> List[str]:
    total = report_service.total_completed_sales_by_seller(sales, seller)
    return [f"Total completed sales of {seller}: {format_currency(total, number_format)}"]


def render_manager_count(sales: Iterable[Sale], manager: str) -> List[str]:
    count = report_service.count_all_sales_by_manager(sales, manager)
    return [f"Sales count for the team of {manager}: {count}"]


def render_status_and_month(
    sales: Iterable[Sale],
    status: SaleStatus,
    months: Sequence[Month],
) -> List[str]:
    counts = report_service.count_sales_by_status_and_month(sales, status, *months)
    return [
        f"Sales in {month.name} with status {status.value}: {count}"
        for month, count in counts.items()
    ]


def render_department_counts(sales: Iterable[Sale]) -> List[str]:
    lines = ["Completed sales by department:"]
    lines.extend(
        f"{department} {count}"
        for department, count in report_service.count_completed_sales_by_department(sales)
    )
    return lines


def render_payment_methods_by_year(sales: Iterable[Sale]) -> List[str]:
    lines = ["Completed sales by payment method per year:"]
    by_year = report_service.count_completed_sales_by_payment_method_by_year(sales)
    lines.extend(f"{year} {format_mapping(methods)}" for year, methods in by_year.items())
    return lines


def render_top_sellers(
    sales: Iterable[Sale],
    limit: int = 3,
    number_format: NumberFormat = NumberFormat(),
) -> List[str]:
    lines = [f"Top {limit} sellers:"]
    lines.extend(
        f"{entry.seller} {format_currency(entry.total, number_format)}"
        for entry in report_service.top_sellers(sales, limit)
    )
    return lines


@dataclass(frozen=True, slots=True)
class ReportOptions:
    """Parameters for the reports that need them."""

    seller: Optional[str] = None
    manager: Optional[str] = None
    status: SaleStatus = SaleStatus.CANCELLED
    months: Tuple[Month, ...] = field(default=(Month.JANUARY, Month.FEBRUARY, Month.MARCH))
    top_limit: int = 3


def render_report_battery(
    sales: Sequence[Sale],
    options: ReportOptions = ReportOptions(),
    number_format: NumberFormat = NumberFormat(),
) -> List[str]:
    """
    Render every report in run order.

    Each report is followed by SEPARATOR except the last one (top sellers).
    Seller and manager reports are skipped when no name is configured.
    """

    sections: List[List[str]] = [
        render_total_completed(sales, number_format),
        render_total_cancelled(sales, number_format),
        render_most_recent_completed(sales),
        render_days_between_completed(sales),
    ]
    if options.seller is not None:
        sections.append(render_seller_total(sales, options.seller, number_format))
    if options.manager is not None:
        sections.append(render_manager_count(sales, options.manager))
    sections.extend([
        render_status_and_month(sales, options.status, options.months),
        render_department_counts(sales),
        render_payment_methods_by_year(sales),
    ])

    lines: List[str] = []
    for section in sections:
        lines.extend(section)
        lines.append(SEPARATOR)
    lines.extend(render_top_sellers(sales, options.top_limit, number_format))
    return lines


__all__ = [
    "NumberFormat",
    "ReportOptions",
    "SEPARATOR",
    "format_currency",
    "format_mapping",
    "render_days_between_completed",
    "render_department_counts",
    "render_manager_count",
    "render_most_recent_completed",
    "render_payment_methods_by_year",
    "render_report_battery",
    "render_seller_total",
    "render_status_and_month",
    "render_top_sellers",
    "render_total_cancelled",
    "render_total_completed",
]
