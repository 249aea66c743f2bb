"""
Report service: aggregate queries over the loaded sales.

Every function is a pure computation over an iterable of Sale records. None
of them print, mutate their input or raise when nothing matches; an empty
selection yields zero, None or an empty collection.

Ordering rules (for reproducible output):
- Most recent completed sale: latest sale_date, ties go to the greatest number.
- Status-and-month counts: months ascending.
- Department counts: department name descending.
- Payment method counts: years ascending, methods ascending within a year.
- Top sellers: total descending, ties by seller name ascending.

totals_by_status and count_sales_by_manager are library API for callers
that want every status or manager at once; the printed report battery
uses the single-status and single-manager forms.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from domain.sale import Month, Sale, SaleStatus

ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class SellerTotal:
    """Total completed value for one seller."""
    seller: str
    total: Decimal


def _completed(sales: Iterable[Sale]) -> List[Sale]:
    return [s for s in sales if s.is_completed]


def _sum_values(sales: Iterable[Sale]) -> Decimal:
    total = ZERO
    for sale in sales:
        total += sale.value
    return total


def total_by_status(sales: Iterable[Sale], status: SaleStatus) -> Decimal:
    """Sum of value over the sales with the given status."""

    return _sum_values(s for s in sales if s.status is status)


def total_completed_sales(sales: Iterable[Sale]) -> Decimal:
    return total_by_status(sales, SaleStatus.COMPLETED)


def total_cancelled_sales(sales: Iterable[Sale]) -> Decimal:
    return total_by_status(sales, SaleStatus.CANCELLED)


def totals_by_status(sales: Iterable[Sale]) -> Dict[SaleStatus, Decimal]:
    """
    Sum of value per status, for every status present.

    The totals always add up to the sum over all records. Keys follow the
    SaleStatus declaration order.
    """

    totals: Dict[SaleStatus, Decimal] = defaultdict(lambda: ZERO)
    for sale in sales:
        totals[sale.status] += sale.value
    return {status: totals[status] for status in SaleStatus if status in totals}


def most_recent_completed_sale(sales: Iterable[Sale]) -> Optional[Sale]:
    """
    Completed sale with the latest sale_date.

    When several completed sales share that date, the one with the greatest
    number wins. Returns None if there are no completed sales.
    """

    completed = _completed(sales)
    if not completed:
        return None
    return max(completed, key=lambda s: (s.sale_date, s.number))


def days_between_first_and_last_completed_sale(sales: Iterable[Sale]) -> Optional[int]:
    """Calendar days between the earliest and latest completed sale, or None if there are none."""

    dates = [s.sale_date for s in _completed(sales)]
    if not dates:
        return None
    return (max(dates) - min(dates)).days


def total_completed_sales_by_seller(sales: Iterable[Sale], seller: str) -> Decimal:
    """Completed value for one seller. The name match is exact and case-sensitive."""

    return _sum_values(s for s in sales if s.is_completed and s.seller == seller)


def count_all_sales_by_manager(sales: Iterable[Sale], manager: str) -> int:
    """Number of sales of a manager's team, whatever their status."""

    return sum(1 for s in sales if s.manager == manager)


def count_sales_by_manager(sales: Iterable[Sale]) -> Dict[str, int]:
    """Number of sales per manager, whatever their status, managers ascending."""

    counts = Counter(s.manager for s in sales)
    return dict(sorted(counts.items()))


def count_sales_by_status_and_month(
    sales: Iterable[Sale],
    status: SaleStatus,
    *months: Month,
) -> Dict[Month, int]:
    """
    Count sales with the given status whose sale month is one of `months`.

    Only months with at least one matching sale appear in the result; a month
    with no match is omitted rather than reported as zero.
    """

    wanted = {Month(m) for m in months}
    counts = Counter(
        Month.of(s.sale_date)
        for s in sales
        if s.status is status and s.sale_date.month in wanted
    )
    return {month: counts[month] for month in sorted(counts)}


def count_completed_sales_by_department(sales: Iterable[Sale]) -> List[Tuple[str, int]]:
    """Completed sales per department, department names in descending order."""

    counts = Counter(s.department for s in _completed(sales))
    return sorted(counts.items(), key=lambda item: item[0], reverse=True)


def count_completed_sales_by_payment_method_by_year(
    sales: Iterable[Sale],
) -> Dict[int, Dict[str, int]]:
    """Completed sales grouped by year, then by payment method within each year."""

    grouped: Dict[int, Counter] = defaultdict(Counter)
    for sale in _completed(sales):
        grouped[sale.sale_date.year][sale.payment_method] += 1
    return {
        year: dict(sorted(grouped[year].items()))
        for year in sorted(grouped)
    }


def top_sellers(sales: Iterable[Sale], limit: int = 3) -> List[SellerTotal]:
    """
    Sellers ranked by total completed value.

    Args:
        sales: Sales to rank
        limit: Maximum number of sellers returned (default: 3)

    Returns:
        At most `limit` SellerTotal entries, totals non-increasing. Equal
        totals are ordered by seller name. Empty when no sale is completed.

    Raises:
        ValueError: If limit is negative.
    """

    if limit < 0:
        raise ValueError("limit must be >= 0")

    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for sale in _completed(sales):
        totals[sale.seller] += sale.value

    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [SellerTotal(seller=seller, total=total) for seller, total in ranked[:limit]]


__all__ = [
    "SellerTotal",
    "count_all_sales_by_manager",
    "count_completed_sales_by_department",
    "count_completed_sales_by_payment_method_by_year",
    "count_sales_by_manager",
    "count_sales_by_status_and_month",
    "days_between_first_and_last_completed_sale",
    "most_recent_completed_sale",
    "top_sellers",
    "total_by_status",
    "total_cancelled_sales",
    "total_completed_sales",
    "total_completed_sales_by_seller",
    "totals_by_status",
]
