#!/usr/bin/env python3
"""
Sales Report Runner

Loads a semicolon-delimited sales file and prints the full report battery:
totals by status, most recent completed sale, date span, per-seller and
per-manager rollups, monthly and departmental counts, payment methods per
year and the top sellers.

Usage:
    python -m scripts.run_reports path/to/sales.csv
    python -m scripts.run_reports sales.csv --seller "Ana" --manager "Carla"
    python -m scripts.run_reports sales.csv --status COMPLETED --months JAN FEB --locale pt_BR.UTF-8
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from domain.errors import SalesReportError
from domain.sale import Month
from repositories.sale_repository import SaleStore
from repositories.settings import Settings, get_settings, parse_status_name, validate_log_level
from services.report_formatter import NumberFormat, ReportOptions, render_report_battery

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print aggregate reports for a semicolon-delimited sales file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Reports for a file
  python -m scripts.run_reports sales.csv

  # Include seller and manager rollups
  python -m scripts.run_reports sales.csv --seller "Ana" --manager "Carla"

  # Completed sales in January and February, Brazilian number format
  python -m scripts.run_reports sales.csv --status COMPLETED --months JAN FEB --locale pt_BR.UTF-8
        """
    )

    parser.add_argument(
        "csv_path",
        nargs="?",
        default=settings.sales_file,
        help="Path to the sales file (default: $SALES_FILE)"
    )

    parser.add_argument(
        "--seller",
        default=settings.seller,
        help="Seller for the completed-sales-by-seller report"
    )

    parser.add_argument(
        "--manager",
        default=settings.manager,
        help="Manager for the sales-count-by-manager report"
    )

    parser.add_argument(
        "--status",
        type=parse_status_name,
        default=settings.status,
        help=f"Status for the status-and-month report (default: {settings.status.value})"
    )

    parser.add_argument(
        "--months",
        nargs="+",
        type=Month.parse,
        default=list(settings.months),
        help="Months for the status-and-month report, as names or numbers"
    )

    parser.add_argument(
        "--locale",
        default=settings.report_locale,
        help="Locale used to format amounts (default: $REPORT_LOCALE)"
    )

    parser.add_argument(
        "--encoding",
        default=settings.encoding,
        help=f"Input file encoding (default: {settings.encoding})"
    )

    parser.add_argument(
        "--log-level",
        type=validate_log_level,
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})"
    )

    return parser


def run(args: argparse.Namespace, delimiter: str) -> List[str]:
    """
    Load the sales file and render every report.

    Raises:
        DataSourceError: If the file is missing, empty or malformed at file level
        ParseError: If any row cannot be parsed
    """
    store = SaleStore.load(args.csv_path, encoding=args.encoding, delimiter=delimiter)
    options = ReportOptions(
        seller=args.seller,
        manager=args.manager,
        status=args.status,
        months=tuple(args.months),
    )
    return render_report_battery(store.sales, options, NumberFormat.for_locale(args.locale))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    try:
        settings = get_settings()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.csv_path:
        parser.print_usage(sys.stderr)
        print("error: no sales file given and SALES_FILE is not set", file=sys.stderr)
        return 2

    try:
        lines = run(args, settings.delimiter)
    except KeyboardInterrupt:
        print("\n\nReport run interrupted by user", file=sys.stderr)
        return 130
    except SalesReportError as e:
        logger.error(f"Report run aborted: {e}")
        print(f"FATAL ERROR: {e}", file=sys.stderr)
        return 1

    # Output only once every report is computed, so a failed load prints nothing
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
