"""
Runtime settings.

Values come from environment variables, optionally loaded from a `.env`
file at the project root. Nothing here touches the input file itself.

Environment variables (all optional):
- SALES_FILE: Path of the sales file used when none is given on the command line
- SALES_FILE_ENCODING: Input encoding (default: latin-1)
- SALES_DELIMITER: Single-character column delimiter (default: ;)
- REPORT_LOCALE: Locale name used to format amounts (e.g. pt_BR.UTF-8)
- REPORT_SELLER / REPORT_MANAGER: Names for the per-seller and per-manager reports
- REPORT_STATUS: Status for the status-and-month report (default: CANCELLED)
- REPORT_MONTHS: Comma-separated months for that report (default: JANUARY,FEBRUARY,MARCH)
- LOG_LEVEL: Logging level name (default: WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from domain.sale import Month, SaleStatus

DEFAULT_ENCODING = "latin-1"
DEFAULT_DELIMITER = ";"
DEFAULT_STATUS = SaleStatus.CANCELLED
DEFAULT_MONTHS: Tuple[Month, ...] = (Month.JANUARY, Month.FEBRUARY, Month.MARCH)
DEFAULT_LOG_LEVEL = "WARNING"

# Look for .env in the project root
ENV_PATH = Path(__file__).parent.parent / ".env"


@dataclass(frozen=True, slots=True)
class Settings:
    sales_file: Optional[str]
    encoding: str
    delimiter: str
    report_locale: Optional[str]
    seller: Optional[str]
    manager: Optional[str]
    status: SaleStatus
    months: Tuple[Month, ...]
    log_level: str


def _optional(env: Mapping[str, str], key: str) -> Optional[str]:
    value = env.get(key, "").strip()
    return value or None


def parse_status_name(text: str) -> SaleStatus:
    """Resolve a configured status name; unlike row parsing, unknown names are an error."""

    status = SaleStatus.lookup(text)
    if status is None:
        choices = ", ".join(s.value for s in SaleStatus)
        raise ValueError(f"Unknown status {text!r}. Expected one of: {choices}")
    return status


def parse_months(text: str) -> Tuple[Month, ...]:
    """Parse a comma-separated month list such as "JANUARY,feb,3"."""

    return tuple(Month.parse(token) for token in text.split(",") if token.strip())


def validate_log_level(name: str) -> str:
    level = name.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def get_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env: Mapping to read from. Defaults to os.environ after loading .env.

    Raises:
        ValueError: If the delimiter, status, months or log level are invalid.
    """

    if env is None:
        load_dotenv(dotenv_path=ENV_PATH)
        env = os.environ

    delimiter = env.get("SALES_DELIMITER", DEFAULT_DELIMITER)
    if len(delimiter) != 1:
        raise ValueError(
            f"SALES_DELIMITER must be a single character, got {delimiter!r}"
        )

    raw_status = _optional(env, "REPORT_STATUS")
    raw_months = _optional(env, "REPORT_MONTHS")

    return Settings(
        sales_file=_optional(env, "SALES_FILE"),
        encoding=_optional(env, "SALES_FILE_ENCODING") or DEFAULT_ENCODING,
        delimiter=delimiter,
        report_locale=_optional(env, "REPORT_LOCALE"),
        seller=_optional(env, "REPORT_SELLER"),
        manager=_optional(env, "REPORT_MANAGER"),
        status=parse_status_name(raw_status) if raw_status else DEFAULT_STATUS,
        months=parse_months(raw_months) if raw_months else DEFAULT_MONTHS,
        log_level=validate_log_level(_optional(env, "LOG_LEVEL") or DEFAULT_LOG_LEVEL),
    )


__all__ = ["Settings", "get_settings", "parse_months", "parse_status_name"]
