"""
Pytest configuration and shared fixtures.

This file adds the project root to the Python path so that tests can import
domain, repositories, services and scripts without installing the package.
"""

from __future__ import annotations

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import List

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.sale import Sale, SaleStatus  # noqa: E402

HEADER = "number;seller;manager;department;value;saleDate;paymentMethod;status"


def make_sale(
    number: int,
    seller: str = "Ana",
    *,
    manager: str = "Carla",
    department: str = "Eletronicos",
    value: str = "0",
    sale_date: date = date(2023, 1, 1),
    payment_method: str = "Pix",
    status: SaleStatus = SaleStatus.COMPLETED,
) -> Sale:
    return Sale(
        number=number,
        seller=seller,
        manager=manager,
        department=department,
        value=Decimal(value),
        sale_date=sale_date,
        payment_method=payment_method,
        status=status,
    )


@pytest.fixture
def example_sales() -> List[Sale]:
    """The three-record scenario: two completed sales by Ana, one cancelled by Bob."""

    return [
        make_sale(1, "Ana", value="100", sale_date=date(2023, 1, 1)),
        make_sale(2, "Ana", value="50", sale_date=date(2023, 1, 15)),
        make_sale(
            3,
            "Bob",
            manager="Diego",
            value="30",
            sale_date=date(2023, 2, 10),
            status=SaleStatus.CANCELLED,
        ),
    ]


@pytest.fixture
def mixed_sales() -> List[Sale]:
    """A larger set spanning two years, several departments and every status."""

    return [
        make_sale(1, "Ana", department="Eletronicos", value="1200.50",
                  sale_date=date(2022, 11, 3), payment_method="Cartao"),
        make_sale(2, "Bruno", manager="Diego", department="Moveis", value="300",
                  sale_date=date(2022, 12, 20), payment_method="Boleto"),
        make_sale(3, "Carlos", manager="Diego", department="Moveis", value="800",
                  sale_date=date(2023, 1, 9), payment_method="Pix"),
        make_sale(4, "Ana", department="Brinquedos", value="99.90",
                  sale_date=date(2023, 1, 9), payment_method="Pix"),
        make_sale(5, "Bruno", manager="Diego", department="Eletronicos", value="450",
                  sale_date=date(2023, 3, 1), payment_method="Cartao",
                  status=SaleStatus.CANCELLED),
        make_sale(6, "Daniela", department="Moveis", value="75.25",
                  sale_date=date(2023, 3, 14), payment_method="Boleto",
                  status=SaleStatus.PENDING),
        make_sale(7, "Carlos", manager="Diego", department="Eletronicos", value="20",
                  sale_date=date(2023, 1, 30), payment_method="Cartao",
                  status=SaleStatus.CANCELLED),
        make_sale(8, "Elisa", department="Brinquedos", value="10",
                  sale_date=date(2023, 2, 2), payment_method="Pix",
                  status=SaleStatus.UNKNOWN),
    ]


@pytest.fixture
def write_sales_file(tmp_path):
    """Write lines to a Latin-1 encoded sales file and return its path."""

    def _write(lines: List[str], *, name: str = "sales.csv", encoding: str = "latin-1") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding=encoding)
        return path

    return _write
