"""Тестирование форматирования значений для печатных форм"""

from datetime import date
from decimal import Decimal

import pytest

from infobuh_docs.shared.utils.formatting import (
    format_amount,
    format_date,
    format_quantity,
)


@pytest.mark.parametrize("value, expected", [
    (Decimal("3000"), "3 000,00"),
    (Decimal("0.005"), "0,01"),
    (Decimal("1234567.891"), "1 234 567,89"),
    (Decimal("12.5"), "12,50"),
    (Decimal("1000000000000000000000000000.8"), "1 000 000 000 000 000 000 000 000 000,80"),
])
def test_format_amount(value, expected):
    assert format_amount(value) == expected


@pytest.mark.parametrize("value, expected", [
    (Decimal("2"), "2"),
    (Decimal("1.50"), "1,5"),
    (Decimal("100"), "100"),
    (Decimal("0.125"), "0,125"),
    (Decimal("1.234567890123456000000000000001"), "1,234567890123456000000000000001"),
])
def test_format_quantity(value, expected):
    assert format_quantity(value) == expected


def test_format_date():
    assert format_date(date(2024, 3, 1)) == "01.03.2024"

