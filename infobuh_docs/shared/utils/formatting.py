"""
Форматирование значений для печатных форм
"""

import decimal
from datetime import date
from decimal import Decimal

from .money import round_money


def format_amount(value: Decimal) -> str:
    """3000 -> '3 000,00'"""
    rounded = round_money(value)
    return f"{rounded:,.2f}".replace(',', ' ').replace('.', ',')


def format_quantity(value: Decimal) -> str:
    """2 -> '2', 1.50 -> '1,5'"""
    # точность не меньше числа цифр, иначе normalize округлит
    context = decimal.Context(prec=max(len(value.as_tuple().digits), 1))
    normalized = value.normalize(context)
    return f"{normalized:f}".replace('.', ',')


def format_date(value: date) -> str:
    """date(2024, 3, 1) -> '01.03.2024'"""
    return value.strftime("%d.%m.%Y")
