"""
Точная денежная арифметика на Decimal

Контекст по умолчанию хранит 28 значащих цифр и молча округляет.
Здесь точность подбирается под операнды, а потеря точности
(Inexact) превращается в исключение.
"""

import decimal
from decimal import Decimal, ROUND_HALF_UP
from functools import reduce
from typing import Iterable

_CENT = Decimal("0.01")


def _context(precision: int) -> decimal.Context:
    return decimal.Context(
        prec=max(precision, 1),
        rounding=ROUND_HALF_UP,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
        traps=[decimal.Inexact, decimal.InvalidOperation, decimal.Overflow, decimal.DivisionByZero],
    )


def _digits(value: Decimal) -> int:
    return len(value.as_tuple().digits)


def exact_product(left: Decimal, right: Decimal) -> Decimal:
    """Произведение без округления"""
    with decimal.localcontext(_context(_digits(left) + _digits(right))):
        return left * right


def exact_sum(values: Iterable[Decimal]) -> Decimal:
    """Сумма без округления; результат не зависит от порядка слагаемых"""
    values = list(values)
    if not values:
        return Decimal(0)

    top = max(value.adjusted() for value in values)
    bottom = min(value.as_tuple().exponent for value in values)
    # запас на переносы: по одной цифре на каждый десятичный разряд числа слагаемых
    precision = top - bottom + 1 + len(str(len(values))) + 1
    with decimal.localcontext(_context(precision)):
        return reduce(lambda acc, value: acc + value, values)


def round_money(value: Decimal) -> Decimal:
    """Округление до копеек (тиын) по правилам бухгалтерии, для сумм любой величины"""
    context = _context(max(value.adjusted(), 0) + 4)
    context.traps[decimal.Inexact] = False
    with decimal.localcontext(context):
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, rate: Decimal) -> Decimal:
    """Доля суммы (например, НДС по ставке 0.12), округленная до копеек"""
    return round_money(exact_product(amount, rate))
