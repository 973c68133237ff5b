"""
Сумма прописью на русском языке (для итоговых строк документов)
"""

import re
from decimal import Decimal
from typing import Sequence, Union

from .money import round_money

_HUNDREDS = [
    "", "сто", "двести", "триста", "четыреста",
    "пятьсот", "шестьсот", "семьсот", "восемьсот", "девятьсот",
]
_TENS = [
    "", "", "двадцать", "тридцать", "сорок",
    "пятьдесят", "шестьдесят", "семьдесят", "восемьдесят", "девяносто",
]
_TEENS = [
    "десять", "одиннадцать", "двенадцать", "тринадцать", "четырнадцать",
    "пятнадцать", "шестнадцать", "семнадцать", "восемнадцать", "девятнадцать",
]
_ONES = ["", "один", "два", "три", "четыре", "пять", "шесть", "семь", "восемь", "девять"]
_ONES_FEMININE = ["", "одна", "две"] + _ONES[3:]

# Разряды по 10^3: единицы, тысячи (женский род), далее короткая шкала до дециллиона
_SCALES = [
    ("", "", ""),
    ("тысяча", "тысячи", "тысяч"),
    ("миллион", "миллиона", "миллионов"),
    ("миллиард", "миллиарда", "миллиардов"),
    ("триллион", "триллиона", "триллионов"),
    ("квадриллион", "квадриллиона", "квадриллионов"),
    ("квинтиллион", "квинтиллиона", "квинтиллионов"),
    ("секстиллион", "секстиллиона", "секстиллионов"),
    ("септиллион", "септиллиона", "септиллионов"),
    ("октиллион", "октиллиона", "октиллионов"),
    ("нониллион", "нониллиона", "нониллионов"),
    ("дециллион", "дециллиона", "дециллионов"),
]

# (основная единица, дробная единица)
_CURRENCIES = {
    "KZT": (("тенге", "тенге", "тенге"), ("тиын", "тиын", "тиын")),
    "USD": (("доллар", "доллара", "долларов"), ("цент", "цента", "центов")),
    "EUR": (("евро", "евро", "евро"), ("цент", "цента", "центов")),
    "RUB": (("рубль", "рубля", "рублей"), ("копейка", "копейки", "копеек")),
}

SUPPORTED_CURRENCIES = tuple(_CURRENCIES)

Amount = Union[Decimal, int, float, str]


def plural_form(number: int, forms: Sequence[str]) -> str:
    """Выбирает форму слова для числа: (1, 2-4, 5-20)"""
    last_two = number % 100
    last = number % 10
    if 11 <= last_two <= 19:
        return forms[2]
    if last == 1:
        return forms[0]
    if 2 <= last <= 4:
        return forms[1]
    return forms[2]


def triad_to_words(number: int, feminine: bool = False) -> str:
    """Число от 1 до 999 прописью"""
    if not 0 < number < 1000:
        raise ValueError(f"Ожидается число от 1 до 999, получено {number}")

    words = []
    hundreds, rest = divmod(number, 100)
    if hundreds:
        words.append(_HUNDREDS[hundreds])

    if 10 <= rest <= 19:
        words.append(_TEENS[rest - 10])
    else:
        tens, ones = divmod(rest, 10)
        if tens:
            words.append(_TENS[tens])
        if ones:
            words.append((_ONES_FEMININE if feminine else _ONES)[ones])

    return " ".join(words)


def _to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, str):
        cleaned = re.sub(r"[^\d.,]", "", amount).replace(",", ".")
        return Decimal(cleaned)
    return Decimal(str(amount))


def integer_to_words(number: int) -> str:
    """Целое неотрицательное число прописью (без валюты, с маленькой буквы)"""
    if number < 0:
        raise ValueError("Сумма не может быть отрицательной")
    if number == 0:
        return "ноль"

    parts = []
    scale_index = 0
    while number > 0:
        if scale_index >= len(_SCALES):
            raise ValueError("Сумма слишком велика для записи прописью")
        number, group = divmod(number, 1000)
        if group:
            scale_word = plural_form(group, _SCALES[scale_index])
            group_words = triad_to_words(group, feminine=scale_index == 1)
            parts.insert(0, f"{group_words} {scale_word}".strip())
        scale_index += 1

    return " ".join(parts)


def amount_to_words(amount: Amount, currency: str = "KZT") -> str:
    """
    Сумма прописью с валютой и дробной частью цифрами.

    Пример: 1935000 -> "Один миллион девятьсот тридцать пять тысяч тенге 00 тиын"
    """
    if currency not in _CURRENCIES:
        raise ValueError(f"Неподдерживаемая валюта: {currency}")

    value = round_money(_to_decimal(amount))
    if value < 0:
        raise ValueError("Сумма не может быть отрицательной")

    integer_part = int(value)
    minor_part = int((value - integer_part) * 100)

    words = integer_to_words(integer_part)
    words = words[0].upper() + words[1:]

    major_forms, minor_forms = _CURRENCIES[currency]
    major_word = plural_form(integer_part, major_forms)
    minor_word = plural_form(minor_part, minor_forms)

    return f"{words} {major_word} {minor_part:02d} {minor_word}"
