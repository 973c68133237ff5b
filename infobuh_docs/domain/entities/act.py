"""
Входные данные акта выполненных работ (Pydantic модели)

Поля на входе именуются в camelCase, внутри - в snake_case.
"""

import math
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ...shared.utils.money import exact_product

# Только цифры ASCII, без времени, с ведущими нулями
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


def _non_empty_text(value: Any) -> str:
    if not isinstance(value, str):
        raise PydanticCustomError("string_type", "Ожидается строка")
    if not value.strip():
        raise PydanticCustomError("empty_string", "Поле не может быть пустым")
    return value.strip()


def _positive_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise PydanticCustomError("number_type", "Ожидается число")
    if isinstance(value, float) and not math.isfinite(value):
        raise PydanticCustomError("finite_number", "Число должно быть конечным")

    # str(float) дает кратчайшее представление: 0.1 -> Decimal('0.1')
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    if not number.is_finite():
        raise PydanticCustomError("finite_number", "Число должно быть конечным")
    if number <= 0:
        raise PydanticCustomError("greater_than", "Значение должно быть больше нуля")
    return number


def _strict_date(value: Any) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _DATE_PATTERN.fullmatch(value):
        raise PydanticCustomError("date_format", "Неверный формат даты (YYYY-MM-DD)")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise PydanticCustomError("date_value", "Несуществующая календарная дата")


class ActItem(BaseModel):
    """Позиция акта: работа или услуга"""

    model_config = _MODEL_CONFIG

    description: str
    quantity: Decimal
    unit: str
    price: Decimal

    @field_validator("description", "unit", mode="before")
    @classmethod
    def validate_text(cls, v):
        return _non_empty_text(v)

    @field_validator("quantity", "price", mode="before")
    @classmethod
    def validate_positive(cls, v):
        return _positive_decimal(v)

    @property
    def amount(self) -> Decimal:
        """Стоимость позиции без округления"""
        return exact_product(self.quantity, self.price)


class ActInput(BaseModel):
    """Запрос на формирование акта выполненных работ"""

    model_config = _MODEL_CONFIG

    seller_legal_entity_id: str
    client_legal_entity_id: str
    act_number: str
    act_date: date
    contract_number: str
    contract_date: date
    items: Tuple[ActItem, ...]
    date_of_completion: date
    executor_employee_id: Optional[str] = None
    customer_employee_id: Optional[str] = None

    @field_validator(
        "seller_legal_entity_id",
        "client_legal_entity_id",
        "act_number",
        "contract_number",
        mode="before",
    )
    @classmethod
    def validate_text(cls, v):
        return _non_empty_text(v)

    @field_validator("executor_employee_id", "customer_employee_id", mode="before")
    @classmethod
    def validate_optional_id(cls, v):
        if v is None:
            return None
        return _non_empty_text(v)

    @field_validator("act_date", "contract_date", "date_of_completion", mode="before")
    @classmethod
    def validate_date(cls, v):
        return _strict_date(v)

    @field_validator("items")
    @classmethod
    def validate_items(cls, v):
        if not v:
            raise PydanticCustomError("items_empty", "Требуется хотя бы одна позиция")
        return v
