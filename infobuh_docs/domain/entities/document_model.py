"""
Модель документа, готовая к рендерингу
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel


class PartyDetails(BaseModel):
    """Сторона акта с данными для печати"""

    name: str
    bin: str = ""
    address: str = ""
    kbe: str = ""

    model_config = {
        "frozen": True
    }

    def to_string(self) -> str:
        parts = [self.name]
        if self.bin:
            parts.append(f"БИН {self.bin}")
        if self.address:
            parts.append(self.address)
        return ", ".join(parts)


class BankDetails(BaseModel):
    """Реквизиты банка исполнителя"""

    name: str
    bik: str = ""
    account: str = ""

    model_config = {
        "frozen": True
    }


class Signatory(BaseModel):
    """Подписант со стороны исполнителя или заказчика"""

    full_name: str
    role: str = ""

    model_config = {
        "frozen": True
    }


class DocumentLine(BaseModel):
    """Строка таблицы акта"""

    position: int
    description: str
    quantity: Decimal
    unit: str
    price: Decimal
    amount: Decimal
    vat: Decimal = Decimal(0)

    model_config = {
        "frozen": True
    }


class DocumentModel(BaseModel):
    """Акт выполненных работ со всеми разрешенными ссылками"""

    act_number: str
    act_date: date
    contract_number: str
    contract_date: date
    date_of_completion: date
    seller: PartyDetails
    client: PartyDetails
    lines: Tuple[DocumentLine, ...]
    total: Decimal
    total_in_words: str
    vat_total: Decimal = Decimal(0)
    currency: str = "KZT"
    seller_bank: Optional[BankDetails] = None
    executor: Optional[Signatory] = None
    customer: Optional[Signatory] = None

    model_config = {
        "frozen": True
    }

    @property
    def has_signatures(self) -> bool:
        return self.executor is not None or self.customer is not None
