"""
Записи связанных сущностей, получаемые из базы данных
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class LegalEntity(BaseModel):
    """Юридическое лицо (продавец или заказчик)"""

    id: str
    name: str
    bin: str = ""
    address: str = ""
    phone: Optional[str] = None
    type: Optional[str] = None
    ugd: str = ""

    model_config = {
        "frozen": True
    }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'LegalEntity':
        """Создает запись из строки результата запроса"""
        return cls(
            id=str(row["id"]),
            name=row["name"],
            bin=row.get("bin") or "",
            address=row.get("address") or "",
            phone=row.get("phone"),
            type=row.get("type"),
            ugd=row.get("ugd") or "",
        )

    def to_string(self) -> str:
        """Название с БИН для печатной формы"""
        if self.bin:
            return f"{self.name}, БИН {self.bin}"
        return self.name


class Employee(BaseModel):
    """Сотрудник, подписывающий документ"""

    id: str
    full_name: str
    role: str = ""

    model_config = {
        "frozen": True
    }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Employee':
        return cls(
            id=str(row["id"]),
            full_name=row["full_name"],
            role=row.get("role") or "",
        )


class BankAccount(BaseModel):
    """Банковский счет юридического лица"""

    name: str
    bik: str = ""
    account: str = ""

    model_config = {
        "frozen": True
    }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'BankAccount':
        return cls(
            name=row["name"],
            bik=row.get("bik") or "",
            account=row.get("account") or "",
        )
