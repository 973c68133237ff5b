"""
Интерфейс поиска связанных сущностей для сборки документа
"""
from abc import ABC, abstractmethod
from typing import Optional

from ..entities.parties import BankAccount, LegalEntity, Employee


class IEntityLookup(ABC):
    """Поиск юр. лиц, их банковских счетов и сотрудников. None означает, что запись не найдена."""

    @abstractmethod
    async def get_legal_entity(self, entity_id: str) -> Optional[LegalEntity]:
        """Возвращает юридическое лицо по идентификатору"""
        pass

    @abstractmethod
    async def get_employee(self, employee_id: str) -> Optional[Employee]:
        """Возвращает сотрудника по идентификатору"""
        pass

    @abstractmethod
    async def get_bank_account(self, legal_entity_id: str) -> Optional[BankAccount]:
        """Возвращает основной банковский счет юридического лица"""
        pass
