import logging
from typing import Optional

from ...domain.entities.parties import BankAccount, LegalEntity, Employee
from ...domain.interfaces.database import IDatabase
from ...domain.interfaces.entity_lookup import IEntityLookup

# id сравнивается как текст: формат идентификаторов не фиксирован
LEGAL_ENTITY_QUERY = """
    SELECT id, name, type, bin, address, phone, ugd
    FROM legal_entities
    WHERE id::text = %s
    LIMIT 1
"""

EMPLOYEE_QUERY = """
    SELECT id, full_name, role
    FROM employees
    WHERE id::text = %s
    LIMIT 1
"""

# Основным считается самый ранний счет
BANK_ACCOUNT_QUERY = """
    SELECT name, bik, account
    FROM banks
    WHERE legal_entity_id::text = %s
    ORDER BY created_at, id
    LIMIT 1
"""


class DatabaseEntityLookup(IEntityLookup):
    """Поиск сторон акта через параметризованные запросы к БД"""

    def __init__(self, database: IDatabase):
        self._database = database
        self._logger = logging.getLogger(f"app.{self.__class__.__name__}")

    async def get_legal_entity(self, entity_id: str) -> Optional[LegalEntity]:
        result = await self._database.query(LEGAL_ENTITY_QUERY, (entity_id,))
        if not result.rows:
            self._logger.warning(f"Юридическое лицо не найдено: {entity_id}")
            return None
        return LegalEntity.from_row(result.rows[0])

    async def get_employee(self, employee_id: str) -> Optional[Employee]:
        result = await self._database.query(EMPLOYEE_QUERY, (employee_id,))
        if not result.rows:
            self._logger.warning(f"Сотрудник не найден: {employee_id}")
            return None
        return Employee.from_row(result.rows[0])

    async def get_bank_account(self, legal_entity_id: str) -> Optional[BankAccount]:
        result = await self._database.query(BANK_ACCOUNT_QUERY, (legal_entity_id,))
        if not result.rows:
            self._logger.info(f"Банковский счет не найден: {legal_entity_id}")
            return None
        return BankAccount.from_row(result.rows[0])
