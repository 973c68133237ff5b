import copy
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

project_root = Path(__file__).parent.parent.resolve()

if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from infobuh_docs.domain.entities.parties import BankAccount, Employee, LegalEntity  # noqa: E402
from infobuh_docs.domain.interfaces.database import IDatabase, QueryResult  # noqa: E402
from infobuh_docs.domain.interfaces.entity_lookup import IEntityLookup  # noqa: E402


LEGAL_ENTITIES = {
    "S1": {"id": "S1", "name": "ТОО Альфа", "type": "LLP", "bin": "123456789012",
           "address": "г. Алматы, ул. Абая, 1", "phone": "+7 727 000 00 00", "ugd": "17"},
    "C1": {"id": "C1", "name": "ТОО Бета", "type": "LLP", "bin": "210987654321",
           "address": "г. Астана, пр. Республики, 2", "phone": None},
}

BANKS = {
    "S1": {"name": "АО Халык Банк", "bik": "HSBKKZKX", "account": "KZ123456789012345678"},
}

EMPLOYEES = {
    "E1": {"id": "E1", "full_name": "Иванов И. И.", "role": "Директор"},
    "E2": {"id": "E2", "full_name": "Петров П. П.", "role": "Бухгалтер"},
}

BASE_PAYLOAD = {
    "sellerLegalEntityId": "S1",
    "clientLegalEntityId": "C1",
    "actNumber": "A-100",
    "actDate": "2024-03-01",
    "contractNumber": "K-7",
    "contractDate": "2024-01-15",
    "items": [
        {"description": "Consulting", "quantity": 2, "unit": "hr", "price": 1500},
    ],
    "dateOfCompletion": "2024-02-29",
}


class FakeDatabase(IDatabase):
    """База в памяти: отвечает на запросы поиска юр. лиц, сотрудников и счетов"""

    def __init__(self, legal_entities: Optional[Dict[str, Dict]] = None,
                 employees: Optional[Dict[str, Dict]] = None,
                 banks: Optional[Dict[str, Dict]] = None):
        self.legal_entities = LEGAL_ENTITIES if legal_entities is None else legal_entities
        self.employees = EMPLOYEES if employees is None else employees
        self.banks = BANKS if banks is None else banks
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.closed = False

    async def query(self, text: str, params: Sequence[Any] = ()) -> QueryResult:
        self.calls.append((text, tuple(params)))
        if "FROM employees" in text:
            table = self.employees
        elif "FROM banks" in text:
            table = self.banks
        else:
            table = self.legal_entities
        row = table.get(params[0])
        rows = [row] if row is not None else []
        return QueryResult(rows=rows, row_count=len(rows))

    async def close(self) -> None:
        self.closed = True


class FakeLookups(IEntityLookup):
    def __init__(self, legal_entities: Optional[Dict[str, Dict]] = None,
                 employees: Optional[Dict[str, Dict]] = None,
                 banks: Optional[Dict[str, Dict]] = None):
        self.legal_entities = LEGAL_ENTITIES if legal_entities is None else legal_entities
        self.employees = EMPLOYEES if employees is None else employees
        self.banks = BANKS if banks is None else banks
        self.requested: List[str] = []

    async def get_legal_entity(self, entity_id: str) -> Optional[LegalEntity]:
        self.requested.append(entity_id)
        row = self.legal_entities.get(entity_id)
        return LegalEntity.from_row(row) if row else None

    async def get_employee(self, employee_id: str) -> Optional[Employee]:
        self.requested.append(employee_id)
        row = self.employees.get(employee_id)
        return Employee.from_row(row) if row else None

    async def get_bank_account(self, legal_entity_id: str) -> Optional[BankAccount]:
        self.requested.append(f"bank:{legal_entity_id}")
        row = self.banks.get(legal_entity_id)
        return BankAccount.from_row(row) if row else None


@pytest.fixture
def payload() -> Dict[str, Any]:
    """Корректный запрос на формирование акта (копия для каждого теста)"""
    return copy.deepcopy(BASE_PAYLOAD)


@pytest.fixture
def fake_database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def fake_lookups() -> FakeLookups:
    return FakeLookups()
