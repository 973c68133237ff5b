"""
Интерфейс доступа к базе данных

Узкая возможность: только параметризованный запрос на чтение.
Транзакциями и схемой этот слой не владеет.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from pydantic import BaseModel, Field


class QueryResult(BaseModel):
    """Результат запроса"""
    rows: List[Dict[str, Any]] = Field(default_factory=list, description="Строки результата")
    row_count: int = Field(0, description="Количество строк")


class IDatabase(ABC):
    """Интерфейс выполнения параметризованных запросов"""

    @abstractmethod
    async def query(self, text: str, params: Sequence[Any] = ()) -> QueryResult:
        """
        Выполняет параметризованный запрос

        Args:
            text: Текст SQL с плейсхолдерами %s
            params: Значения параметров

        Returns:
            QueryResult: Строки (словари) и их количество
        """
        pass
