"""Пул соединений Postgres и выполнение запросов только на чтение."""
import logging
import re
from typing import Any, Optional, Sequence

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from ...domain.interfaces.database import IDatabase, QueryResult
from ...shared.exceptions.base_exceptions import ExternalServiceError, TechnicalError

SELECT_ONLY = re.compile(r"^\s*SELECT\b", re.IGNORECASE)
FORBIDDEN_SQL_KEYWORDS = re.compile(
    r"\b(INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|COPY|TRUNCATE|GRANT)\b",
    re.IGNORECASE,
)


class QueryPolicyError(TechnicalError):
    """Запрос не является одиночным SELECT"""


def validate_read_only(text: str) -> None:
    """Пропускает только одиночный SELECT без модифицирующих ключевых слов"""
    if not text or not isinstance(text, str):
        raise QueryPolicyError("Текст запроса не может быть пустым")
    q = text.strip().rstrip(";")
    if not SELECT_ONLY.search(q):
        raise QueryPolicyError("Разрешены только запросы SELECT")
    if ";" in q:
        raise QueryPolicyError("Пакет из нескольких запросов запрещен")
    if FORBIDDEN_SQL_KEYWORDS.search(q):
        raise QueryPolicyError("Запрос содержит запрещенное ключевое слово")


class PostgresDatabase(IDatabase):
    """Реализация IDatabase поверх асинхронного пула psycopg"""

    def __init__(self, conninfo: str, min_size: int = 1, max_size: int = 10):
        self._conninfo = conninfo
        self._min_size = min_size
        self._max_size = max_size
        self._pool: Optional[AsyncConnectionPool] = None
        self._logger = logging.getLogger(f"app.{self.__class__.__name__}")

    async def _get_pool(self) -> AsyncConnectionPool:
        if self._pool is None:
            pool = AsyncConnectionPool(
                conninfo=self._conninfo,
                min_size=self._min_size,
                max_size=self._max_size,
                open=False,
            )
            await pool.open()
            self._pool = pool
            self._logger.info(f"Открыт пул соединений (min={self._min_size}, max={self._max_size})")
        return self._pool

    async def query(self, text: str, params: Sequence[Any] = ()) -> QueryResult:
        validate_read_only(text)
        pool = await self._get_pool()
        try:
            async with pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(text, tuple(params))
                    rows = await cur.fetchall()
        except psycopg.Error as e:
            self._logger.error(f"Ошибка выполнения запроса: {e}")
            raise ExternalServiceError("Ошибка обращения к базе данных", details={"reason": str(e)}) from e
        return QueryResult(rows=rows, row_count=len(rows))

    async def close(self) -> None:
        """Закрыть пул (для тестов или shutdown)"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            self._logger.info("Пул соединений закрыт")
