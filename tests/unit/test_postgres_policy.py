"""Тестирование политики запросов только на чтение"""

import asyncio

import pytest

from infobuh_docs.infrastructure.database.postgres import (
    PostgresDatabase,
    QueryPolicyError,
    validate_read_only,
)
from infobuh_docs.infrastructure.lookups.database_lookup import (
    BANK_ACCOUNT_QUERY,
    EMPLOYEE_QUERY,
    LEGAL_ENTITY_QUERY,
)


class TestReadOnlyPolicy:
    """Разрешен только одиночный SELECT"""

    @pytest.mark.parametrize("text", [
        "SELECT 1",
        "  select id from legal_entities where id::text = %s;",
        LEGAL_ENTITY_QUERY,
        EMPLOYEE_QUERY,
        BANK_ACCOUNT_QUERY,
    ])
    def test_allowed(self, text):
        validate_read_only(text)

    @pytest.mark.parametrize("text", [
        "",
        "UPDATE legal_entities SET name = 'x'",
        "DELETE FROM employees",
        "SELECT 1; DROP TABLE employees",
        "SELECT * INTO backup FROM employees; TRUNCATE employees",
        "WITH x AS (DELETE FROM employees RETURNING *) SELECT * FROM x",
        "SELECT id FROM employees WHERE name = 'a' UNION SELECT 1 FROM pg_user; INSERT INTO t VALUES (1)",
    ])
    def test_refused(self, text):
        with pytest.raises(QueryPolicyError):
            validate_read_only(text)

    def test_refused_before_connecting(self):
        database = PostgresDatabase("postgresql://invalid-host:1/none")

        with pytest.raises(QueryPolicyError):
            asyncio.run(database.query("DROP TABLE legal_entities"))

        assert database._pool is None
