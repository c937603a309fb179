"""Shared pytest fixtures for slotQL unit and integration tests."""
from __future__ import annotations

import pytest

from slotql.compile.builder import QueryBuilder
from slotql.compile.mysql import MySQLEscaper
from slotql.compile.postgres import PostgresEscaper
from slotql.compile.sqlite import SQLiteEscaper
from slotql.connection import BackslashTextEscaper
from slotql.schema.options import BuildOptions


class RecordingConnection:
    """Stands in for a MySQL DB-API connection: escapes text and records calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._escaper = BackslashTextEscaper()

    def escape_string(self, value: str) -> str:
        self.calls.append(value)
        return self._escaper.escape_string(value)


@pytest.fixture()
def connection() -> RecordingConnection:
    return RecordingConnection()


@pytest.fixture()
def mysql(connection: RecordingConnection) -> QueryBuilder:
    """MySQL builder wired to a recording connection."""
    return QueryBuilder.for_connection(connection, BuildOptions(target="mysql"))


@pytest.fixture(scope="session")
def mysql_escaper() -> MySQLEscaper:
    return MySQLEscaper()


@pytest.fixture(scope="session")
def pg_escaper() -> PostgresEscaper:
    return PostgresEscaper()


@pytest.fixture(scope="session")
def sqlite_escaper() -> SQLiteEscaper:
    return SQLiteEscaper()
