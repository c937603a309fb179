"""slotQL compilation layer: template + arguments → literal SQL."""
from slotql.compile.base import SQLEscaper
from slotql.compile.builder import QueryBuilder
from slotql.compile.mysql import MySQLEscaper
from slotql.compile.postgres import PostgresEscaper
from slotql.compile.sqlite import SQLiteEscaper

__all__ = [
    "SQLEscaper",
    "QueryBuilder",
    "MySQLEscaper",
    "PostgresEscaper",
    "SQLiteEscaper",
]
