"""SQLite dialect escaper."""
from __future__ import annotations

from slotql.compile.base import SQLEscaper


class SQLiteEscaper(SQLEscaper):
    """Escapes arguments for SQLite.

    Python's ``sqlite3`` module has no escaping routine of its own, so text
    uses standard quote doubling.  Booleans are stored as integers and render
    as ``1`` / ``0``.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'
