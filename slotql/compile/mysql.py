"""MySQL dialect escaper."""

from __future__ import annotations

from slotql.compile.base import SQLEscaper


class MySQLEscaper(SQLEscaper):
    """Escapes arguments for MySQL / MariaDB.

    Identifiers are quoted with backticks (`` ` ``).  Booleans render as
    ``1`` / ``0``.  Without a live connection, text is escaped with
    :class:`~slotql.connection.BackslashTextEscaper`, which follows
    ``mysql_real_escape_string``.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"
