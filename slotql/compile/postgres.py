"""PostgreSQL dialect escaper."""

from __future__ import annotations

from slotql.compile.base import SQLEscaper


class PostgresEscaper(SQLEscaper):
    """Escapes arguments for PostgreSQL.

    Identifiers are quoted with double quotes.  PostgreSQL will not compare a
    ``boolean`` column with ``1``, so booleans render as ``TRUE`` / ``FALSE``.
    Text defaults to standard quote doubling, which assumes
    ``standard_conforming_strings`` is on (the default since 9.1).
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'

    def bool_literal(self, value: bool) -> str:
        return "TRUE" if value else "FALSE"
