"""Utilities for building an escaper from external sources.

SQLAlchemy converter
--------------------
:func:`escaper_from_sqlalchemy` picks the escaper matching a SQLAlchemy
engine, connection or dialect.

Install the optional dependency before using this module::

    pip install "slotql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from slotql import QueryBuilder
    from slotql.schema.converters import escaper_from_sqlalchemy

    engine = create_engine("sqlite:///mydb.db")
    builder = QueryBuilder(escaper_from_sqlalchemy(engine))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from slotql.compile.base import SQLEscaper
from slotql.compile.registry import EscaperFactory
from slotql.connection import StandardTextEscaper, TextEscaper, default_text_escaper

if TYPE_CHECKING:
    from sqlalchemy.engine import Dialect


class SQLAlchemyEscaper(SQLEscaper):
    """Escaper for dialects without a built-in counterpart.

    Identifiers are quoted by the dialect's own identifier preparer; text
    uses standard quote doubling unless a text escaper is supplied.

    Args:
        dialect: A SQLAlchemy :class:`~sqlalchemy.engine.Dialect`.
        text_escaper: Optional text escaping capability.
    """

    def __init__(self, dialect: Dialect, text_escaper: TextEscaper | None = None) -> None:
        self._dialect = dialect
        super().__init__(text_escaper or StandardTextEscaper())

    @property
    def dialect_name(self) -> str:
        return self._dialect.name

    def quote_identifier(self, name: str) -> str:
        return self._dialect.identifier_preparer.quote_identifier(name)


def escaper_from_sqlalchemy(
    bind: Any,
    text_escaper: TextEscaper | None = None,
) -> SQLEscaper:
    """Return the escaper for a SQLAlchemy engine, connection or dialect.

    Dialect names that resolve through :class:`EscaperFactory` (``mysql``,
    ``mariadb``, ``postgresql``, ``sqlite`` or any registered target) map to
    the registered escapers.
    When the MySQL dialect reports that the server runs with
    ``NO_BACKSLASH_ESCAPES``, standard quote doubling is used for text.
    Any other dialect gets a :class:`SQLAlchemyEscaper`.

    Args:
        bind: A :class:`sqlalchemy.engine.Engine`,
            :class:`sqlalchemy.engine.Connection` or dialect instance.
        text_escaper: Overrides the text escaper picked for the dialect.

    Returns:
        A configured :class:`SQLEscaper`.
    """
    dialect = getattr(bind, "dialect", bind)
    target = EscaperFactory.resolve(dialect.name)
    if target is None:
        return SQLAlchemyEscaper(dialect, text_escaper)

    if text_escaper is None:
        if target == "mysql" and not getattr(dialect, "_backslash_escapes", True):
            text_escaper = StandardTextEscaper()
        else:
            text_escaper = default_text_escaper(target)
    return EscaperFactory.create(target, text_escaper)
