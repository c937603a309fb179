"""slotQL – SQL query templating with typed placeholders and conditional blocks.

Escape Arguments. Don't Concatenate Them.

Public API
----------
``build_query``
    Substitute arguments into a query template and resolve its conditional
    blocks, returning literal SQL.

``skip``
    Return the sentinel that drops the conditional block around its
    placeholder.

Template syntax
---------------
``?``   value, rendered by its Python type
``?d``  integer
``?f``  float
``?#``  identifier, or a list of identifiers
``?a``  list (``1, 2, 3``) or mapping (quoted ``key = value`` pairs)
``{…}`` conditional block, dropped when one of its placeholders is skipped

Example::

    import slotql

    sql = slotql.build_query(
        "SELECT ?# FROM users WHERE id IN (?a){ AND block = ?d}",
        [["name", "email"], [1, 2, 3], slotql.skip()],
        connection=pymysql_connection,
    )
    # SELECT `name`, `email` FROM users WHERE id IN (1, 2, 3)

Extensibility
-------------
New dialect escapers can be registered via::

    from slotql.compile.registry import EscaperFactory

    @EscaperFactory.register("mssql")
    class MSSQLEscaper(SQLEscaper):
        ...

After registration, ``build_query`` picks it up for ``dialect="mssql"``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from slotql.compile.base import SQLEscaper
from slotql.compile.builder import QueryBuilder
from slotql.compile.conditionals import resolve_conditionals
from slotql.compile.mysql import MySQLEscaper
from slotql.compile.postgres import PostgresEscaper
from slotql.compile.registry import EscaperFactory
from slotql.compile.sqlite import SQLiteEscaper
from slotql.compile.substitutor import SubstitutedQuery
from slotql.connection import (
    BackslashTextEscaper,
    ConnectionTextEscaper,
    StandardTextEscaper,
    TextEscaper,
    text_escaper_for,
)
from slotql.errors import (
    ArgumentCoercionError,
    ArgumentCountMismatchError,
    EmptyArrayError,
    EscaperConfigError,
    InvalidSpecifierError,
    NestedBlockError,
    SkipOutsideBlockError,
    SlotQLError,
    TemplateSyntaxError,
    UnbalancedBraceError,
    UnsupportedConnectionError,
    UnsupportedValueTypeError,
)
from slotql.schema.converters import escaper_from_sqlalchemy
from slotql.schema.options import BuildOptions, BuildOptionsBuilder
from slotql.schema.values import SKIP, SKIP_MARKER, Skip, skip

# ---------------------------------------------------------------------------
# Register built-in escapers with EscaperFactory
# ---------------------------------------------------------------------------

EscaperFactory.register_class("mysql", MySQLEscaper, "mariadb")
EscaperFactory.register_class("postgres", PostgresEscaper, "postgresql")
EscaperFactory.register_class("sqlite", SQLiteEscaper)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core pipeline
    "build_query",
    "skip",
    "SKIP",
    "SKIP_MARKER",
    "Skip",
    "resolve_conditionals",
    "SubstitutedQuery",
    # Configuration
    "BuildOptions",
    "BuildOptionsBuilder",
    # Escaping
    "QueryBuilder",
    "SQLEscaper",
    "EscaperFactory",
    "MySQLEscaper",
    "PostgresEscaper",
    "SQLiteEscaper",
    "escaper_from_sqlalchemy",
    # Connection collaborators
    "TextEscaper",
    "StandardTextEscaper",
    "BackslashTextEscaper",
    "ConnectionTextEscaper",
    "text_escaper_for",
    # Errors
    "SlotQLError",
    "InvalidSpecifierError",
    "UnsupportedValueTypeError",
    "ArgumentCountMismatchError",
    "ArgumentCoercionError",
    "EmptyArrayError",
    "TemplateSyntaxError",
    "NestedBlockError",
    "UnbalancedBraceError",
    "SkipOutsideBlockError",
    "EscaperConfigError",
    "UnsupportedConnectionError",
]


def build_query(
    template: str,
    args: Sequence[Any] = (),
    *,
    connection: Any = None,
    dialect: str | None = None,
    options: BuildOptions | None = None,
) -> str:
    """Build literal SQL from a query template.

    This is the main entry point for slotQL::

        sql = slotql.build_query(
            "UPDATE users SET ?a WHERE id = ?d",
            [{"name": "Jack", "email": None}, 7],
            connection=conn,
        )
        # UPDATE users SET `name` = 'Jack', `email` = NULL WHERE id = 7

    Args:
        template: Query template.
        args: One argument per placeholder, in textual order.
        connection: Supplies text escaping (see
            :func:`~slotql.connection.text_escaper_for`).  When ``None`` the
            dialect's offline escaper is used.
        dialect: Dialect target; overrides ``options.target``.
        options: Build options; defaults to ``BuildOptions()`` (MySQL).

    Returns:
        Literal SQL with every placeholder replaced and every conditional
        block resolved.

    Raises:
        InvalidSpecifierError: On an unknown ``?`` specifier.
        ArgumentCountMismatchError: If the argument count does not match.
        UnsupportedValueTypeError: If an argument cannot be escaped.
        TemplateSyntaxError: (or subclass) on malformed conditional blocks.
        EscaperConfigError: If the dialect target is not registered.
    """
    options = options or BuildOptions()
    if dialect is not None:
        options = options.model_copy(update={"target": dialect})
    return QueryBuilder.for_connection(connection, options).build(template, args)
