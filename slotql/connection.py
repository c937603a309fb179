"""Text escaping collaborators.

The escapers never talk to a database.  The only thing they need from a
connection is its native string-escaping routine, wrapped here behind the
:class:`TextEscaper` protocol.

``text_escaper_for`` adapts whatever the caller holds:

- a DB-API connection exposing ``escape_string`` (PyMySQL, mysqlclient) or
  ``real_escape_string``,
- a psycopg 3 connection, escaped through libpq,
- a plain ``str -> str`` callable,
- ``None`` or a :class:`sqlite3.Connection`, for which the dialect default
  is used (MySQL backslash rules, or standard quote doubling).
"""
from __future__ import annotations

import sqlite3
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from slotql.errors import UnsupportedConnectionError


@runtime_checkable
class TextEscaper(Protocol):
    """Anything that can escape text for inclusion in a quoted SQL literal."""

    def escape_string(self, value: str) -> str:
        """Return ``value`` escaped, without the surrounding quotes."""
        ...


class StandardTextEscaper:
    """SQL-standard escaping: embedded single quotes are doubled.

    Matches PostgreSQL with ``standard_conforming_strings`` on and SQLite.
    """

    def escape_string(self, value: str) -> str:
        return value.replace("'", "''")

    def __repr__(self) -> str:
        return "StandardTextEscaper()"


# Same table as mysql_real_escape_string().
_BACKSLASH_ESCAPES = str.maketrans(
    {
        "\0": "\\0",
        "\n": "\\n",
        "\r": "\\r",
        "\\": "\\\\",
        "'": "\\'",
        '"': '\\"',
        "\x1a": "\\Z",
    }
)


class BackslashTextEscaper:
    """MySQL escaping rules, for use when no live MySQL connection is at hand."""

    def escape_string(self, value: str) -> str:
        return value.translate(_BACKSLASH_ESCAPES)

    def __repr__(self) -> str:
        return "BackslashTextEscaper()"


class ConnectionTextEscaper:
    """Delegates to a connection's own escaping routine.

    Args:
        escape: The bound ``escape_string`` (or equivalent) callable.  Drivers
            that return ``bytes`` are decoded as UTF-8.
    """

    def __init__(self, escape: Callable[[str], str | bytes]) -> None:
        self._escape = escape

    def escape_string(self, value: str) -> str:
        escaped = self._escape(value)
        if isinstance(escaped, bytes):
            return escaped.decode("utf-8")
        return escaped

    def __repr__(self) -> str:
        return f"ConnectionTextEscaper({self._escape!r})"


def _psycopg_text_escaper(connection: Any) -> ConnectionTextEscaper:
    """Wrap libpq's ``PQescapeStringConn`` for a psycopg 3 connection."""
    from psycopg.pq import Escaping

    escaping = Escaping(connection.pgconn)
    encoding = connection.info.encoding

    def escape(value: str) -> str:
        return escaping.escape_string(value.encode(encoding)).decode(encoding)

    return ConnectionTextEscaper(escape)


def default_text_escaper(target: str) -> TextEscaper:
    """Return the escaper used for ``target`` when no connection is supplied."""
    if target == "mysql":
        return BackslashTextEscaper()
    return StandardTextEscaper()


def text_escaper_for(connection: Any = None, target: str = "mysql") -> TextEscaper:
    """Adapt ``connection`` to the :class:`TextEscaper` protocol.

    Args:
        connection: A DB-API connection, a ``TextEscaper``, a callable, or
            ``None``.
        target: Dialect target, used to pick the default escaper.

    Returns:
        A ``TextEscaper``.

    Raises:
        UnsupportedConnectionError: If ``connection`` exposes no escaping
            routine.
    """
    if connection is None or isinstance(connection, sqlite3.Connection):
        return default_text_escaper(target)
    if isinstance(connection, (StandardTextEscaper, BackslashTextEscaper, ConnectionTextEscaper)):
        return connection
    for attr in ("escape_string", "real_escape_string"):
        method = getattr(connection, attr, None)
        if callable(method):
            return ConnectionTextEscaper(method)
    if getattr(connection, "pgconn", None) is not None:
        return _psycopg_text_escaper(connection)
    if callable(connection):
        return ConnectionTextEscaper(connection)
    raise UnsupportedConnectionError(type(connection).__name__)
