"""Escaper abstractions: the SQLEscaper ABC.

The Template Method pattern (GoF) is used:
- ``SQLEscaper`` implements value, identifier and array escaping once, on top
  of the typed :mod:`slotql.schema.values` variants.
- ``MySQLEscaper``, ``PostgresEscaper`` and ``SQLiteEscaper`` override the
  dialect-specific steps (identifier quoting, boolean literals).

Text literals are always escaped by the injected
:class:`~slotql.connection.TextEscaper`, never by the escaper itself.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any

from slotql.connection import TextEscaper, default_text_escaper
from slotql.errors import UnsupportedValueTypeError
from slotql.schema.values import (
    ArgumentValue,
    BoolValue,
    FloatValue,
    IntValue,
    ListValue,
    MappingValue,
    NullValue,
    TextValue,
    classify,
    kind_name,
)


class SQLEscaper(ABC):
    """Abstract base for dialect-specific SQL escapers.

    Args:
        text_escaper: The connection's string-escaping capability.  Defaults
            to the dialect's offline escaper (see
            :func:`~slotql.connection.default_text_escaper`).
    """

    def __init__(self, text_escaper: TextEscaper | None = None) -> None:
        self._text = text_escaper or default_text_escaper(self.dialect_name)

    @property
    def text_escaper(self) -> TextEscaper:
        return self._text

    # ------------------------------------------------------------------
    # Dialect-specific steps
    # ------------------------------------------------------------------

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Args:
            name: Unquoted identifier (table or column name).

        Returns:
            Quoted identifier with embedded quote characters doubled.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (e.g. ``'mysql'``)."""

    def bool_literal(self, value: bool) -> str:
        """Return the SQL literal for a boolean (``1`` / ``0`` by default)."""
        return "1" if value else "0"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def escape_value(self, value: Any) -> str:
        """Render a single argument as a SQL literal.

        Raises:
            UnsupportedValueTypeError: If the argument's kind has no literal form.
        """
        return self.render(classify(value))

    def escape_identifier(self, identifier: Any) -> str:
        """Quote a name, or a list of names joined with ``", "``.

        Raises:
            UnsupportedValueTypeError: If a name is not a string.
        """
        if isinstance(identifier, str):
            return self.quote_identifier(identifier)
        if isinstance(identifier, (list, tuple)):
            return ", ".join(self.escape_identifier(item) for item in identifier)
        raise UnsupportedValueTypeError(
            kind_name(identifier), reason="identifiers must be strings"
        )

    def escape_array(self, collection: Any) -> str:
        """Render a list as ``a, b, c`` or a mapping as ``k1 = v1, k2 = v2``.

        Raises:
            UnsupportedValueTypeError: If ``collection`` is not a list, tuple
                or mapping, or holds an unsupported value.
        """
        arg = classify(collection)
        if not isinstance(arg, (ListValue, MappingValue)):
            raise UnsupportedValueTypeError(
                kind_name(collection), reason="expected a list or mapping"
            )
        return self._render_array(arg)

    def render(self, arg: ArgumentValue) -> str:
        """Render an already-classified argument."""
        if isinstance(arg, NullValue):
            return "NULL"
        if isinstance(arg, BoolValue):
            return self.bool_literal(arg.value)
        if isinstance(arg, IntValue):
            return str(arg.value)
        if isinstance(arg, FloatValue):
            return self._float_literal(arg.value)
        if isinstance(arg, TextValue):
            return f"'{self._text.escape_string(arg.value)}'"
        if isinstance(arg, (ListValue, MappingValue)):
            return self._render_array(arg)
        raise UnsupportedValueTypeError(type(arg).__name__)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _render_array(self, arg: ListValue | MappingValue) -> str:
        if isinstance(arg, ListValue):
            return ", ".join(self.render(item) for item in arg.items)
        return ", ".join(
            f"{self.quote_identifier(key)} = {self.render(item)}" for key, item in arg.items
        )

    @staticmethod
    def _float_literal(value: float) -> str:
        if not math.isfinite(value):
            raise UnsupportedValueTypeError("float", reason=f"{value!r} has no SQL literal")
        return repr(value)
