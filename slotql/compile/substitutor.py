"""Placeholder substitution.

``Substitutor`` replaces every placeholder in a scanned template with an
escaped literal, consuming arguments strictly in textual order through an
index cursor over an immutable tuple.  Skipped arguments become ``skip``
fragments so the conditional resolver can drop their enclosing block.

The result is a :class:`SubstitutedQuery`: a sequence of fragments that
remembers which text came from the template and which came from escaped
arguments.  Braces are only honoured in template text, so a value such as
``'{x}'`` never opens a conditional block.
"""
from __future__ import annotations

import numbers
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal

from slotql.compile.context import BuildContext
from slotql.compile.scanner import BraceToken, PlaceholderToken, TextToken, placeholder_count, scan
from slotql.errors import (
    ArgumentCoercionError,
    ArgumentCountMismatchError,
    EmptyArrayError,
    InvalidSpecifierError,
)
from slotql.schema.values import SKIP_MARKER, is_skip, kind_name

FragmentKind = Literal["text", "literal", "skip", "open", "close"]


@dataclass(frozen=True)
class Fragment:
    """One piece of a substituted query.

    Attributes:
        kind: ``text`` (template text), ``literal`` (escaped argument),
            ``skip`` (skipped placeholder), ``open`` / ``close`` (braces).
        text: The SQL text; :data:`SKIP_MARKER` for skips.
        position: Offset of the originating token in the template.
    """

    kind: FragmentKind
    text: str
    position: int


@dataclass(frozen=True)
class SubstitutedQuery:
    """Output of :meth:`Substitutor.substitute`.

    ``str(query)`` is the intermediate query string, with skipped
    placeholders written as :data:`SKIP_MARKER`.
    """

    fragments: tuple[Fragment, ...]
    placeholders: int

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self.fragments)

    def __str__(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)

    @property
    def skipped(self) -> int:
        """Number of skipped placeholders."""
        return sum(1 for fragment in self.fragments if fragment.kind == "skip")


# ---------------------------------------------------------------------------
# Numeric coercion for ?d / ?f
# ---------------------------------------------------------------------------


def coerce_int(value: Any) -> int:
    """Cast a ``?d`` argument to ``int``.

    ``None`` becomes ``0``, floats truncate toward zero and numeric strings
    are parsed after stripping whitespace.

    Raises:
        ArgumentCoercionError: For non-numeric text, non-finite numbers and
            any other kind.
    """
    if value is None:
        return 0
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return coerce_int(float(text))
        except ValueError as exc:
            raise ArgumentCoercionError("d", "str") from exc
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            return int(value)
        except (OverflowError, ValueError) as exc:
            raise ArgumentCoercionError("d", kind_name(value)) from exc
    raise ArgumentCoercionError("d", kind_name(value))


def coerce_float(value: Any) -> float:
    """Cast a ``?f`` argument to ``float``.

    Raises:
        ArgumentCoercionError: For non-numeric text, integers too large for a
            float, and any other kind.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as exc:
            raise ArgumentCoercionError("f", "str") from exc
    if isinstance(value, (bool, numbers.Real, Decimal)):
        try:
            return float(value)
        except OverflowError as exc:
            raise ArgumentCoercionError("f", kind_name(value)) from exc
    raise ArgumentCoercionError("f", kind_name(value))


# ---------------------------------------------------------------------------
# Substitutor
# ---------------------------------------------------------------------------


class Substitutor:
    """Replaces placeholders with escaped arguments.

    Args:
        ctx: Escaper and build options.
    """

    def __init__(self, ctx: BuildContext) -> None:
        self._ctx = ctx

    def substitute(self, template: str, args: Sequence[Any] = ()) -> SubstitutedQuery:
        """Substitute ``args`` into ``template``.

        Args:
            template: Query template.
            args: One argument per placeholder, in textual order.

        Returns:
            The substituted query fragments.

        Raises:
            InvalidSpecifierError: On an unknown ``?`` specifier.
            ArgumentCountMismatchError: If the argument count does not match.
            UnsupportedValueTypeError: If an argument cannot be escaped.
            ArgumentCoercionError: If a ``?d`` / ``?f`` argument is not numeric.
            EmptyArrayError: On an empty collection when those are disabled.
        """
        tokens = scan(template)
        values = tuple(args)
        expected = placeholder_count(tokens)
        if expected > len(values) or (
            expected < len(values) and not self._ctx.options.allow_extra_args
        ):
            raise ArgumentCountMismatchError(expected, len(values))

        fragments: list[Fragment] = []
        cursor = 0
        for token in tokens:
            if isinstance(token, TextToken):
                fragments.append(Fragment("text", token.text, token.position))
            elif isinstance(token, BraceToken):
                kind: FragmentKind = "open" if token.brace == "{" else "close"
                fragments.append(Fragment(kind, token.brace, token.position))
            else:
                fragments.append(self._render(token, values[cursor]))
                cursor += 1
        return SubstitutedQuery(tuple(fragments), expected)

    def _render(self, token: PlaceholderToken, value: Any) -> Fragment:
        if is_skip(value):
            return Fragment("skip", SKIP_MARKER, token.position)

        escaper = self._ctx.escaper
        specifier = token.specifier
        if specifier is None:
            sql = escaper.escape_value(value)
        elif specifier == "d":
            sql = escaper.escape_value(coerce_int(value))
        elif specifier == "f":
            sql = escaper.escape_value(coerce_float(value))
        elif specifier == "#":
            self._check_not_empty(specifier, value)
            sql = escaper.escape_identifier(value)
        elif specifier == "a":
            self._check_not_empty(specifier, value)
            sql = escaper.escape_array(value)
        else:
            raise InvalidSpecifierError(specifier, token.position)
        return Fragment("literal", sql, token.position)

    def _check_not_empty(self, specifier: str, value: Any) -> None:
        if self._ctx.options.allow_empty_arrays:
            return
        if isinstance(value, (list, tuple, Mapping)) and not value:
            raise EmptyArrayError(specifier)
