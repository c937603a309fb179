"""Template tokenizer.

One left-to-right pass splits a template into text, placeholders and
conditional-block braces:

    "SELECT ?# FROM t {WHERE id = ?d}"
      → Text("SELECT ") Placeholder("#") Text(" FROM t ") Brace("{")
        Text("WHERE id = ") Placeholder("d") Brace("}")

A ``?`` followed by an ASCII letter always takes that letter as its
specifier; only ``d``, ``f`` and ``a`` (plus ``#``) are valid.  A ``?``
followed by anything else is a bare placeholder.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from slotql.errors import InvalidSpecifierError

#: Valid placeholder specifiers.
SPECIFIERS: frozenset[str] = frozenset("dfa#")

_TOKEN = re.compile(r"\?([A-Za-z#])?|[{}]")


@dataclass(frozen=True)
class TextToken:
    """Literal template text, copied to the output unchanged."""

    text: str
    position: int


@dataclass(frozen=True)
class PlaceholderToken:
    """A ``?`` with an optional specifier; consumes one argument."""

    specifier: str | None
    position: int

    @property
    def text(self) -> str:
        return "?" + (self.specifier or "")


@dataclass(frozen=True)
class BraceToken:
    """A conditional-block delimiter."""

    brace: Literal["{", "}"]
    position: int

    @property
    def text(self) -> str:
        return self.brace


Token = TextToken | PlaceholderToken | BraceToken


def scan(template: str) -> tuple[Token, ...]:
    """Tokenize ``template``.

    Args:
        template: Query template.

    Returns:
        Tokens in textual order.  Concatenating their ``text`` reproduces
        the template.

    Raises:
        InvalidSpecifierError: If a ``?`` is followed by a letter other than
            ``d``, ``f`` or ``a``.
    """
    tokens: list[Token] = []
    last_end = 0

    for match in _TOKEN.finditer(template):
        start, end = match.span()
        if start > last_end:
            tokens.append(TextToken(template[last_end:start], last_end))

        lexeme = match.group(0)
        if lexeme == "{" or lexeme == "}":
            tokens.append(BraceToken(lexeme, start))
        else:
            specifier = match.group(1)
            if specifier is not None and specifier not in SPECIFIERS:
                raise InvalidSpecifierError(specifier, start)
            tokens.append(PlaceholderToken(specifier, start))
        last_end = end

    if last_end < len(template):
        tokens.append(TextToken(template[last_end:], last_end))
    return tuple(tokens)


def placeholder_count(tokens: tuple[Token, ...]) -> int:
    """Return the number of placeholders in ``tokens``."""
    return sum(1 for token in tokens if isinstance(token, PlaceholderToken))
