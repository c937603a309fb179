"""Conditional block resolution.

A conditional block is the text between a ``{`` and the next ``}``.  After
substitution each block is either dropped, braces included, because one of
its placeholders was skipped, or unwrapped so that only its content remains:

    SELECT * FROM t WHERE a = 1{ AND b = __SKIP__}{ AND c = 2}
      → SELECT * FROM t WHERE a = 1 AND c = 2

The resolver is one explicit scan over brace and skip fragments.  Blocks do
not nest; a ``{`` inside an open block, an unmatched brace, or a skip outside
any block raises a :class:`~slotql.errors.TemplateSyntaxError`.
"""
from __future__ import annotations

import re
from collections.abc import Iterable

from slotql.compile.substitutor import Fragment, SubstitutedQuery
from slotql.errors import NestedBlockError, SkipOutsideBlockError, UnbalancedBraceError
from slotql.schema.values import SKIP_MARKER

_STRUCTURE = re.compile(r"[{}]|" + re.escape(SKIP_MARKER))


def fragments_from_text(query: str) -> tuple[Fragment, ...]:
    """Split an intermediate query string into resolver fragments.

    Every brace is structural and every :data:`SKIP_MARKER` occurrence counts
    as a skipped placeholder, wherever it appears.
    """
    fragments: list[Fragment] = []
    last_end = 0
    for match in _STRUCTURE.finditer(query):
        start, end = match.span()
        if start > last_end:
            fragments.append(Fragment("text", query[last_end:start], last_end))
        lexeme = match.group(0)
        if lexeme == "{":
            fragments.append(Fragment("open", lexeme, start))
        elif lexeme == "}":
            fragments.append(Fragment("close", lexeme, start))
        else:
            fragments.append(Fragment("skip", lexeme, start))
        last_end = end
    if last_end < len(query):
        fragments.append(Fragment("text", query[last_end:], last_end))
    return tuple(fragments)


def resolve_blocks(fragments: Iterable[Fragment]) -> tuple[str, int]:
    """Resolve conditional blocks.

    Returns:
        The final SQL and the number of blocks dropped.

    Raises:
        NestedBlockError: If a block opens inside another block.
        UnbalancedBraceError: On a stray ``}`` or an unclosed ``{``.
        SkipOutsideBlockError: If a skip is not enclosed by a block.
    """
    out: list[str] = []
    block: list[str] | None = None
    block_start = -1
    block_skipped = False
    dropped = 0

    for fragment in fragments:
        if fragment.kind == "open":
            if block is not None:
                raise NestedBlockError(fragment.position)
            block, block_start, block_skipped = [], fragment.position, False
        elif fragment.kind == "close":
            if block is None:
                raise UnbalancedBraceError("}", fragment.position)
            if block_skipped:
                dropped += 1
            else:
                out.extend(block)
            block = None
        elif fragment.kind == "skip":
            if block is None:
                raise SkipOutsideBlockError(fragment.position)
            block_skipped = True
        elif block is not None:
            block.append(fragment.text)
        else:
            out.append(fragment.text)

    if block is not None:
        raise UnbalancedBraceError("{", block_start)
    return "".join(out), dropped


def resolve_conditionals(query: SubstitutedQuery | str) -> str:
    """Drop skipped conditional blocks and unwrap the rest.

    Args:
        query: Substitutor output, or an intermediate query string in which
            skipped placeholders appear as :data:`SKIP_MARKER`.

    Returns:
        The final SQL.
    """
    fragments = fragments_from_text(query) if isinstance(query, str) else query.fragments
    sql, _ = resolve_blocks(fragments)
    return sql
