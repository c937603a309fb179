"""Unit tests for conditional block resolution."""

from __future__ import annotations

import pytest

from slotql.compile.builder import QueryBuilder
from slotql.compile.conditionals import fragments_from_text, resolve_blocks, resolve_conditionals
from slotql.compile.mysql import MySQLEscaper
from slotql.compile.substitutor import SubstitutedQuery
from slotql.errors import (
    NestedBlockError,
    SkipOutsideBlockError,
    TemplateSyntaxError,
    UnbalancedBraceError,
)
from slotql.schema.values import SKIP, SKIP_MARKER


def _substitute(template: str, args: list) -> SubstitutedQuery:
    return QueryBuilder(MySQLEscaper()).substitute(template, args)


# ---------------------------------------------------------------------------
# Intermediate string form
# ---------------------------------------------------------------------------


def test_intermediate_string_carries_marker():
    query = _substitute("SELECT 1{ AND a = ?}{ AND b = ?d}", [SKIP, 3])
    assert str(query) == f"SELECT 1{{ AND a = {SKIP_MARKER}}}{{ AND b = 3}}"
    assert query.placeholders == 2
    assert query.skipped == 1


def test_string_input_drops_marked_block_and_unwraps_others():
    assert resolve_conditionals(f"A{{B {SKIP_MARKER}}}C{{D}}") == "ACD"


def test_string_and_fragment_forms_agree():
    query = _substitute("x{ y = ?}{ z = ?d} w", [SKIP, 1])
    assert resolve_conditionals(query) == resolve_conditionals(str(query)) == "x z = 1 w"


def test_fragments_from_text_positions():
    fragments = fragments_from_text(f"a{{{SKIP_MARKER}}}")
    assert [(f.kind, f.position) for f in fragments] == [
        ("text", 0),
        ("open", 1),
        ("skip", 2),
        ("close", 2 + len(SKIP_MARKER)),
    ]


# ---------------------------------------------------------------------------
# Block semantics
# ---------------------------------------------------------------------------


def test_block_without_placeholders_is_unwrapped():
    assert resolve_conditionals("WHERE 1{ AND 2 = 2}") == "WHERE 1 AND 2 = 2"


def test_empty_block():
    assert resolve_conditionals("a{}b") == "ab"


def test_skip_anywhere_in_block_drops_whole_block():
    query = _substitute("SELECT 1{ AND a = ?d AND b = ? AND c = ?}", [1, SKIP, "x"])
    sql, dropped = resolve_blocks(query)
    assert sql == "SELECT 1"
    assert dropped == 1


def test_two_skips_in_one_block_count_once():
    query = _substitute("{? ?}", [SKIP, SKIP])
    assert resolve_blocks(query) == ("", 1)


def test_text_outside_blocks_is_untouched():
    assert resolve_conditionals("SELECT 'a' FROM t") == "SELECT 'a' FROM t"


# ---------------------------------------------------------------------------
# Brace syntax errors
# ---------------------------------------------------------------------------


def test_nested_block_rejected():
    with pytest.raises(NestedBlockError) as exc_info:
        resolve_conditionals("{a {b} c}")
    assert exc_info.value.position == 3


def test_stray_closing_brace_rejected():
    with pytest.raises(UnbalancedBraceError) as exc_info:
        resolve_conditionals("a } b")
    assert exc_info.value.brace == "}"
    assert exc_info.value.position == 2


def test_unclosed_block_rejected():
    with pytest.raises(UnbalancedBraceError) as exc_info:
        resolve_conditionals("a {b")
    assert exc_info.value.brace == "{"
    assert exc_info.value.position == 2


def test_skip_outside_block_rejected():
    with pytest.raises(SkipOutsideBlockError):
        resolve_conditionals(f"a = {SKIP_MARKER}")


def test_syntax_errors_share_base_class():
    with pytest.raises(TemplateSyntaxError) as exc_info:
        resolve_conditionals("{{}}")
    response = exc_info.value.to_error_response()
    assert response["error"] == "NESTED_BLOCK"
    assert response["details"] == {"position": 1}
