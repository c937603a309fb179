"""Unit tests for the dialect escapers (all three dialects)."""

from __future__ import annotations

import pytest

from slotql.compile.base import SQLEscaper
from slotql.compile.mysql import MySQLEscaper
from slotql.compile.postgres import PostgresEscaper
from slotql.compile.registry import EscaperFactory
from slotql.compile.sqlite import SQLiteEscaper
from slotql.connection import StandardTextEscaper
from slotql.errors import EscaperConfigError, UnsupportedValueTypeError
from slotql.schema.values import SKIP


def test_null_bool_and_numbers(mysql_escaper):
    assert mysql_escaper.escape_value(None) == "NULL"
    assert mysql_escaper.escape_value(True) == "1"
    assert mysql_escaper.escape_value(False) == "0"
    assert mysql_escaper.escape_value(-12) == "-12"
    assert mysql_escaper.escape_value(0.25) == "0.25"
    assert mysql_escaper.escape_value(1e20) == "1e+20"


def test_text_mysql_backslash_rules(mysql_escaper):
    assert mysql_escaper.escape_value("it's") == "'it\\'s'"
    assert mysql_escaper.escape_value('say "hi"') == "'say \\\"hi\\\"'"
    assert mysql_escaper.escape_value("a\\b") == "'a\\\\b'"
    assert mysql_escaper.escape_value("line\nbreak\x00") == "'line\\nbreak\\0'"


def test_text_standard_rules(pg_escaper, sqlite_escaper):
    assert pg_escaper.escape_value("it's") == "'it''s'"
    assert sqlite_escaper.escape_value("a\\b") == "'a\\b'"


def test_postgres_booleans(pg_escaper):
    assert pg_escaper.escape_value(True) == "TRUE"
    assert pg_escaper.escape_value(False) == "FALSE"


@pytest.mark.parametrize(
    ("escaper", "expected"),
    [
        (MySQLEscaper(), "`my``col`"),
        (PostgresEscaper(), '"my`col"'),
        (SQLiteEscaper(), '"my`col"'),
    ],
)
def test_quote_identifier_per_dialect(escaper, expected):
    assert escaper.escape_identifier("my`col") == expected


def test_double_quote_doubled_for_postgres(pg_escaper):
    assert pg_escaper.escape_identifier('a"b') == '"a""b"'


def test_identifier_list_recurses(mysql_escaper):
    assert mysql_escaper.escape_identifier(["a", ("b", "c")]) == "`a`, `b`, `c`"


def test_identifier_rejects_non_strings(mysql_escaper):
    with pytest.raises(UnsupportedValueTypeError) as exc_info:
        mysql_escaper.escape_identifier(5)
    assert exc_info.value.kind == "int"


def test_array_sequential(mysql_escaper):
    assert mysql_escaper.escape_array([1, "x", None, True]) == "1, 'x', NULL, 1"
    assert mysql_escaper.escape_array((1.5, 2)) == "1.5, 2"


def test_array_keyed(mysql_escaper):
    assert mysql_escaper.escape_array({"name": "Jack", "age": 30}) == "`name` = 'Jack', `age` = 30"


def test_array_nested_lists_flatten_once(mysql_escaper):
    assert mysql_escaper.escape_array([1, [2, 3], ["o'k"]]) == "1, 2, 3, 'o\\'k'"


def test_array_keyed_with_nested_list(mysql_escaper):
    assert mysql_escaper.escape_array({"ids": [1, 2]}) == "`ids` = 1, 2"


def test_value_delegates_collections_to_array(mysql_escaper):
    assert mysql_escaper.escape_value([1, 2]) == mysql_escaper.escape_array([1, 2])


def test_array_rejects_skip_inside(mysql_escaper):
    with pytest.raises(UnsupportedValueTypeError) as exc_info:
        mysql_escaper.escape_array([1, SKIP])
    assert exc_info.value.kind == "Skip"


def test_array_rejects_text(mysql_escaper):
    with pytest.raises(UnsupportedValueTypeError):
        mysql_escaper.escape_array("1, 2")


def test_infinite_float_rejected(pg_escaper):
    with pytest.raises(UnsupportedValueTypeError):
        pg_escaper.escape_value(float("inf"))


def test_custom_text_escaper_is_used():
    class Upper:
        def escape_string(self, value: str) -> str:
            return value.upper()

    escaper = MySQLEscaper(Upper())
    assert escaper.escape_value("abc") == "'ABC'"


# ---------------------------------------------------------------------------
# EscaperFactory
# ---------------------------------------------------------------------------


class TestEscaperFactory:
    def test_builtin_targets_registered(self):
        assert {"mysql", "postgres", "sqlite"} <= set(EscaperFactory.registered_targets())

    def test_create_passes_text_escaper(self):
        text = StandardTextEscaper()
        escaper = EscaperFactory.create("mysql", text)
        assert isinstance(escaper, MySQLEscaper)
        assert escaper.text_escaper is text

    @pytest.mark.parametrize(
        ("name", "target"),
        [("postgresql", "postgres"), ("MariaDB", "mysql"), ("SQLite", "sqlite"), ("db2", None)],
    )
    def test_resolve_aliases_and_case(self, name, target):
        assert EscaperFactory.resolve(name) == target

    def test_aliases_are_not_listed_as_targets(self):
        assert "postgresql" not in EscaperFactory.registered_targets()

    def test_create_through_alias(self):
        assert isinstance(EscaperFactory.create("postgresql"), PostgresEscaper)

    def test_unknown_target(self):
        with pytest.raises(EscaperConfigError) as exc_info:
            EscaperFactory.create("db2")
        assert exc_info.value.to_error_response()["error"] == "ESCAPER_CONFIG"

    def test_register_decorator(self):
        @EscaperFactory.register("bracketed")
        class BracketEscaper(SQLEscaper):
            @property
            def dialect_name(self) -> str:
                return "bracketed"

            def quote_identifier(self, name: str) -> str:
                return "[" + name.replace("]", "]]") + "]"

        escaper = EscaperFactory.create("bracketed")
        assert isinstance(escaper, BracketEscaper)
        assert escaper.escape_array({"a]": 1}) == "[a]]] = 1"
        assert escaper.escape_value("it's") == "'it''s'"
