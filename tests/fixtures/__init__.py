"""Test fixtures: sample schema DDL and awkward text values."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

_FIXTURES_DIR = Path(__file__).parent

#: Strings that break naive concatenation or brace/marker scanning.
TRICKY_NAMES = [
    "O'Brien",
    "back\\slash",
    "multi\nline",
    "'; DROP TABLE users; --",
    "{braces}",
    "__SKIP__",
    "quote \" inside",
]


def load_ddl(target: Literal["sqlite", "postgres"] = "sqlite") -> str:
    """Return the sample DDL SQL string for the given backend.

    Args:
        target: ``'sqlite'`` (default) or ``'postgres'``.

    Returns:
        DDL string ready to execute against the target backend.
    """
    filename = f"ddl_{target}.sql"
    return (_FIXTURES_DIR / filename).read_text()
