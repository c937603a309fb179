"""Build context value object.

Packages the ``(escaper, options)`` pair shared by ``QueryBuilder`` and the
``Substitutor`` into a single immutable object.
"""
from __future__ import annotations

from dataclasses import dataclass

from slotql.compile.base import SQLEscaper
from slotql.schema.options import BuildOptions


@dataclass(frozen=True)
class BuildContext:
    """Immutable context for building queries.

    Attributes:
        escaper: Dialect-specific escaper, already wired to a text escaper.
        options: Argument-count and empty-collection rules.
    """

    escaper: SQLEscaper
    options: BuildOptions
