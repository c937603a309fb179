"""Template → literal SQL.

``QueryBuilder`` is the top-level orchestrator.  It runs the two passes in
order and owns nothing but immutable configuration:

QueryBuilder
  ├── Substitutor          (substitutor.py)   placeholders → literals / skips
  └── resolve_blocks       (conditionals.py)  drop or unwrap ``{...}`` blocks

All dialect-specific behaviour lives in the injected
:class:`~slotql.compile.base.SQLEscaper`, which in turn delegates text
escaping to the connection.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import structlog

from slotql.compile.base import SQLEscaper
from slotql.compile.conditionals import resolve_blocks
from slotql.compile.context import BuildContext
from slotql.compile.registry import EscaperFactory
from slotql.compile.substitutor import SubstitutedQuery, Substitutor
from slotql.connection import text_escaper_for
from slotql.errors import EscaperConfigError, SlotQLError
from slotql.schema.options import BuildOptions
from slotql.schema.values import SKIP, Skip

# Goes through stdlib logging; silent unless the application adds a handler.
logger = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)


class QueryBuilder:
    """Builds literal SQL from query templates.

    Args:
        escaper: Dialect-specific escaper instance.
        options: Build options; defaults to ``BuildOptions()``.
    """

    def __init__(
        self,
        escaper: SQLEscaper,
        options: BuildOptions | None = None,
    ) -> None:
        self._ctx = BuildContext(escaper=escaper, options=options or BuildOptions())
        self._substitutor = Substitutor(self._ctx)

    @classmethod
    def for_connection(
        cls,
        connection: Any = None,
        options: BuildOptions | None = None,
    ) -> QueryBuilder:
        """Create a builder whose text escaping is delegated to ``connection``.

        The escaper is resolved via :class:`EscaperFactory` from
        ``options.target``.

        Args:
            connection: A DB-API connection, text escaper, callable or ``None``
                (see :func:`~slotql.connection.text_escaper_for`).
            options: Build options; defaults to ``BuildOptions()``.
        """
        options = options or BuildOptions()
        target = EscaperFactory.resolve(options.target)
        if target is None:
            raise EscaperConfigError(options.target, EscaperFactory.registered_targets())
        text_escaper = text_escaper_for(connection, target)
        return cls(EscaperFactory.create(target, text_escaper), options)

    @property
    def escaper(self) -> SQLEscaper:
        return self._ctx.escaper

    @property
    def options(self) -> BuildOptions:
        return self._ctx.options

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def skip() -> Skip:
        """Return the skip sentinel."""
        return SKIP

    def substitute(self, template: str, args: Sequence[Any] = ()) -> SubstitutedQuery:
        """Run the substitution pass only."""
        return self._substitutor.substitute(template, args)

    def build(self, template: str, args: Sequence[Any] = ()) -> str:
        """Build the final SQL for ``template`` and ``args``.

        Args:
            template: Query template with ``?``, ``?d``, ``?f``, ``?#``, ``?a``
                placeholders and optional ``{...}`` blocks.
            args: One argument per placeholder, in textual order.  Pass
                :meth:`skip` to drop the enclosing block.

        Returns:
            Literal SQL.

        Raises:
            SlotQLError: (or subclass) on any template or argument error.
        """
        try:
            substituted = self._substitutor.substitute(template, args)
            sql, dropped = resolve_blocks(substituted)
        except SlotQLError as exc:
            logger.debug(
                "query_build_failed",
                dialect=self._ctx.escaper.dialect_name,
                error=exc.code,
            )
            raise

        logger.debug(
            "query_built",
            dialect=self._ctx.escaper.dialect_name,
            placeholders=substituted.placeholders,
            skipped=substituted.skipped,
            dropped_blocks=dropped,
        )
        return sql
