"""Dialect target → escaper class lookup.

Targets are matched case-insensitively and may carry aliases, so driver and
SQLAlchemy dialect names (``postgresql``, ``mariadb``) resolve to the same
escaper as the canonical target::

    @EscaperFactory.register("mssql", "sqlserver")
    class MSSQLEscaper(SQLEscaper):
        ...

    EscaperFactory.resolve("SQLServer")   # 'mssql'
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from slotql.compile.base import SQLEscaper
from slotql.connection import TextEscaper
from slotql.errors import EscaperConfigError


class EscaperFactory:
    """Registry of :class:`SQLEscaper` classes keyed by dialect target."""

    _escapers: ClassVar[dict[str, type[SQLEscaper]]] = {}
    _aliases: ClassVar[dict[str, str]] = {}

    @classmethod
    def register(
        cls, target: str, *aliases: str
    ) -> Callable[[type[SQLEscaper]], type[SQLEscaper]]:
        """Class decorator form of :meth:`register_class`."""

        def decorator(escaper_cls: type[SQLEscaper]) -> type[SQLEscaper]:
            cls.register_class(target, escaper_cls, *aliases)
            return escaper_cls

        return decorator

    @classmethod
    def register_class(
        cls, target: str, escaper_cls: type[SQLEscaper], *aliases: str
    ) -> None:
        """Register ``escaper_cls`` under ``target`` and any ``aliases``.

        Re-registering a target replaces its escaper class.
        """
        canonical = target.lower()
        cls._escapers[canonical] = escaper_cls
        for alias in aliases:
            cls._aliases[alias.lower()] = canonical

    @classmethod
    def resolve(cls, name: str) -> str | None:
        """Return the canonical target for ``name``, or ``None`` if unknown."""
        key = name.lower()
        key = cls._aliases.get(key, key)
        return key if key in cls._escapers else None

    @classmethod
    def create(cls, name: str, text_escaper: TextEscaper | None = None) -> SQLEscaper:
        """Instantiate the escaper registered for ``name``.

        Args:
            name: Dialect target or alias.
            text_escaper: The connection's text escaping capability; the
                dialect default is used when omitted.

        Raises:
            EscaperConfigError: If ``name`` resolves to no registered target.
        """
        target = cls.resolve(name)
        if target is None:
            raise EscaperConfigError(name, cls.registered_targets())
        return cls._escapers[target](text_escaper)

    @classmethod
    def registered_targets(cls) -> list[str]:
        return sorted(cls._escapers)
