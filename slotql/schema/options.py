"""Pydantic model for the BuildOptions that configure a QueryBuilder.

Options are plain data: the dialect target the escaper renders for, and the
few places where the engine can be stricter or looser about its input.
Create them directly or compose them through the builder::

    from slotql import BuildOptions

    options = BuildOptions(target="postgres")

    options = (
        BuildOptions.builder("mysql")
        .allow_extra_args()
        .reject_empty_arrays()
        .build()
    )
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

#: Built-in escaper targets.  Further targets can be registered with
#: :class:`~slotql.compile.registry.EscaperFactory`.
DialectTarget = Literal["mysql", "postgres", "sqlite"]


class BuildOptions(BaseModel):
    """Configuration for a single :class:`~slotql.compile.builder.QueryBuilder`.

    Attributes:
        target: Backend whose identifier and literal rules are used.
        allow_extra_args: Ignore arguments left over after the last
            placeholder instead of failing with
            :class:`~slotql.errors.ArgumentCountMismatchError`.
        allow_empty_arrays: Render an empty ``?a`` / ``?#`` collection as an
            empty string.  When ``False`` an
            :class:`~slotql.errors.EmptyArrayError` is raised instead.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: DialectTarget | str = "mysql"
    allow_extra_args: bool = False
    allow_empty_arrays: bool = True

    @classmethod
    def builder(cls, target: DialectTarget | str = "mysql") -> "BuildOptionsBuilder":
        """Return a :class:`BuildOptionsBuilder` for ``target``."""
        return BuildOptionsBuilder(target)


class BuildOptionsBuilder:
    """Fluent builder for :class:`BuildOptions`.

    Always obtained via :meth:`BuildOptions.builder`.
    """

    def __init__(self, target: DialectTarget | str) -> None:
        self._target = target
        self._allow_extra_args = False
        self._allow_empty_arrays = True

    def allow_extra_args(self) -> "BuildOptionsBuilder":
        """Tolerate more arguments than placeholders."""
        self._allow_extra_args = True
        return self

    def reject_empty_arrays(self) -> "BuildOptionsBuilder":
        """Fail on empty collections passed to ``?a`` or ``?#``."""
        self._allow_empty_arrays = False
        return self

    def build(self) -> BuildOptions:
        return BuildOptions(
            target=self._target,
            allow_extra_args=self._allow_extra_args,
            allow_empty_arrays=self._allow_empty_arrays,
        )
