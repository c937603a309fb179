"""Typed argument models and the skip sentinel.

Arguments arrive as plain Python objects.  :func:`classify` maps each one
onto a closed union of pydantic models exactly once, at the API boundary,
so the escapers can match on ``kind`` exhaustively instead of probing
runtime types at every step.

Usage::

    from slotql.schema.values import IntValue, ListValue, classify

    arg = classify([1, 2])
    assert isinstance(arg, ListValue)
    assert arg.items == (IntValue(value=1), IntValue(value=2))
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

from slotql.errors import UnsupportedValueTypeError

# ---------------------------------------------------------------------------
# Skip sentinel
# ---------------------------------------------------------------------------


class Skip(Enum):
    """The single skip sentinel.

    Passing :data:`SKIP` as an argument removes the conditional block that
    encloses its placeholder.  Membership is checked by identity, so text
    arguments are never mistaken for the sentinel.
    """

    SKIP = "__SKIP__"

    def __repr__(self) -> str:
        return "skip()"


#: The canonical skip sentinel returned by :func:`skip`.
SKIP = Skip.SKIP

#: Text standing in for a skipped placeholder in an intermediate query string.
SKIP_MARKER: str = SKIP.value


def skip() -> Skip:
    """Return the skip sentinel."""
    return SKIP


def is_skip(value: Any) -> bool:
    """Return ``True`` if ``value`` is the skip sentinel."""
    return value is SKIP


# ---------------------------------------------------------------------------
# Argument variants
# ---------------------------------------------------------------------------

_FROZEN = ConfigDict(extra="forbid", frozen=True)


class NullValue(BaseModel):
    """SQL ``NULL`` (Python ``None``)."""

    model_config = _FROZEN

    kind: Literal["null"] = "null"


class BoolValue(BaseModel):
    """A boolean flag."""

    model_config = _FROZEN

    kind: Literal["bool"] = "bool"
    value: StrictBool


class IntValue(BaseModel):
    """An integer."""

    model_config = _FROZEN

    kind: Literal["int"] = "int"
    value: StrictInt


class FloatValue(BaseModel):
    """A floating point number."""

    model_config = _FROZEN

    kind: Literal["float"] = "float"
    value: StrictFloat


class TextValue(BaseModel):
    """A text string, escaped by the connection before quoting."""

    model_config = _FROZEN

    kind: Literal["text"] = "text"
    value: StrictStr


class ListValue(BaseModel):
    """A sequential collection (``list`` / ``tuple``)."""

    model_config = _FROZEN

    kind: Literal["list"] = "list"
    items: tuple[ArgumentValue, ...] = ()


class MappingValue(BaseModel):
    """A keyed collection; keys are rendered as identifiers."""

    model_config = _FROZEN

    kind: Literal["mapping"] = "mapping"
    items: tuple[tuple[StrictStr, ArgumentValue], ...] = ()


ArgumentValue = Annotated[
    NullValue | BoolValue | IntValue | FloatValue | TextValue | ListValue | MappingValue,
    Field(discriminator="kind"),
]

# Resolve forward references in recursive types.
ListValue.model_rebuild()
MappingValue.model_rebuild()

_VARIANTS = (NullValue, BoolValue, IntValue, FloatValue, TextValue, ListValue, MappingValue)

#: Shared instance for ``None``; the models are frozen.
NULL = NullValue()


def kind_name(value: Any) -> str:
    """Return the name used in error messages for ``value``'s runtime kind."""
    if value is None:
        return "NoneType"
    if isinstance(value, Skip):
        return "Skip"
    return type(value).__name__


def classify(value: Any) -> ArgumentValue:
    """Map a Python object onto its :data:`ArgumentValue` variant.

    ``bool`` is tested before ``int`` because it is an ``int`` subclass.
    Subclasses of ``str``, ``int`` and ``float`` (``StrEnum`` members, for
    example) are reduced to their plain value, never their ``__str__``.
    Collections are classified recursively.  Already-classified values are
    returned unchanged.

    Args:
        value: The raw argument.

    Returns:
        The matching variant model.

    Raises:
        UnsupportedValueTypeError: If ``value`` (or anything nested inside
            it) is not null, bool, int, float, text, list/tuple or mapping.
    """
    if value is None:
        return NULL
    if isinstance(value, _VARIANTS):
        return value
    if isinstance(value, bool):
        return BoolValue(value=value)
    if isinstance(value, int):
        return IntValue(value=int.__int__(value))
    if isinstance(value, float):
        return FloatValue(value=float.__float__(value))
    if isinstance(value, str):
        return TextValue(value=str.__str__(value))
    if isinstance(value, Mapping):
        pairs = []
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedValueTypeError(
                    kind_name(key), reason="mapping keys must be strings"
                )
            pairs.append((str.__str__(key), classify(item)))
        return MappingValue(items=tuple(pairs))
    if isinstance(value, (list, tuple)):
        return ListValue(items=tuple(classify(item) for item in value))
    raise UnsupportedValueTypeError(kind_name(value))
