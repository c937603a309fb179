"""slotQL schema models: argument variants, skip sentinel, build options."""
from slotql.schema.options import BuildOptions, BuildOptionsBuilder, DialectTarget
from slotql.schema.values import (
    NULL,
    SKIP,
    SKIP_MARKER,
    ArgumentValue,
    BoolValue,
    FloatValue,
    IntValue,
    ListValue,
    MappingValue,
    NullValue,
    Skip,
    TextValue,
    classify,
    is_skip,
    skip,
)

__all__ = [
    "BuildOptions",
    "BuildOptionsBuilder",
    "DialectTarget",
    "NULL",
    "SKIP",
    "SKIP_MARKER",
    "ArgumentValue",
    "BoolValue",
    "FloatValue",
    "IntValue",
    "ListValue",
    "MappingValue",
    "NullValue",
    "Skip",
    "TextValue",
    "classify",
    "is_skip",
    "skip",
]
