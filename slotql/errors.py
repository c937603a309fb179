"""Custom exception hierarchy for slotQL.

All public errors inherit from SlotQLError so callers can catch the base
class for any slotQL-specific failure.
"""
from __future__ import annotations

from typing import Any


class SlotQLError(Exception):
    """Base exception for all slotQL errors.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. ``INVALID_SPECIFIER``).
        details: Extra context describing the failure.
    """

    code: str = "SLOTQL_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class InvalidSpecifierError(SlotQLError):
    """Raised when an unrecognised letter follows a ``?`` placeholder."""

    def __init__(self, specifier: str, position: int | None = None) -> None:
        super().__init__(
            f"Invalid placeholder specifier '?{specifier}'"
            + (f" at position {position}." if position is not None else "."),
            code="INVALID_SPECIFIER",
            details={"specifier": specifier, "position": position},
        )
        self.specifier = specifier
        self.position = position


class UnsupportedValueTypeError(SlotQLError):
    """Raised when an argument's runtime kind cannot be rendered as SQL."""

    def __init__(self, kind: str, reason: str | None = None) -> None:
        message = f"Unsupported value type: {kind}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message + ".",
            code="UNSUPPORTED_VALUE_TYPE",
            details={"kind": kind},
        )
        self.kind = kind


class ArgumentCountMismatchError(SlotQLError):
    """Raised when the number of arguments does not match the placeholders."""

    def __init__(self, expected: int, supplied: int) -> None:
        super().__init__(
            f"Template has {expected} placeholder(s) but {supplied} argument(s) were supplied.",
            code="ARGUMENT_COUNT_MISMATCH",
            details={"expected": expected, "supplied": supplied},
        )
        self.expected = expected
        self.supplied = supplied


class ArgumentCoercionError(SlotQLError):
    """Raised when a ``?d`` / ``?f`` argument cannot be cast to a number."""

    def __init__(self, specifier: str, kind: str) -> None:
        target = "integer" if specifier == "d" else "float"
        super().__init__(
            f"Cannot coerce {kind} argument to {target} for '?{specifier}'.",
            code="ARGUMENT_COERCION",
            details={"specifier": specifier, "kind": kind},
        )
        self.specifier = specifier
        self.kind = kind


class EmptyArrayError(SlotQLError):
    """Raised when an empty collection is passed and empty arrays are disabled."""

    def __init__(self, specifier: str) -> None:
        super().__init__(
            f"Empty collection passed to '?{specifier}'.",
            code="EMPTY_ARRAY",
            details={"specifier": specifier},
        )
        self.specifier = specifier


class TemplateSyntaxError(SlotQLError):
    """Raised when conditional-block braces in a template are malformed.

    Args:
        message: Human-readable description.
        position: Offset of the offending character in the scanned text.
    """

    code = "TEMPLATE_SYNTAX"

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message, details={"position": position})
        self.position = position


class NestedBlockError(TemplateSyntaxError):
    """Raised when a ``{`` opens inside an already open conditional block."""

    code = "NESTED_BLOCK"

    def __init__(self, position: int) -> None:
        super().__init__(
            f"Nested conditional block at position {position}; blocks cannot be nested.",
            position,
        )


class UnbalancedBraceError(TemplateSyntaxError):
    """Raised for a ``}`` without an open block or a block left unclosed."""

    code = "UNBALANCED_BRACE"

    def __init__(self, brace: str, position: int) -> None:
        if brace == "{":
            message = f"Conditional block opened at position {position} is never closed."
        else:
            message = f"Closing brace at position {position} has no matching '{{'."
        super().__init__(message, position)
        self.brace = brace


class SkipOutsideBlockError(TemplateSyntaxError):
    """Raised when a skipped placeholder is not inside a conditional block."""

    code = "SKIP_OUTSIDE_BLOCK"

    def __init__(self, position: int) -> None:
        super().__init__(
            f"skip() used for a placeholder outside a conditional block (position {position}).",
            position,
        )


class EscaperConfigError(SlotQLError):
    """Raised when no escaper is registered for the requested dialect target."""

    def __init__(self, target: str, registered: list[str]) -> None:
        super().__init__(
            f"Unsupported dialect target: '{target}'. Registered targets: {registered}.",
            code="ESCAPER_CONFIG",
            details={"target": target, "registered": registered},
        )
        self.target = target
        self.registered = registered


class UnsupportedConnectionError(SlotQLError):
    """Raised when a connection object offers no string-escaping routine."""

    def __init__(self, kind: str) -> None:
        super().__init__(
            f"Connection of type {kind} has no escape_string() or real_escape_string().",
            code="UNSUPPORTED_CONNECTION",
            details={"kind": kind},
        )
        self.kind = kind
