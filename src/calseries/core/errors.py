"""Core error types with rich context.

Two failure kinds cover the whole library: malformed input and
positional access on an empty series. Absence of a date in a lookup is
never an error.
"""

from __future__ import annotations

from typing import Any


class CalSeriesError(Exception):
    """Base exception with rich context.

    Attributes:
        error_code: Unique error code string for programmatic handling
        message: Human-readable error message
        context: Additional context data for debugging
        fix_hint: Actionable hint for resolving the error
    """

    error_code: str = "E_UNKNOWN"
    fix_hint: str = ""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        fix_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if fix_hint is not None:
            self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f"(context: {self.context})")
        if self.fix_hint:
            parts.append(f"[hint: {self.fix_hint}]")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Return a structured dict with code, message, hint and context."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "fix_hint": self.fix_hint,
            "context": self.context,
        }


class EInvalidArgument(CalSeriesError, ValueError):
    """Malformed input: missing dates or values, mismatched lengths, bad bounds."""

    error_code = "E_INVALID_ARGUMENT"


class ENotFound(CalSeriesError, LookupError):
    """Positional access (earliest/latest) on an empty series."""

    error_code = "E_NOT_FOUND"
    fix_hint = "Check series.is_empty before reading earliest/latest points"


# Error registry for lookup
ERROR_REGISTRY: dict[str, type[CalSeriesError]] = {
    "E_INVALID_ARGUMENT": EInvalidArgument,
    "E_NOT_FOUND": ENotFound,
}


def get_error_class(error_code: str) -> type[CalSeriesError]:
    """Get error class by code."""
    return ERROR_REGISTRY.get(error_code, CalSeriesError)
