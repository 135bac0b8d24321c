"""Exception hierarchy for resultsafe.

These are raised for programming defects and misconfiguration only.
Operational failures flow through ``Result`` values instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resultsafe.result import ErrorDetails


class ResultSafeError(Exception):
    """Base exception for all resultsafe errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ContractViolationError(ResultSafeError, AssertionError):
    """A Result was constructed in a state that breaks its invariant.

    Also an ``AssertionError``: this signals a bug at the call site, not a
    recoverable condition.
    """


class UnwrapError(ResultSafeError):
    """The payload of a failed Result was read."""

    def __init__(
        self,
        message: str,
        *,
        error: ErrorDetails,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.error = error


class ConfigurationError(ResultSafeError):
    """Settings validation or resolution failed."""
