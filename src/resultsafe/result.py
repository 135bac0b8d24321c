"""Result type for exception-free control flow.

A ``Result`` is either a success carrying a payload or a failure carrying an
``ErrorDetails``; never both, never neither. Invalid combinations are
rejected at construction time.

Usage:
    def divide(a: int, b: int) -> Result[float]:
        if b == 0:
            return Result.failure(ErrorDetails.EXECUTION_ERROR)
        return Result.success(a / b)

    result = divide(10, 2)
    if result.is_success:
        print(result.value)
    else:
        print(result.error)
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import ClassVar

from resultsafe.errors import ContractViolationError, UnwrapError

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ErrorDetails:
    """Immutable ``(code, message)`` pair identifying a failure category.

    Equality and hashing use ``code`` and ``message`` only. ``cause`` holds
    the originating exception when one exists.

    Attributes:
        code: Stable machine-readable identifier, e.g. ``"Error.NotAvailable"``.
        message: Human-readable description.
        cause: Exception this descriptor was stamped from, if any.
    """

    code: str
    message: str
    cause: BaseException | None = field(default=None, compare=False, repr=False)

    NONE: ClassVar[ErrorDetails]
    NULL_VALUE: ClassVar[ErrorDetails]
    TOO_MANY_RESULTS: ClassVar[ErrorDetails]
    NOT_AVAILABLE: ClassVar[ErrorDetails]
    EXECUTION_ERROR: ClassVar[ErrorDetails]

    def __post_init__(self) -> None:
        """Reserve the empty code for the "no error" sentinel."""
        if not self.code and self.message:
            raise ValueError("ErrorDetails.code must be non-empty")

    @property
    def is_none(self) -> bool:
        """True for the "no error" sentinel."""
        return not self.code and not self.message

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        qualified: bool = False,
        keep_cause: bool = True,
    ) -> ErrorDetails:
        """Stamp an exception's type name and message into a descriptor."""
        exc_type = type(exc)
        code = (
            f"{exc_type.__module__}.{exc_type.__qualname__}"
            if qualified
            else exc_type.__name__
        )
        return cls(code, _exception_message(exc), exc if keep_cause else None)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" if self.message else self.code


ErrorDetails.NONE = ErrorDetails("", "")
ErrorDetails.NULL_VALUE = ErrorDetails(
    "Error.NullValue", "A null value was provided."
)
ErrorDetails.TOO_MANY_RESULTS = ErrorDetails(
    "Error.TooManyResults", "Multiple results were found when only one was expected."
)
ErrorDetails.NOT_AVAILABLE = ErrorDetails(
    "Error.NotAvailable", "The requested resource is not available."
)
ErrorDetails.EXECUTION_ERROR = ErrorDetails(
    "Error.ExecutionError", "An error occurred during execution."
)


@dataclass(frozen=True, slots=True)
class Unit:
    """Payload for results of operations that return nothing."""

    def __repr__(self) -> str:
        return "UNIT"


UNIT = Unit()


@dataclass(frozen=True, slots=True, repr=False)
class Result[T]:
    """Outcome of an operation: a payload on success, an error on failure.

    Build instances with ``Result.success`` or ``Result.failure``.
    """

    is_success: bool
    _value: T | None
    error: ErrorDetails

    def __post_init__(self) -> None:
        """Enforce ``is_success`` <=> ``error`` is the "no error" sentinel."""
        if not isinstance(self.error, ErrorDetails):
            raise TypeError(
                f"Result.error must be ErrorDetails, got {type(self.error).__name__}"
            )
        if self.is_success and not self.error.is_none:
            _violation(
                "Success result must not have an error.",
                hint="Use Result.failure(error) to report an error.",
            )
        if not self.is_success and self.error.is_none:
            _violation(
                "Failure result must have an error.",
                hint="Pass a catalog entry such as ErrorDetails.EXECUTION_ERROR "
                "or build an ErrorDetails(code, message).",
            )

    @classmethod
    def success(cls, value: T) -> Result[T]:
        """Wrap ``value`` as a successful outcome."""
        return cls(True, value, ErrorDetails.NONE)

    @classmethod
    def failure(cls, error: ErrorDetails) -> Result[T]:
        """Wrap ``error`` as a failed outcome.

        Raises:
            ContractViolationError: If ``error`` is ``ErrorDetails.NONE``.
        """
        return cls(False, None, error)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def value(self) -> T:
        """The success payload.

        Raises:
            UnwrapError: If this result is a failure.
        """
        if not self.is_success:
            raise UnwrapError(
                f"Cannot read the value of a failed result ({self.error})",
                error=self.error,
                hint="Check is_success first, or use value_or(default).",
            )
        return self._value  # type: ignore[return-value]

    def value_or[D](self, default: D) -> T | D:
        """Return the payload on success, otherwise ``default``."""
        return self._value if self.is_success else default  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self.error!r})"


def _exception_message(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        # __str__ itself raised; fall back to the bare type name
        return f"<unprintable {type(exc).__name__}>"


def _violation(message: str, *, hint: str) -> None:
    log.error(message)
    raise ContractViolationError(message, hint=hint)
