"""Turn raising and awaitable operations into ``Result`` values.

These helpers are an explicit opt-in boundary: any fault raised by the
wrapped operation comes back as a failed ``Result`` instead of propagating.
Calling the underlying operation directly still raises as usual.

A fault is any ``Exception`` plus ``asyncio.CancelledError``. Process exits
(``KeyboardInterrupt``, ``SystemExit``) are not faults of the operation and
pass through untouched.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from typing import TYPE_CHECKING, Any

from resultsafe.config import Settings, current_settings
from resultsafe.errors import ConfigurationError
from resultsafe.result import UNIT, ErrorDetails, Result, Unit

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    ErrorMap = Mapping[type[BaseException], ErrorDetails]

logger = logging.getLogger(__name__)

CAUGHT: tuple[type[BaseException], ...] = (Exception, asyncio.CancelledError)


# --- Synchronous ---


def attempt[T](func: Callable[[], T], *, errors: ErrorMap | None = None) -> Result[T]:
    """Call ``func`` once and capture its outcome.

    Args:
        func: Zero-argument callable to invoke.
        errors: Optional mapping from exception type to the descriptor to
            report for it. The most specific type along the exception's MRO
            wins; unmapped faults are stamped with their type name and message.

    Returns:
        ``Result.success(return_value)``, or ``Result.failure(details)`` if
        ``func`` raised.

    Example:
        result = attempt(lambda: int("42"))
        assert result.value == 42
    """
    try:
        value = func()
    except CAUGHT as exc:
        return Result.failure(_describe(exc, errors, func))
    return Result.success(value)


def attempt_action(
    func: Callable[[], object], *, errors: ErrorMap | None = None
) -> Result[Unit]:
    """Like ``attempt`` but discard the return value and succeed with ``UNIT``."""
    return _as_unit(attempt(func, errors=errors))


# --- Asynchronous ---


async def to_result[T](
    awaitable: Awaitable[T], *, errors: ErrorMap | None = None
) -> Result[T]:
    """Await ``awaitable`` once and capture its outcome.

    Cancellation is reported as a failure too, whether the awaited operation
    was cancelled or the awaiting task itself was. In the latter case the
    pending cancellation request is consumed so enclosing ``asyncio.timeout``
    and ``TaskGroup`` scopes see a normal exit.

    Example:
        result = await to_result(client.fetch(url))
        if result.is_failure:
            log.warning("fetch failed: %s", result.error)
    """
    try:
        value = await awaitable
    except asyncio.CancelledError as exc:
        _consume_cancellation()
        return Result.failure(_describe(exc, errors, awaitable))
    except Exception as exc:
        return Result.failure(_describe(exc, errors, awaitable))
    return Result.success(value)


async def to_unit_result(
    awaitable: Awaitable[object], *, errors: ErrorMap | None = None
) -> Result[Unit]:
    """Like ``to_result`` but discard the value and succeed with ``UNIT``."""
    return _as_unit(await to_result(awaitable, errors=errors))


# --- Decorator ---


def catching(
    func: Callable[..., Any] | None = None, *, errors: ErrorMap | None = None
) -> Any:
    """Decorate a function so every call returns a ``Result``.

    Coroutine functions are routed through ``to_result``; plain functions
    through ``attempt``. Usable bare or with arguments:

        @catching
        def parse(raw: str) -> int: ...

        @catching(errors={KeyError: ErrorDetails.NOT_AVAILABLE})
        async def lookup(key: str) -> Row: ...
    """

    def decorate(fn: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Result[Any]:
                # Call fn inside the awaited coroutine so argument errors are caught too
                @functools.wraps(fn)
                async def call() -> Any:
                    return await fn(*args, **kwargs)

                return await to_result(call(), errors=errors)

            return async_wrapper

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Result[Any]:
            return attempt(functools.partial(fn, *args, **kwargs), errors=errors)

        return wrapper

    return decorate if func is None else decorate(func)


# --- Internal helpers ---


def _settings_or_defaults() -> Settings:
    # A broken RESULTSAFE_* environment must not turn a caught fault into a raise
    try:
        return current_settings()
    except ConfigurationError as e:
        logger.warning("Ignoring invalid resultsafe settings, using defaults: %s", e)
        return Settings()


def _describe(exc: BaseException, errors: ErrorMap | None, op: object) -> ErrorDetails:
    settings = _settings_or_defaults()
    details = _lookup(exc, errors) or ErrorDetails.from_exception(
        exc,
        qualified=settings.qualified_codes,
        keep_cause=settings.keep_cause,
    )
    if settings.log_caught_faults:
        logger.log(
            settings.fault_log_levelno,
            "Caught %s from %s: %s",
            details.code,
            _op_name(op),
            details.message or "<no message>",
        )
    return details


def _lookup(exc: BaseException, errors: ErrorMap | None) -> ErrorDetails | None:
    if not errors:
        return None
    for klass in type(exc).__mro__:
        details = errors.get(klass)
        if details is not None:
            return details
    return None


def _as_unit(result: Result[Any]) -> Result[Unit]:
    if result.is_success:
        return Result.success(UNIT)
    return Result.failure(result.error)


def _consume_cancellation() -> None:
    task = asyncio.current_task()
    if task is not None and task.cancelling():
        task.uncancel()


def _op_name(op: object) -> str:
    if isinstance(op, functools.partial):
        op = op.func
    name = getattr(op, "__qualname__", None)
    return name if isinstance(name, str) else repr(op)
