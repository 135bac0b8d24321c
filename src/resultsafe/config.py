"""Settings for the conversion helpers.

Resolution precedence is defaults < environment (``RESULTSAFE_*``) <
programmatic overrides. Resolved settings are frozen Pydantic models; an
ambient scope lets callers adjust them for a block of code without touching
process-wide state.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from resultsafe.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

ENV_PREFIX = "RESULTSAFE_"

_LEVEL_NAMES = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class Settings(BaseModel):
    """Schema, defaults and validation for resultsafe settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    #: Log every fault a conversion helper catches.
    log_caught_faults: bool = Field(default=True)
    #: Level used when logging caught faults.
    fault_log_level: str = Field(default="DEBUG")
    #: Attach the caught exception to ``ErrorDetails.cause``.
    keep_cause: bool = Field(default=True)
    #: Stamp ``module.QualName`` instead of the bare exception type name.
    qualified_codes: bool = Field(default=False)

    @field_validator("fault_log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept level names in any case."""
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in _LEVEL_NAMES:
                raise ValueError(f"unknown log level {v!r}")
        return v

    @property
    def fault_log_levelno(self) -> int:
        return logging.getLevelNamesMapping()[self.fault_log_level]


# --- Loading ---


def _coerce_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def load_env() -> dict[str, Any]:
    """Read ``RESULTSAFE_*`` variables, coercing booleans by schema type.

    Unknown keys are kept so validation can reject them with a clear message.
    """
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        info = Settings.model_fields.get(field_name)
        if info is not None and info.annotation is bool:
            config[field_name] = _coerce_bool(value)
        else:
            config[field_name] = value
    return config


_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    load_dotenv(find_dotenv(usecwd=True))
    _DOTENV_LOADED = True


# --- Resolution ---


def resolve_settings(overrides: Mapping[str, Any] | None = None) -> Settings:
    """Resolve settings from defaults, environment and ``overrides``.

    Raises:
        ConfigurationError: If the merged values fail validation.
    """
    _load_dotenv_once()
    merged = {**load_env(), **(overrides or {})}
    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "")
        # Remove "Value error, " prefix if present (Pydantic standard wrapper)
        if msg.startswith("Value error, "):
            msg = msg[13:]
        raise ConfigurationError(
            f"Settings validation failed for {loc or 'settings'}: {msg}",
            hint=f"Check {ENV_PREFIX}* environment variables and overrides. "
            f"Known fields: {', '.join(sorted(Settings.model_fields))}.",
        ) from e
    log.debug("Resolved settings: %s", settings)
    return settings


@cache
def _process_settings() -> Settings:
    return resolve_settings()


def reload_settings() -> Settings:
    """Drop the cached process-wide settings and resolve them again."""
    _process_settings.cache_clear()
    return _process_settings()


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[Settings | None] = contextvars.ContextVar(
    "resultsafe_settings", default=None
)


def current_settings() -> Settings:
    """Return the ambient settings, or the process-wide resolved settings."""
    ambient = _AMBIENT.get()
    return ambient if ambient is not None else _process_settings()


@contextmanager
def settings_scope(
    settings_or_overrides: Settings | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Generator[Settings]:
    """Run a block with adjusted settings.

    Overrides apply on top of the currently active settings. The scope is
    context-local, so concurrent tasks and threads do not observe it.

    Example:
        with settings_scope(log_caught_faults=False):
            result = attempt(parse)
    """
    if isinstance(settings_or_overrides, Settings):
        base = settings_or_overrides.model_dump()
    else:
        base = {**current_settings().model_dump(), **(settings_or_overrides or {})}
    try:
        settings = Settings.model_validate({**base, **overrides})
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid settings override: {e.errors()[0].get('msg', '')}",
            hint=f"Known fields: {', '.join(sorted(Settings.model_fields))}.",
        ) from e
    token = _AMBIENT.set(settings)
    try:
        yield settings
    finally:
        _AMBIENT.reset(token)
