"""resultsafe: Result values, fault-to-Result conversion and null-safety helpers.

Public API:
    - Result, ErrorDetails, Unit/UNIT: outcome types and the error catalog
    - attempt(), attempt_action(): run a callable, capture any fault
    - to_result(), to_unit_result(): await an operation, capture any fault
    - catching: decorator form of the above
    - is_safe(), safe(), safe_invoke(): normalize destroyed handles to None
    - settings_scope(): adjust helper settings for a block of code
"""

from __future__ import annotations

import logging

from resultsafe.config import Settings, current_settings, resolve_settings, settings_scope
from resultsafe.errors import (
    ConfigurationError,
    ContractViolationError,
    ResultSafeError,
    UnwrapError,
)
from resultsafe.result import UNIT, ErrorDetails, Result, Unit
from resultsafe.safety import (
    Liveness,
    ManagedHandle,
    is_safe,
    liveness,
    safe,
    safe_invoke,
)
from resultsafe.trycatch import (
    attempt,
    attempt_action,
    catching,
    to_result,
    to_unit_result,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("resultsafe")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("resultsafe").addHandler(logging.NullHandler())

__all__ = [
    "UNIT",
    "ConfigurationError",
    "ContractViolationError",
    "ErrorDetails",
    "Liveness",
    "ManagedHandle",
    "Result",
    "ResultSafeError",
    "Settings",
    "Unit",
    "UnwrapError",
    "attempt",
    "attempt_action",
    "catching",
    "current_settings",
    "is_safe",
    "liveness",
    "resolve_settings",
    "safe",
    "safe_invoke",
    "settings_scope",
    "to_result",
    "to_unit_result",
]
