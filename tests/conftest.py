"""Pytest configuration and fixtures.

Provides environment isolation and shared test doubles. Fixtures here are
autouse unless noted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import pytest

from resultsafe import config as rs_config
from resultsafe.safety import ManagedHandle

# =============================================================================
# Test Doubles
# =============================================================================


class Body(ManagedHandle):
    """Host object double with a little state to act on."""

    __slots__ = ("pushes",)

    def __init__(self, name: str = "body") -> None:
        super().__init__(name)
        self.pushes = 0

    def push(self) -> int:
        self.pushes += 1
        return self.pushes


@dataclass
class CountingCall:
    """Zero-argument callable that records invocations.

    Returns ``result`` or raises ``exc`` when called.
    """

    result: Any = None
    exc: BaseException | None = None
    calls: int = 0
    seen: list[Any] = field(default_factory=list)

    def __call__(self, *args: Any) -> Any:
        self.calls += 1
        self.seen.extend(args)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture
def body() -> Body:
    """A live host handle."""
    return Body()


@pytest.fixture
def destroyed_body() -> Body:
    """A host handle that has been destroyed but is still referenced."""
    b = Body("ghost")
    b.destroy()
    return b


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(rs_config, "load_dotenv", lambda *_args, **_kwargs: False)


@pytest.fixture(autouse=True)
def isolate_settings_env(monkeypatch):
    """Clear RESULTSAFE_* variables and the cached settings for each test."""
    for key in list(os.environ.keys()):
        if key.startswith(rs_config.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    rs_config._process_settings.cache_clear()
    yield
    rs_config._process_settings.cache_clear()
