"""End-to-end scenarios combining results, conversion and null-safety."""

from __future__ import annotations

import asyncio

import pytest

from resultsafe import (
    ErrorDetails,
    ManagedHandle,
    Result,
    attempt,
    safe,
    safe_invoke,
    to_result,
)

pytestmark = pytest.mark.integration


def divide(a: int, b: int) -> Result[int]:
    if b == 0:
        return Result.failure(ErrorDetails.EXECUTION_ERROR)
    return Result.success(a // b)


def test_divide_by_zero_reports_execution_error():
    result = divide(10, 0)

    assert result.is_failure
    assert result.error.code == "Error.ExecutionError"


def test_divide_by_two_succeeds():
    assert divide(10, 2) == Result.success(5)


def test_raw_operation_still_raises_outside_the_boundary():
    with pytest.raises(ZeroDivisionError):
        _ = 10 / 0

    assert attempt(lambda: 10 / 0).is_failure


class Door(ManagedHandle):
    __slots__ = ("opened",)

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.opened = False

    def open(self) -> None:
        self.opened = True


class Level:
    """Host double: doors can be destroyed while callers hold references."""

    def __init__(self) -> None:
        self.doors = {"front": Door("front"), "back": Door("back")}

    def find(self, name: str) -> Door:
        if name not in self.doors:
            raise KeyError(name)
        return self.doors[name]

    async def load_door(self, name: str) -> Door:
        await asyncio.sleep(0)
        return self.find(name)


def test_lookup_then_safe_use():
    level = Level()
    back = level.find("back")
    back.destroy()

    for name in ("front", "back"):
        door = attempt(lambda n=name: level.find(n)).value
        safe_invoke(door, Door.open)

    assert level.doors["front"].opened is True
    assert level.doors["back"].opened is False
    assert safe(back) is None


@pytest.mark.asyncio
async def test_async_lookup_with_catalog_mapping():
    level = Level()
    errors = {KeyError: ErrorDetails.NOT_AVAILABLE}

    found = await to_result(level.load_door("front"), errors=errors)
    missing = await to_result(level.load_door("cellar"), errors=errors)

    assert found.is_success
    assert safe(found.value) is level.doors["front"]
    assert missing.error is ErrorDetails.NOT_AVAILABLE


@pytest.mark.asyncio
async def test_timeout_around_to_result_yields_failure():
    async def slow() -> int:
        await asyncio.sleep(10)
        return 1

    async with asyncio.timeout(0.01):
        result = await to_result(slow())

    assert result.is_failure
    assert result.error.code == "CancelledError"
