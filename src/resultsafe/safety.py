"""Null-safety for handles whose destroyed state hides behind a live reference.

Engine-managed objects can be destroyed while Python still holds a reference
to them. Such a handle is not ``None`` by identity, but its type overrides
``==`` so that it compares equal to ``None`` ("fake null"). The helpers here
classify a handle into one of three states and collapse the result into a
plain optional: the handle itself, or a genuine ``None``.

    if (body := safe(scene.find("player"))) is not None:
        body.apply_force(...)
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


class Liveness(str, Enum):
    """Lifetime state of a handle."""

    LIVE = "live"
    DESTROYED = "destroyed"
    ABSENT = "absent"


def liveness(handle: object) -> Liveness:
    """Classify ``handle`` as live, destroyed or absent.

    Destroyed handles are detected through the type's own equality override,
    never through identity, which cannot see them.
    """
    if handle is None:
        return Liveness.ABSENT
    # Only a literal True counts; array-likes return elementwise results.
    if (handle == None) is True:  # noqa: E711
        return Liveness.DESTROYED
    return Liveness.LIVE


def is_safe(handle: object) -> bool:
    """True iff ``handle`` is neither ``None`` nor destroyed."""
    return liveness(handle) is Liveness.LIVE


def safe[H](handle: H | None) -> H | None:
    """Return ``handle`` if it is safe to use, otherwise a genuine ``None``."""
    return handle if is_safe(handle) else None


def safe_invoke[H](handle: H | None, action: Callable[[H], object]) -> None:
    """Call ``action(handle)`` once if ``handle`` is safe; otherwise do nothing."""
    if is_safe(handle):
        action(handle)  # type: ignore[arg-type]


class ManagedHandle:
    """Base for objects whose lifetime is owned by an external host.

    After ``destroy()`` the instance keeps existing as a Python object but
    compares equal to ``None`` and is falsy, mirroring hosts that invalidate
    objects out from under their references.
    """

    __slots__ = ("_destroyed", "name")

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._destroyed = False

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        """Mark the handle as destroyed. Idempotent."""
        self._destroyed = True

    def __eq__(self, other: Any) -> bool:
        if other is None:
            return self._destroyed
        if not isinstance(other, ManagedHandle):
            return NotImplemented
        return self is other

    __hash__ = object.__hash__

    def __bool__(self) -> bool:
        return not self._destroyed

    def __repr__(self) -> str:
        state = "destroyed" if self._destroyed else "live"
        return f"{type(self).__name__}({self.name!r}, {state})"
