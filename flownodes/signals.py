"""Lightweight signals connecting emitters to any number of callables."""

from __future__ import annotations

from typing import Any, Callable

Slot = Callable[..., Any]


class Signal:
    """Calls each connected slot, in connection order, on every emit."""

    def __init__(self) -> None:
        self._slots: list[Slot] = []

    def connect(self, slot: Slot) -> None:
        """Attach a callable; connecting it twice makes it run twice."""
        if not callable(slot):
            raise TypeError(f"slot must be callable, got {type(slot).__name__}")
        self._slots.append(slot)

    def disconnect(self, slot: Slot) -> bool:
        """Detach every occurrence of ``slot``; report whether any was found."""
        remaining = [s for s in self._slots if s != slot]
        removed = len(remaining) != len(self._slots)
        self._slots = remaining
        return removed

    def emit(self, *args: Any) -> None:
        """Invoke the slots with ``args``; slots may (dis)connect while running."""
        for slot in list(self._slots):
            slot(*args)

    def __contains__(self, slot: object) -> bool:
        return any(s == slot for s in self._slots)

    def __len__(self) -> int:
        return len(self._slots)