"""A small named-value store with typed retrieval."""

from __future__ import annotations

from typing import Any, Optional, TypeVar

T = TypeVar("T")


class Properties:
    """Values stored by name."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    @property
    def values(self) -> dict[str, Any]:
        return self._values

    def put(self, name: str, value: Any) -> None:
        self._values[name] = value

    def get(self, name: str, kind: type[T]) -> Optional[T]:
        """Return the value as ``kind``, or None if absent or not convertible."""
        if name not in self._values:
            return None
        value = self._values[name]
        if isinstance(value, kind):
            return value
        try:
            return kind(value)  # type: ignore[call-arg]
        except (TypeError, ValueError):
            return None