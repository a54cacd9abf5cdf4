"""A tagged value holder with exact-type queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Type, TypeVar

T = TypeVar("T")


def is_type(value: Any, kind: type) -> bool:
    """True if ``value`` is exactly of type ``kind`` (subclasses do not count)."""
    return type(value) is kind


def try_get(value: Any, kind: Type[T]) -> Optional[T]:
    """Return ``value`` if it is exactly of type ``kind``, else None."""
    return value if is_type(value, kind) else None


@dataclass
class Variant:
    """Holds one value and answers which alternative it currently is."""

    value: Any

    def is_(self, kind: type) -> bool:
        return is_type(self.value, kind)

    def get(self, kind: Type[T]) -> T:
        """Return the held value; raises TypeError if it is not of ``kind``."""
        if not self.is_(kind):
            raise TypeError(
                f"variant holds {type(self.value).__name__}, not {kind.__name__}"
            )
        return self.value

    def try_get(self, kind: Type[T]) -> Optional[T]:
        return try_get(self.value, kind)