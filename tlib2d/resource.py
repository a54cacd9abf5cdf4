"""A bounded quantity such as health or mana."""

from __future__ import annotations

from typing import Optional


class Resource:
    """A value kept clamped between a minimum and a maximum."""

    def __init__(
        self, minimum: float = 0, maximum: float = 10, value: Optional[float] = None
    ) -> None:
        if maximum < minimum:
            raise ValueError(f"maximum {maximum} is below minimum {minimum}")
        self.minimum = minimum
        self.maximum = maximum
        self.value = maximum
        self.set(maximum if value is None else value)

    def __repr__(self) -> str:
        return f"Resource(minimum={self.minimum!r}, maximum={self.maximum!r}, value={self.value!r})"

    def set_max_and_value(self, v: float) -> None:
        self.set_max(v)
        self.set(v)

    def set_min(self, v: float) -> None:
        self.minimum = v
        self.set(self.value)

    def set_max(self, v: float) -> None:
        self.maximum = v
        self.set(self.value)

    def set(self, v: float) -> None:
        self.value = min(max(v, self.minimum), self.maximum)

    def add(self, v: float) -> None:
        self.set(self.value + v)

    def reduce(self, v: float) -> None:
        self.set(self.value - v)

    def full(self) -> bool:
        return self.value == self.maximum

    def depleted(self) -> bool:
        return self.value == self.minimum