"""Seedable Mersenne Twister random number generator with convenience helpers."""

from __future__ import annotations

import random
import secrets
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

_STATE_SIZE = 624
_MASK32 = 0xFFFFFFFF


def _genrand_state(seed: int) -> list[int]:
    words = [seed & _MASK32]
    for i in range(1, _STATE_SIZE):
        prev = words[-1]
        words.append((1812433253 * (prev ^ (prev >> 30)) + i) & _MASK32)
    return words


class RNG:
    """A 32-bit Mersenne Twister seeded the way ``mt19937`` is."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._gen = random.Random()
        self.current_seed = 0
        self.seed(seed)

    def seed(self, value: Optional[int] = None) -> None:
        """Seed with ``value``, or with a fresh random seed when it is None."""
        if value is None:
            value = secrets.randbits(32)
        value &= _MASK32
        self._gen.setstate((3, tuple(_genrand_state(value)) + (_STATE_SIZE,), None))
        self.current_seed = value

    def get_state(self) -> str:
        """Serialise the generator: 624 state words followed by the position."""
        _, words, _ = self._gen.getstate()
        return " ".join(str(w) for w in words)

    def set_state(self, state: str) -> None:
        """Restore a state produced by :meth:`get_state`."""
        try:
            words = [int(tok) for tok in state.split()]
        except ValueError as exc:
            raise ValueError("malformed generator state") from exc
        if len(words) != _STATE_SIZE + 1:
            raise ValueError("malformed generator state")
        *body, index = words
        if any(not 0 <= w <= _MASK32 for w in body) or not 0 <= index <= _STATE_SIZE:
            raise ValueError("malformed generator state")
        self._gen.setstate((3, tuple(words), None))

    def rand_range_int(self, low: int, high: int) -> int:
        """A random integer in ``[low, high]``, both ends included."""
        if low > high:
            raise ValueError(f"empty range: {low} > {high}")
        return self._gen.randint(low, high)

    def rand_range_real(self, low: float, high: float) -> float:
        """A random float between ``low`` and ``high``."""
        if low > high:
            raise ValueError(f"empty range: {low} > {high}")
        return self._gen.uniform(low, high)

    def rand_bool(self) -> bool:
        return self.rand_range_int(0, 1) == 1

    def choice(self, items: Sequence[T]) -> T:
        """A random element of ``items``; raises IndexError when it is empty."""
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.rand_range_int(0, len(items) - 1)]