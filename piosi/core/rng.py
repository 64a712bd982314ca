"""Deterministic 32-bit PRNG used by the seeded level generator."""

from collections.abc import Sequence
from typing import TypeVar

T_co = TypeVar("T_co")

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_DIVISOR = 4294967296.0


def _imul(a: int, b: int) -> int:
    """Low 32 bits of the product of two unsigned 32-bit integers."""
    return (a * b) & _MASK


class Mulberry32:
    """
    Mulberry32 generator.

    The output stream is a function of the seed and the number of draws only,
    so any two runs that draw in the same order see the same values on every
    platform.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK

    @property
    def state(self) -> int:
        """The current 32-bit internal state."""
        return self._state

    def next_uint32(self) -> int:
        """Advance the stream and return the next unsigned 32-bit value."""
        self._state = (self._state + _INCREMENT) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return (t ^ (t >> 14)) & _MASK

    def random(self) -> float:
        """Return the next floating point number in the range [0.0, 1.0)."""
        return self.next_uint32() / _DIVISOR

    def randrange(self, low: int, span: int) -> int:
        """Return floor(random() * span) + low, an integer in [low, low + span)."""
        if span <= 0:
            raise ValueError(f"span must be positive, got {span}")
        return int(self.random() * span) + low

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return an element of the non-empty sequence, consuming one draw."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[self.randrange(0, len(seq))]
