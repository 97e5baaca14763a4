"""Seeded 32-bit pseudo-random stream used for weight initialisation."""

from __future__ import annotations

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_SCALE = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class Mulberry32:
    """Mulberry32 generator producing floats in ``[0, 1)``.

    The state is a single unsigned 32-bit word initialised from ``seed``
    modulo ``2**32``. Every draw adds a fixed odd increment to the state and
    hashes it with a multiply/xor-shift mix, so two generators built from the
    same seed emit the same stream bit for bit. Instances own their state;
    nothing is shared between them.
    """

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self._state = self.seed & _MASK

    @property
    def state(self) -> int:
        return self._state

    def next_uint32(self) -> int:
        self._state = (self._state + _INCREMENT) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return (t ^ (t >> 14)) & _MASK

    def random(self) -> float:
        return self.next_uint32() / _SCALE

    __call__ = random


__all__ = ["Mulberry32"]
