"""Deterministic random stream and hash helpers shared by every generator.

Not cryptographically secure. Every value is reproduced bit for bit across
runs, so changing any constant here changes every generated artifact.
"""
from __future__ import annotations

from typing import Optional

U32_MASK = 0xFFFFFFFF
ZERO_SEED_FALLBACK = 0xA341316C

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def to_u32(value: int) -> int:
    """Reinterpret ``value`` as an unsigned 32-bit integer."""

    return int(value) & U32_MASK


class DeterministicRng:
    """xorshift32 stream.

    A stream is a plain value owned by one caller. Use :meth:`copy` to hand an
    independent stream to another consumer instead of sharing this one.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        seed = to_u32(seed)
        self._state = seed if seed != 0 else ZERO_SEED_FALLBACK

    @property
    def state(self) -> int:
        return self._state

    def copy(self) -> "DeterministicRng":
        clone = DeterministicRng(self._state)
        return clone

    def next_u32(self) -> int:
        x = self._state
        x ^= (x << 13) & U32_MASK
        x ^= x >> 17
        x ^= (x << 5) & U32_MASK
        self._state = x
        return x

    def next01(self) -> float:
        """Uniform float in [0, 1) from the top 24 bits of the next draw."""

        return (self.next_u32() >> 8) / 16777216.0

    def tri01(self) -> float:
        """Triangular float in [0, 1) centred on 0.5."""

        first = self.next01()
        second = self.next01()
        return (first + second) * 0.5

    def next_int(self, min_inclusive: int, max_exclusive: int) -> int:
        if max_exclusive <= min_inclusive:
            return min_inclusive
        span = max_exclusive - min_inclusive
        return min_inclusive + self.next_u32() % span

    def __repr__(self) -> str:
        return f"DeterministicRng(state=0x{self._state:08X})"


def hash_combine(a: int, b: int) -> int:
    """Order-sensitive 32-bit avalanche mix used to derive sub-seeds."""

    a = to_u32(a)
    b = to_u32(b)
    x = (a + 0x9E3779B9 + ((b << 6) & U32_MASK) + (b >> 2)) & U32_MASK
    x ^= x >> 16
    x = (x * 0x7FEB352D) & U32_MASK
    x ^= x >> 15
    x = (x * 0x846CA68B) & U32_MASK
    x ^= x >> 16
    return x


def hash_string(text: Optional[str]) -> int:
    """32-bit FNV-1a over UTF-16 code units; empty or missing text hashes to 0."""

    if not text:
        return 0
    data = text.encode("utf-16-le", "surrogatepass")
    h = _FNV_OFFSET
    for index in range(0, len(data), 2):
        unit = data[index] | (data[index + 1] << 8)
        h = ((h ^ unit) * _FNV_PRIME) & U32_MASK
    return h


__all__ = [
    "DeterministicRng",
    "U32_MASK",
    "ZERO_SEED_FALLBACK",
    "hash_combine",
    "hash_string",
    "to_u32",
]
