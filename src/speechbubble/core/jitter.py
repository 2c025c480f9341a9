"""Seeded pseudo-random generator for reproducible shape jitter.

The seed string is hashed with xmur3 into two 32-bit state words, which then
drive a multiply-with-carry generator. Every `Random` instance owns its state,
so the same seed always yields the same sequence regardless of what other
instances have produced. Sketch and cloud bubbles rely on this to re-render
identically across frames.
"""

import math

from speechbubble.domain import Point

_MASK = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit integer multiplication (low 32 bits, unsigned)."""
    return (a * b) & _MASK


def _to_int32(value: int) -> int:
    value &= _MASK
    return value - 0x100000000 if value >= 0x80000000 else value


def xmur3(text: str) -> int:
    """Hash a string to an unsigned 32-bit integer.

    The string is hashed as UTF-16 code units, so characters outside the
    Basic Multilingual Plane contribute both halves of their surrogate pair.

    Examples:
        >>> xmur3("seed-A") == xmur3("seed-A")
        True
    """
    data = text.encode("utf-16-le", "surrogatepass")
    units = [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]

    h = 1779033703 ^ len(units)
    for unit in units:
        h = _imul(h ^ unit, 3432918353)
        h = ((h << 13) | (h >> 19)) & _MASK

    h = _imul(h ^ (h >> 16), 2246822507)
    h = _imul(h ^ (h >> 13), 3266489909)
    h ^= h >> 16
    return h & _MASK


class Random:
    """Deterministic random number generator.

    Example:
        rnd = Random("panel-3-bubble-1")
        radius = 50 * (0.9 + rnd.next_float() * 0.2)
    """

    def __init__(self, seed: int | str) -> None:
        """Initialize generator state from a seed.

        Args:
            seed: Integer or string seed; integers are hashed via their
                decimal representation
        """
        hashed = xmur3(str(seed))
        self._m_w = _to_int32(123456789 + hashed)
        self._m_z = _to_int32(987654321 - hashed)

    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        self._m_z = _to_int32(36969 * (self._m_z & 65535) + (self._m_z >> 16))
        self._m_w = _to_int32(18000 * (self._m_w & 65535) + (self._m_w >> 16))
        result = ((self._m_z << 16) + (self._m_w & 65535)) & _MASK
        return result / 4294967296

    def next_int(self, low: int, high: int) -> int:
        """Return an integer in [low, high], rounding half up."""
        return math.floor(self.random() * (high - low) + low + 0.5)

    def next_float(self, low: float = 0.0, high: float = 1.0) -> float:
        """Return a float in [low, high)."""
        return self.random() * (high - low) + low

    def next_bool(self) -> bool:
        return self.random() >= 0.5

    def perturb(self, point: Point, by_x: int, by_y: int) -> Point:
        """Move a point by a random integer offset within +/- (by_x, by_y)."""
        return Point(
            point.x + self.next_int(-by_x, by_x),
            point.y + self.next_int(-by_y, by_y),
        )
