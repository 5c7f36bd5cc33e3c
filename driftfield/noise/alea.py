"""
Alea - Seedable deterministic PRNG

Johannes Baagøe's Alea generator, the one the browser sketches seed their
noise with. Same seed in, same float stream out, bit for bit, in any
process and on any platform.

State is three fractional accumulators (s0, s1, s2) in [0, 1) and an
integer carry. Seeds are hashed through a "masher" over their string
form, using ECMAScript number formatting so 42, 42.0 and "42" are the
same seed here and in the sketches.
"""

import math
import random
from decimal import Decimal
from typing import Callable, List, Optional, Union

from ..errors import SeedError


Seed = Union[str, int, float]

# 2^-32
_INV_U32 = 2.3283064365386963e-10
# 2^-53
_INV_U53 = 1.1102230246251565e-16
_MASH_INIT = 4022871197  # 0xEFC8249D
_MULTIPLIER = 2091639


def _uint32(x: float) -> int:
    """Truncate toward zero and wrap to 32 bits (ECMAScript ToUint32)."""
    return int(x) & 0xFFFFFFFF


def js_number_string(value: Union[int, float]) -> str:
    """
    Format a number the way ECMAScript Number.prototype.toString does.

    Integral floats lose their ".0", exponent notation is only used
    below 1e-6 or from 1e21 up, and the exponent carries no padding.
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        return format(Decimal(repr(value)).normalize(), "f")
    mantissa, exponent = repr(value).split("e")
    exp = int(exponent)
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    return f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"


def _utf16_units(data: str) -> List[int]:
    """UTF-16 code units of a string (what String.charCodeAt walks)."""
    raw = data.encode("utf-16-le", "surrogatepass")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def seed_string(seed: Seed) -> str:
    """String form of a seed, as hashed by the masher."""
    # bool is an int subclass but not a meaningful seed
    if isinstance(seed, bool) or not isinstance(seed, (str, int, float)):
        raise SeedError(
            f"seed must be a string or number, got {type(seed).__name__}"
        )
    if isinstance(seed, str):
        return seed
    return js_number_string(seed)


class Masher:
    """Rolling string hash feeding Alea's initial state."""

    def __init__(self):
        self._n = _MASH_INIT

    def __call__(self, data: str) -> float:
        n = self._n
        for unit in _utf16_units(data):
            n += unit
            h = 0.02519603282416938 * n
            n = _uint32(h)
            h -= n
            h *= n
            n = _uint32(h)
            h -= n
            n += h * 4294967296.0
        self._n = n
        return _uint32(n) * _INV_U32


class Alea:
    """
    Alea PRNG. Calling the instance returns the next float in [0, 1).

    Example:
        rng = Alea(42)
        rng()          # -> same value on every run
        rng.uint32()   # -> 32-bit integer draw
    """

    def __init__(self, seed: Seed):
        self.seed = seed_string(seed)
        mash = Masher()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(self.seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(self.seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(self.seed)
        if self.s2 < 0:
            self.s2 += 1

    def __call__(self) -> float:
        t = _MULTIPLIER * self.s0 + self.c * _INV_U32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def random(self) -> float:
        """Random float in [0, 1)."""
        return self()

    def uint32(self) -> int:
        """Random integer in [0, 2^32)."""
        return int(self() * 4294967296.0)

    def fract53(self) -> float:
        """Random float in [0, 1) with 53 bits of resolution."""
        return self() + int(self() * 0x200000) * _INV_U53

    def uniform(self, lo: float, hi: float) -> float:
        """Random float in [lo, hi)."""
        return lo + self() * (hi - lo)


def create_prng(seed: Optional[Seed] = None) -> Callable[[], float]:
    """
    Build a float generator from an optional seed.

    None delegates to the interpreter's ambient randomness and is not
    reproducible. Strings and numbers give a deterministic Alea stream.
    """
    if seed is None:
        return random.random
    return Alea(seed)
