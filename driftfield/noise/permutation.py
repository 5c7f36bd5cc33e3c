"""
Permutation table for gradient hashing.

Shuffles 0..255 with a forward Fisher-Yates pass driven by any
float-in-[0, 1) generator, so a seeded Alea stream always gives the
same table.
"""

from typing import Callable, Tuple

TABLE_SIZE = 256


def build_permutation_table(random_fn: Callable[[], float]) -> Tuple[int, ...]:
    """Return a permutation of 0..255 determined by the draws of random_fn."""
    table = list(range(TABLE_SIZE))
    # last slot is never swapped with itself
    for i in range(TABLE_SIZE - 1):
        r = i + int(random_fn() * (TABLE_SIZE - i))
        table[i], table[r] = table[r], table[i]
    return tuple(table)
