"""
Zip Puzzle - Seeded Random

Deterministic LCG shared by every generator stage. Constants match the
puzzles already served to players, so a date seed always yields the same grid.
"""

from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


class SeededRandom:
    """Deterministic PRNG for reproducible levels."""

    def __init__(self, seed: int):
        self.seed = seed
        self._state = seed

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Returns a number in [0, 1)."""
        self._state = (self._state * MULTIPLIER + INCREMENT) % MODULUS
        return self._state / MODULUS

    def next_int(self, min_val: int, max_val: int) -> int:
        """Returns an integer in [min, max]."""
        if min_val > max_val:
            return min_val
        return min_val + int(self.next() * (max_val - min_val + 1))

    def shuffle(self, arr: Sequence[T]) -> List[T]:
        """Fisher-Yates shuffle, returns a permuted copy."""
        result = list(arr)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def choice(self, arr: Sequence[T]) -> Optional[T]:
        """Random element of the sequence."""
        if not arr:
            return None
        return arr[self.next_int(0, len(arr) - 1)]
