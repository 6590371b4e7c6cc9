"""
Deterministic Random Source
===========================
A seeded pseudo-random generator for tests and benchmarks.

The results are reproducible since the seed is deterministic. This class is
*NOT* thread-safe; every test context must own its own instance.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from spheretest.config import DEFAULT_RANDOM_SEED

logger = logging.getLogger(__name__)

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
MAX_SKEWED_LOG = 31

_MASK32 = 0xFFFFFFFF


class Random:
    """
    Reproducible random numbers drawn from a Mersenne Twister (MT19937).

    Every draw is assembled from 32-bit words of the underlying bit generator,
    so the sequence depends only on the seed and the order of calls.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """
        Args:
            seed: Initial 32-bit signed seed. Defaults to DEFAULT_RANDOM_SEED.
        """
        self._bit_generator: np.random.MT19937
        self.reset(DEFAULT_RANDOM_SEED if seed is None else seed)

    def __call__(self, n: int) -> int:
        return self.uniform(n)

    def reset(self, seed: int) -> None:
        """
        Reset the generator state using the given seed.

        Raises:
            ValueError: If `seed` does not fit into a signed 32-bit integer.
        """
        if not INT32_MIN <= seed <= INT32_MAX:
            raise ValueError(f"Seed must be a signed 32-bit integer, got {seed}.")
        self._bit_generator = np.random.MT19937(seed & _MASK32)
        logger.debug(f"Random source reset with seed {seed}")

    def rand32(self) -> int:
        """Return a uniformly distributed 32-bit unsigned integer."""
        return int(self._bit_generator.random_raw()) & _MASK32

    def rand64(self) -> int:
        """Return a uniformly distributed 64-bit unsigned integer."""
        high = self.rand32()
        return (high << 32) | self.rand32()

    def rand_double(self) -> float:
        """
        Return a uniformly distributed float in the range [0, 1).

        Note that the values returned are all multiples of 2**-53, which means
        that not all possible values in this range are returned.
        """
        a = self.rand32() >> 5  # 27 bits
        b = self.rand32() >> 6  # 26 bits
        return (a * 67108864.0 + b) * (1.0 / 9007199254740992.0)

    def uniform(self, n: int) -> int:
        """
        Return a uniformly distributed integer in the range [0, n).

        The reduction is taken from 64 random bits, which keeps the modulo bias
        below 2**-32 for every 32-bit `n`.

        Raises:
            ValueError: If `n` is not a positive 32-bit integer.
        """
        if not 0 < n <= INT32_MAX:
            raise ValueError(f"'n' must lie in [1, {INT32_MAX}], got {n}.")
        return self.rand64() % n

    def uniform_double(self, min: float, limit: float) -> float:
        """Return a uniformly distributed float in the range [min, limit)."""
        return min + self.rand_double() * (limit - min)

    def one_in(self, n: int) -> bool:
        """Return True with probability 1 in n."""
        return self.uniform(n) == 0

    def skewed(self, max_log: int) -> int:
        """
        Pick "base" uniformly from [0, max_log] and return "base" random bits.

        The effect is to pick a number in the range [0, 2**max_log - 1] with
        bias towards smaller numbers.

        Raises:
            ValueError: If `max_log` is outside [0, 31].
        """
        if not 0 <= max_log <= MAX_SKEWED_LOG:
            raise ValueError(f"'max_log' must lie in [0, {MAX_SKEWED_LOG}], got {max_log}.")
        base = self.uniform(max_log + 1)
        return self.rand32() & ((1 << base) - 1)
