"""Seeded random source for sketches.

Every helper that needs entropy takes an explicit ``rng`` argument so a
sketch can be replayed from its seed. Helpers fall back to a process-wide
default source when none is passed.
"""

import hashlib
import logging
import math
from typing import Optional, Sequence, TypeVar, Union

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

T = TypeVar("T")
Seed = Union[int, str]

SEED_RANGE = 1_000_000


def _seed_to_int(seed: Seed) -> int:
    """Map an int or string seed to a non-negative 64-bit integer."""
    if isinstance(seed, int):
        return abs(seed)
    digest = hashlib.sha256(str(seed).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


class RandomSource:
    """Stateful pseudo-random generator handle.

    Wraps a ``numpy.random.Generator``. Not thread-safe: confine an instance
    to one thread.
    """

    def __init__(self, seed: Optional[Seed] = None):
        self._seed: Optional[Seed] = None
        self._rng = np.random.default_rng()
        if seed is not None:
            self.set_seed(seed)

    def set_seed(self, seed: Seed) -> None:
        """Reset the generator to the state derived from ``seed``."""
        self._seed = seed
        self._rng = np.random.default_rng(_seed_to_int(seed))
        logger.debug(f"Random source seeded with {seed!r}")

    def get_seed(self) -> Optional[Seed]:
        """Seed last passed to ``set_seed`` (None when unseeded)."""
        return self._seed

    def value(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._rng.random())

    def range(
        self,
        min_value: float,
        max_value: float,
        size: Optional[Union[int, tuple]] = None,
    ) -> Union[float, NDArray[np.float64]]:
        """Uniform value(s) in [min_value, max_value).

        Args:
            min_value: Lower bound (inclusive)
            max_value: Upper bound (exclusive)
            size: None for a scalar, otherwise the output array shape

        Returns:
            A float, or an array of the requested shape
        """
        if size is None:
            return float(self._rng.uniform(min_value, max_value))
        return self._rng.uniform(min_value, max_value, size)

    def gaussian(
        self,
        mean: float = 0.0,
        std: float = 1.0,
        size: Optional[Union[int, tuple]] = None,
    ) -> Union[float, NDArray[np.float64]]:
        """Normally distributed value(s)."""
        if size is None:
            return float(self._rng.normal(mean, abs(std)))
        return self._rng.normal(mean, abs(std), size)

    def pick(self, items: Sequence[T]) -> T:
        """Random element of a non-empty sequence."""
        if len(items) == 0:
            raise ValueError("Cannot pick from an empty sequence")
        return items[int(math.floor(self.value() * len(items)))]


_default_source: Optional[RandomSource] = None


def default_source() -> RandomSource:
    """Get the shared process-wide random source."""
    global _default_source
    if _default_source is None:
        _default_source = RandomSource()
    return _default_source


def initiate_seed(seed: Optional[Seed] = 0) -> str:
    """Resolve the seed a sketch should use.

    A falsy seed (0, "" or None) produces a fresh seed from OS entropy.
    The draw does not advance any ``RandomSource``, so picking a seed never
    disturbs a sketch that is already running.

    Args:
        seed: Explicit seed, or a falsy value for a random one

    Returns:
        The seed as a string
    """
    if not seed:
        seed = int(np.random.default_rng().integers(0, SEED_RANGE))
    return str(seed)
