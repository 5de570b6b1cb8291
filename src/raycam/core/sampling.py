"""Random sources and unit-disk sampling for thin-lens defocus blur.

The CPU side of the camera draws lens offsets from a ``numpy.random.Generator``.
Three ways of getting one are provided:

- ``make_rng(seed)``: an explicit generator; unseeded generators log the seed
  they were given so a run can be reproduced.
- ``thread_rng()``: a lazily created generator private to the calling thread,
  safe for one-ray-per-task CPU fallbacks without any locking.
- ``DiskSampler``: a single seeded stream shared between threads, with draws
  serialized by a lock.

Example:
    >>> from raycam.core.sampling import make_rng, sample_unit_disk
    >>> rng = make_rng(1234)
    >>> p = sample_unit_disk(rng)
    >>> float(p.x) ** 2 + float(p.y) ** 2 < 1.0
    True
"""

from __future__ import annotations

import logging
import threading

import numpy as np

from raycam.core.vec3 import Vec3, dot

logger = logging.getLogger(__name__)

_thread_state = threading.local()


def _entropy_seed() -> int:
    """Draw a 32-bit seed from OS entropy and log it at INFO level."""
    seed = int(np.random.SeedSequence().entropy % (2**32))
    logger.info(f"Random seed: {seed}")
    return seed


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create a random generator, logging the seed when one is generated.

    Args:
        seed: Explicit seed. When None, a seed is drawn from OS entropy and
            logged at INFO level.

    Returns:
        A new ``numpy.random.Generator``.
    """
    if seed is None:
        seed = _entropy_seed()
    return np.random.default_rng(seed)


def thread_rng() -> np.random.Generator:
    """Return the calling thread's generator, creating it on first use."""
    rng = getattr(_thread_state, "rng", None)
    if rng is None:
        rng = make_rng()
        _thread_state.rng = rng
    return rng


def seed_thread_rng(seed: int) -> np.random.Generator:
    """Replace the calling thread's generator with one seeded by ``seed``."""
    rng = make_rng(seed)
    _thread_state.rng = rng
    return rng


def sample_unit_disk(rng: np.random.Generator | None = None) -> Vec3:
    """Draw a point uniformly distributed over the unit disk in the xy-plane.

    Rejection sampling: two uniform values in [0, 1) are mapped to [-1, 1)
    and the candidate is redrawn while its squared length is >= 1. The
    expected number of draws is 4/pi.

    Args:
        rng: Generator to draw from. Defaults to ``thread_rng()``.

    Returns:
        A Vec3 (x, y, 0) with x^2 + y^2 < 1.
    """
    if rng is None:
        rng = thread_rng()
    while True:
        xy = rng.random(2, dtype=np.float32)
        p = Vec3(xy[0] * 2.0 - 1.0, xy[1] * 2.0 - 1.0, 0.0)
        if dot(p, p) < 1.0:
            return p


class DiskSampler:
    """A unit-disk sampler sharing one seeded stream across threads.

    Draws are serialized with a lock, so the sequence of samples is
    reproducible for a given seed as long as callers are ordered.

    Attributes:
        seed: The seed the underlying generator was created with.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = _entropy_seed()
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self._lock = threading.Lock()

    def sample(self) -> Vec3:
        """Draw one point from the unit disk."""
        with self._lock:
            return sample_unit_disk(self._rng)

    def __repr__(self) -> str:
        return f"DiskSampler(seed={self.seed})"
