"""Seeded random source threaded explicitly through profile and session generation."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RandomSource:
    """
    Reproducible stream of draws owned by a single generation pass.

    Wraps a private random.Random; the same seed yields the same sequence
    of draws.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def uniform(self) -> float:
        """Real in [0, 1)."""
        return self._rng.random()

    def gaussian(self) -> float:
        """Standard normal real."""
        return self._rng.gauss(0.0, 1.0)

    def int_below(self, bound: int) -> int:
        """Integer in [0, bound)."""
        assert isinstance(bound, int) and bound >= 1, f"bound must be >= 1, got {bound!r}"
        return self._rng.randrange(bound)

    def pick_from(self, candidates: Sequence[T]) -> T:
        """Uniform choice by index."""
        assert len(candidates) > 0, "candidates must not be empty"
        return candidates[self.int_below(len(candidates))]
