"""
Random source for schedule generation.

Schedules are random by design; pass a SeededRNG(seed) to replay one exactly.
"""
from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class SeededRNG:
    """Wrapper around random.Random so the draw can be injected and replayed."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> int | None:
        return self._seed

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def shuffled(self, items: Sequence[T]) -> list[T]:
        return shuffle(items, self)


def shuffle(items: Sequence[T], rng: SeededRNG | None = None) -> list[T]:
    """
    Fisher-Yates: return a new list holding items in uniformly random order.
    The input is left untouched.
    """
    rng = rng or SeededRNG()
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out
