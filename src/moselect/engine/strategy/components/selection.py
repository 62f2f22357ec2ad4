"""
Mating selection operators.

Operators pick parent indices through the strategy's shared generator; the
comparison factories turn per-candidate scores into tournament callables.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np

from moselect.foundation.exceptions import DegenerateInputError


class BinaryTournament:
    """
    Binary tournament over candidate indices.

    better(i, j) returns >0 if candidate i wins, <0 if candidate j wins and 0
    on a tie, which is settled by a coin flip.
    """

    def __init__(
        self,
        better: Callable[[int, int], int],
        rng: np.random.Generator,
        *,
        distinct: bool = True,
    ) -> None:
        self.better = better
        self.rng = rng
        self.distinct = distinct

    def __call__(self, n_candidates: int, n_winners: int) -> np.ndarray:
        if n_candidates <= 0:
            raise DegenerateInputError("Tournament selection needs at least one candidate.")
        rng = self.rng
        winners = np.empty(n_winners, dtype=int)
        for t in range(n_winners):
            if self.distinct and n_candidates > 1:
                i, j = rng.choice(n_candidates, size=2, replace=False)
            else:
                i, j = rng.integers(0, n_candidates, size=2)
            cmp = self.better(int(i), int(j))
            if cmp == 0:
                cmp = 1 if rng.random() < 0.5 else -1
            winners[t] = i if cmp > 0 else j
        return winners


class RandomSelection:
    """Uniform random parent selection (with replacement)."""

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng

    def __call__(self, population: Sequence[object], n_parents: int) -> np.ndarray:
        pop_size = len(population)
        if pop_size == 0:
            raise DegenerateInputError("Cannot select parents from an empty population.")
        return self.rng.integers(0, pop_size, size=n_parents)


def lower_is_better(values: np.ndarray) -> Callable[[int, int], int]:
    """Tournament rule preferring the candidate with the lower value."""
    values = np.asarray(values, dtype=float)

    def better(i: int, j: int) -> int:
        if values[i] < values[j]:
            return 1
        if values[i] > values[j]:
            return -1
        return 0

    return better


def rank_and_crowding(rank: np.ndarray, crowding: np.ndarray) -> Callable[[int, int], int]:
    """Tournament rule: lower front rank first, then larger crowding distance."""
    rank = np.asarray(rank)
    crowding = np.asarray(crowding, dtype=float)

    def better(i: int, j: int) -> int:
        if rank[i] != rank[j]:
            return 1 if rank[i] < rank[j] else -1
        if crowding[i] != crowding[j]:
            return 1 if crowding[i] > crowding[j] else -1
        return 0

    return better


__all__ = ["BinaryTournament", "RandomSelection", "lower_is_better", "rank_and_crowding"]
