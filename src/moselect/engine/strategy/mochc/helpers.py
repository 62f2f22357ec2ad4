"""
Support functions for MOCHC.

This module contains:
- The default genotype distance (Hamming)
- Incest-prevention pairing
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from moselect.foundation.exceptions import DegenerateInputError
from moselect.foundation.individual import Individual

Distance = Callable[[Individual, Individual], float]


def hamming_distance(a: Individual, b: Individual) -> float:
    """Number of positions where the two genotypes differ."""
    x = getattr(a, "variables", None)
    y = getattr(b, "variables", None)
    if x is None or y is None:
        raise DegenerateInputError("Hamming distance needs individuals with variables.")
    x = np.asarray(x).reshape(-1)
    y = np.asarray(y).reshape(-1)
    if x.shape != y.shape:
        raise DegenerateInputError(f"Genotypes differ in length: {x.size} vs {y.size}.")
    return float(np.count_nonzero(x != y))


def incest_free_pairs(population: Sequence[Individual], threshold: float, distance: Distance) -> list[Individual]:
    """
    Parents from consecutive pairs whose distance exceeds ``2 * threshold``.

    Members are paired in the order given (0 with 1, 2 with 3, ...); an odd
    last member is left out.
    """
    parents: list[Individual] = []
    for i in range(0, len(population) - 1, 2):
        first, second = population[i], population[i + 1]
        if distance(first, second) > 2 * threshold:
            parents.extend((first, second))
    return parents


__all__ = ["Distance", "hamming_distance", "incest_free_pairs"]
