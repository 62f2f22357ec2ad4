"""
Support functions for HypE.

The HypE estimators themselves live in ``moselect.foundation.hypervolume``;
this module adds the normalization and the critical-front reduction loop.
"""

from __future__ import annotations

import numpy as np

from moselect.foundation.hypervolume import hype_fitness
from moselect.foundation.scaling import normalize_values


def hype_population_fitness(
    F: np.ndarray,
    n_samples: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """HypE fitness of every row with ``k`` equal to the set size (used for mating)."""
    F = np.asarray(F, dtype=float)
    if F.shape[0] == 0:
        return np.zeros(0)
    points = normalize_values(F)
    return hype_fitness(points, F.shape[0], n_samples, rng)


def hype_front_reduction(
    F: np.ndarray,
    n_select: int,
    n_samples: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Reduce a front to ``n_select`` rows by iterative HypE removal.

    The front is normalized once by its own range. At each step the HypE
    fitness is recomputed with ``k`` equal to the number of rows still to be
    removed and the row with the lowest value is dropped.

    Parameters
    ----------
    F : np.ndarray
        Objective values of the critical front, minimization form.
    n_select : int
        Number of rows to keep.
    n_samples : int
        Monte-Carlo sample count, negative for the exact computation.
    rng : np.random.Generator
        Random generator for the sampling estimator.

    Returns
    -------
    np.ndarray
        Indices of the kept rows, in source order.
    """
    F = np.asarray(F, dtype=float)
    keep = np.arange(F.shape[0])
    if n_select >= keep.size:
        return keep
    points = normalize_values(F)
    while keep.size > n_select:
        values = hype_fitness(points[keep], keep.size - n_select, n_samples, rng)
        keep = np.delete(keep, int(np.argmin(values)))
    return keep


__all__ = ["hype_population_fitness", "hype_front_reduction"]
