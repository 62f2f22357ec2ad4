"""
Objective transformation commands.

The population commands mutate the individuals they receive; strategies run
them on explicit copies (``copy_population``) whenever the caller's
individuals must stay untouched. The matrix functions return new arrays.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

import numpy as np

from .individual import Individual, ObjectiveAccess, objective_matrix, write_objectives


def copy_population(population: Sequence[Individual]) -> list[Individual]:
    """Independent deep copies, in order."""
    return [ind.copy() for ind in population]


# =============================================================================
# Matrix functions
# =============================================================================


def invert_values(F: np.ndarray) -> np.ndarray:
    """Negate every non-zero value."""
    F = np.asarray(F, dtype=float)
    return np.where(F != 0.0, -F, F)


def scale_values(F: np.ndarray, lower: np.ndarray, upper: np.ndarray) -> np.ndarray:
    """
    Scale to [0, 1] with clamping.

    Objectives with ``upper == lower`` map to 1.0.
    """
    F = np.asarray(F, dtype=float)
    lower = np.asarray(lower, dtype=float)
    upper = np.asarray(upper, dtype=float)
    span = upper - lower
    safe = np.where(span != 0.0, span, 1.0)
    scaled = np.where(span != 0.0, (F - lower) / safe, 1.0)
    return np.clip(scaled, 0.0, 1.0)


def normalize_values(F: np.ndarray) -> np.ndarray:
    """Scale each objective by the set's own min and max."""
    F = np.asarray(F, dtype=float)
    if F.shape[0] == 0:
        return F.copy()
    return scale_values(F, F.min(axis=0), F.max(axis=0))


# =============================================================================
# In-place population commands
# =============================================================================


def invert_objectives(population: Sequence[Individual], n_obj: int, *, policy: ObjectiveAccess = "raise") -> None:
    """Negate every non-zero objective value of every individual, in place."""
    F = objective_matrix(population, n_obj, policy=policy)
    write_objectives(population, invert_values(F))


def scale_objectives(
    population: Sequence[Individual],
    lower: np.ndarray,
    upper: np.ndarray,
    *,
    policy: ObjectiveAccess = "raise",
) -> None:
    """
    Scale objective values to [0, 1] using the given bounds, in place.

    Unbounded objectives fall back to the population's own range.
    """
    lower = np.asarray(lower, dtype=float)
    upper = np.asarray(upper, dtype=float)
    F = objective_matrix(population, lower.size, policy=policy)
    if F.shape[0] == 0:
        return
    lo = np.where(np.isfinite(lower), lower, F.min(axis=0))
    hi = np.where(np.isfinite(upper), upper, F.max(axis=0))
    write_objectives(population, scale_values(F, lo, hi))


def scale_objectives_no_bounds(population: Sequence[Individual], n_obj: int, *, policy: ObjectiveAccess = "raise") -> None:
    """Scale objective values to [0, 1] by the population's min and max, in place."""
    F = objective_matrix(population, n_obj, policy=policy)
    write_objectives(population, normalize_values(F))


def shuffle_population(population: list[Any], rng: np.random.Generator) -> None:
    """Shuffle a list in place with the shared generator."""
    order = rng.permutation(len(population))
    population[:] = [population[i] for i in order]


def sort_population(population: list[Any], key: Callable[[Any], float], *, reverse: bool = False) -> None:
    """Stable in-place sort by ``key``."""
    population.sort(key=key, reverse=reverse)


__all__ = [
    "copy_population",
    "invert_values",
    "scale_values",
    "normalize_values",
    "invert_objectives",
    "scale_objectives",
    "scale_objectives_no_bounds",
    "shuffle_population",
    "sort_population",
]
