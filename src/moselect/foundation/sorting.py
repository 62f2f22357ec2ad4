"""
Dominance-based partitioning.

``fast_non_dominated_sort`` is the O(N^2) kernel working on objective
matrices. ``split_population`` and ``extract_non_dominated`` are the generic
front-peeling commands working on individuals through a comparator; they are
meant for small sets such as archives or critical fronts.
"""

from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np

from .dominance import DOMINATES, ConstraintMode, dominance_matrix
from .individual import Individual


class _Comparator(Protocol):
    def compare(self, a: Individual, b: Individual) -> int: ...


def fast_non_dominated_sort(
    F: np.ndarray,
    cv: np.ndarray | None = None,
    constraint_mode: ConstraintMode = "none",
) -> tuple[list[np.ndarray], np.ndarray]:
    """
    Classic O(N^2) fast non-dominated sort.

    Parameters
    ----------
    F : np.ndarray
        Objective values in minimization form, shape (N, n_obj).
    cv : np.ndarray, optional
        Constraint violation per row.
    constraint_mode : {"none", "feasibility", "violation"}
        Constraint handling applied to the dominance relation.

    Returns
    -------
    fronts : list of np.ndarray
        Row indices per front, front 1 first; source order is kept within a front.
    rank : np.ndarray
        Front number of every row, starting at 1.
    """
    F = np.asarray(F, dtype=float)
    n = F.shape[0]
    if n == 0:
        return [], np.empty(0, dtype=int)

    dom = dominance_matrix(F, cv, constraint_mode)
    dominated_count = dom.sum(axis=0).astype(np.int64)
    rank = np.empty(n, dtype=int)
    fronts: list[np.ndarray] = []

    current = np.flatnonzero(dominated_count == 0)
    level = 1
    while current.size > 0:
        fronts.append(current)
        rank[current] = level
        dominated_count -= dom[current].sum(axis=0)
        dominated_count[current] = -1
        dom[current] = False
        level += 1
        current = np.flatnonzero(dominated_count == 0)

    return fronts, rank


def non_dominated_mask(F: np.ndarray) -> np.ndarray:
    """True for rows of ``F`` (minimization form) not dominated by any other row."""
    F = np.asarray(F, dtype=float)
    if F.shape[0] == 0:
        return np.zeros(0, dtype=bool)
    return ~dominance_matrix(F).any(axis=0)


def split_population(
    population: Sequence[Individual],
    comparator: _Comparator,
    *,
    copy: bool = True,
) -> list[list[Individual]]:
    """
    Peel a population into fronts.

    An individual enters the current front when no other remaining individual
    dominates it. The input is not modified; by default the fronts hold copies
    so callers can attach auxiliary data without touching the originals.
    """
    remaining = list(population)
    fronts: list[list[Individual]] = []
    while remaining:
        current = [
            ind
            for ind in remaining
            if not any(other is not ind and comparator.compare(other, ind) == DOMINATES for other in remaining)
        ]
        if not current:
            # Only reachable with a comparator that is not a partial order.
            current = list(remaining)
        taken = {id(ind) for ind in current}
        remaining = [ind for ind in remaining if id(ind) not in taken]
        fronts.append([ind.copy() for ind in current] if copy else current)
    return fronts


def extract_non_dominated(population: Sequence[Individual], comparator: _Comparator) -> list[Individual]:
    """Return the members of ``population`` no other member dominates (same references, source order)."""
    members = list(population)
    return [
        ind
        for ind in members
        if not any(other is not ind and comparator.compare(other, ind) == DOMINATES for other in members)
    ]


__all__ = [
    "fast_non_dominated_sort",
    "non_dominated_mask",
    "split_population",
    "extract_non_dominated",
]
