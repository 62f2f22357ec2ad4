"""
Support functions for the steady-state epsilon-MOEA.

This module contains:
- Steady-state replacement of one population member by an offspring
- Epsilon archive insertion with same-hypercube tie-breaking
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from moselect.foundation.dominance import (
    DOMINATED,
    DOMINATES,
    EpsilonDominanceComparator,
    ParetoComparator,
)
from moselect.foundation.grid import cell_corner_distance
from moselect.foundation.individual import Individual


def replacement_index(
    offspring: Individual,
    population: Sequence[Individual],
    comparator: ParetoComparator,
    rng: np.random.Generator,
) -> int:
    """
    Position of the population member an offspring replaces, or -1.

    The first member the offspring dominates is replaced. When the offspring
    neither dominates nor is dominated by any member, a random member is
    replaced. Otherwise the offspring is rejected.
    """
    incomparable = 0
    for i, member in enumerate(population):
        flag = comparator.compare(offspring, member)
        if flag == DOMINATES:
            return i
        if flag != DOMINATED:
            incomparable += 1
    if population and incomparable == len(population):
        return int(rng.integers(len(population)))
    return -1


def offer_to_epsilon_archive(
    archive: list[Individual],
    candidate: Individual,
    box: EpsilonDominanceComparator,
    pareto: ParetoComparator,
) -> bool:
    """
    Epsilon archive insertion, in place.

    The candidate is rejected when a member box-dominates it. Members it
    box-dominates are removed and the candidate enters. When it shares its
    hypercube with members, it must Pareto-dominate each of them or, when
    incomparable, lie closer to the cell's utopian corner.

    Returns
    -------
    bool
        True if the candidate entered the archive.
    """
    if any(member is candidate for member in archive):
        return False
    f_cand = np.asarray(candidate.objectives, dtype=float)
    cell = box.coordinates(f_cand)
    dominated: list[int] = []
    same_cell: list[int] = []
    for j, member in enumerate(archive):
        flag = box.compare(candidate, member)
        if flag == DOMINATED:
            return False
        if flag == DOMINATES:
            dominated.append(j)
        elif np.array_equal(cell, box.coordinates(np.asarray(member.objectives, dtype=float))):
            same_cell.append(j)

    if dominated:
        removed = set(dominated)
        archive[:] = [m for j, m in enumerate(archive) if j not in removed]
        archive.append(candidate)
        return True
    if not same_cell:
        archive.append(candidate)
        return True

    coords = cell[None, :]
    d_cand = cell_corner_distance(f_cand[None, :], coords, box.epsilon, box.lower)[0]
    for j in same_cell:
        member = archive[j]
        flag = pareto.compare(candidate, member)
        if flag == DOMINATED:
            return False
        if flag != DOMINATES:
            f_member = np.asarray(member.objectives, dtype=float)
            d_member = cell_corner_distance(f_member[None, :], coords, box.epsilon, box.lower)[0]
            if d_cand >= d_member:
                return False
    removed = set(same_cell)
    archive[:] = [m for j, m in enumerate(archive) if j not in removed]
    archive.append(candidate)
    return True


__all__ = ["replacement_index", "offer_to_epsilon_archive"]
