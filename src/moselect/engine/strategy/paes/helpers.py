"""
Support functions for PAES.

This module contains the pieces shared by the (1+1) and (mu+lambda)
variants:
- Dominance score of a candidate against the archive
- Grid-aware archive insertion (replace a member of the most crowded cell)
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from moselect.foundation.dominance import DOMINATED, DOMINATES
from moselect.foundation.grid import AdaptiveGrid
from moselect.foundation.individual import Individual


def dominance_score(individual: Individual, archive: Sequence[Individual], comparator) -> int:
    """
    Score of ``individual`` against the archive.

    -1 when an archive member dominates it, +1 when it dominates at least one
    member (and nobody dominates it), 0 otherwise.
    """
    score = 0
    for member in archive:
        if member is individual:
            continue
        flag = comparator.compare(individual, member)
        if flag == DOMINATED:
            return -1
        if flag == DOMINATES:
            score = 1
    return score


def crowded_member(locations: np.ndarray, grid: AdaptiveGrid, rng: np.random.Generator) -> int:
    """Position of a random archive member lying in the grid's most crowded location."""
    target = grid.most_crowded()
    members = np.flatnonzero(locations == target)
    if members.size == 0:
        return -1
    return int(members[rng.integers(members.size)])


def offer_to_grid_archive(
    archive: list[Individual],
    candidate: Individual,
    comparator,
    capacity: int,
    grid: AdaptiveGrid,
    locate: Callable[[Sequence[Individual]], np.ndarray],
    rng: np.random.Generator,
) -> bool:
    """
    PAES archiving rule, in place.

    A dominated or duplicate candidate is rejected and every member it
    dominates is removed. With room left the candidate is appended. With a
    full archive it replaces a random member of the most crowded location,
    provided its own location holds fewer members than that one.

    ``grid`` must already hold the occupancy counts of ``archive``; it is kept
    in sync with the insertions and removals made here. ``locate`` maps
    individuals to grid locations.
    """
    survivors: list[Individual] = []
    for member in archive:
        if member is candidate:
            return False
        flag = comparator.compare(candidate, member)
        if flag == DOMINATED:
            return False
        if flag != DOMINATES and np.array_equal(candidate.objectives, member.objectives):
            return False
        if flag == DOMINATES:
            grid.remove(int(locate([member])[0]))
        else:
            survivors.append(member)
    location = int(locate([candidate])[0])
    if len(survivors) < capacity:
        survivors.append(candidate)
        grid.add(location)
        archive[:] = survivors
        return True
    locations = locate(survivors) if survivors else np.zeros(0, dtype=np.int64)
    target = grid.most_crowded()
    if grid.count(location) >= grid.count(target):
        archive[:] = survivors
        return False
    victim = crowded_member(locations, grid, rng)
    if victim < 0:
        archive[:] = survivors
        return False
    grid.remove(target)
    del survivors[victim]
    survivors.append(candidate)
    grid.add(location)
    archive[:] = survivors
    return True


__all__ = ["dominance_score", "crowded_member", "offer_to_grid_archive"]
