"""
Non-dominated archive commands shared by archive-keeping strategies.

The functions mutate the archive list they receive (membership only, never
the individuals themselves).
"""

from __future__ import annotations

from typing import Iterable, Protocol

import numpy as np

from moselect.foundation.dominance import DOMINATED, DOMINATES
from moselect.foundation.individual import Individual


class _Comparator(Protocol):
    n_obj: int

    def compare(self, a: Individual, b: Individual) -> int: ...


def _same_objectives(a: Individual, b: Individual) -> bool:
    if a.objectives is None or b.objectives is None:
        return False
    return bool(np.array_equal(a.objectives, b.objectives))


def add_to_archive(archive: list[Individual], candidate: Individual, comparator: _Comparator) -> bool:
    """
    Offer ``candidate`` to a non-dominated archive, in place.

    The candidate is rejected when a member dominates it or already has the
    same objective vector; otherwise every member it dominates is removed and
    the candidate is appended.

    Returns
    -------
    bool
        True if the candidate entered the archive.
    """
    survivors: list[Individual] = []
    for member in archive:
        if member is candidate:
            return False
        flag = comparator.compare(candidate, member)
        if flag == DOMINATED or _same_objectives(candidate, member):
            return False
        if flag != DOMINATES:
            survivors.append(member)
    survivors.append(candidate)
    archive[:] = survivors
    return True


def merge_into_archive(
    archive: list[Individual],
    candidates: Iterable[Individual],
    comparator: _Comparator,
    *,
    copy: bool = True,
) -> int:
    """Offer every candidate in turn; returns how many were accepted."""
    accepted = 0
    for candidate in candidates:
        if add_to_archive(archive, candidate.copy() if copy else candidate, comparator):
            accepted += 1
    return accepted


__all__ = ["add_to_archive", "merge_into_archive"]
