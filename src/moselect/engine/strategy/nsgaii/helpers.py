"""
Support functions for NSGA-II style survival.
Separated so that other strategies (MOCHC) reuse the same ranking.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from moselect.foundation.crowding import crowding_by_fronts
from moselect.foundation.dominance import ConstraintMode
from moselect.foundation.sorting import fast_non_dominated_sort


@dataclass
class RankInfo:
    """Front number (from 1) and crowding distance of one individual."""

    rank: int
    crowding: float


def rank_and_crowding(
    F: np.ndarray,
    cv: np.ndarray | None = None,
    constraint_mode: ConstraintMode = "none",
    lower: np.ndarray | None = None,
    upper: np.ndarray | None = None,
) -> tuple[list[np.ndarray], np.ndarray, np.ndarray]:
    """Fronts, rank and per-front crowding distance of every row of ``F`` (minimization form)."""
    fronts, rank = fast_non_dominated_sort(F, cv, constraint_mode)
    crowding = crowding_by_fronts(F, fronts, lower, upper)
    return fronts, rank, crowding


def nsga2_survival(
    F: np.ndarray,
    n_survive: int,
    cv: np.ndarray | None = None,
    constraint_mode: ConstraintMode = "none",
    lower: np.ndarray | None = None,
    upper: np.ndarray | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Rank-and-crowding truncation.

    Whole fronts are taken while they fit; the remainder comes from the first
    front that does not fit, in descending crowding order (stable on ties).

    Parameters
    ----------
    F : np.ndarray
        Objective values of the merged set in minimization form.
    n_survive : int
        Number of rows to keep.
    cv : np.ndarray, optional
        Constraint violation per row.
    constraint_mode : {"none", "feasibility", "violation"}
        Constraint handling applied to the dominance relation.
    lower, upper : np.ndarray, optional
        Objective bounds used to normalize crowding distances.

    Returns
    -------
    selected : np.ndarray
        Row indices of the survivors, best fronts first.
    rank : np.ndarray
        Front number of every row of ``F``.
    crowding : np.ndarray
        Crowding distance of every row of ``F``.
    """
    fronts, rank, crowding = rank_and_crowding(F, cv, constraint_mode, lower, upper)
    selected: list[int] = []
    for front in fronts:
        remaining = n_survive - len(selected)
        if remaining <= 0:
            break
        if front.size <= remaining:
            selected.extend(front.tolist())
            continue
        order = np.argsort(-crowding[front], kind="mergesort")
        selected.extend(front[order[:remaining]].tolist())
        break
    return np.asarray(selected, dtype=int), rank, crowding


__all__ = ["RankInfo", "rank_and_crowding", "nsga2_survival"]
