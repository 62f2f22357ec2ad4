"""
Support functions for SPEA2.

This module contains the core SPEA2 selection functions:
- SPEA2 fitness (strength + raw fitness + density)
- Archive construction
- Iterative k-nearest-neighbour truncation
"""

from __future__ import annotations

import numpy as np
from scipy.spatial.distance import cdist

from moselect.foundation.dominance import dominance_matrix


def pairwise_distances(F: np.ndarray) -> np.ndarray:
    """Euclidean distance matrix in objective space."""
    return cdist(F, F)


def spea2_fitness(F: np.ndarray, k: int) -> tuple[np.ndarray, np.ndarray]:
    """Compute SPEA2 fitness and distance matrix.

    Fitness is raw fitness (sum of the strengths of every dominator) plus the
    density ``1 / (sigma_k + 2)``, where ``sigma_k`` is the distance to the
    k-th nearest neighbour. Non-dominated rows therefore have fitness < 1.

    Parameters
    ----------
    F : np.ndarray
        Objective values in minimization form, shape (N, n_obj).
    k : int
        Neighbour used for the density estimate; clamped to ``N - 1``.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        (fitness, distance_matrix)
    """
    n = F.shape[0]
    if n == 0:
        return np.empty(0), np.empty((0, 0))
    dom = dominance_matrix(F)
    strength = dom.sum(axis=1)
    raw = (dom * strength[:, None]).sum(axis=0).astype(float)

    dist = pairwise_distances(F)
    if n == 1:
        return raw + 0.5, dist
    kk = min(max(k, 1), n - 1)
    sorted_dist = np.sort(dist, axis=1)
    # Column 0 is the distance to itself.
    sigma_k = sorted_dist[:, kk]
    return raw + 1.0 / (sigma_k + 2.0), dist


def truncate_by_distance(dist_matrix: np.ndarray, keep: int) -> np.ndarray:
    """SPEA2 truncation operator.

    Iteratively removes the member whose sorted neighbour distances are
    lexicographically smallest (closest nearest neighbour, ties resolved by
    the second nearest, and so on).

    Returns
    -------
    np.ndarray
        Positions of the retained rows, in their original order.
    """
    candidates = list(range(dist_matrix.shape[0]))
    while len(candidates) > keep:
        sub = dist_matrix[np.ix_(candidates, candidates)].copy()
        np.fill_diagonal(sub, np.inf)
        ordered = np.sort(sub, axis=1)
        worst = min(range(len(candidates)), key=lambda i: tuple(ordered[i]))
        del candidates[worst]
    return np.asarray(candidates, dtype=int)


def select_archive(fitness: np.ndarray, dist: np.ndarray, archive_size: int) -> np.ndarray:
    """
    Indices forming the new archive.

    Every row with fitness below 1 is taken. A short archive is filled with the
    best remaining rows by fitness; an oversized one is truncated by distance.
    """
    nondominated = np.flatnonzero(fitness < 1.0)
    if nondominated.size == archive_size:
        return nondominated
    if nondominated.size < archive_size:
        order = np.argsort(fitness, kind="mergesort")
        return np.sort(order[:archive_size])
    kept = truncate_by_distance(dist[np.ix_(nondominated, nondominated)], archive_size)
    return nondominated[kept]


__all__ = ["pairwise_distances", "spea2_fitness", "truncate_by_distance", "select_archive"]
