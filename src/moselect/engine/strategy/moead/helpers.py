"""
Support functions for MOEA/D.

This module contains neighbourhood construction and ideal point bookkeeping
for decomposition-based selection. Aggregation functions live in
``moselect.foundation.scalarizing``.
"""

from __future__ import annotations

import numpy as np
from scipy.spatial.distance import cdist


# =============================================================================
# Neighbourhood Management
# =============================================================================


def compute_neighbors(weights: np.ndarray, neighbor_size: int) -> np.ndarray:
    """Compute neighbourhood indices based on weight vector distances.

    Parameters
    ----------
    weights : np.ndarray
        Weight vectors, shape (n_subproblems, n_obj).
    neighbor_size : int
        Neighbourhood size (T parameter).

    Returns
    -------
    np.ndarray
        Neighbourhood indices, shape (n_subproblems, neighbor_size). Each row
        starts with the subproblem itself.
    """
    dist = cdist(weights, weights)
    order = np.argsort(dist, axis=1, kind="mergesort")
    return order[:, :neighbor_size]


# =============================================================================
# Ideal Point
# =============================================================================


def initial_ideal(lower: np.ndarray, upper: np.ndarray, maximize: np.ndarray) -> np.ndarray:
    """
    Starting ideal point in minimization form.

    A minimized objective starts at ``upper + 1`` and a maximized one at
    ``lower - 1`` (negated), i.e. just outside the worst bound, so the first
    evaluated individual always improves it.
    """
    start = np.where(maximize, lower - 1.0, upper + 1.0)
    return np.where(maximize, -start, start)


def update_ideal(ideal: np.ndarray, fvals: np.ndarray) -> np.ndarray:
    """Component-wise minimum of the ideal point and every row of ``fvals`` (in place)."""
    fvals = np.atleast_2d(fvals)
    if fvals.shape[0]:
        np.minimum(ideal, fvals.min(axis=0), out=ideal)
    return ideal


__all__ = ["compute_neighbors", "initial_ideal", "update_ideal"]
