"""
Support functions for PAR.

This module contains:
- Reference point normalization into the merged set's scaled space
- Region of interest detection around the reference point
"""

from __future__ import annotations

import numpy as np

from moselect.foundation.scalarizing import augmented_asf


def normalize_reference(reference: np.ndarray, F: np.ndarray) -> np.ndarray:
    """
    Express ``reference`` in the space where each column of ``F`` spans [0, 1].

    Both arguments are in minimization form. The result is not clamped, so a
    reference point outside the set's range keeps its relative position.
    """
    F = np.asarray(F, dtype=float)
    fmin = F.min(axis=0)
    span = F.max(axis=0) - fmin
    safe = np.where(span != 0.0, span, 1.0)
    return (np.asarray(reference, dtype=float) - fmin) / safe


def region_of_interest(G: np.ndarray, reference: np.ndarray, rho: float) -> tuple[np.ndarray, np.ndarray]:
    """
    Rows of ``G`` lying in the region of interest of ``reference``.

    The row with the lowest augmented ASF defines one shifted reference point
    per objective (the reference plus that row's value on the objective). For
    each shifted point the row with the lowest ASF gives the limit on that
    objective; the region holds every row within all limits.

    Parameters
    ----------
    G : np.ndarray
        Scaled objective values in minimization form, shape (N, n_obj).
    reference : np.ndarray
        Reference point in the same space.
    rho : float
        Augmentation coefficient of the ASF.

    Returns
    -------
    inside : np.ndarray
        Boolean mask of the rows inside the region.
    asf_values : np.ndarray
        Augmented ASF of every row with respect to ``reference``.
    """
    G = np.asarray(G, dtype=float)
    asf_values = augmented_asf(G, reference, rho)
    best = int(np.argmin(asf_values))
    n_obj = G.shape[1]
    limits = np.empty(n_obj, dtype=float)
    for i in range(n_obj):
        shifted = np.array(reference, dtype=float)
        shifted[i] += G[best, i]
        closest = int(np.argmin(augmented_asf(G, shifted, rho)))
        limits[i] = G[closest, i]
    inside = np.all(G <= limits, axis=1)
    return inside, asf_values


__all__ = ["normalize_reference", "region_of_interest"]
