"""SMS-EMOA helper functions.

This module contains the survival step of SMS-EMOA:
- Normalization of the worst front
- Selection of the member with the smallest hypervolume contribution
"""

from __future__ import annotations

import numpy as np

from moselect.foundation.hypervolume import hv_contributions
from moselect.foundation.scaling import normalize_values

__all__ = ["REFERENCE_OFFSET", "least_contributor"]

REFERENCE_OFFSET = 0.1


def least_contributor(F: np.ndarray, offset: float = REFERENCE_OFFSET) -> int:
    """Index of the row with the smallest exclusive hypervolume contribution.

    Parameters
    ----------
    F : np.ndarray
        Objective values of one front in minimization form, shape (N, n_obj).
    offset : float
        Distance of the reference point beyond the worst value once the front
        is normalized to [0, 1].

    Returns
    -------
    int
        Row to remove; ties resolve to the first row. A single-row front
        returns 0.
    """
    F = np.asarray(F, dtype=float)
    if F.shape[0] <= 1:
        return 0
    points = normalize_values(F)
    reference = np.full(F.shape[1], 1.0 + offset)
    contrib = hv_contributions(points, reference, maximize=False)
    return int(np.argmin(contrib))
