"""
Support functions for IBEA.

This module contains the core IBEA selection functions:
- Indicator computation (additive epsilon, hypervolume difference)
- Fitness calculation
- Iterative environmental selection

Indicator matrices follow ``I[i, j] = I(x_i, x_j)``: how well ``x_i`` performs
relative to ``x_j``, lower meaning better.
"""

from __future__ import annotations

import numpy as np

from moselect.foundation.dominance import dominance_matrix
from moselect.foundation.hypervolume import hv_pair_indicator
from moselect.foundation.scaling import normalize_values

_MIN_SCALE = 1e-19


def epsilon_indicator(F: np.ndarray) -> np.ndarray:
    """Compute the additive epsilon indicator matrix on bounds-normalized values.

    ``I(a, b) = max_k (a_k - b_k) / width_k`` is the smallest shift that makes
    ``a`` weakly dominate ``b``. Objectives with zero width contribute nothing.

    Parameters
    ----------
    F : np.ndarray
        Objective values in minimization form, shape (N, n_obj).

    Returns
    -------
    np.ndarray
        Epsilon indicator matrix, shape (N, N).
    """
    F = np.asarray(F, dtype=float)
    if F.shape[0] == 0:
        return np.empty((0, 0))
    width = F.max(axis=0) - F.min(axis=0)
    safe = np.where(width > 0, width, 1.0)
    scaled = np.where(width > 0, F / safe, 0.0)
    diff = scaled[:, None, :] - scaled[None, :, :]
    return np.asarray(np.max(diff, axis=2), dtype=float)


def hypervolume_indicator(F: np.ndarray, rho: float = 1.0) -> np.ndarray:
    """Compute the hypervolume difference indicator matrix.

    Values are normalized by the set's own range first. When ``a`` dominates
    ``b`` the indicator is minus the volume ``a`` adds over ``b``; otherwise it
    is the volume dominated by ``b`` but not by ``a``. The reference corner sits
    at ``rho`` times the range.

    Parameters
    ----------
    F : np.ndarray
        Objective values in minimization form, shape (N, n_obj).
    rho : float
        Reference point factor (>= 1).

    Returns
    -------
    np.ndarray
        Hypervolume indicator matrix, shape (N, N).
    """
    F = normalize_values(np.asarray(F, dtype=float))
    n = F.shape[0]
    if n == 0:
        return np.empty((0, 0))
    lower = F.min(axis=0)
    upper = F.max(axis=0)
    dom = dominance_matrix(F)
    indicator = np.zeros((n, n), dtype=float)
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            if dom[i, j]:
                indicator[i, j] = -hv_pair_indicator(F[j], F[i], lower, upper, rho)
            else:
                indicator[i, j] = hv_pair_indicator(F[i], F[j], lower, upper, rho)
    return indicator


def compute_indicator_matrix(F: np.ndarray, indicator: str, rho: float = 1.0) -> np.ndarray:
    """Compute the indicator matrix for ``"epsilon"`` or ``"hypervolume"``."""
    if indicator == "hypervolume":
        return hypervolume_indicator(F, rho)
    return epsilon_indicator(F)


def indicator_scale(indicator: np.ndarray) -> float:
    """Largest absolute indicator value ``c`` (never zero)."""
    if indicator.size == 0:
        return 1.0
    return max(float(np.max(np.abs(indicator))), _MIN_SCALE)


def ibea_fitness(indicator: np.ndarray, kappa: float, scale: float) -> np.ndarray:
    """Compute IBEA fitness from the indicator matrix.

    ``F(x) = -sum_{y != x} exp(-I(y, x) / (c * kappa))``. Lower fitness values
    are worse (more negative); the worst is removed first.

    Parameters
    ----------
    indicator : np.ndarray
        Indicator matrix, shape (N, N).
    kappa : float
        Scaling factor controlling selection pressure.
    scale : float
        Normalization constant ``c``.

    Returns
    -------
    np.ndarray
        Fitness values, shape (N,).
    """
    contrib = np.exp(-indicator / (scale * kappa))
    np.fill_diagonal(contrib, 0.0)
    return np.asarray(-np.sum(contrib, axis=0), dtype=float)


def ibea_survival(indicator: np.ndarray, n_survive: int, kappa: float) -> tuple[np.ndarray, np.ndarray]:
    """
    Iteratively remove the individual with the lowest fitness.

    After each removal the remaining fitness values are corrected by the
    removed individual's contribution.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        (selected indices in source order, their fitness)
    """
    scale = indicator_scale(indicator)
    fitness = ibea_fitness(indicator, kappa, scale)
    alive = np.ones(indicator.shape[0], dtype=bool)
    while alive.sum() > n_survive:
        candidates = np.flatnonzero(alive)
        worst = int(candidates[np.argmin(fitness[candidates])])
        alive[worst] = False
        fitness[alive] += np.exp(-indicator[worst, alive] / (scale * kappa))
    selected = np.flatnonzero(alive)
    return selected, fitness[selected]


__all__ = [
    "epsilon_indicator",
    "hypervolume_indicator",
    "compute_indicator_matrix",
    "indicator_scale",
    "ibea_fitness",
    "ibea_survival",
]
