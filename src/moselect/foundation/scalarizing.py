"""
Scalarizing functions.

All functions take objective values in minimization form and return values
where lower is better.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .exceptions import ConfigurationError

WEIGHT_FLOOR = 1e-6

Scalarizer = Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray]


def asf(fvals: np.ndarray, ref: np.ndarray, weights: np.ndarray, *, floor: float = WEIGHT_FLOOR) -> np.ndarray:
    """Achievement scalarizing function: ``max_i (f_i - z_i) / w_i``.

    Parameters
    ----------
    fvals : np.ndarray
        Objective values, shape (N, n_obj) or (n_obj,).
    ref : np.ndarray
        Reference point ``z``, shape (n_obj,).
    weights : np.ndarray
        Weight vector(s), broadcastable against ``fvals``. Entries below
        ``floor`` are clamped to ``floor``.

    Returns
    -------
    np.ndarray
        ASF values, shape (N,) or scalar.
    """
    w = np.maximum(np.asarray(weights, dtype=float), floor)
    return np.max((np.asarray(fvals, dtype=float) - ref) / w, axis=-1)


def augmented_asf(fvals: np.ndarray, ref: np.ndarray, rho: float) -> np.ndarray:
    """Unweighted ASF with an augmentation term: ``max(f - z) + rho * sum(f - z)``."""
    diff = np.asarray(fvals, dtype=float) - ref
    return np.max(diff, axis=-1) + rho * np.sum(diff, axis=-1)


def tchebycheff(fvals: np.ndarray, weights: np.ndarray, ideal: np.ndarray) -> np.ndarray:
    """Tchebycheff aggregation: ``max(w * |f - z*|)``."""
    diff = np.abs(np.asarray(fvals, dtype=float) - ideal)
    return np.max(weights * diff, axis=-1)


def weighted_sum(fvals: np.ndarray, weights: np.ndarray, ideal: np.ndarray) -> np.ndarray:
    """Weighted sum aggregation: ``sum(w * (f - z*))``."""
    shifted = np.asarray(fvals, dtype=float) - ideal
    return np.sum(weights * shifted, axis=-1)


_SCALARIZERS: dict[str, Scalarizer] = {
    "tchebycheff": tchebycheff,
    "weighted-sum": weighted_sum,
}


def get_scalarizer(name: str) -> Scalarizer:
    key = name.lower().replace("_", "-")
    try:
        return _SCALARIZERS[key]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported scalarizing function '{name}'.",
            suggestion=f"Use one of: {', '.join(sorted(_SCALARIZERS))}",
        ) from None


__all__ = [
    "WEIGHT_FLOOR",
    "Scalarizer",
    "asf",
    "augmented_asf",
    "tchebycheff",
    "weighted_sum",
    "get_scalarizer",
]
