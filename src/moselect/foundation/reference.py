"""
Reference vector and point generation.

- ``das_dennis``: simplex-lattice reference points with an optional inner layer.
- ``uniform_weight_vectors``: MOEA/D weight vectors by filtered enumeration.
- ``load_reference_points``: user supplied points from a CSV-like file.
"""

from __future__ import annotations

import itertools
import logging
import os
from math import comb

import numpy as np

from .exceptions import ConfigurationError, ReferencePointsError

logger = logging.getLogger(__name__)

WEIGHT_SUM_TOLERANCE = 1e-8


def count_lattice_points(n_obj: int, divisions: int) -> int:
    """Number of simplex-lattice points: ``C(divisions + n_obj - 1, n_obj - 1)``."""
    if divisions < 1:
        raise ConfigurationError(f"divisions must be >= 1, got {divisions}.")
    return comb(divisions + n_obj - 1, n_obj - 1)


def _simplex_lattice(n_obj: int, divisions: int) -> np.ndarray:
    coords: list[tuple[int, ...]] = []

    def rec(remaining: int, depth: int, current: list[int]) -> None:
        if depth == n_obj - 1:
            coords.append(tuple(current) + (remaining,))
            return
        for value in range(remaining + 1):
            current.append(value)
            rec(remaining - value, depth + 1, current)
            current.pop()

    rec(divisions, 0, [])
    return np.asarray(coords, dtype=float) / divisions


def das_dennis(n_obj: int, p1: int, p2: int | None = None) -> np.ndarray:
    """
    Das-Dennis reference points on the unit simplex.

    Parameters
    ----------
    n_obj : int
        Number of objectives (dimension of every point).
    p1 : int
        Divisions of the boundary layer.
    p2 : int, optional
        Divisions of the inner layer. Inner points are shrunk towards the
        simplex centre ``1 / n_obj``: ``(point + centre) / 2``.

    Returns
    -------
    np.ndarray
        Points of shape (C(p1+M-1, M-1) + C(p2+M-1, M-1), n_obj); every row sums to 1.
    """
    if n_obj < 2:
        raise ConfigurationError(f"Reference points need at least 2 objectives, got {n_obj}.")
    if p1 is None or p1 < 1:
        raise ConfigurationError(f"p1 must be a positive number of divisions, got {p1}.")
    if p2 is not None and p2 < 1:
        raise ConfigurationError(f"p2 must be a positive number of divisions, got {p2}.")
    if p1 < n_obj and p2 is None:
        raise ConfigurationError(
            f"p1={p1} is lower than the number of objectives ({n_obj}), so no point lies inside the simplex.",
            suggestion="Increase p1 or add an inner layer with p2",
        )
    boundary = _simplex_lattice(n_obj, p1)
    if p2 is None:
        return boundary
    centre = 1.0 / n_obj
    inner = (_simplex_lattice(n_obj, p2) + centre) / 2.0
    return np.vstack([boundary, inner])


def uniform_weight_vectors(h: int, n_obj: int) -> np.ndarray:
    """
    MOEA/D weight vectors.

    Every combination of ``{0, 1/h, ..., 1}`` over ``n_obj`` coordinates is
    enumerated and only those summing to 1 (within 1e-8) are kept.

    Raises
    ------
    ConfigurationError
        If ``h`` is not positive or no combination is valid.
    """
    if h <= 0:
        raise ConfigurationError(f"H must be positive, got {h}.", suggestion="Set 'h' to a positive integer")
    if n_obj < 1:
        raise ConfigurationError(f"Number of objectives must be positive, got {n_obj}.")
    steps = np.arange(h + 1, dtype=float) / h
    vectors = [
        combo for combo in itertools.product(steps, repeat=n_obj) if abs(sum(combo) - 1.0) < WEIGHT_SUM_TOLERANCE
    ]
    if not vectors:
        raise ConfigurationError(
            f"No weight vector sums to 1 for H={h} and {n_obj} objectives.",
            details={"h": h, "n_obj": n_obj},
        )
    return np.asarray(vectors, dtype=float)


def load_reference_points(path: str, n_obj: int) -> np.ndarray:
    """
    Read reference points from ``path``.

    The first line holds ``n_points,dim``; each following line holds one
    comma-separated point. ``dim`` must match ``n_obj``.
    """
    if not os.path.exists(path):
        raise ReferencePointsError(path, "file does not exist")
    with open(path, "r", encoding="utf-8") as fh:
        header = fh.readline().strip()
        try:
            n_points, dim = (int(part) for part in header.split(","))
        except ValueError:
            raise ReferencePointsError(path, f"malformed header '{header}'") from None
        if dim != n_obj:
            raise ReferencePointsError(path, f"points have {dim} dimensions but the problem has {n_obj} objectives")
        try:
            points = np.loadtxt(fh, delimiter=",", ndmin=2)
        except ValueError as exc:
            raise ReferencePointsError(path, f"unreadable row ({exc})") from exc
    if points.shape[0] != n_points or points.shape[1] != dim:
        raise ReferencePointsError(path, f"expected {n_points}x{dim} values, found {points.shape[0]}x{points.shape[1]}")
    logger.debug("Loaded %d reference points from %s", n_points, path)
    return points.astype(float, copy=False)


__all__ = [
    "WEIGHT_SUM_TOLERANCE",
    "count_lattice_points",
    "das_dennis",
    "uniform_weight_vectors",
    "load_reference_points",
]
