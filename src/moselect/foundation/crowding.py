"""Crowding distance (NSGA-II density estimator)."""

from __future__ import annotations

from typing import Iterable, Literal, Sequence

import numpy as np

from .exceptions import ConfigurationError

CrowdingAggregate = Literal["sum", "mean"]


def crowding_distance(
    F: np.ndarray,
    lower: Sequence[float] | np.ndarray | None = None,
    upper: Sequence[float] | np.ndarray | None = None,
    *,
    aggregate: CrowdingAggregate = "sum",
) -> np.ndarray:
    """
    Crowding distance of every row of a front.

    For each objective the rows are sorted ascending (stable, so ties keep
    list order); the two boundary rows receive ``+inf`` and every interior row
    accumulates ``(next - previous) / (max - min)``, with ``max - min`` taken
    over the front. Objectives with finite bounds are scaled to ``[0, 1]``
    first. Objectives with a zero range are skipped.

    Parameters
    ----------
    F : np.ndarray
        Objective values of one front, shape (N, n_obj). Direction does not matter.
    lower, upper : array-like, optional
        Objective bounds used to scale values. Infinite entries leave the
        objective unscaled.
    aggregate : {"sum", "mean"}
        ``"sum"`` adds the per-objective contributions; ``"mean"`` divides the
        sum by the number of objectives.

    Returns
    -------
    np.ndarray
        Distances, shape (N,).
    """
    if aggregate not in ("sum", "mean"):
        raise ConfigurationError(f"Unknown crowding aggregate '{aggregate}'.", suggestion="Use 'sum' or 'mean'")
    F = np.asarray(F, dtype=float)
    n = F.shape[0]
    if n == 0:
        return np.zeros(0, dtype=float)
    n_obj = F.shape[1]
    if n <= 2:
        return np.full(n, np.inf)

    lo = np.full(n_obj, -np.inf) if lower is None else np.asarray(lower, dtype=float)
    hi = np.full(n_obj, np.inf) if upper is None else np.asarray(upper, dtype=float)

    d = np.zeros(n, dtype=float)
    for m in range(n_obj):
        order = np.argsort(F[:, m], kind="mergesort")
        sorted_vals = F[order, m]

        d[order[0]] = np.inf
        d[order[-1]] = np.inf

        if np.isfinite(lo[m]) and np.isfinite(hi[m]) and hi[m] > lo[m]:
            sorted_vals = (sorted_vals - lo[m]) / (hi[m] - lo[m])
        span = sorted_vals[-1] - sorted_vals[0]
        if span <= 0.0:
            continue

        contrib = (sorted_vals[2:] - sorted_vals[:-2]) / span
        d[order[1:-1]] += contrib

    if aggregate == "mean":
        d = d / n_obj
    return d


def crowding_by_fronts(
    F: np.ndarray,
    fronts: Iterable[np.ndarray],
    lower: Sequence[float] | np.ndarray | None = None,
    upper: Sequence[float] | np.ndarray | None = None,
) -> np.ndarray:
    """Crowding distance computed front by front, returned for every row of ``F``."""
    F = np.asarray(F, dtype=float)
    crowding = np.zeros(F.shape[0], dtype=float)
    for front in fronts:
        idx = np.asarray(front, dtype=int)
        if idx.size:
            crowding[idx] = crowding_distance(F[idx], lower, upper)
    return crowding


__all__ = ["CrowdingAggregate", "crowding_distance", "crowding_by_fronts"]
