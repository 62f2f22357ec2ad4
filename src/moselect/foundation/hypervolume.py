"""
Hypervolume engine.

- ``hypervolume``: exact volume of a point set (HSO slicing).
- ``hv_contributions``: exclusive contribution of every point.
- ``hype_weights`` / ``hype_exact`` / ``hype_sampling``: HypE fitness, exact by
  recursive slicing or estimated by Monte-Carlo sampling.
- ``hv_pair_indicator``: volume dominated by one point but not by another,
  used by the hypervolume variant of IBEA.

The HypE and pairwise functions expect points in normalized minimization form,
i.e. every objective scaled to [0, 1], lower is better and the reference point
sits at 1 in every objective.
"""

from __future__ import annotations

import numpy as np

from .exceptions import ConfigurationError, DegenerateInputError

_SAMPLE_BATCH = 2048


# =============================================================================
# Set hypervolume
# =============================================================================


def _filter_dominated_max(P: np.ndarray) -> np.ndarray:
    """Keep rows not weakly dominated by another row (maximization)."""
    n = P.shape[0]
    if n <= 1:
        return P
    ge = np.all(P[:, None, :] >= P[None, :, :], axis=2)
    gt = np.any(P[:, None, :] > P[None, :, :], axis=2)
    dominated = (ge & gt).any(axis=0)
    keep = ~dominated
    # Drop exact duplicates, keeping the first occurrence.
    P = P[keep]
    _, first = np.unique(P, axis=0, return_index=True)
    return P[np.sort(first)]


def _slice_volume(P: np.ndarray) -> float:
    """Volume of the union of boxes ``[0, p]`` for every row ``p`` of ``P``."""
    n, d = P.shape
    if n == 0:
        return 0.0
    if d == 1:
        return float(P[:, 0].max())
    P = _filter_dominated_max(P)
    order = np.argsort(-P[:, -1], kind="mergesort")
    P = P[order]
    volume = 0.0
    for i in range(P.shape[0]):
        below = P[i + 1, -1] if i + 1 < P.shape[0] else 0.0
        height = P[i, -1] - below
        if height > 0.0:
            volume += height * _slice_volume(P[: i + 1, :-1])
    return volume


def hypervolume(
    F: np.ndarray,
    reference: np.ndarray | None = None,
    *,
    maximize: bool = True,
) -> float:
    """
    Exact hypervolume of a point set.

    Parameters
    ----------
    F : np.ndarray
        Points, shape (N, n_obj).
    reference : np.ndarray, optional
        Reference point. Defaults to the origin when maximizing and to the
        all-ones corner when minimizing (normalized space).
    maximize : bool
        When True the volume between the reference and the points above it is
        measured; when False the volume between the points and a reference
        above them.

    Returns
    -------
    float
        Dominated volume; 0.0 for an empty set.
    """
    F = np.asarray(F, dtype=float)
    if F.size == 0:
        return 0.0
    F = np.atleast_2d(F)
    n_obj = F.shape[1]
    if reference is None:
        reference = np.zeros(n_obj) if maximize else np.ones(n_obj)
    ref = np.asarray(reference, dtype=float)
    if ref.shape != (n_obj,):
        raise ConfigurationError(f"Reference point must have {n_obj} values, got shape {ref.shape}.")
    P = F - ref if maximize else ref - F
    P = np.clip(P, 0.0, None)
    P = P[np.all(P > 0.0, axis=1)]
    return _slice_volume(P)


def hv_contributions(
    F: np.ndarray,
    reference: np.ndarray | None = None,
    *,
    maximize: bool = True,
) -> np.ndarray:
    """Exclusive hypervolume contribution of every point: ``HV(F) - HV(F without i)``."""
    F = np.atleast_2d(np.asarray(F, dtype=float))
    n = F.shape[0]
    if n == 0:
        return np.zeros(0)
    total = hypervolume(F, reference, maximize=maximize)
    contrib = np.empty(n, dtype=float)
    mask = np.ones(n, dtype=bool)
    for i in range(n):
        mask[i] = False
        contrib[i] = total - hypervolume(F[mask], reference, maximize=maximize)
        mask[i] = True
    return contrib


# =============================================================================
# HypE
# =============================================================================


def hype_weights(k: int, size: int) -> np.ndarray:
    """
    HypE weights ``rho[i] = (1/i) * prod_{j=1}^{i-1} (k - j) / (size - j)`` for ``i = 1..k``.

    ``rho[0]`` is 0. Entries past ``size`` are never reached by the estimators.
    """
    if k < 1:
        raise ConfigurationError(f"HypE parameter k must be at least 1, got {k}.")
    rho = np.zeros(k + 1, dtype=float)
    for i in range(1, k + 1):
        value = 1.0 / i
        for j in range(1, i):
            denom = size - j
            value *= (k - j) / denom if denom != 0 else 0.0
        rho[i] = value
    return rho


def _hype_slice(
    points: np.ndarray,
    members: np.ndarray,
    dim: int,
    bounds: np.ndarray,
    rho: np.ndarray,
    k: int,
) -> np.ndarray:
    fitness = np.zeros(points.shape[0], dtype=float)
    order = members[np.argsort(points[members, dim], kind="mergesort")]
    count = order.size
    for i in range(count):
        current = points[order[i], dim]
        upper = points[order[i + 1], dim] if i < count - 1 else bounds[dim]
        extrusion = upper - current
        if dim == 0:
            if i + 1 <= k:
                fitness[order[: i + 1]] += extrusion * rho[i + 1]
        elif extrusion > 0.0:
            fitness += extrusion * _hype_slice(points, order[: i + 1], dim - 1, bounds, rho, k)
    return fitness


def hype_exact(points: np.ndarray, k: int, reference: float | np.ndarray = 1.0) -> np.ndarray:
    """
    Exact HypE fitness by recursive slicing.

    Points are sorted along the current axis; each slab between consecutive
    values (or the reference for the last one) is extruded into the remaining
    dimensions, and at the bottom dimension the slab volume is shared among
    the ``i`` points dominating it with weight ``rho[i]``.
    """
    P = np.atleast_2d(np.asarray(points, dtype=float))
    n, d = P.shape
    if n == 0:
        return np.zeros(0)
    bounds = np.broadcast_to(np.asarray(reference, dtype=float), (d,)).astype(float)
    rho = hype_weights(k, n)
    return _hype_slice(P, np.arange(n), d - 1, bounds, rho, k)


def hype_sampling(
    points: np.ndarray,
    k: int,
    n_samples: int,
    rng: np.random.Generator,
    *,
    lower: float = 0.0,
    upper: float = 1.0,
) -> np.ndarray:
    """
    Monte-Carlo estimate of the HypE fitness.

    ``n_samples`` points are drawn uniformly in ``[lower, upper]^d``. For each
    sample the points weakly dominating it are counted; when ``0 < count <= k``
    every dominator receives ``rho[count]``. The sums are scaled by
    ``(upper - lower)^d / n_samples``.
    """
    if n_samples <= 0:
        raise ConfigurationError(f"Sampling size must be positive, got {n_samples}.")
    P = np.atleast_2d(np.asarray(points, dtype=float))
    n, d = P.shape
    if n == 0:
        return np.zeros(0)
    rho = hype_weights(k, n)
    values = np.zeros(n, dtype=float)
    done = 0
    while done < n_samples:
        batch = min(_SAMPLE_BATCH, n_samples - done)
        samples = rng.uniform(lower, upper, size=(batch, d))
        hits = np.all(P[None, :, :] <= samples[:, None, :], axis=2)
        counts = hits.sum(axis=1)
        valid = (counts > 0) & (counts <= k)
        weights = np.zeros(batch, dtype=float)
        weights[valid] = rho[counts[valid]]
        values += (hits * weights[:, None]).sum(axis=0)
        done += batch
    return values * (upper - lower) ** d / n_samples


def hype_fitness(
    points: np.ndarray,
    k: int,
    n_samples: int,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """HypE fitness: exact when ``n_samples < 0``, sampled otherwise."""
    if n_samples < 0:
        return hype_exact(points, k)
    if rng is None:
        raise DegenerateInputError("A random generator is required for sampled HypE fitness.")
    return hype_sampling(points, k, n_samples, rng)


# =============================================================================
# Pairwise indicator (IBEA)
# =============================================================================


def _exclusive_volume(a: np.ndarray, b: np.ndarray | None, dim: int, lower: np.ndarray, span: np.ndarray) -> float:
    """Normalized volume dominated by ``a`` but not by ``b`` in the first ``dim`` objectives."""
    r = span[dim - 1]
    top = lower[dim - 1] + r
    value_a = a[dim - 1]
    value_b = top if b is None else b[dim - 1]
    if dim == 1:
        return (value_b - value_a) / r if value_a < value_b else 0.0
    if value_a < value_b:
        volume = _exclusive_volume(a, None, dim - 1, lower, span) * (value_b - value_a) / r
        volume += _exclusive_volume(a, b, dim - 1, lower, span) * (top - value_b) / r
        return volume
    return _exclusive_volume(a, b, dim - 1, lower, span) * (top - value_a) / r


def hv_pair_indicator(
    a: np.ndarray,
    b: np.ndarray,
    lower: np.ndarray,
    upper: np.ndarray,
    rho: float = 1.0,
) -> float:
    """
    Volume dominated by ``b`` but not by ``a`` (minimization).

    The reference corner is ``lower + rho * (upper - lower)``; volumes are
    normalized by that box. Objectives with a zero range use a unit span.
    """
    lower = np.asarray(lower, dtype=float)
    span = rho * (np.asarray(upper, dtype=float) - lower)
    span = np.where(span > 0.0, span, 1.0)
    return _exclusive_volume(np.asarray(b, dtype=float), np.asarray(a, dtype=float), lower.size, lower, span)


__all__ = [
    "hypervolume",
    "hv_contributions",
    "hype_weights",
    "hype_exact",
    "hype_sampling",
    "hype_fitness",
    "hv_pair_indicator",
]
