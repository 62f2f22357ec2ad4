"""
Grid / hypercube diversity primitives.

Three grids live here:

- hypercube coordinates used by epsilon dominance (OMOPSO, SSeMOEA),
- the GrEA grid with its ranking, crowding and point distance metrics,
- the adaptive bisection grid used by PAES to count cell occupancy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

import numpy as np

from .exceptions import ConfigurationError


GridMetric = Literal["manhattan", "chebyshev"]


# =============================================================================
# Hypercubes / epsilon dominance
# =============================================================================


def resolve_epsilon(
    epsilon: Sequence[float] | float | None,
    n_obj: int,
    *,
    n_hypercubes: int | None = None,
    lower: Sequence[float] | None = None,
    upper: Sequence[float] | None = None,
) -> np.ndarray:
    """
    Resolve the per-objective epsilon values.

    Parameters
    ----------
    epsilon : float or sequence of float, optional
        Either one value per objective, or a single value broadcast to every
        objective.
    n_obj : int
        Number of objectives.
    n_hypercubes : int, optional
        Used when ``epsilon`` is not given: ``epsilon = (upper - lower) / n_hypercubes``.
    lower, upper : sequence of float, optional
        Objective bounds, required when deriving epsilon from ``n_hypercubes``.

    Returns
    -------
    np.ndarray
        Positive epsilon values, shape (n_obj,).
    """
    if epsilon is not None:
        values = np.atleast_1d(np.asarray(epsilon, dtype=float))
        if values.size == 1:
            values = np.full(n_obj, float(values[0]))
        elif values.size != n_obj:
            raise ConfigurationError(
                f"Expected 1 or {n_obj} epsilon values, got {values.size}.",
                details={"epsilon": values.tolist()},
            )
    else:
        if n_hypercubes is None:
            raise ConfigurationError(
                "Either epsilon values or a number of hypercubes is required.",
                suggestion="Set 'epsilon-values' or 'number-of-hypercubes'",
            )
        if n_hypercubes <= 0:
            raise ConfigurationError(f"number-of-hypercubes must be positive, got {n_hypercubes}.")
        if lower is None or upper is None:
            raise ConfigurationError("Objective bounds are required to derive epsilon values.")
        lo = np.asarray(lower, dtype=float)
        hi = np.asarray(upper, dtype=float)
        if not (np.all(np.isfinite(lo)) and np.all(np.isfinite(hi))):
            raise ConfigurationError(
                "Cannot derive epsilon values from unbounded objectives.",
                suggestion="Give every objective finite bounds or set 'epsilon-values' explicitly",
            )
        values = (hi - lo) / float(n_hypercubes)
    if np.any(values <= 0):
        raise ConfigurationError(f"Epsilon values must be positive, got {values.tolist()}.")
    return values


def epsilon_grid(
    epsilon: Sequence[float] | float | None,
    n_hypercubes: int | None,
    lower: Sequence[float],
    upper: Sequence[float],
    F: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Epsilon values and grid origin, falling back to the range of ``F``.

    Infinite objective bounds are replaced by the per-objective minimum and
    maximum of ``F`` (raw objective values, typically the initial population)
    before epsilon is derived from ``n_hypercubes``.

    Returns
    -------
    tuple of np.ndarray
        ``(epsilon, origin)``, each of shape (n_obj,).
    """
    lo = np.asarray(lower, dtype=float).copy()
    hi = np.asarray(upper, dtype=float).copy()
    F = np.asarray(F, dtype=float)
    if F.size:
        unbounded = ~(np.isfinite(lo) & np.isfinite(hi))
        if np.any(unbounded):
            lo = np.where(np.isfinite(lo), lo, F.min(axis=0))
            hi = np.where(np.isfinite(hi), hi, F.max(axis=0))
            # A flat column still needs a positive box width.
            hi = np.where(hi > lo, hi, lo + 1.0)
    if epsilon is None:
        values = resolve_epsilon(None, lo.size, n_hypercubes=n_hypercubes, lower=lo, upper=hi)
    else:
        values = resolve_epsilon(epsilon, lo.size)
    origin = np.where(np.isfinite(lo), lo, 0.0)
    return values, origin


def hypercube_coordinates(
    F: np.ndarray,
    epsilon: np.ndarray,
    lower: np.ndarray,
    maximize: np.ndarray | bool = False,
) -> np.ndarray:
    """
    Integer hypercube coordinates of each row of ``F``.

    The coordinate is ``floor((f - lower) / epsilon)`` for minimized objectives
    and ``ceil`` of the same ratio for maximized ones.
    """
    F = np.asarray(F, dtype=float)
    ratio = (F - np.asarray(lower, dtype=float)) / np.asarray(epsilon, dtype=float)
    mask = np.broadcast_to(np.asarray(maximize, dtype=bool), (F.shape[1],))
    coords = np.where(mask, np.ceil(ratio), np.floor(ratio))
    return coords.astype(np.int64)


def cell_corner_distance(
    F: np.ndarray,
    coords: np.ndarray,
    epsilon: np.ndarray,
    lower: np.ndarray,
) -> np.ndarray:
    """Euclidean distance from each point to the utopian corner of its own hypercube."""
    corner = np.asarray(lower, dtype=float) + np.asarray(coords, dtype=float) * np.asarray(epsilon, dtype=float)
    return np.sqrt(np.sum((np.asarray(F, dtype=float) - corner) ** 2, axis=1))


# =============================================================================
# GrEA grid
# =============================================================================


@dataclass(frozen=True)
class GridSpec:
    """Per-objective grid boundaries and cell width."""

    lower: np.ndarray
    upper: np.ndarray
    width: np.ndarray


def grid_setup(F: np.ndarray, div: int) -> GridSpec:
    """
    Grid boundaries for a set of points in minimization form.

    Each objective range is widened by half a cell on both sides so that the
    extreme points do not sit on the grid boundary.
    """
    if div <= 0:
        raise ConfigurationError(f"Number of grid divisions must be positive, got {div}.")
    F = np.asarray(F, dtype=float)
    fmin = F.min(axis=0)
    fmax = F.max(axis=0)
    pad = (fmax - fmin) / (2.0 * div)
    lower = fmin - pad
    upper = fmax + pad
    return GridSpec(lower=lower, upper=upper, width=(upper - lower) / div)


def grid_coordinates(F: np.ndarray, spec: GridSpec) -> np.ndarray:
    """Grid location of each point; a zero-width objective maps to coordinate 0."""
    F = np.asarray(F, dtype=float)
    width = spec.width
    safe = np.where(width > 0, width, 1.0)
    coords = np.where(width > 0, np.floor((F - spec.lower) / safe), 0.0)
    return coords.astype(np.int64)


def grid_ranking(G: np.ndarray) -> np.ndarray:
    """GR: sum of grid coordinates."""
    return np.asarray(G, dtype=float).sum(axis=1)


def grid_difference(G: np.ndarray, metric: GridMetric = "manhattan") -> np.ndarray:
    """Pairwise grid difference between all rows of ``G``."""
    G = np.asarray(G, dtype=float)
    diff = np.abs(G[:, None, :] - G[None, :, :])
    if metric == "manhattan":
        return diff.sum(axis=2)
    if metric == "chebyshev":
        return diff.max(axis=2) if diff.size else np.zeros(diff.shape[:2])
    raise ConfigurationError(f"Unknown grid metric '{metric}'.", suggestion="Use 'manhattan' or 'chebyshev'")


def grid_crowding(G: np.ndarray, metric: GridMetric = "manhattan") -> np.ndarray:
    """
    GCD: sum of ``M - GD(p, q)`` over the grid neighbours ``q`` of ``p``.

    Two points are neighbours when their grid difference is below the number
    of objectives ``M``.
    """
    G = np.asarray(G)
    n_obj = G.shape[1]
    gd = grid_difference(G, metric)
    weight = np.where(gd < n_obj, n_obj - gd, 0.0)
    np.fill_diagonal(weight, 0.0)
    return weight.sum(axis=1)


def grid_point_distance(F: np.ndarray, G: np.ndarray, spec: GridSpec) -> np.ndarray:
    """
    GCPD: normalized Euclidean distance to the utopian corner of the own cell.
    """
    F = np.asarray(F, dtype=float)
    width = spec.width
    safe = np.where(width > 0, width, 1.0)
    offset = np.where(width > 0, (F - (spec.lower + np.asarray(G, dtype=float) * width)) / safe, 0.0)
    return np.sqrt(np.sum(offset**2, axis=1))


def grid_dominance(G: np.ndarray) -> np.ndarray:
    """Pareto dominance over grid coordinates (lower is better)."""
    G = np.asarray(G)
    le = np.all(G[:, None, :] <= G[None, :, :], axis=2)
    lt = np.any(G[:, None, :] < G[None, :, :], axis=2)
    return le & lt


def grid_front_reduction(
    F: np.ndarray,
    n_select: int,
    div: int,
    metric: GridMetric = "manhattan",
) -> list[int]:
    """
    Select ``n_select`` points of a critical front with the GrEA loop.

    The best remaining point by (GR, GCD, GCPD) is picked, then its grid
    neighbours are penalized: GCD grows by ``M - GD`` and GR grows by ``M + 2``
    for points in the same cell, by ``M`` for grid-dominated points and by a
    propagated penalty degree for the remaining neighbours.

    Parameters
    ----------
    F : np.ndarray
        Objective values of the critical front in minimization form.
    n_select : int
        Number of points to keep.
    div : int
        Grid divisions per objective.
    metric : {"manhattan", "chebyshev"}
        Grid difference used for neighbourhood.

    Returns
    -------
    list[int]
        Selected row indices in selection order.
    """
    F = np.asarray(F, dtype=float)
    n, n_obj = F.shape
    if n_select >= n:
        return list(range(n))
    if n_select <= 0:
        return []

    spec = grid_setup(F, div)
    G = grid_coordinates(F, spec)
    gr = grid_ranking(G)
    gcd = np.zeros(n)
    gcpd = grid_point_distance(F, G, spec)
    gd = grid_difference(G, metric)
    gdom = grid_dominance(G)

    remaining = list(range(n))
    selected: list[int] = []
    while len(selected) < n_select:
        best = min(remaining, key=lambda i: (gr[i], gcd[i], gcpd[i]))
        selected.append(best)
        remaining.remove(best)
        if not remaining:
            break
        rem = np.asarray(remaining)
        dist = gd[best, rem]

        neighbours = dist < n_obj
        gcd[rem[neighbours]] += n_obj - dist[neighbours]

        equal = dist == 0
        dominated = gdom[best, rem] & ~equal
        gr[rem[equal]] += n_obj + 2
        gr[rem[dominated]] += n_obj

        others = ~equal & ~dominated
        penalty = np.zeros(n)
        for q in rem[others & neighbours]:
            degree = n_obj - gd[best, q]
            if penalty[q] < degree:
                penalty[q] = degree
                for r in rem[others]:
                    if gdom[q, r] and penalty[r] < degree:
                        penalty[r] = degree
        gr[rem[others]] += penalty[rem[others]]
    return selected


# =============================================================================
# PAES adaptive grid
# =============================================================================


class AdaptiveGrid:
    """
    Adaptive bisection grid over the archive's objective range.

    Each objective range ``[min, max]`` is bisected ``bisections`` times, which
    yields ``2 ** (n_obj * bisections)`` locations. The grid keeps an occupancy
    counter per location.
    """

    def __init__(self, n_obj: int, bisections: int) -> None:
        if bisections <= 0:
            raise ConfigurationError(f"number-of-bisections must be positive, got {bisections}.")
        self.n_obj = n_obj
        self.bisections = bisections
        self.divisions = 2**bisections
        self.lower = np.zeros(n_obj)
        self.upper = np.ones(n_obj)
        self.counts: dict[int, int] = {}

    @property
    def n_locations(self) -> int:
        return self.divisions**self.n_obj

    def fit(self, F: np.ndarray) -> None:
        """Refit the bounds to the range of ``F`` without touching the counters."""
        F = np.atleast_2d(np.asarray(F, dtype=float))
        if F.shape[0] == 0:
            return
        self.lower = F.min(axis=0)
        self.upper = F.max(axis=0)

    def recount(self, locations: np.ndarray) -> None:
        """Reset the counters to the occupancy of ``locations``."""
        values, counts = np.unique(np.asarray(locations, dtype=np.int64), return_counts=True)
        self.counts = {int(v): int(c) for v, c in zip(values, counts)}

    def update(self, F: np.ndarray) -> np.ndarray:
        """Refit the bounds to ``F`` and recount occupancy. Returns the locations of ``F``."""
        F = np.atleast_2d(np.asarray(F, dtype=float))
        if F.shape[0] == 0:
            self.counts = {}
            return np.zeros(0, dtype=np.int64)
        self.fit(F)
        locations = self.locate(F)
        self.recount(locations)
        return locations

    def locate(self, F: np.ndarray) -> np.ndarray:
        F = np.atleast_2d(np.asarray(F, dtype=float))
        span = self.upper - self.lower
        safe = np.where(span > 0, span, 1.0)
        frac = np.where(span > 0, (F - self.lower) / safe, 0.0)
        cells = np.clip(np.floor(frac * self.divisions), 0, self.divisions - 1).astype(np.int64)
        weights = self.divisions ** np.arange(self.n_obj, dtype=np.int64)
        return cells @ weights

    def count(self, location: int) -> int:
        return self.counts.get(int(location), 0)

    def add(self, location: int) -> None:
        self.counts[int(location)] = self.count(location) + 1

    def remove(self, location: int) -> None:
        current = self.count(location)
        if current <= 1:
            self.counts.pop(int(location), None)
        else:
            self.counts[int(location)] = current - 1

    def most_crowded(self) -> int:
        """Location with the highest count; ties resolve to the lowest location."""
        if not self.counts:
            return -1
        return max(sorted(self.counts), key=lambda loc: self.counts[loc])


__all__ = [
    "GridMetric",
    "resolve_epsilon",
    "epsilon_grid",
    "hypercube_coordinates",
    "cell_corner_distance",
    "GridSpec",
    "grid_setup",
    "grid_coordinates",
    "grid_ranking",
    "grid_difference",
    "grid_crowding",
    "grid_point_distance",
    "grid_dominance",
    "grid_front_reduction",
    "AdaptiveGrid",
]
