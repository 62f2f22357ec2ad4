"""
NSGA-III normalization, association and niching kernels.

All functions work on objective matrices in minimization form.
"""

from __future__ import annotations

import logging

import numpy as np

from moselect.foundation.scalarizing import WEIGHT_FLOOR, asf

logger = logging.getLogger(__name__)


def identify_extremes(shifted: np.ndarray) -> np.ndarray:
    """Index of the extreme point of every objective axis.

    The extreme point of axis ``i`` minimizes the ASF with weight 1 on ``i``
    and ``WEIGHT_FLOOR`` on every other objective.
    """
    if shifted.size == 0:
        return np.array([], dtype=int)
    n_obj = shifted.shape[1]
    extremes = np.empty(n_obj, dtype=int)
    zero = np.zeros(n_obj)
    for i in range(n_obj):
        weights = np.full(n_obj, WEIGHT_FLOOR)
        weights[i] = 1.0
        extremes[i] = int(np.argmin(asf(shifted, zero, weights)))
    return extremes


def compute_intercepts(shifted: np.ndarray, extreme_idx: np.ndarray) -> np.ndarray:
    """Hyperplane intercepts through the extreme points.

    Falls back to the per-objective maxima when the extreme points are
    duplicated or otherwise yield a singular or degenerate plane.
    """
    n_obj = shifted.shape[1]
    if extreme_idx.size == 0:
        return np.ones(n_obj, dtype=float)
    maxima = shifted.max(axis=0)
    try:
        plane = np.linalg.solve(shifted[extreme_idx], np.ones(n_obj))
        with np.errstate(divide="ignore"):
            intercepts = 1.0 / plane
    except np.linalg.LinAlgError:
        logger.warning("Singular hyperplane through the extreme points; using objective maxima as intercepts.")
        intercepts = maxima
    else:
        if np.any(~np.isfinite(intercepts)) or np.any(intercepts <= 1e-10):
            logger.warning("Degenerate hyperplane intercepts; using objective maxima instead.")
            intercepts = maxima
    return np.where(intercepts > 1e-10, intercepts, 1.0)


def normalize(F: np.ndarray, selected: np.ndarray) -> np.ndarray:
    """Translate by the ideal point of ``F[selected]`` and divide by the intercepts."""
    ideal = F[selected].min(axis=0)
    shifted = F - ideal
    intercepts = compute_intercepts(shifted[selected], identify_extremes(shifted[selected]))
    return shifted / intercepts


def associate(normalized_F: np.ndarray, ref_points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Closest reference line (through the origin) and perpendicular distance to it."""
    directions = ref_points / np.linalg.norm(ref_points, axis=1, keepdims=True)
    projection = normalized_F @ directions.T
    sq_norm = np.sum(normalized_F**2, axis=1, keepdims=True)
    perpendicular = np.sqrt(np.maximum(sq_norm - projection**2, 0.0))
    associations = np.argmin(perpendicular, axis=1)
    distances = perpendicular[np.arange(normalized_F.shape[0]), associations]
    return associations, distances


def niche_selection(
    front: np.ndarray,
    n_remaining: int,
    niche_counts: np.ndarray,
    associations: np.ndarray,
    distances: np.ndarray,
    rng: np.random.Generator,
) -> list[int]:
    """
    Niching over the critical front.

    Repeatedly picks the reference point with the lowest niche count among
    those still having front members (random tie-break). An empty niche
    takes its closest member; a populated one takes a random member.

    Parameters
    ----------
    front : np.ndarray
        Indices of the critical front.
    n_remaining : int
        Number of members to pick.
    niche_counts : np.ndarray
        Members already selected per reference point (updated in place).
    associations, distances : np.ndarray
        Associated reference point and perpendicular distance of every row.
    rng : np.random.Generator
        Shared generator.
    """
    selected: list[int] = []
    pool = list(front.tolist())
    while len(selected) < n_remaining and pool:
        refs = np.unique(associations[pool])
        counts = niche_counts[refs]
        candidates_refs = refs[counts == counts.min()]
        ref = int(rng.choice(candidates_refs))
        members = [idx for idx in pool if associations[idx] == ref]
        if niche_counts[ref] == 0:
            pick = members[int(np.argmin(distances[members]))]
        else:
            pick = members[int(rng.integers(len(members)))]
        pool.remove(pick)
        niche_counts[ref] += 1
        selected.append(pick)
    return selected


def nsgaiii_survival(
    F: np.ndarray,
    fronts: list[np.ndarray],
    n_survive: int,
    ref_points: np.ndarray,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Survivor indices of NSGA-III environmental selection.

    Parameters
    ----------
    F : np.ndarray
        Objective values of population and offspring, minimization form.
    fronts : list of np.ndarray
        Non-dominated fronts of ``F``.
    n_survive : int
        Target population size.
    ref_points : np.ndarray
        Reference points on the unit simplex.
    rng : np.random.Generator
        Shared generator for niche tie-breaks.
    """
    taken: list[int] = []
    critical: np.ndarray | None = None
    for front in fronts:
        if len(taken) + front.size <= n_survive:
            taken.extend(front.tolist())
            if len(taken) == n_survive:
                break
        else:
            critical = front
            break
    if critical is None:
        return np.asarray(taken, dtype=int)

    considered = np.asarray(taken + critical.tolist(), dtype=int)
    normalized = normalize(F, considered)
    associations, distances = associate(normalized, ref_points)
    niche_counts = np.bincount(associations[np.asarray(taken, dtype=int)], minlength=ref_points.shape[0])
    niche_counts = niche_counts.astype(int)
    chosen = niche_selection(critical, n_survive - len(taken), niche_counts, associations, distances, rng)
    return np.asarray(taken + chosen, dtype=int)


__all__ = ["identify_extremes", "compute_intercepts", "normalize", "associate", "niche_selection", "nsgaiii_survival"]
