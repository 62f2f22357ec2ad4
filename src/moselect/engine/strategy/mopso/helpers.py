"""
Support functions for the multi-objective particle swarm strategies.

This module contains:
- Leader tournament by crowding distance
- Crowding-based leader archive truncation
- Constriction coefficient and boundary handling
- Personal best update
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from moselect.foundation.dominance import DOMINATED
from moselect.foundation.individual import Particle


def leader_tournament(crowding: np.ndarray, n_leaders: int, rng: np.random.Generator) -> np.ndarray:
    """
    Pick ``n_leaders`` archive positions by binary tournament.

    Both candidates are drawn with replacement; the larger crowding distance
    wins and ties are settled by a coin flip.
    """
    crowding = np.asarray(crowding, dtype=float)
    n = crowding.size
    winners = np.empty(n_leaders, dtype=int)
    for t in range(n_leaders):
        i = int(rng.integers(n))
        j = int(rng.integers(n))
        if crowding[i] > crowding[j]:
            winners[t] = i
        elif crowding[i] < crowding[j]:
            winners[t] = j
        else:
            winners[t] = i if rng.random() < 0.5 else j
    return winners


def truncate_by_crowding(crowding: np.ndarray, capacity: int, rng: np.random.Generator) -> np.ndarray:
    """
    Positions kept when shrinking an archive to ``capacity``.

    Members are sorted by decreasing crowding distance (stable), the tail is
    dropped and the survivors are shuffled.
    """
    order = np.argsort(-np.asarray(crowding, dtype=float), kind="mergesort")[:capacity]
    return rng.permutation(order)


def constriction_coefficient(c1: float, c2: float) -> float:
    """Clerc's constriction factor; 1 when ``c1 + c2 <= 4``."""
    phi = c1 + c2
    if phi <= 4.0:
        return 1.0
    return 2.0 / abs(2.0 - phi - np.sqrt(phi * phi - 4.0 * phi))


def bound_positions(
    X: np.ndarray,
    V: np.ndarray,
    lower: np.ndarray,
    upper: np.ndarray,
    velocity_factor: float,
) -> None:
    """
    Clamp positions to the box, in place.

    The velocity component of every clamped coordinate is multiplied by
    ``velocity_factor`` (-1 reflects, a small positive value damps).
    """
    outside = (X < lower) | (X > upper)
    if not np.any(outside):
        return
    np.clip(X, lower, upper, out=X)
    V[outside] *= velocity_factor


def update_personal_bests(swarm: Sequence[Particle], comparator) -> int:
    """
    Move each particle's memory to its current state unless the memory dominates it.

    Particles without a memory adopt their current state. Returns the number
    of memories replaced.
    """
    replaced = 0
    for particle in swarm:
        if particle.best_objectives is not None:
            current = np.asarray(particle.objectives, dtype=float)
            best = np.asarray(particle.best_objectives, dtype=float)
            if comparator.compare_values(current, best) == DOMINATED:
                continue
        particle.best_position = np.array(particle.position, dtype=float)
        particle.best_objectives = np.array(particle.objectives, dtype=float)
        replaced += 1
    return replaced


__all__ = [
    "leader_tournament",
    "truncate_by_crowding",
    "constriction_coefficient",
    "bound_positions",
    "update_personal_bests",
]
