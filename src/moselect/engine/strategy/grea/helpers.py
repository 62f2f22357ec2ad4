"""
Support functions for GrEA.

Grid metrics (GR, GCD, GCPD) and the critical-front reduction loop live in
``moselect.foundation.grid``; this module builds the mating tournament rule.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from moselect.foundation.dominance import dominance_matrix
from moselect.foundation.grid import GridMetric, grid_coordinates, grid_crowding, grid_dominance, grid_setup


def grid_tournament_rule(F: np.ndarray, div: int, metric: GridMetric = "manhattan") -> Callable[[int, int], int]:
    """
    Tournament rule over the rows of ``F`` (minimization form).

    A candidate wins when it Pareto-dominates or grid-dominates the other;
    otherwise the lower grid crowding distance wins, and equal GCD is a tie.
    """
    F = np.asarray(F, dtype=float)
    G = grid_coordinates(F, grid_setup(F, div))
    pareto = dominance_matrix(F)
    gdom = grid_dominance(G)
    gcd = grid_crowding(G, metric)

    def better(i: int, j: int) -> int:
        if pareto[i, j] or gdom[i, j]:
            return 1
        if pareto[j, i] or gdom[j, i]:
            return -1
        if gcd[i] != gcd[j]:
            return 1 if gcd[i] < gcd[j] else -1
        return 0

    return better


__all__ = ["grid_tournament_rule"]
