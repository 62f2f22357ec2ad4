"""
Objective model: per-objective direction and bounds.

Kernels in this package work on objective matrices in minimization form. The
helpers here translate between the user's objective directions and that form.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .exceptions import ConfigurationError, MixedDirectionsError


@dataclass(frozen=True)
class Objective:
    """Direction and bounds of a single objective."""

    maximize: bool = False
    lower: float = -math.inf
    upper: float = math.inf
    name: str | None = None

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ConfigurationError(
                f"Objective lower bound {self.lower} exceeds upper bound {self.upper}.",
                details={"name": self.name},
            )

    @property
    def bounded(self) -> bool:
        return math.isfinite(self.lower) and math.isfinite(self.upper)


def minimize_all(n_obj: int) -> list[Objective]:
    """Convenience factory for ``n_obj`` unbounded minimized objectives."""
    return [Objective() for _ in range(n_obj)]


def maximize_mask(objectives: Sequence[Objective]) -> np.ndarray:
    """Boolean mask, True where the objective is maximized."""
    return np.array([obj.maximize for obj in objectives], dtype=bool)


def uniform_direction(objectives: Sequence[Objective]) -> bool | None:
    """
    Return True if every objective is maximized, False if every objective is
    minimized and None when directions are mixed.
    """
    mask = maximize_mask(objectives)
    if mask.all():
        return True
    if not mask.any():
        return False
    return None


def require_uniform_direction(objectives: Sequence[Objective], strategy: str) -> bool:
    """Return the common direction or raise MixedDirectionsError."""
    direction = uniform_direction(objectives)
    if direction is None:
        raise MixedDirectionsError(strategy)
    return direction


def objective_bounds(objectives: Sequence[Objective]) -> tuple[np.ndarray, np.ndarray]:
    lower = np.array([obj.lower for obj in objectives], dtype=float)
    upper = np.array([obj.upper for obj in objectives], dtype=float)
    return lower, upper


def _as_mask(maximize: np.ndarray | Sequence[Objective]) -> np.ndarray:
    items = list(maximize)
    if items and isinstance(items[0], Objective):
        return maximize_mask(items)
    return np.asarray(items, dtype=bool)


def to_minimization(F: np.ndarray, maximize: np.ndarray | Sequence[Objective] | bool | None) -> np.ndarray:
    """
    Return a copy of ``F`` where maximized columns are negated.

    Parameters
    ----------
    F : np.ndarray
        Objective values, shape (N, n_obj).
    maximize : array-like of bool, sequence of Objective, bool or None
        Direction per objective. A plain bool applies to every column and
        None means all minimized.

    Returns
    -------
    np.ndarray
        Objective values where lower is always better.
    """
    F = np.array(F, dtype=float, copy=True)
    if maximize is None or maximize is False:
        return F
    if maximize is True:
        return -F
    mask = _as_mask(maximize)
    if mask.size and F.size:
        F[:, mask] = -F[:, mask]
    return F


__all__ = [
    "Objective",
    "minimize_all",
    "maximize_mask",
    "uniform_direction",
    "require_uniform_direction",
    "objective_bounds",
    "to_minimization",
]
