"""
Dominance comparators.

Comparators return ``1`` when the first argument dominates the second, ``-1``
when it is dominated and ``0`` when both are incomparable (or equal). The
vectorized ``dominance_matrix`` is the counterpart used by the numpy kernels;
it expects objective values in minimization form.
"""

from __future__ import annotations

from typing import Literal, Sequence

import numpy as np

from .exceptions import ConfigurationError
from .grid import hypercube_coordinates, resolve_epsilon
from .individual import Individual, ObjectiveAccess, objective_vector
from .objectives import Objective, maximize_mask, objective_bounds

DOMINATES = 1
DOMINATED = -1
INCOMPARABLE = 0

ConstraintMode = Literal["none", "feasibility", "violation"]
CONSTRAINT_MODES: tuple[str, ...] = ("none", "feasibility", "violation")


def compare_minimization(a: np.ndarray, b: np.ndarray) -> int:
    """Pareto comparison of two vectors where lower values are better."""
    better = bool(np.any(a < b))
    worse = bool(np.any(a > b))
    if better and not worse:
        return DOMINATES
    if worse and not better:
        return DOMINATED
    return INCOMPARABLE


class ParetoComparator:
    """
    Direction-aware Pareto dominance between individuals.

    Each objective keeps its own direction, so ``a`` dominates ``b`` when it is
    not worse in any objective and strictly better in at least one.
    """

    def __init__(self, objectives: Sequence[Objective], *, policy: ObjectiveAccess = "raise") -> None:
        if not objectives:
            raise ConfigurationError("A comparator needs at least one objective.")
        self.objectives = list(objectives)
        self.n_obj = len(self.objectives)
        self.policy = policy
        self._sign = np.where(maximize_mask(self.objectives), -1.0, 1.0)

    def key(self, values: np.ndarray) -> np.ndarray:
        """Vector actually compared, in minimization form."""
        return self._sign * np.asarray(values, dtype=float)

    def compare_values(self, a: np.ndarray, b: np.ndarray) -> int:
        return compare_minimization(self.key(a), self.key(b))

    def compare(self, a: Individual, b: Individual) -> int:
        fa = objective_vector(a, self.n_obj, policy=self.policy)
        fb = objective_vector(b, self.n_obj, policy=self.policy)
        return self.compare_values(fa, fb)

    __call__ = compare

    def dominates(self, a: Individual, b: Individual) -> bool:
        return self.compare(a, b) == DOMINATES


class EpsilonDominanceComparator(ParetoComparator):
    """
    Pareto dominance evaluated over hypercube coordinates.

    Two individuals in the same hypercube are incomparable. Coordinates are
    ``floor((f - lower) / epsilon)`` for minimized objectives and ``ceil`` for
    maximized ones.
    """

    def __init__(
        self,
        objectives: Sequence[Objective],
        epsilon: Sequence[float] | float | None = None,
        *,
        n_hypercubes: int | None = None,
        lower: Sequence[float] | None = None,
        policy: ObjectiveAccess = "raise",
    ) -> None:
        super().__init__(objectives, policy=policy)
        obj_lower, obj_upper = objective_bounds(self.objectives)
        self.lower = obj_lower if lower is None else np.asarray(lower, dtype=float)
        # Unbounded objectives are discretized from the origin.
        self.lower = np.where(np.isfinite(self.lower), self.lower, 0.0)
        self.epsilon = resolve_epsilon(epsilon, self.n_obj, n_hypercubes=n_hypercubes, lower=obj_lower, upper=obj_upper)
        self.maximize = maximize_mask(self.objectives)

    def coordinates(self, values: np.ndarray) -> np.ndarray:
        return hypercube_coordinates(np.atleast_2d(values), self.epsilon, self.lower, self.maximize)[0]

    def key(self, values: np.ndarray) -> np.ndarray:
        return self._sign * self.coordinates(values)


class ConstrainedComparator:
    """
    Feasibility-first wrapper around another comparator.

    A feasible individual dominates an infeasible one, two infeasible
    individuals are incomparable and two feasible ones defer to ``base``.
    """

    def __init__(self, base: ParetoComparator) -> None:
        self.base = base
        self.objectives = base.objectives
        self.n_obj = base.n_obj

    def _infeasible_tie(self, a: Individual, b: Individual) -> int:
        return INCOMPARABLE

    def compare(self, a: Individual, b: Individual) -> int:
        fa, fb = a.feasible, b.feasible
        if fa and fb:
            return self.base.compare(a, b)
        if fa:
            return DOMINATES
        if fb:
            return DOMINATED
        return self._infeasible_tie(a, b)

    __call__ = compare

    def dominates(self, a: Individual, b: Individual) -> bool:
        return self.compare(a, b) == DOMINATES


class ViolationComparator(ConstrainedComparator):
    """Like ConstrainedComparator, but the lower violation wins between two infeasible individuals."""

    def _infeasible_tie(self, a: Individual, b: Individual) -> int:
        va = float(getattr(a, "constraint_violation", 0.0))
        vb = float(getattr(b, "constraint_violation", 0.0))
        if va < vb:
            return DOMINATES
        if va > vb:
            return DOMINATED
        return INCOMPARABLE


def make_comparator(
    objectives: Sequence[Objective],
    constraint_mode: ConstraintMode = "none",
    *,
    policy: ObjectiveAccess = "raise",
) -> ParetoComparator | ConstrainedComparator:
    """Build the Pareto comparator, optionally wrapped with constraint handling."""
    base = ParetoComparator(objectives, policy=policy)
    if constraint_mode == "none":
        return base
    if constraint_mode == "feasibility":
        return ConstrainedComparator(base)
    if constraint_mode == "violation":
        return ViolationComparator(base)
    raise ConfigurationError(
        f"Unknown constraint mode '{constraint_mode}'.",
        suggestion=f"Use one of: {', '.join(CONSTRAINT_MODES)}",
    )


def dominance_matrix(
    F: np.ndarray,
    cv: np.ndarray | None = None,
    constraint_mode: ConstraintMode = "none",
) -> np.ndarray:
    """
    Pairwise dominance relation.

    Parameters
    ----------
    F : np.ndarray
        Objective values in minimization form, shape (N, n_obj).
    cv : np.ndarray, optional
        Constraint violation per row, 0 for feasible rows.
    constraint_mode : {"none", "feasibility", "violation"}
        How feasibility alters the relation.

    Returns
    -------
    np.ndarray
        Boolean matrix D where ``D[i, j]`` means row i dominates row j.
    """
    F = np.asarray(F, dtype=float)
    n = F.shape[0]
    if n == 0:
        return np.zeros((0, 0), dtype=bool)
    le = np.all(F[:, None, :] <= F[None, :, :], axis=2)
    lt = np.any(F[:, None, :] < F[None, :, :], axis=2)
    dom = le & lt
    if cv is None or constraint_mode == "none":
        return dom
    cv = np.asarray(cv, dtype=float)
    feas = cv <= 0.0
    both_feasible = feas[:, None] & feas[None, :]
    result = (dom & both_feasible) | (feas[:, None] & ~feas[None, :])
    if constraint_mode == "violation":
        both_infeasible = ~feas[:, None] & ~feas[None, :]
        result |= both_infeasible & (cv[:, None] < cv[None, :])
    return result


__all__ = [
    "DOMINATES",
    "DOMINATED",
    "INCOMPARABLE",
    "ConstraintMode",
    "CONSTRAINT_MODES",
    "compare_minimization",
    "ParetoComparator",
    "EpsilonDominanceComparator",
    "ConstrainedComparator",
    "ViolationComparator",
    "make_comparator",
    "dominance_matrix",
]
