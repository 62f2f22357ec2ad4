"""
Individual capability and the concrete solution types.

Strategies never inspect genotypes. They only need to read and write the
objective vector, ask for feasibility and produce independent copies.
"""

from __future__ import annotations

import copy as _copy
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Protocol, Sequence, runtime_checkable

import numpy as np

from .exceptions import ConfigurationError, ObjectiveAccessError

logger = logging.getLogger(__name__)

ObjectiveAccess = Literal["raise", "zero"]


@runtime_checkable
class Individual(Protocol):
    """Minimal capability a population member must expose."""

    objectives: np.ndarray | None

    @property
    def feasible(self) -> bool: ...

    def copy(self) -> "Individual": ...


@dataclass(eq=False)
class Solution:
    """
    Default Individual implementation.

    Attributes:
        objectives: Objective vector, None until evaluated
        variables: Opaque decision variables owned by the variation layer
        constraint_violation: Aggregated violation degree, 0 when feasible
    """

    objectives: np.ndarray | None = None
    variables: Any = None
    constraint_violation: float = 0.0

    def __post_init__(self) -> None:
        if self.objectives is not None:
            self.objectives = np.asarray(self.objectives, dtype=float)

    @property
    def feasible(self) -> bool:
        return self.constraint_violation <= 0.0

    def copy(self) -> "Solution":
        return _copy.deepcopy(self)


@dataclass(eq=False)
class Particle(Solution):
    """Swarm member used by the particle swarm strategies."""

    velocity: np.ndarray | None = None
    best_position: np.ndarray | None = None
    best_objectives: np.ndarray | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.variables is not None:
            self.variables = np.asarray(self.variables, dtype=float)
            if self.velocity is None:
                self.velocity = np.zeros_like(self.variables)
            if self.best_position is None:
                self.best_position = self.variables.copy()
        if self.best_objectives is None and self.objectives is not None:
            self.best_objectives = self.objectives.copy()

    @property
    def position(self) -> np.ndarray:
        return self.variables

    @position.setter
    def position(self, value: np.ndarray) -> None:
        self.variables = np.asarray(value, dtype=float)


def _read_objectives(individual: Individual, n_obj: int, index: int, policy: ObjectiveAccess) -> np.ndarray | None:
    """Objective vector of one individual, or None when the zero policy applies."""
    values = getattr(individual, "objectives", None)
    found = None if values is None else int(np.size(values))
    if values is None or found != n_obj:
        if policy == "zero":
            return None
        if policy != "raise":
            raise ConfigurationError(f"Unknown objective access policy '{policy}'.", suggestion="Use 'raise' or 'zero'")
        raise ObjectiveAccessError(index, n_obj, found)
    return np.asarray(values, dtype=float).reshape(n_obj)


def objective_vector(
    individual: Individual,
    n_obj: int,
    *,
    index: int = 0,
    policy: ObjectiveAccess = "raise",
) -> np.ndarray:
    """Read the objective vector of one individual under the given access policy."""
    values = _read_objectives(individual, n_obj, index, policy)
    if values is None:
        logger.warning("Individual %d has no usable objective vector; substituting zeros.", index)
        return np.zeros(n_obj, dtype=float)
    return values


def objective_matrix(
    population: Sequence[Individual],
    n_obj: int,
    *,
    policy: ObjectiveAccess = "raise",
) -> np.ndarray:
    """
    Stack the objective vectors of a population.

    Parameters
    ----------
    population : sequence of Individual
        Population to read. It is not modified.
    n_obj : int
        Expected number of objectives.
    policy : {"raise", "zero"}
        ``"raise"`` signals ObjectiveAccessError on a missing or malformed
        vector; ``"zero"`` substitutes zero vectors and logs one warning with
        the number of substituted rows.

    Returns
    -------
    np.ndarray
        Matrix of shape (len(population), n_obj).
    """
    F = np.zeros((len(population), n_obj), dtype=float)
    missing = 0
    for i, ind in enumerate(population):
        values = _read_objectives(ind, n_obj, i, policy)
        if values is None:
            missing += 1
        else:
            F[i] = values
    if missing:
        logger.warning(
            "%d of %d individuals have no usable objective vector; substituting zeros.", missing, len(population)
        )
    return F


def write_objectives(population: Iterable[Individual], F: np.ndarray) -> None:
    """Assign the rows of ``F`` back to the individuals, in place."""
    for ind, row in zip(population, np.asarray(F, dtype=float)):
        ind.objectives = row.copy()


def constraint_violations(population: Sequence[Individual]) -> np.ndarray:
    """Violation degree per individual; 0 for feasible members."""
    cv = np.zeros(len(population), dtype=float)
    for i, ind in enumerate(population):
        value = getattr(ind, "constraint_violation", None)
        if value is None:
            cv[i] = 0.0 if ind.feasible else 1.0
        else:
            cv[i] = max(float(value), 0.0)
    return cv


def unique_members(*groups: Iterable[Individual]) -> list[Individual]:
    """Concatenate groups, dropping repeated references to the same object."""
    seen: set[int] = set()
    merged: list[Individual] = []
    for group in groups:
        if group is None:
            continue
        for ind in group:
            if id(ind) in seen:
                continue
            seen.add(id(ind))
            merged.append(ind)
    return merged


__all__ = [
    "ObjectiveAccess",
    "Individual",
    "Solution",
    "Particle",
    "objective_vector",
    "objective_matrix",
    "write_objectives",
    "constraint_violations",
    "unique_members",
]
