"""
OMOPSO and SMPSO: multi-objective particle swarm strategies.

Both keep a bounded archive of epsilon non-dominated particles that act as
leaders. Besides the five lifecycle operations they expose the movement
commands a swarm driver calls every generation: ``update_velocities``,
``update_positions``, ``turbulence`` and ``update_personal_bests``. The
movement commands work in place on the particles they receive;
``turbulence`` returns new particles.

References:
    M. Reyes-Sierra, C. A. Coello Coello, "Improving PSO-Based Multi-objective
    Optimization Using Crowding, Mutation and epsilon-Dominance", EMO 2005.

    A. J. Nebro et al., "SMPSO: A New PSO-based Metaheuristic for
    Multi-objective Optimization", MCDM 2009.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Sequence

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.config.mopso import (
    OMOPSOConfig,
    OMOPSOConfigData,
    SMPSOConfig,
    SMPSOConfigData,
)
from moselect.foundation.crowding import crowding_distance
from moselect.foundation.dominance import EpsilonDominanceComparator
from moselect.foundation.exceptions import ConfigurationError, DegenerateInputError
from moselect.foundation.grid import epsilon_grid
from moselect.foundation.individual import Particle, unique_members
from moselect.foundation.objectives import objective_bounds
from moselect.foundation.sorting import extract_non_dominated

from .helpers import (
    bound_positions,
    constriction_coefficient,
    leader_tournament,
    truncate_by_crowding,
    update_personal_bests,
)
from .mutation import Mutation, NonUniformMutation, PolynomialMutation, UniformMutation

logger = logging.getLogger(__name__)


class _SwarmStrategy(SelectionStrategy):
    """
    Leader archive and movement plumbing shared by OMOPSO and SMPSO.

    Subclasses set the acceleration range, the velocity rule, the factor applied
    to a velocity component whose position hits a bound, and the turbulence.
    """

    archive_policy = ArchivePolicy.BOUNDED
    acceleration_range: ClassVar[tuple[float, float]] = (1.5, 2.0)
    bounce_factor: ClassVar[float] = -1.0

    def __init__(self, context: StrategyContext, config: OMOPSOConfigData | SMPSOConfigData) -> None:
        super().__init__(context)
        if context.genotype_bounds is None:
            raise ConfigurationError(
                f"{self.name} needs genotype bounds to move particles.",
                suggestion="Pass genotype_bounds=(lower, upper) to the StrategyContext",
            )
        self.config = config
        self.lower, self.upper = context.genotype_bounds
        self.archive_size = config.archive_size or context.population_size
        self._archive_comparator: EpsilonDominanceComparator | None = None

    @property
    def archive_comparator(self) -> EpsilonDominanceComparator | None:
        """Epsilon-dominance comparator of the leader archive, available after ``initialize``."""
        return self._archive_comparator

    # ------------------------------------------------------------------
    # Leader archive
    # ------------------------------------------------------------------

    def crowding(self, members: Sequence[Particle]) -> np.ndarray:
        """Crowding distance of the archive members, normalized by the objective bounds."""
        lower, upper = objective_bounds(self.objectives)
        return crowding_distance(self.objective_values(members), lower, upper)

    def _build_archive(self, candidates: Population, keep: set[int]) -> Population:
        members = extract_non_dominated(candidates, self._archive_comparator)
        seen: list[np.ndarray] = []
        unique: Population = []
        for member in members:
            values = np.asarray(member.objectives, dtype=float)
            if any(np.array_equal(values, other) for other in seen):
                continue
            seen.append(values)
            unique.append(member if id(member) in keep else member.copy())
        if len(unique) > self.archive_size:
            kept = truncate_by_crowding(self.crowding(unique), self.archive_size, self.rng)
            logger.debug("%s leader archive truncated from %d to %d", self.name, len(unique), self.archive_size)
            unique = [unique[i] for i in kept]
        return unique

    def _initialize(self, population: Population) -> Population:
        lower, upper = objective_bounds(self.objectives)
        epsilon, origin = epsilon_grid(
            self.config.epsilon, self.config.n_hypercubes, lower, upper, self.objective_values(population)
        )
        self._archive_comparator = EpsilonDominanceComparator(
            self.objectives, epsilon, lower=origin, policy=self.context.objective_access
        )
        logger.debug("%s epsilon values %s", self.name, epsilon.tolist())
        return self._build_archive(population, keep=set())

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        if not archive:
            raise DegenerateInputError(f"{self.name} needs a non-empty leader archive to select leaders.")
        winners = leader_tournament(self.crowding(archive), len(population), self.rng)
        return [archive[i] for i in winners]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        return offspring

    def _update_archive(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        current = archive or []
        candidates = unique_members(current, offspring, population)
        return self._build_archive(candidates, keep={id(member) for member in current})

    # ------------------------------------------------------------------
    # Movement commands (in place)
    # ------------------------------------------------------------------

    def _positions(self, swarm: Sequence[Particle]) -> np.ndarray:
        if any(getattr(p, "position", None) is None for p in swarm):
            raise DegenerateInputError(f"{self.name} can only move particles with a position.")
        return np.array([p.position for p in swarm], dtype=float).reshape(len(swarm), self.lower.size)

    def _coefficients(self) -> tuple[float, float, float, float, float]:
        rng = self.rng
        lo, hi = self.acceleration_range
        w = rng.uniform(0.1, 0.5)
        c1 = rng.uniform(lo, hi)
        c2 = rng.uniform(lo, hi)
        r1 = rng.uniform(0.0, 1.0)
        r2 = rng.uniform(0.0, 1.0)
        return w, c1, c2, r1, r2

    def _next_velocity(self, V, X, P, L, w, c1, c2, r1, r2) -> np.ndarray:
        return w * V + c1 * r1 * (P - X) + c2 * r2 * (L - X)

    def update_velocities(self, swarm: Sequence[Particle], leaders: Sequence[Particle]) -> None:
        """
        Recompute every particle's velocity toward its memory and its leader, in place.

        The inertia and acceleration coefficients are drawn once per call and
        shared by the whole swarm.
        """
        if len(leaders) != len(swarm):
            raise DegenerateInputError(f"Expected one leader per particle, got {len(leaders)} for {len(swarm)}.")
        X = self._positions(swarm)
        V = np.array([p.velocity for p in swarm], dtype=float).reshape(X.shape)
        P = np.array([p.best_position for p in swarm], dtype=float).reshape(X.shape)
        L = np.array([leader.best_position for leader in leaders], dtype=float).reshape(X.shape)
        V = self._next_velocity(V, X, P, L, *self._coefficients())
        for particle, row in zip(swarm, V):
            particle.velocity = row.copy()

    def update_positions(self, swarm: Sequence[Particle]) -> None:
        """Move every particle by its velocity and push it back inside the bounds, in place."""
        X = self._positions(swarm)
        V = np.array([p.velocity for p in swarm], dtype=float).reshape(X.shape)
        X += V
        bound_positions(X, V, self.lower, self.upper, self.bounce_factor)
        for particle, x, v in zip(swarm, X, V):
            particle.position = x.copy()
            particle.velocity = v.copy()

    def update_personal_bests(self, swarm: Sequence[Particle]) -> int:
        """Refresh the particles' memories after evaluation, in place."""
        return update_personal_bests(swarm, self.comparator)

    def _disturb(self, X: np.ndarray) -> np.ndarray:  # pragma: no cover - abstract
        raise NotImplementedError

    def turbulence(self, swarm: Sequence[Particle]) -> Population:
        """
        Mutated copies of the swarm, in swarm order.

        The caller's particles are not modified. The copies keep the objective
        values of their originals until the driver evaluates them.
        """
        disturbed = [particle.copy() for particle in swarm]
        if not disturbed:
            return disturbed
        X = self._disturb(self._positions(disturbed).copy())
        V = np.array([p.velocity for p in disturbed], dtype=float).reshape(X.shape)
        bound_positions(X, V, self.lower, self.upper, self.bounce_factor)
        for particle, x, v in zip(disturbed, X, V):
            particle.position = x.copy()
            particle.velocity = v.copy()
        return disturbed


class OMOPSO(_SwarmStrategy):
    """
    OMOPSO selection strategy.

    Parameters
    ----------
    context : StrategyContext
        Execution context; ``genotype_bounds`` is required.
    config : OMOPSOConfigData, optional
        Archive size and epsilon settings.
    uniform_mutation, non_uniform_mutation : Mutation, optional
        Turbulence operators for the first and second thirds of the swarm.
        Both default to probability ``1 / n_var`` and perturbation 0.5.
    """

    name = "OMOPSO"
    acceleration_range = (1.5, 2.0)
    bounce_factor = -1.0

    def __init__(
        self,
        context: StrategyContext,
        config: OMOPSOConfigData | None = None,
        *,
        uniform_mutation: Mutation | None = None,
        non_uniform_mutation: Mutation | None = None,
    ) -> None:
        super().__init__(context, config or OMOPSOConfig.default())
        self.uniform_mutation = uniform_mutation or UniformMutation(None, 0.5, lower=self.lower, upper=self.upper)
        self.non_uniform_mutation = non_uniform_mutation or NonUniformMutation(
            None, 0.5, lower=self.lower, upper=self.upper
        )

    def _disturb(self, X: np.ndarray) -> np.ndarray:
        if isinstance(self.non_uniform_mutation, NonUniformMutation):
            self.non_uniform_mutation.set_progress(self.context.generation / self.context.max_generations)
        step = X.shape[0] // 3
        X[:step] = self.uniform_mutation(X[:step].copy(), self.rng)
        X[step : 2 * step] = self.non_uniform_mutation(X[step : 2 * step].copy(), self.rng)
        return X


class SMPSO(_SwarmStrategy):
    """
    SMPSO selection strategy.

    Velocities are multiplied by the constriction coefficient and clamped to
    half the range of each variable; a particle leaving the box keeps only a
    thousandth of the offending velocity component.

    Parameters
    ----------
    context : StrategyContext
        Execution context; ``genotype_bounds`` is required.
    config : SMPSOConfigData, optional
        Archive size, epsilon settings and per-particle mutation probability.
    mutation : Mutation, optional
        Turbulence operator; polynomial mutation with probability ``1 / n_var``
        by default.
    """

    name = "SMPSO"
    acceleration_range = (1.5, 2.5)
    bounce_factor = 0.001

    def __init__(
        self,
        context: StrategyContext,
        config: SMPSOConfigData | None = None,
        *,
        mutation: Mutation | None = None,
    ) -> None:
        super().__init__(context, config or SMPSOConfig.default())
        self.mutation = mutation or PolynomialMutation(None, 20.0, lower=self.lower, upper=self.upper)
        self.max_velocity = (self.upper - self.lower) / 2.0

    def _next_velocity(self, V, X, P, L, w, c1, c2, r1, r2) -> np.ndarray:
        chi = constriction_coefficient(c1, c2)
        V = chi * super()._next_velocity(V, X, P, L, w, c1, c2, r1, r2)
        return np.clip(V, -self.max_velocity, self.max_velocity)

    def _disturb(self, X: np.ndarray) -> np.ndarray:
        selected = np.flatnonzero(self.rng.random(X.shape[0]) < self.config.mut_prob)
        if selected.size:
            X[selected] = self.mutation(X[selected].copy(), self.rng)
        return X


__all__ = ["OMOPSO", "SMPSO"]
