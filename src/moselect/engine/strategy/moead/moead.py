"""
MOEA/D: Multi-Objective Evolutionary Algorithm based on Decomposition.

References:
    Q. Zhang, H. Li, "MOEA/D: A Multiobjective Evolutionary Algorithm Based
    on Decomposition", IEEE TEC 11(6), 2007.
"""

from __future__ import annotations

import logging

import numpy as np

from moselect.engine.strategy.components.archive import merge_into_archive
from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.config.moead import MOEADConfig, MOEADConfigData
from moselect.foundation.exceptions import ConfigurationError, DegenerateInputError
from moselect.foundation.objectives import objective_bounds
from moselect.foundation.reference import uniform_weight_vectors
from moselect.foundation.scalarizing import get_scalarizer
from moselect.foundation.sorting import extract_non_dominated

from .helpers import compute_neighbors, initial_ideal, update_ideal

logger = logging.getLogger(__name__)


class MOEAD(SelectionStrategy):
    """
    MOEA/D selection strategy.

    Position ``i`` of the population holds the incumbent of subproblem ``i``.
    Mating draws two distinct neighbours per subproblem; environmental
    selection offers offspring ``i`` to at most ``nr`` randomly ordered
    neighbours of subproblem ``i`` and replaces every incumbent whose
    aggregated value it strictly improves. An optional external archive keeps
    the Pareto non-dominated offspring.

    Parameters
    ----------
    context : StrategyContext
        Shared context. ``population_size`` must equal the number of weight
        vectors generated from ``h``.
    config : MOEADConfigData, optional
        ``h``, neighbourhood size ``t``, replacement limit ``nr``, external
        archive flag and aggregation function.
    """

    name = "MOEA/D"
    archive_policy = ArchivePolicy.UNBOUNDED
    requires_uniform_direction = True

    def __init__(self, context: StrategyContext, config: MOEADConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or MOEADConfig.default(self.n_obj)
        self._weights = uniform_weight_vectors(self.config.h, self.n_obj)
        n_vectors = self._weights.shape[0]
        if n_vectors != context.population_size:
            raise ConfigurationError(
                f"MOEA/D with h={self.config.h} and {self.n_obj} objectives defines {n_vectors} subproblems "
                f"but the population size is {context.population_size}.",
                suggestion="Make the population size equal to the number of weight vectors",
            )
        if self.config.t > context.population_size:
            raise ConfigurationError(
                f"The neighbourhood size t={self.config.t} exceeds the population size {context.population_size}."
            )
        if self.config.t < 2:
            raise ConfigurationError("MOEA/D mating needs a neighbourhood of at least 2 subproblems.")
        self.archive_policy = ArchivePolicy.UNBOUNDED if self.config.external_pop else ArchivePolicy.NONE
        self.scalarizer = get_scalarizer(self.config.function)
        self.neighbors = compute_neighbors(self._weights, self.config.t)
        lower, upper = objective_bounds(self.objectives)
        self._ideal_start = initial_ideal(lower, upper, self._maximize)
        self.ideal = self._ideal_start.copy()

    @property
    def weight_vectors(self) -> np.ndarray:
        """Weight vector of every subproblem (copy)."""
        return self._weights.copy()

    def aggregate(self, fvals: np.ndarray, subproblems: np.ndarray | int) -> np.ndarray:
        """Aggregated value of minimization-form ``fvals`` for the given subproblem(s)."""
        return self.scalarizer(fvals, self._weights[subproblems], self.ideal)

    def _initialize(self, population: Population) -> Population | None:
        self._check_size(population)
        self.ideal = self._ideal_start.copy()
        update_ideal(self.ideal, self.minimization_values(population))
        if not self.config.external_pop:
            return None
        return extract_non_dominated(population, self.comparator)

    def _check_size(self, population: Population) -> None:
        if len(population) != self._weights.shape[0]:
            raise DegenerateInputError(
                f"MOEA/D expects one individual per subproblem ({self._weights.shape[0]}), got {len(population)}."
            )

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        self._check_size(population)
        t = self.neighbors.shape[1]
        parents: Population = []
        for i in range(len(population)):
            first, second = self.rng.choice(t, size=2, replace=False)
            parents.append(population[self.neighbors[i, first]])
            parents.append(population[self.neighbors[i, second]])
        return parents

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        self._check_size(population)
        survivors = list(population)
        current = self.minimization_values(survivors)
        child_values = self.minimization_values(offspring)
        replaced = 0
        for i, (child, fc) in enumerate(zip(offspring[: len(survivors)], child_values)):
            update_ideal(self.ideal, fc)
            n_repl = 0
            for j in self.rng.permutation(self.neighbors[i]):
                if n_repl >= self.config.nr:
                    break
                if self.aggregate(fc, j) < self.aggregate(current[j], j):
                    survivors[j] = child.copy()
                    current[j] = fc
                    n_repl += 1
            replaced += n_repl
        logger.debug("%s performed %d replacements", self.name, replaced)
        return survivors

    def _update_archive(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population | None:
        if not self.config.external_pop:
            return None
        new_archive = list(archive or [])
        merge_into_archive(new_archive, offspring, self.comparator)
        return new_archive


__all__ = ["MOEAD"]
