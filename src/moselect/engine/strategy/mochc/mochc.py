"""
MOCHC: multi-objective CHC with incest prevention and cataclysmic restarts.

References:
    A. J. Nebro, E. Alba, G. Molina, F. Chicano, F. Luna, J. J. Durillo,
    "Optimal Antenna Placement using a New Multi-Objective CHC Algorithm",
    GECCO 2007.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.config.mochc import MOCHCConfig, MOCHCConfigData
from moselect.engine.strategy.nsgaii.helpers import nsga2_survival
from moselect.foundation.exceptions import ConfigurationError
from moselect.foundation.individual import Individual, unique_members
from moselect.foundation.objectives import objective_bounds

from .helpers import Distance, hamming_distance, incest_free_pairs

logger = logging.getLogger(__name__)

Mutator = Callable[[Sequence[Individual]], list]


class MOCHC(SelectionStrategy):
    """
    MOCHC selection strategy.

    Parents are paired at random and a pair only mates when its members are
    further apart than twice the incest threshold. Survivors are chosen
    NSGA-II style. Every generation in which no offspring survives lowers the
    threshold; once it drops to ``-convergence_value`` the population is
    restarted: the best spread survivors are kept and the rest are replaced by
    mutants.

    Parameters
    ----------
    context : StrategyContext
        Execution context.
    config : MOCHCConfigData, optional
        Thresholds, number of survivors and convergence value.
    mutator : callable, optional
        ``mutator(individuals) -> list`` returning new, already evaluated
        individuals. Required once a restart happens.
    distance : callable, optional
        Genotype distance between two individuals; Hamming by default.
    """

    name = "MOCHC"
    archive_policy = ArchivePolicy.NONE

    def __init__(
        self,
        context: StrategyContext,
        config: MOCHCConfigData | None = None,
        *,
        mutator: Mutator | None = None,
        distance: Distance | None = None,
    ) -> None:
        super().__init__(context)
        self.config = config or MOCHCConfig.default()
        self.mutator = mutator
        self.distance = distance or hamming_distance
        self.n_survivors = self.config.n_survivors or max(1, int(0.05 * context.population_size))
        if self.n_survivors > context.population_size:
            raise ConfigurationError(
                f"number-of-survivors ({self.n_survivors}) exceeds the population size ({context.population_size})."
            )
        self.lower, self.upper = objective_bounds(self.objectives)
        self.current_d = self.config.initial_d
        self.restarts = 0

    def _initialize(self, population: Population) -> None:
        self.current_d = self.config.initial_d
        self.restarts = 0
        return None

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        shuffled = [population[i] for i in self.rng.permutation(len(population))]
        return incest_free_pairs(shuffled, self.current_d, self.distance)

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        merged = unique_members(population, offspring)
        F = self.minimization_values(merged)
        selected, _, crowding = nsga2_survival(F, self.context.population_size, lower=self.lower, upper=self.upper)
        survivors = [merged[i] for i in selected]

        parents = {id(ind) for ind in population}
        if all(id(ind) in parents for ind in survivors):
            self.current_d -= 1
            logger.debug("%s threshold lowered to %d", self.name, self.current_d)

        if self.current_d <= -self.config.convergence_value:
            survivors = self._restart(survivors, crowding[selected])
        return survivors

    def _restart(self, survivors: Population, crowding: np.ndarray) -> Population:
        if self.mutator is None:
            raise ConfigurationError(
                "MOCHC reached a cataclysmic restart without a mutator.",
                suggestion="Pass mutator=... when building the strategy",
            )
        order = np.argsort(-np.asarray(crowding, dtype=float), kind="mergesort")
        ranked = [survivors[i] for i in order]
        kept = ranked[: self.n_survivors]
        mutants = list(self.mutator(ranked[self.n_survivors :]))
        self.current_d = self.config.restart_d
        self.restarts += 1
        logger.debug("%s restart %d: kept %d, mutated %d", self.name, self.restarts, len(kept), len(mutants))
        return kept + mutants


__all__ = ["MOCHC"]
