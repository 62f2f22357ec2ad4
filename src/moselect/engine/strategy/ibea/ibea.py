"""
IBEA: Indicator-Based Evolutionary Algorithm.

References:
    E. Zitzler, S. Kuenzli, "Indicator-Based Selection in Multiobjective
    Search", PPSN VIII, LNCS 3242, 2004.
"""

from __future__ import annotations

import logging

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import BinaryTournament, lower_is_better
from moselect.engine.strategy.config.ibea import IBEAConfig, IBEAConfigData
from moselect.foundation.individual import unique_members
from moselect.foundation.side_table import SideTable

from .helpers import compute_indicator_matrix, ibea_fitness, ibea_survival, indicator_scale

logger = logging.getLogger(__name__)


class IBEA(SelectionStrategy):
    """
    IBEA selection strategy.

    Fitness is computed from a pairwise quality indicator (additive epsilon or
    hypervolume difference). Environmental selection removes the worst
    individual of population and offspring one at a time, updating the
    fitness of the rest after every removal. Parents come from a binary
    tournament on fitness.

    Parameters
    ----------
    context : StrategyContext
        Shared context.
    config : IBEAConfigData, optional
        ``kappa``, indicator name and hypervolume reference factor ``rho``.
    """

    name = "IBEA"
    archive_policy = ArchivePolicy.NONE
    requires_uniform_direction = True

    def __init__(self, context: StrategyContext, config: IBEAConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or IBEAConfig.default()
        self.kappa = self.config.kappa
        self.indicator = self.config.indicator
        self.fitness: SideTable[float] = SideTable()

    def indicator_matrix(self, population: Population) -> np.ndarray:
        return compute_indicator_matrix(self.minimization_values(population), self.indicator, self.config.rho)

    def _initialize(self, population: Population) -> None:
        self.fitness.clear()
        self._fitness_assignment(population)
        return None

    def _fitness_assignment(self, population: Population, archive: Population | None = None) -> None:
        if not population:
            return
        indicator = self.indicator_matrix(population)
        values = ibea_fitness(indicator, self.kappa, indicator_scale(indicator))
        for ind, value in zip(population, values):
            self.fitness[ind] = float(value)

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        if any(ind not in self.fitness for ind in population):
            self._fitness_assignment(population)
        values = np.array([self.fitness[ind] for ind in population])
        tournament = BinaryTournament(lower_is_better(-values), self.rng, distinct=False)
        return [population[i] for i in tournament(len(population), len(population))]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        merged = unique_members(population, offspring)
        selected, values = ibea_survival(self.indicator_matrix(merged), self.context.population_size, self.kappa)
        survivors = [merged[i] for i in selected]
        self.fitness.clear()
        for ind, value in zip(survivors, values):
            self.fitness[ind] = float(value)
        logger.debug("%s removed %d individuals", self.name, len(merged) - len(survivors))
        return survivors


__all__ = ["IBEA"]
