"""
HypE: Hypervolume Estimation Algorithm.

References:
    J. Bader, E. Zitzler, "HypE: An Algorithm for Fast Hypervolume-Based
    Many-Objective Optimization", Evolutionary Computation 19(1), 2011.
"""

from __future__ import annotations

import logging

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import BinaryTournament, lower_is_better
from moselect.engine.strategy.config.hype import HypEConfig, HypEConfigData
from moselect.foundation.individual import unique_members
from moselect.foundation.side_table import SideTable
from moselect.foundation.sorting import fast_non_dominated_sort

from .helpers import hype_front_reduction, hype_population_fitness

logger = logging.getLogger(__name__)


class HypE(SelectionStrategy):
    """
    HypE selection strategy.

    Survivors are whole fronts of population and offspring; the critical
    front is reduced by repeatedly dropping the member with the lowest HypE
    value. Mating is a binary tournament on the HypE fitness of the
    population (higher wins).

    Parameters
    ----------
    context : StrategyContext
        Shared context.
    config : HypEConfigData, optional
        Monte-Carlo sampling size; negative means exact computation.
    """

    name = "HypE"
    archive_policy = ArchivePolicy.NONE
    requires_uniform_direction = True

    def __init__(self, context: StrategyContext, config: HypEConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or HypEConfig.default()
        self.sampling_size = self.config.sampling_size
        self.fitness: SideTable[float] = SideTable()

    @property
    def exact(self) -> bool:
        return self.sampling_size < 0

    def _initialize(self, population: Population) -> None:
        self.fitness.clear()
        return None

    def _fitness_assignment(self, population: Population, archive: Population | None = None) -> None:
        values = hype_population_fitness(self.minimization_values(population), self.sampling_size, self.rng)
        self.fitness.clear()
        for ind, value in zip(population, values):
            self.fitness[ind] = float(value)

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        self._fitness_assignment(population)
        values = np.array([self.fitness[ind] for ind in population])
        tournament = BinaryTournament(lower_is_better(-values), self.rng)
        return [population[i] for i in tournament(len(population), len(population))]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        merged = unique_members(population, offspring)
        F = self.minimization_values(merged)
        fronts, _ = fast_non_dominated_sort(F)
        n_survive = self.context.population_size
        selected: list[int] = []
        for front in fronts:
            if len(selected) + front.size <= n_survive:
                selected.extend(int(i) for i in front)
                continue
            fill = n_survive - len(selected)
            if fill > 0:
                kept = hype_front_reduction(F[front], fill, self.sampling_size, self.rng)
                selected.extend(int(i) for i in front[kept])
                logger.debug("%s reduced the critical front from %d to %d", self.name, front.size, fill)
            break
        return [merged[i] for i in selected]


__all__ = ["HypE"]
