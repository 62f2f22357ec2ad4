"""
SPEA2: Strength Pareto Evolutionary Algorithm 2.

References:
    E. Zitzler, M. Laumanns, L. Thiele, "SPEA2: Improving the Strength
    Pareto Evolutionary Algorithm", TIK-Report 103, ETH Zurich, 2001.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import BinaryTournament, lower_is_better
from moselect.engine.strategy.config.spea2 import SPEA2Config, SPEA2ConfigData
from moselect.foundation.exceptions import ConfigurationError, DegenerateInputError
from moselect.foundation.individual import unique_members
from moselect.foundation.side_table import SideTable

from .helpers import select_archive, spea2_fitness

logger = logging.getLogger(__name__)


class SPEA2(SelectionStrategy):
    """
    SPEA2 selection strategy.

    The archive replaces the population each generation: parents come from a
    binary tournament on archive fitness, environmental selection hands the
    offspring back as the next population, and the archive is rebuilt from
    population, offspring and the previous archive.

    Parameters
    ----------
    context : StrategyContext
        Shared context.
    config : SPEA2ConfigData, optional
        Archive size (defaults to the population size) and ``k`` for the
        density estimate (defaults to ``int(sqrt(population + archive))``).
    """

    name = "SPEA2"
    archive_policy = ArchivePolicy.REPLACES_POPULATION

    def __init__(self, context: StrategyContext, config: SPEA2ConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or SPEA2Config.default()
        self.archive_size = self.config.archive_size or context.population_size
        self.k = self.config.k_value or int(math.sqrt(context.population_size + self.archive_size))
        if self.k > self.archive_size:
            raise ConfigurationError(
                f"SPEA2 k-value ({self.k}) cannot exceed the archive size ({self.archive_size}).",
                suggestion="Lower 'k-value' or increase 'archive-size'",
            )
        self.fitness: SideTable[float] = SideTable()

    def _initialize(self, population: Population) -> Population:
        return self._build_archive(population)

    def _fitness_assignment(self, population: Population, archive: Population | None = None) -> None:
        merged = unique_members(population, archive)
        if not merged:
            return
        values, _ = spea2_fitness(self.minimization_values(merged), self.k)
        self.fitness.clear()
        for ind, value in zip(merged, values):
            self.fitness[ind] = float(value)

    def _build_archive(self, individuals: Population) -> Population:
        if not individuals:
            return []
        fitness, dist = spea2_fitness(self.minimization_values(individuals), self.k)
        selected = select_archive(fitness, dist, self.archive_size)
        archive = [individuals[i] for i in selected]
        self.fitness.clear()
        for i, ind in zip(selected, archive):
            self.fitness[ind] = float(fitness[i])
        logger.debug("%s archive rebuilt with %d members", self.name, len(archive))
        return archive

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        if not archive:
            raise DegenerateInputError("SPEA2 mating selection needs a non-empty archive.")
        if any(ind not in self.fitness for ind in archive):
            self._fitness_assignment(archive)
        values = np.array([self.fitness[ind] for ind in archive])
        tournament = BinaryTournament(lower_is_better(values), self.rng, distinct=False)
        return [archive[i] for i in tournament(len(archive), len(population))]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        return list(offspring)

    def _update_archive(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        return self._build_archive(unique_members(population, offspring, archive))


__all__ = ["SPEA2"]
