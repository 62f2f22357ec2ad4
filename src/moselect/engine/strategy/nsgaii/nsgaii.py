"""
NSGA-II: Non-dominated Sorting Genetic Algorithm II.

References:
    K. Deb, A. Pratap, S. Agarwal, T. Meyarivan, "A Fast and Elitist
    Multiobjective Genetic Algorithm: NSGA-II", IEEE TEC 6(2), 2002.
"""

from __future__ import annotations

import logging

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import BinaryTournament, rank_and_crowding as prefer_rank_crowding
from moselect.engine.strategy.config.nsgaii import NSGAIIConfig, NSGAIIConfigData
from moselect.foundation.dominance import make_comparator
from moselect.foundation.individual import constraint_violations, unique_members
from moselect.foundation.objectives import objective_bounds
from moselect.foundation.side_table import SideTable

from .helpers import RankInfo, nsga2_survival, rank_and_crowding

logger = logging.getLogger(__name__)


class NSGAII(SelectionStrategy):
    """
    NSGA-II selection strategy.

    Survivors are chosen from population and offspring by front number and,
    inside the critical front, by crowding distance. Parents come from a
    binary tournament on (rank, crowding); the very first mating returns the
    population unchanged.

    Parameters
    ----------
    context : StrategyContext
        Shared context (objectives, population size, random generator).
    config : NSGAIIConfigData, optional
        ``constraint_mode`` selects plain, feasibility-first or
        violation-degree constrained dominance.

    Examples
    --------
    >>> context = StrategyContext.create(n_obj=2, population_size=100, seed=1)
    >>> strategy = NSGAII(context)
    >>> strategy.initialize(population)
    """

    name = "NSGA-II"
    archive_policy = ArchivePolicy.NONE

    def __init__(self, context: StrategyContext, config: NSGAIIConfigData | None = None) -> None:
        self.config = config or NSGAIIConfig.default()
        self.constraint_mode = self.config.constraint_mode
        super().__init__(context)
        self.lower, self.upper = objective_bounds(self.objectives)
        self.info: SideTable[RankInfo] = SideTable()
        self._first_mating = True

    def _create_comparator(self):
        return make_comparator(self.objectives, self.constraint_mode, policy=self.context.objective_access)

    def _initialize(self, population: Population) -> None:
        self._first_mating = True
        self.info.clear()
        self._fitness_assignment(population)
        return None

    def _fitness_assignment(self, population: Population, archive: Population | None = None) -> None:
        if not population:
            return
        F = self.minimization_values(population)
        _, rank, crowding = rank_and_crowding(
            F, constraint_violations(population), self.constraint_mode, self.lower, self.upper
        )
        for ind, r, d in zip(population, rank, crowding):
            self.info[ind] = RankInfo(int(r), float(d))

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        if self._first_mating:
            self._first_mating = False
            return list(population)
        if any(ind not in self.info for ind in population):
            self._fitness_assignment(population)
        rank = np.array([self.info[ind].rank for ind in population])
        crowding = np.array([self.info[ind].crowding for ind in population])
        tournament = BinaryTournament(prefer_rank_crowding(rank, crowding), self.rng)
        winners = tournament(len(population), len(population))
        return [population[i] for i in winners]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        merged = unique_members(population, offspring)
        F = self.minimization_values(merged)
        selected, rank, crowding = nsga2_survival(
            F,
            self.context.population_size,
            constraint_violations(merged),
            self.constraint_mode,
            self.lower,
            self.upper,
        )
        survivors = [merged[i] for i in selected]
        self.info.clear()
        for i, ind in zip(selected, survivors):
            self.info[ind] = RankInfo(int(rank[i]), float(crowding[i]))
        logger.debug("%s kept %d of %d individuals", self.name, len(survivors), len(merged))
        return survivors


__all__ = ["NSGAII"]
