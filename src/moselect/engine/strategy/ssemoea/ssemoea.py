"""
Steady-state epsilon-MOEA.

References:
    K. Deb, M. Mohan, S. Mishra, "Evaluating the epsilon-Domination Based
    Multi-Objective Evolutionary Algorithm for a Quick Computation of
    Pareto-Optimal Solutions", Evolutionary Computation 13(4), 2005.
"""

from __future__ import annotations

import logging

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.config.ssemoea import SSeMOEAConfig, SSeMOEAConfigData
from moselect.foundation.dominance import DOMINATED, DOMINATES, EpsilonDominanceComparator
from moselect.foundation.exceptions import DegenerateInputError
from moselect.foundation.grid import epsilon_grid
from moselect.foundation.objectives import objective_bounds

from .helpers import offer_to_epsilon_archive, replacement_index

logger = logging.getLogger(__name__)


class SSeMOEA(SelectionStrategy):
    """
    Steady-state epsilon-MOEA selection strategy.

    Each generation one parent comes from a Pareto tournament in the
    population and one from the archive. Offspring replace population
    members they dominate and compete for a place in an epsilon archive
    keeping at most one solution per hypercube.

    Parameters
    ----------
    context : StrategyContext
        Execution context.
    config : SSeMOEAConfigData, optional
        Epsilon values or number of hypercubes per objective.
    """

    name = "SSeMOEA"
    archive_policy = ArchivePolicy.UNBOUNDED

    def __init__(self, context: StrategyContext, config: SSeMOEAConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or SSeMOEAConfig.default()
        self._box: EpsilonDominanceComparator | None = None

    @property
    def box_comparator(self) -> EpsilonDominanceComparator | None:
        """Epsilon-dominance comparator of the archive, available after ``initialize``."""
        return self._box

    def _initialize(self, population: Population) -> Population:
        lower, upper = objective_bounds(self.objectives)
        epsilon, origin = epsilon_grid(
            self.config.epsilon, self.config.n_hypercubes, lower, upper, self.objective_values(population)
        )
        self._box = EpsilonDominanceComparator(
            self.objectives, epsilon, lower=origin, policy=self.context.objective_access
        )
        archive: Population = []
        for ind in population:
            offer_to_epsilon_archive(archive, ind.copy(), self._box, self.comparator)
        return archive

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        if not population:
            raise DegenerateInputError("SSeMOEA cannot select parents from an empty population.")
        rng = self.rng
        first = population[int(rng.integers(len(population)))]
        second = population[int(rng.integers(len(population)))]
        if not archive:
            return [first, second]
        flag = self.comparator.compare(first, second)
        if flag == DOMINATES:
            winner = first
        elif flag == DOMINATED:
            winner = second
        else:
            winner = first if rng.random() < 0.5 else second
        return [winner, archive[int(rng.integers(len(archive)))]]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        survivors = list(population)
        for child in offspring:
            index = replacement_index(child, survivors, self.comparator, self.rng)
            if index < 0:
                continue
            del survivors[index]
            survivors.append(child.copy())
        return survivors

    def _update_archive(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        updated = list(archive or [])
        accepted = 0
        for child in offspring:
            if any(member is child for member in updated):
                continue
            candidate = child.copy()
            if offer_to_epsilon_archive(updated, candidate, self._box, self.comparator):
                accepted += 1
        logger.debug("%s archive accepted %d of %d offspring", self.name, accepted, len(offspring))
        return updated


__all__ = ["SSeMOEA"]
