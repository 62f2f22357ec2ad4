"""
GrEA: Grid-based Evolutionary Algorithm.

References:
    S. Yang, M. Li, X. Liu, J. Zheng, "A Grid-Based Evolutionary Algorithm
    for Many-Objective Optimization", IEEE TEC 17(5), 2013.
"""

from __future__ import annotations

import logging

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import BinaryTournament
from moselect.engine.strategy.config.grea import GrEAConfig, GrEAConfigData
from moselect.foundation.grid import grid_front_reduction
from moselect.foundation.individual import unique_members
from moselect.foundation.sorting import fast_non_dominated_sort

from .helpers import grid_tournament_rule

logger = logging.getLogger(__name__)


class GrEA(SelectionStrategy):
    """
    GrEA selection strategy.

    Survivors are whole fronts of population and offspring. The critical
    front is filled one individual at a time by the best (GR, GCD, GCPD)
    score, penalizing the grid neighbours of every pick.

    Parameters
    ----------
    context : StrategyContext
        Shared context.
    config : GrEAConfigData, optional
        Grid divisions per objective and grid distance metric.
    """

    name = "GrEA"
    archive_policy = ArchivePolicy.NONE
    requires_uniform_direction = True

    def __init__(self, context: StrategyContext, config: GrEAConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or GrEAConfig.default()
        self.div = self.config.div
        self.metric = self.config.grid_distance

    def _initialize(self, population: Population) -> None:
        return None

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        rule = grid_tournament_rule(self.minimization_values(population), self.div, self.metric)
        tournament = BinaryTournament(rule, self.rng, distinct=False)
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
                picks = grid_front_reduction(F[front], fill, self.div, self.metric)
                selected.extend(int(front[i]) for i in picks)
                logger.debug("%s filled %d slots from a front of %d", self.name, fill, front.size)
            break
        return [merged[i] for i in selected]


__all__ = ["GrEA"]
