"""
SMS-EMOA: S-Metric Selection Evolutionary Multi-objective Algorithm.

References:
    N. Beume, B. Naujoks, M. Emmerich, "SMS-EMOA: Multiobjective Selection
    Based on Dominated Hypervolume", EJOR 181(3), 2007.
"""

from __future__ import annotations

import logging

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import RandomSelection
from moselect.engine.strategy.config.smsemoa import SMSEMOAConfig, SMSEMOAConfigData
from moselect.foundation.exceptions import DegenerateInputError
from moselect.foundation.individual import unique_members
from moselect.foundation.sorting import fast_non_dominated_sort

from .helpers import least_contributor

logger = logging.getLogger(__name__)


class SMSEMOA(SelectionStrategy):
    """
    Steady-state SMS-EMOA selection strategy.

    Two random parents produce a single offspring. The offspring joins the
    population and the member of the worst front with the smallest
    hypervolume contribution is discarded.
    """

    name = "SMS-EMOA"
    archive_policy = ArchivePolicy.NONE
    requires_uniform_direction = True

    def __init__(self, context: StrategyContext, config: SMSEMOAConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or SMSEMOAConfig.default()
        self._selection = RandomSelection(self.rng)

    def _initialize(self, population: Population) -> None:
        return None

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        return [population[i] for i in self._selection(population, 2)]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        if not offspring:
            raise DegenerateInputError("SMS-EMOA expects one offspring per generation.")
        merged = unique_members(population, offspring[:1])
        if len(merged) == len(population):
            return merged
        F = self.minimization_values(merged)
        fronts, _ = fast_non_dominated_sort(F)
        worst = fronts[-1]
        removed = int(worst[least_contributor(F[worst])])
        logger.debug("%s discarded a member of front %d", self.name, len(fronts))
        return [ind for i, ind in enumerate(merged) if i != removed]


__all__ = ["SMSEMOA"]
