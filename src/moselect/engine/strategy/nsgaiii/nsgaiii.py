"""
NSGA-III: reference-point based many-objective NSGA.

References:
    K. Deb, H. Jain, "An Evolutionary Many-Objective Optimization Algorithm
    Using Reference-Point-Based Nondominated Sorting Approach, Part I",
    IEEE TEC 18(4), 2014.
"""

from __future__ import annotations

import logging

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import RandomSelection
from moselect.engine.strategy.config.nsgaiii import NSGAIIIConfig, NSGAIIIConfigData
from moselect.foundation.individual import unique_members
from moselect.foundation.reference import das_dennis, load_reference_points
from moselect.foundation.sorting import fast_non_dominated_sort

from .helpers import nsgaiii_survival

logger = logging.getLogger(__name__)


class NSGAIII(SelectionStrategy):
    """
    NSGA-III selection strategy.

    Parents are drawn at random. Survivors fill whole fronts; the critical
    front is resolved by normalizing objectives (ideal point, ASF extreme
    points, hyperplane intercepts), associating each solution with its
    closest reference line and niching on the least crowded reference points.

    Parameters
    ----------
    context : StrategyContext
        Shared context.
    config : NSGAIIIConfigData, optional
        Das-Dennis divisions (``p1``, ``p2``) or a user reference point file.
        Defaults to ``NSGAIIIConfig.default(n_obj)``.
    """

    name = "NSGA-III"
    archive_policy = ArchivePolicy.NONE

    def __init__(self, context: StrategyContext, config: NSGAIIIConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or NSGAIIIConfig.default(self.n_obj)
        if self.config.user_points:
            self._reference_points = load_reference_points(self.config.path, self.n_obj)
        else:
            self._reference_points = das_dennis(self.n_obj, self.config.p1, self.config.p2)
        self.selector = RandomSelection(self.rng)
        logger.debug("%s uses %d reference points", self.name, self._reference_points.shape[0])

    @property
    def reference_points(self) -> np.ndarray:
        """Reference points on the unit simplex (read-only copy)."""
        return self._reference_points.copy()

    def _initialize(self, population: Population) -> None:
        return None

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        idx = self.selector(population, self.context.population_size)
        return [population[i] for i in idx]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        merged = unique_members(population, offspring)
        F = self.minimization_values(merged)
        fronts, _ = fast_non_dominated_sort(F)
        selected = nsgaiii_survival(F, fronts, self.context.population_size, self._reference_points, self.rng)
        return [merged[i] for i in selected]


__all__ = ["NSGAIII"]
