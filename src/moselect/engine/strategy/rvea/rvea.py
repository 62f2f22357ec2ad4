"""
RVEA: Reference Vector guided Evolutionary Algorithm.

References:
    R. Cheng, Y. Jin, M. Olhofer, B. Sendhoff, "A Reference Vector Guided
    Evolutionary Algorithm for Many-Objective Optimization", IEEE TEC 20(5),
    2016.
"""

from __future__ import annotations

import logging

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import RandomSelection
from moselect.engine.strategy.config.rvea import RVEAConfig, RVEAConfigData
from moselect.foundation.individual import unique_members
from moselect.foundation.reference import das_dennis

from .helpers import adapt_reference_vectors, angle_penalized_distance, unit_vectors

logger = logging.getLogger(__name__)


class RVEA(SelectionStrategy):
    """
    RVEA selection strategy.

    Solutions translated by the ideal point are assigned to the reference
    vector they are angularly closest to; each vector keeps the solution with
    the smallest angle-penalized distance. Every ``fr * max_generations``
    generations the vectors are rescaled to the objective ranges of the last
    population seen.

    Parameters
    ----------
    context : StrategyContext
        Execution context; ``generation`` and ``max_generations`` drive the
        angle penalty and the adaptation schedule.
    config : RVEAConfigData, optional
        Das-Dennis divisions ``p1``/``p2``, adaptation frequency ``fr`` and
        penalty rate ``alpha``.
    """

    name = "RVEA"
    archive_policy = ArchivePolicy.NONE
    requires_uniform_direction = True

    def __init__(self, context: StrategyContext, config: RVEAConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or RVEAConfig.default(self.n_obj)
        self._initial_vectors = das_dennis(self.n_obj, self.config.p1, self.config.p2)
        self._vectors = unit_vectors(self._initial_vectors)
        self._selection = RandomSelection(self.rng)
        self._period = self.config.fr * context.max_generations
        self._next_adaptation = self._period
        self._last_values: np.ndarray | None = None
        logger.debug("%s uses %d reference vectors", self.name, self._vectors.shape[0])

    @property
    def reference_vectors(self) -> np.ndarray:
        """Current (unit length) reference vectors."""
        return self._vectors.copy()

    @property
    def initial_reference_vectors(self) -> np.ndarray:
        """Das-Dennis vectors the adaptation starts from."""
        return self._initial_vectors.copy()

    def _initialize(self, population: Population) -> None:
        self._vectors = unit_vectors(self._initial_vectors)
        self._next_adaptation = self._period
        self._last_values = self.minimization_values(population) if population else None
        return None

    def _update(self) -> None:
        if self._period <= 0 or self.context.generation < self._next_adaptation:
            return
        if self._last_values is not None and len(self._last_values):
            self._vectors = adapt_reference_vectors(self._initial_vectors, self._last_values)
            logger.debug("%s adapted reference vectors at generation %d", self.name, self.context.generation)
        while self._next_adaptation <= self.context.generation:
            self._next_adaptation += self._period

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        return [population[i] for i in self._selection(population, self.context.population_size)]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        merged = unique_members(population, offspring)
        F = self.minimization_values(merged)
        translated = F - F.min(axis=0)
        progress = min(self.context.generation / self.context.max_generations, 1.0)
        assignment, apd = angle_penalized_distance(translated, self._vectors, progress, self.config.alpha)

        selected: list[int] = []
        for k in range(self._vectors.shape[0]):
            members = np.flatnonzero(assignment == k)
            if members.size:
                selected.append(int(members[np.argmin(apd[members])]))
        survivors = [merged[i] for i in selected]

        missing = self.context.population_size - len(survivors)
        if missing > 0:
            fill = self._selection(merged, missing)
            survivors.extend(merged[i].copy() for i in fill)
            logger.debug("%s filled %d empty slots at random", self.name, missing)
        self._last_values = self.minimization_values(survivors)
        return survivors


__all__ = ["RVEA"]
