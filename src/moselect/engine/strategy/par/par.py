"""
PAR: preference-based selection around a reference point.

Survivors are taken from the region of interest (ROI) the decision maker's
reference point defines through an achievement scalarizing function.

References:
    A. Ramirez, J. R. Romero, S. Ventura, "Interactive multi-objective
    evolutionary optimization of software architectures", Information
    Sciences 463-464, 2018.
"""

from __future__ import annotations

import logging

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import RandomSelection
from moselect.engine.strategy.config.par import PARConfigData
from moselect.foundation.exceptions import ConfigurationError
from moselect.foundation.individual import unique_members
from moselect.foundation.objectives import objective_bounds, to_minimization
from moselect.foundation.scaling import normalize_values
from moselect.foundation.sorting import fast_non_dominated_sort

from .helpers import normalize_reference, region_of_interest

logger = logging.getLogger(__name__)


class PAR(SelectionStrategy):
    """
    PAR selection strategy.

    Parameters
    ----------
    context : StrategyContext
        Execution context.
    config : PARConfigData
        Reference point (original objective space) and ASF augmentation
        coefficient ``rho``.
    """

    name = "PAR"
    archive_policy = ArchivePolicy.NONE

    def __init__(self, context: StrategyContext, config: PARConfigData) -> None:
        super().__init__(context)
        self.config = config
        self.reference_point = self._validate_reference(config.reference_point)
        self._selection = RandomSelection(self.rng)

    def _validate_reference(self, point) -> np.ndarray:
        ref = np.asarray(point, dtype=float)
        if ref.shape != (self.n_obj,):
            raise ConfigurationError(
                f"The reference point has {ref.size} values but there are {self.n_obj} objectives."
            )
        lower, upper = objective_bounds(self.objectives)
        outside = np.flatnonzero((ref < lower) | (ref > upper))
        if outside.size:
            raise ConfigurationError(
                f"Reference point value for objective {int(outside[0]) + 1} lies outside its bounds.",
                details={"reference_point": ref.tolist()},
            )
        return ref

    def _initialize(self, population: Population) -> None:
        return None

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        return [population[i] for i in self._selection(population, self.context.population_size)]

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        merged = unique_members(population, offspring)
        F = self.minimization_values(merged)
        G = normalize_values(F)
        reference = normalize_reference(to_minimization(self.reference_point[None, :], self._maximize)[0], F)
        inside, asf_values = region_of_interest(G, reference, self.config.rho)

        size = self.context.population_size
        roi = np.flatnonzero(inside)
        if roi.size > size:
            selected = self._reduce(roi, F, size)
        else:
            rest = np.flatnonzero(~inside)
            order = rest[np.argsort(asf_values[rest], kind="mergesort")]
            selected = np.concatenate([roi, order[: size - roi.size]])
        logger.debug("%s region of interest holds %d of %d solutions", self.name, roi.size, len(merged))
        return [merged[i] for i in selected]

    def _reduce(self, roi: np.ndarray, F: np.ndarray, size: int) -> np.ndarray:
        fronts, _ = fast_non_dominated_sort(F[roi])
        chosen: list[int] = []
        for front in fronts:
            remaining = size - len(chosen)
            if front.size <= remaining:
                chosen.extend(roi[front].tolist())
                continue
            picked = self.rng.choice(front, size=remaining, replace=False)
            chosen.extend(roi[picked].tolist())
            break
        return np.asarray(chosen, dtype=int)


__all__ = ["PAR"]
