"""
PAES: Pareto Archived Evolution Strategy, (1+1) and (mu+lambda) variants.

References:
    J. D. Knowles, D. W. Corne, "Approximating the Nondominated Front Using
    the Pareto Archived Evolution Strategy", Evolutionary Computation 8(2),
    2000.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from moselect.engine.strategy.components.base import SelectionStrategy
from moselect.engine.strategy.components.context import StrategyContext
from moselect.engine.strategy.components.protocol import ArchivePolicy, Population
from moselect.engine.strategy.components.selection import BinaryTournament
from moselect.engine.strategy.config.paes import (
    PAESConfig,
    PAESConfigData,
    PAESLambdaConfig,
    PAESLambdaConfigData,
)
from moselect.foundation.dominance import DOMINATED, DOMINATES
from moselect.foundation.exceptions import DegenerateInputError
from moselect.foundation.grid import AdaptiveGrid
from moselect.foundation.individual import Individual
from moselect.foundation.side_table import SideTable
from moselect.foundation.sorting import extract_non_dominated

from .helpers import crowded_member, dominance_score, offer_to_grid_archive

logger = logging.getLogger(__name__)


class PAES(SelectionStrategy):
    """
    (1+1) PAES selection strategy.

    The population is a single current solution. Each generation one mutant
    competes with it: Pareto dominance decides first, then dominance by the
    archive, and finally the occupancy of their grid locations (the mutant
    wins when its location holds fewer archive members). The archive keeps at
    most ``archive_size`` non-dominated solutions on an adaptive grid.

    Parameters
    ----------
    context : StrategyContext
        Shared context.
    config : PAESConfigData, optional
        Number of bisections per objective and archive capacity.
    """

    name = "PAES"
    archive_policy = ArchivePolicy.BOUNDED

    def __init__(self, context: StrategyContext, config: PAESConfigData | None = None) -> None:
        super().__init__(context)
        self.config = config or self._default_config()
        self.archive_size = self.config.archive_size
        self.grid = AdaptiveGrid(self.n_obj, self.config.bisections)
        self.location: SideTable[int] = SideTable()
        self._pending: Individual | None = None

    def _default_config(self):
        return PAESConfig.default()

    # ------------------------------------------------------------------
    # Grid bookkeeping
    # ------------------------------------------------------------------

    def locate(self, individuals: Sequence[Individual]) -> np.ndarray:
        """Grid location of each individual under the current bounds."""
        if not individuals:
            return np.zeros(0, dtype=np.int64)
        return self.grid.locate(self.minimization_values(individuals))

    def crowding(self, individual: Individual) -> int:
        """Number of archive members sharing the location of ``individual``."""
        return self.grid.count(int(self.locate([individual])[0]))

    def _refit(self, archive: Sequence[Individual]) -> None:
        locations = self.grid.update(self.minimization_values(archive))
        self.location.clear()
        for ind, loc in zip(archive, locations):
            self.location[ind] = int(loc)

    def _offer(self, archive: list[Individual], candidate: Individual) -> bool:
        return offer_to_grid_archive(
            archive, candidate, self.comparator, self.archive_size, self.grid, self.locate, self.rng
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _initialize(self, population: Population) -> Population:
        if not population:
            raise DegenerateInputError("PAES needs a current solution to start from.")
        self._pending = None
        archive = [population[0]]
        self._refit(archive)
        return archive

    def _update(self) -> None:
        self._pending = None

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        if len(population) != 1:
            raise DegenerateInputError(f"PAES (1+1) keeps one current solution, got {len(population)}.")
        return list(population)

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        if len(population) != 1 or len(offspring) != 1:
            raise DegenerateInputError("PAES (1+1) requires exactly one parent and one mutant.")
        current, mutant = population[0], offspring[0]
        archive = archive or []
        flag = self.comparator.compare(mutant, current)
        if flag == DOMINATED:
            self._pending = None
            return [current]
        self._pending = mutant
        if flag == DOMINATES:
            return [mutant]
        if any(self.comparator.compare(member, mutant) == DOMINATES for member in archive):
            self._pending = None
            return [current]
        return [mutant] if self._test_mutant(current, mutant, archive) else [current]

    def _test_mutant(self, current: Individual, mutant: Individual, archive: Population) -> bool:
        """True when the mutant's location is less crowded than the current solution's."""
        self._refit(archive)
        return self.crowding(mutant) < self.crowding(current)

    def _update_archive(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        new_archive = list(archive or [])
        mutant = self._pending
        self._pending = None
        if mutant is None:
            return new_archive
        self._refit(new_archive)
        if self._offer(new_archive, mutant):
            self._refit(new_archive)
            logger.debug("%s archived the mutant (archive size %d)", self.name, len(new_archive))
        return new_archive


class PAESLambda(PAES):
    """
    (mu+lambda) PAES selection strategy.

    Individuals are ranked by a dominance score against the archive (higher
    wins) and then by the occupancy of their grid location (lower wins).
    Mating runs ``lambda`` tournaments among the first ``mu`` individuals;
    environmental selection runs ``mu`` tournaments among the ``lambda``
    offspring. Every offspring is offered to the archive.

    Parameters
    ----------
    context : StrategyContext
        Shared context. ``mu`` and ``lambda`` default to its population size.
    config : PAESLambdaConfigData, optional
        Bisections, archive capacity, ``mu`` and ``lambda``.
    """

    name = "PAES-lambda"

    def __init__(self, context: StrategyContext, config: PAESLambdaConfigData | None = None) -> None:
        super().__init__(context, config)
        self.mu = self.config.mu or context.population_size
        self.lambda_ = self.config.lambda_ or context.population_size
        self.score: SideTable[int] = SideTable()

    def _default_config(self):
        return PAESLambdaConfig.default()

    def _initialize(self, population: Population) -> Population:
        if not population:
            raise DegenerateInputError("PAES-lambda needs a non-empty initial population.")
        self._pending = None
        if self.mu == 1:
            return super()._initialize(population)
        self.grid.fit(self.minimization_values(population))
        archive = extract_non_dominated(population, self.comparator)
        locations = self.locate(archive)
        self.grid.recount(locations)
        while len(archive) > self.archive_size:
            victim = crowded_member(locations, self.grid, self.rng)
            self.grid.remove(int(locations[victim]))
            del archive[victim]
            locations = np.delete(locations, victim)
        self.location.clear()
        for ind, loc in zip(archive, locations):
            self.location[ind] = int(loc)
        return archive

    def _assign_scores(self, individuals: Population, archive: Population) -> None:
        self.score.clear()
        for ind in individuals:
            self.score[ind] = dominance_score(ind, archive, self.comparator)

    def _tournament(self, candidates: Population, n_candidates: int, n_winners: int) -> Population:
        n_candidates = min(n_candidates, len(candidates))
        score = np.array([self.score[ind] for ind in candidates[:n_candidates]])
        crowd = np.array([self.grid.count(loc) for loc in self.locate(candidates[:n_candidates])])

        def better(i: int, j: int) -> int:
            if score[i] != score[j]:
                return 1 if score[i] > score[j] else -1
            if crowd[i] != crowd[j]:
                return 1 if crowd[i] < crowd[j] else -1
            return 0

        tournament = BinaryTournament(better, self.rng, distinct=False)
        return [candidates[i] for i in tournament(n_candidates, n_winners)]

    def _mating_selection(self, population: Population, archive: Population | None) -> Population:
        self._assign_scores(population, archive or [])
        return self._tournament(population, self.mu, self.lambda_)

    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        self._assign_scores(offspring, archive or [])
        return self._tournament(offspring, self.lambda_, self.mu)

    def _update_archive(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population:
        new_archive = list(archive or [])
        self.grid.fit(self.minimization_values(new_archive + list(offspring)))
        self.grid.recount(self.locate(new_archive))
        accepted = sum(1 for mutant in offspring if self._offer(new_archive, mutant))
        self.location.clear()
        for ind, loc in zip(new_archive, self.locate(new_archive)):
            self.location[ind] = int(loc)
        logger.debug("%s archived %d of %d offspring", self.name, accepted, len(offspring))
        return new_archive


__all__ = ["PAES", "PAESLambda"]
