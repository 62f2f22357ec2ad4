"""
Common lifecycle plumbing for selection strategies.

Concrete strategies implement the ``_``-prefixed hooks; the public methods
only enforce call order, normalize inputs to lists and log.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Sequence

import numpy as np

from moselect.foundation.dominance import ParetoComparator
from moselect.foundation.exceptions import StrategyStateError
from moselect.foundation.individual import Individual, objective_matrix
from moselect.foundation.objectives import maximize_mask, require_uniform_direction, to_minimization, uniform_direction

from .context import StrategyContext
from .protocol import ArchivePolicy, Population

logger = logging.getLogger(__name__)


class SelectionStrategy(ABC):
    """
    Base class wiring a strategy to its context.

    Attributes:
        context: Shared execution context (read only)
        objectives: Objective model taken from the context
        maximized: True if every objective is maximized, False if every one is
            minimized, None when mixed
    """

    name: ClassVar[str] = "strategy"
    archive_policy: ClassVar[ArchivePolicy] = ArchivePolicy.NONE
    requires_uniform_direction: ClassVar[bool] = False

    def __init__(self, context: StrategyContext) -> None:
        self.context = context
        self.objectives = list(context.objectives)
        self.n_obj = len(self.objectives)
        if self.requires_uniform_direction:
            require_uniform_direction(self.objectives, self.name)
        self.maximized = uniform_direction(self.objectives)
        self._maximize = maximize_mask(self.objectives)
        self._comparator = self._create_comparator()
        self._initialized = False

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    @property
    def rng(self) -> np.random.Generator:
        return self.context.rng

    @property
    def comparator(self):
        """Comparator the strategy ranks individuals with."""
        return self._comparator

    def _create_comparator(self):
        return ParetoComparator(self.objectives, policy=self.context.objective_access)

    def objective_values(self, population: Sequence[Individual]) -> np.ndarray:
        """Raw objective matrix of ``population`` under the context's access policy."""
        return objective_matrix(population, self.n_obj, policy=self.context.objective_access)

    def minimization_values(self, population: Sequence[Individual]) -> np.ndarray:
        """Objective matrix with maximized columns negated."""
        return to_minimization(self.objective_values(population), self._maximize)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, population: Sequence[Individual]) -> Population | None:
        archive = self._initialize(list(population))
        self._initialized = True
        logger.debug("%s initialized with %d individuals", self.name, len(population))
        return archive

    def update(self) -> None:
        self._require_initialized("update")
        self._update()

    def mating_selection(self, population: Sequence[Individual], archive: Sequence[Individual] | None) -> Population:
        self._require_initialized("mating_selection")
        return self._mating_selection(list(population), None if archive is None else list(archive))

    def environmental_selection(
        self,
        population: Sequence[Individual],
        offspring: Sequence[Individual],
        archive: Sequence[Individual] | None,
    ) -> Population:
        self._require_initialized("environmental_selection")
        return self._environmental_selection(
            list(population), list(offspring), None if archive is None else list(archive)
        )

    def update_archive(
        self,
        population: Sequence[Individual],
        offspring: Sequence[Individual],
        archive: Sequence[Individual] | None,
    ) -> Population | None:
        self._require_initialized("update_archive")
        return self._update_archive(list(population), list(offspring), None if archive is None else list(archive))

    def _require_initialized(self, operation: str) -> None:
        if not self._initialized:
            raise StrategyStateError(self.name, operation)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _initialize(self, population: Population) -> Population | None: ...

    def _update(self) -> None:
        """End-of-generation bookkeeping; nothing by default."""

    @abstractmethod
    def _mating_selection(self, population: Population, archive: Population | None) -> Population: ...

    @abstractmethod
    def _environmental_selection(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population: ...

    def _update_archive(
        self, population: Population, offspring: Population, archive: Population | None
    ) -> Population | None:
        """Archive-less strategies keep no archive."""
        return None

    def _fitness_assignment(self, population: Population, archive: Population | None = None) -> None:
        """Internal fitness hook; strategies without a scalar fitness leave it empty."""


__all__ = ["SelectionStrategy"]
