"""
Strategy protocol and shared type definitions.

Defines the lifecycle every selection strategy follows. A driver calls
``initialize`` once and then, each generation, ``update``,
``mating_selection``, (external variation), ``environmental_selection`` and
``update_archive``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, Sequence, runtime_checkable

from moselect.foundation.individual import Individual

Population = list[Individual]


class ArchivePolicy(str, Enum):
    """How a strategy keeps its external archive."""

    NONE = "none"
    REPLACES_POPULATION = "replaces_population"
    BOUNDED = "bounded"
    UNBOUNDED = "unbounded"

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class StrategyProtocol(Protocol):
    """
    Interface a driver relies on.

    Archive-less strategies return None from ``initialize`` and
    ``update_archive``.
    """

    name: str
    archive_policy: ArchivePolicy

    @property
    def comparator(self) -> Any: ...

    def initialize(self, population: Sequence[Individual]) -> Population | None: ...

    def update(self) -> None: ...

    def mating_selection(self, population: Sequence[Individual], archive: Sequence[Individual] | None) -> Population: ...

    def environmental_selection(
        self,
        population: Sequence[Individual],
        offspring: Sequence[Individual],
        archive: Sequence[Individual] | None,
    ) -> Population: ...

    def update_archive(
        self,
        population: Sequence[Individual],
        offspring: Sequence[Individual],
        archive: Sequence[Individual] | None,
    ) -> Population | None: ...


__all__ = ["Population", "ArchivePolicy", "StrategyProtocol"]
