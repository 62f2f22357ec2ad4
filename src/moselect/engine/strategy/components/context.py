"""
Execution context shared between the external driver and a strategy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from moselect.foundation.exceptions import ConfigurationError
from moselect.foundation.individual import ObjectiveAccess
from moselect.foundation.objectives import Objective, minimize_all


@dataclass
class StrategyContext:
    """
    Environment a strategy reads but never owns.

    The driver advances ``generation``; strategies only read it. ``rng`` is the
    single generator every random decision goes through.

    Attributes:
        objectives: Direction and bounds of each objective
        population_size: Target population size
        rng: Shared random generator
        max_generations: Planned number of generations
        generation: Current generation, starting at 0 before the first update
        genotype_bounds: (lower, upper) arrays for real-coded genotypes (PSO)
        objective_access: "raise" or "zero" policy for missing objective values
    """

    objectives: Sequence[Objective]
    population_size: int
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    max_generations: int = 100
    generation: int = 0
    genotype_bounds: tuple[np.ndarray, np.ndarray] | None = None
    objective_access: ObjectiveAccess = "raise"

    def __post_init__(self) -> None:
        self.objectives = list(self.objectives)
        if not self.objectives:
            raise ConfigurationError("The context needs at least one objective.")
        if self.population_size <= 0:
            raise ConfigurationError(f"population_size must be positive, got {self.population_size}.")
        if self.max_generations <= 0:
            raise ConfigurationError(f"max_generations must be positive, got {self.max_generations}.")
        if self.objective_access not in ("raise", "zero"):
            raise ConfigurationError(
                f"Unknown objective access policy '{self.objective_access}'.",
                suggestion="Use 'raise' or 'zero'",
            )
        if self.genotype_bounds is not None:
            lower, upper = self.genotype_bounds
            self.genotype_bounds = (np.asarray(lower, dtype=float), np.asarray(upper, dtype=float))

    @classmethod
    def create(
        cls,
        n_obj: int,
        population_size: int,
        *,
        seed: int | None = None,
        **kwargs,
    ) -> "StrategyContext":
        """Context with ``n_obj`` unbounded minimized objectives and a seeded generator."""
        return cls(
            objectives=minimize_all(n_obj),
            population_size=population_size,
            rng=np.random.default_rng(seed),
            **kwargs,
        )

    @property
    def n_obj(self) -> int:
        return len(self.objectives)

    def advance(self) -> int:
        """Move to the next generation (driver side)."""
        self.generation += 1
        return self.generation


__all__ = ["StrategyContext"]
