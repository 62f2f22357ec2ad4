"""
moselect: selection strategies for multi-objective evolutionary algorithms.

The package separates what a multi-objective optimizer selects from how it
varies and evaluates candidates. A driver owns the generation loop and the
variation operators; a strategy decides which individuals mate, which survive
and what the archive holds.

Example:
    from moselect import StrategyContext, make_strategy

    context = StrategyContext.create(n_obj=2, population_size=100, seed=1)
    strategy = make_strategy("nsgaii", context)
    strategy.initialize(population)
"""

from .engine.strategy import SelectionStrategy, StrategyContext, available_strategies, make_strategy
from .foundation.exceptions import (
    ConfigurationError,
    DegenerateInputError,
    InvalidStrategyError,
    MissingConfigError,
    MixedDirectionsError,
    MOSelectError,
    ObjectiveAccessError,
    StrategyStateError,
)
from .foundation.individual import Individual, Particle, Solution
from .foundation.logging import configure_moselect_logging
from .foundation.objectives import Objective

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "StrategyContext",
    "SelectionStrategy",
    "make_strategy",
    "available_strategies",
    "Individual",
    "Solution",
    "Particle",
    "Objective",
    "configure_moselect_logging",
    "MOSelectError",
    "ConfigurationError",
    "MissingConfigError",
    "InvalidStrategyError",
    "MixedDirectionsError",
    "ObjectiveAccessError",
    "DegenerateInputError",
    "StrategyStateError",
]
