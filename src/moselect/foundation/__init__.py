"""
Dominance and diversity primitives shared by every selection strategy.
"""

from .crowding import crowding_by_fronts, crowding_distance
from .dominance import (
    DOMINATED,
    DOMINATES,
    INCOMPARABLE,
    ConstrainedComparator,
    EpsilonDominanceComparator,
    ParetoComparator,
    ViolationComparator,
    dominance_matrix,
    make_comparator,
)
from .exceptions import (
    ConfigurationError,
    DegenerateInputError,
    InvalidStrategyError,
    MissingConfigError,
    MixedDirectionsError,
    MOSelectError,
    ObjectiveAccessError,
    ReferencePointsError,
    StrategyStateError,
)
from .hypervolume import hv_contributions, hv_pair_indicator, hype_exact, hype_sampling, hypervolume
from .individual import Individual, Particle, Solution, objective_matrix
from .objectives import Objective, uniform_direction
from .reference import das_dennis, load_reference_points, uniform_weight_vectors
from .scalarizing import asf
from .side_table import SideTable
from .sorting import extract_non_dominated, fast_non_dominated_sort, split_population

__all__ = [
    "crowding_by_fronts",
    "crowding_distance",
    "DOMINATED",
    "DOMINATES",
    "INCOMPARABLE",
    "ConstrainedComparator",
    "EpsilonDominanceComparator",
    "ParetoComparator",
    "ViolationComparator",
    "dominance_matrix",
    "make_comparator",
    "ConfigurationError",
    "DegenerateInputError",
    "InvalidStrategyError",
    "MissingConfigError",
    "MixedDirectionsError",
    "MOSelectError",
    "ObjectiveAccessError",
    "ReferencePointsError",
    "StrategyStateError",
    "hv_contributions",
    "hv_pair_indicator",
    "hype_exact",
    "hype_sampling",
    "hypervolume",
    "Individual",
    "Particle",
    "Solution",
    "objective_matrix",
    "Objective",
    "uniform_direction",
    "das_dennis",
    "load_reference_points",
    "uniform_weight_vectors",
    "asf",
    "SideTable",
    "extract_non_dominated",
    "fast_non_dominated_sort",
    "split_population",
]
