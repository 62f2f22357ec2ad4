"""Building blocks shared by every selection strategy."""

from .archive import add_to_archive, merge_into_archive
from .base import SelectionStrategy
from .context import StrategyContext
from .protocol import ArchivePolicy, Population, StrategyProtocol
from .selection import BinaryTournament, RandomSelection, lower_is_better, rank_and_crowding

__all__ = [
    "add_to_archive",
    "merge_into_archive",
    "SelectionStrategy",
    "StrategyContext",
    "ArchivePolicy",
    "Population",
    "StrategyProtocol",
    "BinaryTournament",
    "RandomSelection",
    "lower_is_better",
    "rank_and_crowding",
]
