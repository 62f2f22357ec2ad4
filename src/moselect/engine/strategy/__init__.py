"""
Selection strategies.

Every strategy follows the same lifecycle: ``initialize`` once, then per
generation ``mating_selection``, ``environmental_selection``,
``update_archive`` and ``update``.
"""

from .components import ArchivePolicy, SelectionStrategy, StrategyContext
from .grea import GrEA
from .hype import HypE
from .ibea import IBEA
from .mochc import MOCHC
from .moead import MOEAD
from .mopso import OMOPSO, SMPSO
from .nsgaii import NSGAII
from .nsgaiii import NSGAIII
from .paes import PAES, PAESLambda
from .par import PAR
from .registry import available_strategies, get_strategy_registry, make_strategy
from .rvea import RVEA
from .smsemoa import SMSEMOA
from .spea2 import SPEA2
from .ssemoea import SSeMOEA

__all__ = [
    "ArchivePolicy",
    "SelectionStrategy",
    "StrategyContext",
    "GrEA",
    "HypE",
    "IBEA",
    "MOCHC",
    "MOEAD",
    "OMOPSO",
    "SMPSO",
    "NSGAII",
    "NSGAIII",
    "PAES",
    "PAESLambda",
    "PAR",
    "RVEA",
    "SMSEMOA",
    "SPEA2",
    "SSeMOEA",
    "available_strategies",
    "get_strategy_registry",
    "make_strategy",
]
