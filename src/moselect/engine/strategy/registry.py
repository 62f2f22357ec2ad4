"""
Strategy registry.

Maps short strategy names to builder callables so drivers can create a
strategy from a name and a flat settings mapping without hard-coded
conditionals. Builders accept ``(context, settings, **collaborators)`` and
return a ready strategy; collaborators are the callables some strategies take
besides their configuration (mutation operators, a genotype distance).
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from moselect.foundation.exceptions import ConfigurationError, InvalidStrategyError

from .components.base import SelectionStrategy
from .components.context import StrategyContext
from .config import (
    GrEAConfig,
    HypEConfig,
    IBEAConfig,
    MOCHCConfig,
    MOEADConfig,
    NSGAIIConfig,
    NSGAIIIConfig,
    OMOPSOConfig,
    PAESConfig,
    PAESLambdaConfig,
    PARConfig,
    RVEAConfig,
    SMPSOConfig,
    SMSEMOAConfig,
    SPEA2Config,
    SSeMOEAConfig,
)
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
from .rvea import RVEA
from .smsemoa import SMSEMOA
from .spea2 import SPEA2
from .ssemoea import SSeMOEA

T = TypeVar("T")

StrategyBuilder = Callable[..., SelectionStrategy]


class Registry(Generic[T]):
    """
    Named items with decorator-style registration.

    Lookups of unknown keys raise InvalidStrategyError listing the available
    names and the closest matches.
    """

    def __init__(self, name: str = "Registry") -> None:
        self._name = name
        self._items: dict[str, T] = {}

    def register(self, key: str, item: T | None = None, *, override: bool = False) -> Callable[[T], T] | T:
        """
        Register ``item`` under ``key``; without ``item`` returns a decorator.

        Raises ConfigurationError on a duplicate key unless ``override`` is set.
        """

        normalized = _normalize(key)

        def _do_register(obj: T) -> T:
            if normalized in self._items and not override:
                raise ConfigurationError(f"Key '{key}' already exists in registry '{self._name}'.")
            self._items[normalized] = obj
            return obj

        if item is None:
            return _do_register
        return _do_register(item)

    def get(self, key: str) -> T:
        normalized = _normalize(key)
        if normalized not in self._items:
            options = self.list()
            raise InvalidStrategyError(key, options, get_close_matches(normalized, options, n=3, cutoff=0.6))
        return self._items[normalized]

    def list(self) -> list[str]:
        """Sorted registered keys."""
        return sorted(self._items)

    def __contains__(self, key: str) -> bool:
        return _normalize(key) in self._items

    def __getitem__(self, key: str) -> T:
        return self.get(key)

    def __iter__(self) -> Iterable[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def keys(self) -> Iterable[str]:
        return self._items.keys()


def _normalize(name: str) -> str:
    return str(name).strip().lower().replace("_", "-")


def _simple(strategy_cls, builder_cls) -> StrategyBuilder:
    """Builder passing a config only when settings are given, so strategies pick their own defaults."""

    def build(context: StrategyContext, settings: Mapping[str, Any] | None = None, **collaborators: Any):
        config = builder_cls.from_settings(settings) if settings else None
        return strategy_cls(context, config, **collaborators)

    build.__name__ = f"build_{strategy_cls.__name__.lower()}"
    return build


def _build_par(context: StrategyContext, settings: Mapping[str, Any] | None = None, **collaborators: Any) -> PAR:
    # The reference point has no sensible default.
    return PAR(context, PARConfig.from_settings(settings), **collaborators)


_STRATEGIES: Registry[StrategyBuilder] | None = None


def _register_strategies(registry: Registry[StrategyBuilder]) -> None:
    registry.register("nsgaii", _simple(NSGAII, NSGAIIConfig))
    registry.register("nsgaiii", _simple(NSGAIII, NSGAIIIConfig))
    registry.register("spea2", _simple(SPEA2, SPEA2Config))
    registry.register("moead", _simple(MOEAD, MOEADConfig))
    registry.register("paes", _simple(PAES, PAESConfig))
    registry.register("paes-lambda", _simple(PAESLambda, PAESLambdaConfig))
    registry.register("ibea", _simple(IBEA, IBEAConfig))
    registry.register("hype", _simple(HypE, HypEConfig))
    registry.register("grea", _simple(GrEA, GrEAConfig))
    registry.register("smsemoa", _simple(SMSEMOA, SMSEMOAConfig))
    registry.register("omopso", _simple(OMOPSO, OMOPSOConfig))
    registry.register("smpso", _simple(SMPSO, SMPSOConfig))
    registry.register("ssemoea", _simple(SSeMOEA, SSeMOEAConfig))
    registry.register("mochc", _simple(MOCHC, MOCHCConfig))
    registry.register("par", _build_par)
    registry.register("rvea", _simple(RVEA, RVEAConfig))


def get_strategy_registry() -> Registry[StrategyBuilder]:
    global _STRATEGIES
    if _STRATEGIES is None:
        registry: Registry[StrategyBuilder] = Registry("Strategies")
        _register_strategies(registry)
        _STRATEGIES = registry
    return _STRATEGIES


def available_strategies() -> tuple[str, ...]:
    """Canonical names accepted by ``make_strategy``."""
    return tuple(get_strategy_registry().list())


def make_strategy(
    name: str,
    context: StrategyContext,
    settings: Mapping[str, Any] | None = None,
    **collaborators: Any,
) -> SelectionStrategy:
    """
    Build a strategy from its short name and a flat settings mapping.

    Parameters
    ----------
    name : str
        Strategy name such as ``"nsgaii"`` or ``"paes-lambda"`` (case and
        underscores are ignored).
    context : StrategyContext
        Execution context handed to the strategy.
    settings : mapping, optional
        Documented hyphenated keys of the strategy's configuration.
    **collaborators
        Extra keyword arguments for the strategy constructor, e.g. ``mutator``
        for MOCHC or ``mutation`` for SMPSO.

    Raises
    ------
    InvalidStrategyError
        If ``name`` is not registered.
    ConfigurationError
        If a setting is unknown or out of range.
    """
    return get_strategy_registry().get(name)(context, settings, **collaborators)


__all__ = [
    "Registry",
    "StrategyBuilder",
    "get_strategy_registry",
    "available_strategies",
    "make_strategy",
]
