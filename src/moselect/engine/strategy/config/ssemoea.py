"""SSeMOEA configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .base import _ConfigBuilder, _SerializableConfig
from .epsilon import _EpsilonGridMixin


@dataclass(frozen=True)
class SSeMOEAConfigData(_SerializableConfig):
    epsilon: Optional[Tuple[float, ...]] = None
    n_hypercubes: int = 10


class SSeMOEAConfig(_EpsilonGridMixin, _ConfigBuilder[SSeMOEAConfigData]):
    """Declarative configuration holder for the steady-state epsilon-MOEA."""

    _name = "SSeMOEA"
    _settings_keys = {"epsilon-values": "epsilon_values", "number-of-hypercubes": "number_of_hypercubes"}

    @classmethod
    def default(cls) -> SSeMOEAConfigData:
        return cls().fixed()

    def fixed(self) -> SSeMOEAConfigData:
        return SSeMOEAConfigData(epsilon=self._cfg.get("epsilon"), n_hypercubes=self._cfg.get("n_hypercubes", 10))


__all__ = ["SSeMOEAConfigData", "SSeMOEAConfig"]
