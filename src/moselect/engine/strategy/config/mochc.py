"""MOCHC configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from moselect.foundation.exceptions import ConfigurationError

from .base import _ConfigBuilder, _SerializableConfig, _positive, _require_fields


@dataclass(frozen=True)
class MOCHCConfigData(_SerializableConfig):
    initial_d: int
    restart_d: int
    n_survivors: Optional[int] = None
    convergence_value: int = 1


class MOCHCConfig(_ConfigBuilder[MOCHCConfigData]):
    """
    Declarative configuration holder for MOCHC settings.

    ``initial_d`` is the starting incest threshold (typically a quarter of the
    genotype length); the number of survivors kept on a cataclysmic restart
    defaults to 5% of the population.
    """

    _name = "MOCHC"
    _settings_keys = {
        "initial-d": "initial_d",
        "restart-d": "restart_d",
        "number-of-survivors": "n_survivors",
        "convergence-value": "convergence_value",
    }

    @classmethod
    def default(cls, genotype_length: int = 32) -> MOCHCConfigData:
        d = max(1, genotype_length // 4)
        return cls().initial_d(d).restart_d(d).fixed()

    def initial_d(self, value: int) -> "MOCHCConfig":
        self._cfg["initial_d"] = int(value)
        return self

    def restart_d(self, value: int) -> "MOCHCConfig":
        self._cfg["restart_d"] = int(value)
        return self

    def n_survivors(self, value: int) -> "MOCHCConfig":
        self._cfg["n_survivors"] = _positive(value, "number-of-survivors", integer=True)
        return self

    def convergence_value(self, value: int) -> "MOCHCConfig":
        self._cfg["convergence_value"] = int(value)
        return self

    def fixed(self) -> MOCHCConfigData:
        _require_fields(self._cfg, ("initial_d", "restart_d"), "MOCHC")
        if self._cfg["initial_d"] < 0 or self._cfg["restart_d"] < 0:
            raise ConfigurationError("'initial-d' and 'restart-d' must be non-negative.")
        return MOCHCConfigData(
            initial_d=self._cfg["initial_d"],
            restart_d=self._cfg["restart_d"],
            n_survivors=self._cfg.get("n_survivors"),
            convergence_value=self._cfg.get("convergence_value", 1),
        )


__all__ = ["MOCHCConfigData", "MOCHCConfig"]
