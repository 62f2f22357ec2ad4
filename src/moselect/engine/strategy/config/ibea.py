"""IBEA configuration."""

from __future__ import annotations

from dataclasses import dataclass

from moselect.foundation.exceptions import ConfigurationError

from .base import _ConfigBuilder, _SerializableConfig, _choice, _positive

INDICATORS = ("epsilon", "hypervolume")


@dataclass(frozen=True)
class IBEAConfigData(_SerializableConfig):
    kappa: float = 0.05
    indicator: str = "epsilon"
    rho: float = 1.0


class IBEAConfig(_ConfigBuilder[IBEAConfigData]):
    """
    Declarative configuration holder for IBEA settings.

    Examples:
        cfg = IBEAConfig.default()
        cfg = IBEAConfig().indicator("hypervolume").kappa(0.05).rho(2.0).fixed()
    """

    _name = "IBEA"
    _settings_keys = {"k": "kappa", "kappa": "kappa", "indicator": "indicator", "rho": "rho"}

    @classmethod
    def default(cls, indicator: str = "epsilon") -> IBEAConfigData:
        return cls().indicator(indicator).fixed()

    def kappa(self, value: float) -> "IBEAConfig":
        self._cfg["kappa"] = _positive(value, "k")
        return self

    def indicator(self, value: str) -> "IBEAConfig":
        self._cfg["indicator"] = _choice(value, "indicator", INDICATORS)
        return self

    def rho(self, value: float) -> "IBEAConfig":
        rho = float(value)
        if rho < 1.0:
            raise ConfigurationError(f"'rho' must be at least 1, got {value}.")
        self._cfg["rho"] = rho
        return self

    def fixed(self) -> IBEAConfigData:
        return IBEAConfigData(
            kappa=self._cfg.get("kappa", 0.05),
            indicator=self._cfg.get("indicator", "epsilon"),
            rho=self._cfg.get("rho", 1.0),
        )


__all__ = ["INDICATORS", "IBEAConfigData", "IBEAConfig"]
