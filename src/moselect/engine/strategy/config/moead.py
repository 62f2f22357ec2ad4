"""MOEA/D configuration."""

from __future__ import annotations

from dataclasses import dataclass

from moselect.foundation.exceptions import ConfigurationError

from .base import _ConfigBuilder, _SerializableConfig, _as_bool, _choice, _positive, _require_fields

SCALARIZING_FUNCTIONS = ("tchebycheff", "weighted-sum")


@dataclass(frozen=True)
class MOEADConfigData(_SerializableConfig):
    h: int
    t: int = 10
    nr: int = 2
    external_pop: bool = True
    function: str = "tchebycheff"


class MOEADConfig(_ConfigBuilder[MOEADConfigData]):
    """
    Declarative configuration holder for MOEA/D settings.

    Examples:
        cfg = MOEADConfig.default(n_obj=2)
        cfg = MOEADConfig().h(12).neighbourhood(20).replacements(2).function("weighted-sum").fixed()
    """

    _name = "MOEA/D"
    _settings_keys = {
        "h": "h",
        "t": "neighbourhood",
        "nr": "replacements",
        "external-pop": "external_pop",
        "function": "function",
    }

    @classmethod
    def default(cls, n_obj: int = 2) -> MOEADConfigData:
        """H giving the classic subproblem counts: 100 for 2, 91 for 3 objectives."""
        h = 99 if n_obj <= 2 else 12 if n_obj == 3 else 6
        return cls().h(h).fixed()

    def h(self, value: int) -> "MOEADConfig":
        self._cfg["h"] = _positive(value, "h", integer=True)
        return self

    def neighbourhood(self, value: int) -> "MOEADConfig":
        self._cfg["t"] = _positive(value, "t", integer=True)
        return self

    def replacements(self, value: int) -> "MOEADConfig":
        self._cfg["nr"] = _positive(value, "nr", integer=True)
        return self

    def external_pop(self, enabled: bool = True) -> "MOEADConfig":
        self._cfg["external_pop"] = _as_bool(enabled)
        return self

    def function(self, value: str) -> "MOEADConfig":
        self._cfg["function"] = _choice(value, "function", SCALARIZING_FUNCTIONS)
        return self

    def fixed(self) -> MOEADConfigData:
        _require_fields(self._cfg, ("h",), "MOEAD")
        t = self._cfg.get("t", 10)
        nr = self._cfg.get("nr", 2)
        if nr > t:
            raise ConfigurationError(f"'nr' ({nr}) cannot exceed the neighbourhood size 't' ({t}).")
        return MOEADConfigData(
            h=self._cfg["h"],
            t=t,
            nr=nr,
            external_pop=self._cfg.get("external_pop", True),
            function=self._cfg.get("function", "tchebycheff"),
        )


__all__ = ["SCALARIZING_FUNCTIONS", "MOEADConfigData", "MOEADConfig"]
