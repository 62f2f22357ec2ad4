"""GrEA configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .base import _ConfigBuilder, _SerializableConfig, _choice, _positive, _require_fields

GRID_DISTANCES = ("manhattan", "chebyshev")


@dataclass(frozen=True)
class GrEAConfigData(_SerializableConfig):
    div: int
    grid_distance: str = "manhattan"


class GrEAConfig(_ConfigBuilder[GrEAConfigData]):
    """Declarative configuration holder for GrEA settings."""

    _name = "GrEA"
    _settings_keys = {"div": "div", "grid-distance": "grid_distance"}

    @classmethod
    def default(cls, div: int = 10) -> GrEAConfigData:
        return cls().div(div).fixed()

    def div(self, value: int) -> "GrEAConfig":
        self._cfg["div"] = _positive(value, "div", integer=True)
        return self

    def grid_distance(self, value: str) -> "GrEAConfig":
        self._cfg["grid_distance"] = _choice(value, "grid-distance", GRID_DISTANCES)
        return self

    def fixed(self) -> GrEAConfigData:
        _require_fields(self._cfg, ("div",), "GrEA")
        return GrEAConfigData(div=self._cfg["div"], grid_distance=self._cfg.get("grid_distance", "manhattan"))


__all__ = ["GRID_DISTANCES", "GrEAConfigData", "GrEAConfig"]
