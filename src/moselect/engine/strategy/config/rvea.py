"""RVEA configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import _ConfigBuilder, _SerializableConfig, _in_unit_interval, _non_negative, _positive, _require_fields


@dataclass(frozen=True)
class RVEAConfigData(_SerializableConfig):
    p1: int
    p2: Optional[int] = None
    fr: float = 0.1
    alpha: float = 2.0


class RVEAConfig(_ConfigBuilder[RVEAConfigData]):
    """
    Declarative configuration holder for RVEA settings.

    Examples:
        cfg = RVEAConfig.default(n_obj=3)
        cfg = RVEAConfig().divisions(12).fr(0.1).alpha(2.0).fixed()
    """

    _name = "RVEA"
    _settings_keys = {"p1": "p1", "p2": "p2", "fr": "fr", "alpha": "alpha"}

    @classmethod
    def default(cls, n_obj: int = 3) -> RVEAConfigData:
        if n_obj <= 3:
            return cls().divisions(12 if n_obj == 3 else 99).fixed()
        return cls().divisions(3, 2).fixed()

    def p1(self, value: int) -> "RVEAConfig":
        self._cfg["p1"] = _positive(value, "p1", integer=True)
        return self

    def p2(self, value: int | None) -> "RVEAConfig":
        self._cfg["p2"] = None if value is None else _positive(value, "p2", integer=True)
        return self

    def divisions(self, p1: int, p2: int | None = None) -> "RVEAConfig":
        return self.p1(p1).p2(p2)

    def fr(self, value: float) -> "RVEAConfig":
        self._cfg["fr"] = _in_unit_interval(value, "fr")
        return self

    def alpha(self, value: float) -> "RVEAConfig":
        self._cfg["alpha"] = _non_negative(value, "alpha")
        return self

    def fixed(self) -> RVEAConfigData:
        _require_fields(self._cfg, ("p1",), "RVEA")
        return RVEAConfigData(
            p1=self._cfg["p1"],
            p2=self._cfg.get("p2"),
            fr=self._cfg.get("fr", 0.1),
            alpha=self._cfg.get("alpha", 2.0),
        )


__all__ = ["RVEAConfigData", "RVEAConfig"]
