"""NSGA-II configuration."""

from __future__ import annotations

from dataclasses import dataclass

from moselect.foundation.dominance import CONSTRAINT_MODES

from .base import _ConfigBuilder, _SerializableConfig, _choice


@dataclass(frozen=True)
class NSGAIIConfigData(_SerializableConfig):
    constraint_mode: str = "none"


class NSGAIIConfig(_ConfigBuilder[NSGAIIConfigData]):
    """
    Declarative configuration holder for NSGA-II settings.

    Examples:
        cfg = NSGAIIConfig.default()
        cfg = NSGAIIConfig().constraint_mode("feasibility").fixed()
    """

    _name = "NSGA-II"
    _settings_keys = {"constraint-mode": "constraint_mode"}

    @classmethod
    def default(cls) -> NSGAIIConfigData:
        return cls().fixed()

    def constraint_mode(self, value: str) -> "NSGAIIConfig":
        self._cfg["constraint_mode"] = _choice(value, "constraint-mode", CONSTRAINT_MODES)
        return self

    def fixed(self) -> NSGAIIConfigData:
        return NSGAIIConfigData(constraint_mode=self._cfg.get("constraint_mode", "none"))


__all__ = ["NSGAIIConfigData", "NSGAIIConfig"]
