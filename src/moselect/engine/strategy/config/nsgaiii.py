"""NSGA-III configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from moselect.foundation.exceptions import ConfigurationError

from .base import _ConfigBuilder, _SerializableConfig, _as_bool, _positive


@dataclass(frozen=True)
class NSGAIIIConfigData(_SerializableConfig):
    p1: Optional[int] = None
    p2: Optional[int] = None
    user_points: bool = False
    path: Optional[str] = None


class NSGAIIIConfig(_ConfigBuilder[NSGAIIIConfigData]):
    """
    Declarative configuration holder for NSGA-III settings.

    Reference points come either from Das-Dennis divisions (``p1`` and an
    optional inner-layer ``p2``) or from a user file (``user_points`` + ``path``).

    Examples:
        cfg = NSGAIIIConfig.default(n_obj=3)
        cfg = NSGAIIIConfig().divisions(3, 2).fixed()
        cfg = NSGAIIIConfig().reference_file("points.csv").fixed()
    """

    _name = "NSGA-III"
    _settings_keys = {"p1": "p1", "p2": "p2", "user-points": "user_points", "path": "path"}

    @classmethod
    def default(cls, n_obj: int = 3) -> NSGAIIIConfigData:
        """Divisions of the usual NSGA-III setups: 12 for 3 objectives, 6 for 4-5, 3+2 beyond."""
        if n_obj <= 3:
            return cls().divisions(12).fixed()
        if n_obj <= 5:
            return cls().divisions(6).fixed()
        return cls().divisions(3, 2).fixed()

    def p1(self, value: int) -> "NSGAIIIConfig":
        self._cfg["p1"] = _positive(value, "p1", integer=True)
        return self

    def p2(self, value: int | None) -> "NSGAIIIConfig":
        self._cfg["p2"] = None if value is None else _positive(value, "p2", integer=True)
        return self

    def divisions(self, p1: int, p2: int | None = None) -> "NSGAIIIConfig":
        return self.p1(p1).p2(p2)

    def user_points(self, enabled: bool = True) -> "NSGAIIIConfig":
        self._cfg["user_points"] = _as_bool(enabled)
        return self

    def path(self, value: str) -> "NSGAIIIConfig":
        self._cfg["path"] = str(value)
        return self

    def reference_file(self, path: str) -> "NSGAIIIConfig":
        return self.user_points(True).path(path)

    def fixed(self) -> NSGAIIIConfigData:
        user_points = bool(self._cfg.get("user_points", False))
        if user_points and not self._cfg.get("path"):
            raise ConfigurationError(
                "NSGA-III user reference points require a file path.",
                suggestion="Set 'path' together with 'user-points'",
            )
        if not user_points and "p1" not in self._cfg:
            raise ConfigurationError(
                "NSGA-III needs either 'p1' divisions or 'user-points' with 'path'.",
                suggestion="Use NSGAIIIConfig.default(n_obj) for standard divisions",
            )
        return NSGAIIIConfigData(
            p1=self._cfg.get("p1"),
            p2=self._cfg.get("p2"),
            user_points=user_points,
            path=self._cfg.get("path"),
        )


__all__ = ["NSGAIIIConfigData", "NSGAIIIConfig"]
