"""SPEA2 configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import _ConfigBuilder, _SerializableConfig, _positive


@dataclass(frozen=True)
class SPEA2ConfigData(_SerializableConfig):
    archive_size: Optional[int] = None
    k_value: Optional[int] = None


class SPEA2Config(_ConfigBuilder[SPEA2ConfigData]):
    """
    Declarative configuration holder for SPEA2 settings.

    Unset values are resolved against the context: the archive size defaults
    to the population size and ``k`` to ``int(sqrt(population + archive))``.
    """

    _name = "SPEA2"
    _settings_keys = {"archive-size": "archive_size", "k-value": "k_value"}

    @classmethod
    def default(cls) -> SPEA2ConfigData:
        return cls().fixed()

    def archive_size(self, value: int) -> "SPEA2Config":
        self._cfg["archive_size"] = _positive(value, "archive-size", integer=True)
        return self

    def k_value(self, value: int) -> "SPEA2Config":
        self._cfg["k_value"] = _positive(value, "k-value", integer=True)
        return self

    def fixed(self) -> SPEA2ConfigData:
        return SPEA2ConfigData(
            archive_size=self._cfg.get("archive_size"),
            k_value=self._cfg.get("k_value"),
        )


__all__ = ["SPEA2ConfigData", "SPEA2Config"]
