"""HypE configuration."""

from __future__ import annotations

from dataclasses import dataclass

from moselect.foundation.exceptions import ConfigurationError

from .base import _ConfigBuilder, _SerializableConfig


@dataclass(frozen=True)
class HypEConfigData(_SerializableConfig):
    sampling_size: int = 10000


class HypEConfig(_ConfigBuilder[HypEConfigData]):
    """HypE settings; a negative sampling size selects the exact computation."""

    _name = "HypE"
    _settings_keys = {"sampling-size": "sampling_size"}

    @classmethod
    def default(cls) -> HypEConfigData:
        return cls().fixed()

    def sampling_size(self, value: int) -> "HypEConfig":
        size = int(value)
        if size == 0:
            raise ConfigurationError("'sampling-size' cannot be 0; use a negative value for exact fitness.")
        self._cfg["sampling_size"] = size
        return self

    def exact(self) -> "HypEConfig":
        return self.sampling_size(-1)

    def fixed(self) -> HypEConfigData:
        return HypEConfigData(sampling_size=self._cfg.get("sampling_size", 10000))


__all__ = ["HypEConfigData", "HypEConfig"]
