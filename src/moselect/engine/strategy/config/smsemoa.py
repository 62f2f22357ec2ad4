"""SMS-EMOA configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .base import _ConfigBuilder, _SerializableConfig


@dataclass(frozen=True)
class SMSEMOAConfigData(_SerializableConfig):
    """SMS-EMOA takes no settings of its own."""


class SMSEMOAConfig(_ConfigBuilder[SMSEMOAConfigData]):
    _name = "SMS-EMOA"
    _settings_keys = {}

    @classmethod
    def default(cls) -> SMSEMOAConfigData:
        return cls().fixed()

    def fixed(self) -> SMSEMOAConfigData:
        return SMSEMOAConfigData()


__all__ = ["SMSEMOAConfigData", "SMSEMOAConfig"]
