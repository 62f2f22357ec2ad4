"""OMOPSO and SMPSO configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .base import _ConfigBuilder, _SerializableConfig, _in_unit_interval, _positive
from .epsilon import _EpsilonGridMixin


@dataclass(frozen=True)
class OMOPSOConfigData(_SerializableConfig):
    archive_size: Optional[int] = None
    epsilon: Optional[Tuple[float, ...]] = None
    n_hypercubes: int = 10


@dataclass(frozen=True)
class SMPSOConfigData(_SerializableConfig):
    archive_size: Optional[int] = None
    epsilon: Optional[Tuple[float, ...]] = None
    n_hypercubes: int = 10
    mut_prob: float = 0.15


class OMOPSOConfig(_EpsilonGridMixin, _ConfigBuilder[OMOPSOConfigData]):
    """
    Declarative configuration holder for OMOPSO settings.

    The leader archive size defaults to the population size. Epsilon values
    are either given (one value, or one per objective) or derived from the
    objective bounds split into ``number-of-hypercubes`` boxes.
    """

    _name = "OMOPSO"
    _settings_keys = {
        "archive-size": "archive_size",
        "epsilon-values": "epsilon_values",
        "number-of-hypercubes": "number_of_hypercubes",
    }

    @classmethod
    def default(cls) -> OMOPSOConfigData:
        return cls().fixed()

    def archive_size(self, value: int) -> "OMOPSOConfig":
        self._cfg["archive_size"] = _positive(value, "archive-size", integer=True)
        return self

    def fixed(self) -> OMOPSOConfigData:
        return OMOPSOConfigData(
            archive_size=self._cfg.get("archive_size"),
            epsilon=self._cfg.get("epsilon"),
            n_hypercubes=self._cfg.get("n_hypercubes", 10),
        )


class SMPSOConfig(_EpsilonGridMixin, _ConfigBuilder[SMPSOConfigData]):
    """Declarative configuration holder for SMPSO settings."""

    _name = "SMPSO"
    _settings_keys = {**OMOPSOConfig._settings_keys, "mut-prob": "mut_prob"}

    @classmethod
    def default(cls) -> SMPSOConfigData:
        return cls().fixed()

    def archive_size(self, value: int) -> "SMPSOConfig":
        self._cfg["archive_size"] = _positive(value, "archive-size", integer=True)
        return self

    def mut_prob(self, value: float) -> "SMPSOConfig":
        self._cfg["mut_prob"] = _in_unit_interval(value, "mut-prob")
        return self

    def fixed(self) -> SMPSOConfigData:
        return SMPSOConfigData(
            archive_size=self._cfg.get("archive_size"),
            epsilon=self._cfg.get("epsilon"),
            n_hypercubes=self._cfg.get("n_hypercubes", 10),
            mut_prob=self._cfg.get("mut_prob", 0.15),
        )


__all__ = ["OMOPSOConfigData", "SMPSOConfigData", "OMOPSOConfig", "SMPSOConfig"]
