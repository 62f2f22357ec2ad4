"""PAR configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple

from .base import _ConfigBuilder, _SerializableConfig, _positive, _require_fields


@dataclass(frozen=True)
class PARConfigData(_SerializableConfig):
    reference_point: Tuple[float, ...]
    rho: float = 1e-7


class PARConfig(_ConfigBuilder[PARConfigData]):
    """
    Declarative configuration holder for PAR settings.

    The reference point is given in the original objective space; it may be
    a sequence or a mapping ``{"obj1": v1, "obj2": v2, ...}``.
    """

    _name = "PAR"
    _settings_keys = {"rho": "rho", "reference-point": "reference_point", "ref-point": "reference_point"}

    @classmethod
    def default(cls, reference_point: Sequence[float]) -> PARConfigData:
        return cls().reference_point(reference_point).fixed()

    def rho(self, value: float) -> "PARConfig":
        self._cfg["rho"] = _positive(value, "rho")
        return self

    def reference_point(self, value: Sequence[float] | Mapping[str, Any]) -> "PARConfig":
        if isinstance(value, Mapping):
            keys = sorted(value, key=lambda k: int(str(k).lower().replace("obj", "")))
            value = [value[k] for k in keys]
        self._cfg["reference_point"] = tuple(float(v) for v in value)
        return self

    def fixed(self) -> PARConfigData:
        _require_fields(self._cfg, ("reference_point",), "PAR")
        return PARConfigData(reference_point=self._cfg["reference_point"], rho=self._cfg.get("rho", 1e-7))


__all__ = ["PARConfigData", "PARConfig"]
