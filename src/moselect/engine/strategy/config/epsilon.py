"""Shared epsilon-grid settings (OMOPSO, SMPSO, SSeMOEA)."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from .base import _positive


def _epsilon_values(value: Any) -> Optional[Tuple[float, ...]]:
    if value is None:
        return None
    if isinstance(value, dict):
        # {"epsilon-value": [...]} as produced by nested settings files
        value = next(iter(value.values()))
    items: Sequence[Any] = value if isinstance(value, (list, tuple)) else [value]
    return tuple(_positive(v, "epsilon-values") for v in items)


class _EpsilonGridMixin:
    """Builder methods for strategies discretizing objectives into hypercubes."""

    _cfg: dict

    def epsilon_values(self, value: float | Sequence[float]):
        self._cfg["epsilon"] = _epsilon_values(value)
        return self

    def number_of_hypercubes(self, value: int):
        self._cfg["n_hypercubes"] = _positive(value, "number-of-hypercubes", integer=True)
        return self


__all__ = ["_EpsilonGridMixin", "_epsilon_values"]
