"""Base utilities for strategy configuration."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, ClassVar, Dict, Generic, Mapping, Tuple, TypeVar

from moselect.foundation.exceptions import ConfigurationError, MissingConfigError

DataT = TypeVar("DataT")


class _SerializableConfig:
    """Mixin to serialize dataclass configs."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


def _require_fields(cfg: Dict[str, Any], fields: Tuple[str, ...], name: str) -> None:
    """Validate that required fields are present in configuration."""
    missing = [field for field in fields if field not in cfg]
    if missing:
        raise MissingConfigError(", ".join(missing), f"{name}Config")


def _positive(value: Any, key: str, *, integer: bool = False) -> Any:
    number = int(value) if integer else float(value)
    if number <= 0:
        raise ConfigurationError(f"'{key}' must be positive, got {value}.")
    return number


def _non_negative(value: Any, key: str) -> float:
    number = float(value)
    if number < 0:
        raise ConfigurationError(f"'{key}' must be non-negative, got {value}.")
    return number


def _in_unit_interval(value: Any, key: str) -> float:
    number = float(value)
    if not 0.0 <= number <= 1.0:
        raise ConfigurationError(f"'{key}' must lie in [0, 1], got {value}.")
    return number


def _choice(value: Any, key: str, options: Tuple[str, ...]) -> str:
    text = str(value).lower().replace("_", "-")
    if text not in options:
        raise ConfigurationError(
            f"Unsupported value '{value}' for '{key}'.",
            suggestion=f"Use one of: {', '.join(options)}",
        )
    return text


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


class _ConfigBuilder(Generic[DataT]):
    """
    Fluent builder base.

    Subclasses list the flat settings keys they accept in ``_settings_keys``
    (hyphenated key -> builder method name) and implement ``fixed()``.
    """

    _name: ClassVar[str] = "Strategy"
    _settings_keys: ClassVar[Dict[str, str]] = {}

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any] | None) -> DataT:
        """Build and validate a config from a flat settings mapping."""
        builder = cls()
        for key, value in (settings or {}).items():
            normalized = str(key).lower().replace("_", "-")
            method = cls._settings_keys.get(normalized)
            if method is None:
                raise ConfigurationError(
                    f"Unknown {cls._name} setting '{key}'.",
                    suggestion=f"Accepted keys: {', '.join(sorted(cls._settings_keys)) or 'none'}",
                )
            getattr(builder, method)(value)
        return builder.fixed()

    def fixed(self) -> DataT:  # pragma: no cover - abstract
        raise NotImplementedError


__all__ = [
    "_SerializableConfig",
    "_ConfigBuilder",
    "_require_fields",
    "_positive",
    "_non_negative",
    "_in_unit_interval",
    "_choice",
    "_as_bool",
]
