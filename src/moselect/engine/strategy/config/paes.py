"""PAES and PAES (mu+lambda) configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import _ConfigBuilder, _SerializableConfig, _positive, _require_fields


@dataclass(frozen=True)
class PAESConfigData(_SerializableConfig):
    bisections: int
    archive_size: int


@dataclass(frozen=True)
class PAESLambdaConfigData(_SerializableConfig):
    bisections: int
    archive_size: int
    mu: Optional[int] = None
    lambda_: Optional[int] = None


class PAESConfig(_ConfigBuilder[PAESConfigData]):
    """Declarative configuration holder for (1+1) PAES settings."""

    _name = "PAES"
    _settings_keys = {"number-of-bisections": "bisections", "archive-size": "archive_size"}

    @classmethod
    def default(cls) -> PAESConfigData:
        return cls().bisections(5).archive_size(100).fixed()

    def bisections(self, value: int) -> "PAESConfig":
        self._cfg["bisections"] = _positive(value, "number-of-bisections", integer=True)
        return self

    def archive_size(self, value: int) -> "PAESConfig":
        self._cfg["archive_size"] = _positive(value, "archive-size", integer=True)
        return self

    def fixed(self) -> PAESConfigData:
        _require_fields(self._cfg, ("bisections", "archive_size"), "PAES")
        return PAESConfigData(bisections=self._cfg["bisections"], archive_size=self._cfg["archive_size"])


class PAESLambdaConfig(PAESConfig):
    """
    Declarative configuration holder for PAES (mu+lambda) settings.

    ``mu`` and ``lambda`` default to the population size of the context.
    """

    _name = "PAES-lambda"
    _settings_keys = {**PAESConfig._settings_keys, "mu": "mu", "lambda": "lambda_"}

    @classmethod
    def default(cls) -> PAESLambdaConfigData:  # type: ignore[override]
        return cls().bisections(5).archive_size(100).fixed()

    def mu(self, value: int) -> "PAESLambdaConfig":
        self._cfg["mu"] = _positive(value, "mu", integer=True)
        return self

    def lambda_(self, value: int) -> "PAESLambdaConfig":
        self._cfg["lambda_"] = _positive(value, "lambda", integer=True)
        return self

    def fixed(self) -> PAESLambdaConfigData:  # type: ignore[override]
        _require_fields(self._cfg, ("bisections", "archive_size"), "PAESLambda")
        return PAESLambdaConfigData(
            bisections=self._cfg["bisections"],
            archive_size=self._cfg["archive_size"],
            mu=self._cfg.get("mu"),
            lambda_=self._cfg.get("lambda_"),
        )


__all__ = ["PAESConfigData", "PAESLambdaConfigData", "PAESConfig", "PAESLambdaConfig"]
