"""
Settings loading utilities for strategy configuration files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from moselect.foundation.exceptions import ConfigurationError


def load_strategy_settings(path: str | Path, section: str | None = None) -> Dict[str, Any]:
    """
    Load a YAML or JSON settings file into a flat mapping.

    Parameters
    ----------
    path : str or Path
        File to read; ``.yaml``/``.yml`` files go through PyYAML, anything else
        is parsed as JSON.
    section : str, optional
        Top-level key to return instead of the whole document, e.g. the
        strategy name in a file holding settings for several strategies.
    """
    spec_path = Path(path).expanduser().resolve()
    if not spec_path.exists():
        raise FileNotFoundError(f"Settings file '{spec_path}' does not exist.")
    suffix = spec_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise ImportError("YAML settings requested but PyYAML is not installed. Install with 'pip install pyyaml'.") from exc
        with spec_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    else:
        with spec_path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Settings file '{spec_path}' must contain a mapping, got {type(data).__name__}.",
        )
    if section is not None:
        if section not in data:
            raise ConfigurationError(
                f"Settings file '{spec_path}' has no section '{section}'.",
                suggestion=f"Available sections: {', '.join(sorted(map(str, data)))}",
            )
        data = data[section] or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Section '{section}' of '{spec_path}' must be a mapping.")
    return data


__all__ = ["load_strategy_settings"]
