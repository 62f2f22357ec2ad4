"""
moselect exception hierarchy.

Provides exceptions with helpful messages and suggestions. Every error raised
by the selection subsystem inherits from MOSelectError for easy catching.

Example:
    try:
        strategy = make_strategy("nsgaiii", context, settings)
    except MOSelectError as e:
        logger.error("Strategy setup failed: %s", e)
"""

from __future__ import annotations

from typing import Any


class MOSelectError(Exception):
    """
    Base exception for all moselect errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MOSelectError):
    """Raised when a strategy configuration is invalid or incomplete."""

    pass


class MissingConfigError(ConfigurationError):
    """Raised when a required configuration key is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": field})


class InvalidStrategyError(ConfigurationError):
    """Raised when an unknown strategy name is requested."""

    def __init__(self, name: str, available: list[str] | None = None, close_matches: list[str] | None = None) -> None:
        available = available or []
        message = f"Unknown strategy '{name}'."
        if close_matches:
            message += " Did you mean " + " or ".join(f"'{m}'" for m in close_matches) + "?"
        suggestion = f"Available strategies: {', '.join(available)}" if available else None
        super().__init__(message, suggestion, {"strategy": name, "available": available})


class MixedDirectionsError(ConfigurationError):
    """Raised when a strategy needs all objectives minimized or all maximized."""

    def __init__(self, strategy: str) -> None:
        message = f"{strategy} requires all objectives to be either maximized or minimized."
        suggestion = "Negate the objectives whose direction differs before running this strategy"
        super().__init__(message, suggestion, {"strategy": strategy})


class ReferencePointsError(ConfigurationError):
    """Raised when a reference point file cannot be used."""

    def __init__(self, path: str, reason: str) -> None:
        message = f"Invalid reference point file '{path}': {reason}."
        suggestion = "The first line must be 'n_points,dim' followed by one comma-separated row per point"
        super().__init__(message, suggestion, {"path": path})


# =============================================================================
# Runtime Errors
# =============================================================================


class ObjectiveAccessError(MOSelectError, LookupError):
    """Raised when an individual does not expose a usable objective vector."""

    def __init__(self, index: int, expected: int, found: int | None) -> None:
        if found is None:
            message = f"Individual at position {index} has no objective values."
        else:
            message = f"Individual at position {index} has {found} objective values, expected {expected}."
        suggestion = "Evaluate every individual before selection, or set objective_access='zero' in the context"
        super().__init__(message, suggestion, {"index": index, "expected": expected, "found": found})


class DegenerateInputError(MOSelectError, ValueError):
    """Raised when an operation receives fewer individuals than it assumes."""

    pass


class StrategyStateError(MOSelectError, RuntimeError):
    """Raised when a lifecycle operation is called out of order."""

    def __init__(self, strategy: str, operation: str) -> None:
        message = f"{strategy}.{operation}() called before initialize()."
        suggestion = "Call initialize(population) once before driving the generation loop"
        super().__init__(message, suggestion, {"strategy": strategy, "operation": operation})


__all__ = [
    "MOSelectError",
    "ConfigurationError",
    "MissingConfigError",
    "InvalidStrategyError",
    "MixedDirectionsError",
    "ReferencePointsError",
    "ObjectiveAccessError",
    "DegenerateInputError",
    "StrategyStateError",
]
