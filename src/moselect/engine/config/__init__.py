from .loader import load_strategy_settings

__all__ = ["load_strategy_settings"]
