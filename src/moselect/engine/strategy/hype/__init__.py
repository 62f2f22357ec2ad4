from .hype import HypE

__all__ = ["HypE"]
