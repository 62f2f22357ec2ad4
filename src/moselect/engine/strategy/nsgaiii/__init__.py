from .nsgaiii import NSGAIII

__all__ = ["NSGAIII"]
