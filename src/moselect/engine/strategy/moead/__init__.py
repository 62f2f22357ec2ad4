from .moead import MOEAD

__all__ = ["MOEAD"]
