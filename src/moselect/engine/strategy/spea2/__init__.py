from .spea2 import SPEA2

__all__ = ["SPEA2"]
