from .paes import PAES, PAESLambda

__all__ = ["PAES", "PAESLambda"]
