from .smsemoa import SMSEMOA

__all__ = ["SMSEMOA"]
