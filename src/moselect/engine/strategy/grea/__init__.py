from .grea import GrEA

__all__ = ["GrEA"]
