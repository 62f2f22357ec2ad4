from .ibea import IBEA

__all__ = ["IBEA"]
