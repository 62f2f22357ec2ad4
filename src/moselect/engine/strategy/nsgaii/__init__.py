from .helpers import nsga2_survival, rank_and_crowding
from .nsgaii import NSGAII

__all__ = ["NSGAII", "nsga2_survival", "rank_and_crowding"]
