from .helpers import offer_to_epsilon_archive, replacement_index
from .ssemoea import SSeMOEA

__all__ = ["SSeMOEA", "offer_to_epsilon_archive", "replacement_index"]
