from .helpers import hamming_distance, incest_free_pairs
from .mochc import MOCHC

__all__ = ["MOCHC", "hamming_distance", "incest_free_pairs"]
