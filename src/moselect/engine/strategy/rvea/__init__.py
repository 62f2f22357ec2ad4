from .helpers import adapt_reference_vectors, angle_penalized_distance
from .rvea import RVEA

__all__ = ["RVEA", "adapt_reference_vectors", "angle_penalized_distance"]
