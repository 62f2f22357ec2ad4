from .helpers import normalize_reference, region_of_interest
from .par import PAR

__all__ = ["PAR", "normalize_reference", "region_of_interest"]
