from .mopso import OMOPSO, SMPSO
from .mutation import Mutation, NonUniformMutation, PolynomialMutation, UniformMutation

__all__ = ["OMOPSO", "SMPSO", "Mutation", "NonUniformMutation", "PolynomialMutation", "UniformMutation"]
