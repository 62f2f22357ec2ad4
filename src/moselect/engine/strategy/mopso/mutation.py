"""Real-valued mutation operators used as particle turbulence."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from moselect.foundation.exceptions import ConfigurationError


def _ensure_bounds(lower, upper) -> tuple[np.ndarray, np.ndarray]:
    lo = np.asarray(lower, dtype=float).reshape(-1)
    hi = np.asarray(upper, dtype=float).reshape(-1)
    if lo.shape != hi.shape:
        raise ConfigurationError(f"Bound arrays differ in length: {lo.size} vs {hi.size}.")
    if np.any(hi < lo):
        raise ConfigurationError("Every upper bound must be at least its lower bound.")
    return lo, hi


class Mutation(ABC):
    """
    Base class for turbulence operators.

    Operators take a position matrix (one particle per row) and the shared
    generator, and return the mutated matrix. The matrix may be modified in
    place; callers pass a private copy.
    """

    def __init__(self, prob_mutation: float | None, *, lower, upper) -> None:
        self.lower, self.upper = _ensure_bounds(lower, upper)
        self.span = self.upper - self.lower
        n_var = self.lower.size
        prob = 1.0 / n_var if prob_mutation is None else float(prob_mutation)
        if not 0.0 <= prob <= 1.0:
            raise ConfigurationError(f"Mutation probability must lie in [0, 1], got {prob_mutation}.")
        self.prob = prob

    def _as_positions(self, X: np.ndarray) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.lower.size:
            raise ConfigurationError(
                f"Expected positions with {self.lower.size} variables, got shape {X.shape}."
            )
        return X

    @abstractmethod
    def __call__(self, X: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        raise NotImplementedError


class PolynomialMutation(Mutation):
    """Deb's polynomial mutation with distribution index ``eta``."""

    def __init__(self, prob_mutation: float | None = None, eta: float = 20.0, *, lower, upper) -> None:
        super().__init__(prob_mutation, lower=lower, upper=upper)
        self.eta = float(eta)

    def __call__(self, X: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        X = self._as_positions(X)
        if X.shape[0] == 0:
            return X
        # Mask grid first, then the delta grid.
        rnd_mask = rng.random(X.shape)
        rnd_delta = rng.random(X.shape)
        mask = rnd_mask <= self.prob
        if not np.any(mask):
            return X

        mut_pow = 1.0 / (self.eta + 1.0)
        rows, cols = np.nonzero(mask)
        for i, j in zip(rows, cols):
            y = X[i, j]
            yl = self.lower[j]
            yu = self.upper[j]
            if yu <= yl:
                continue
            delta1 = (y - yl) / (yu - yl)
            delta2 = (yu - y) / (yu - yl)
            rnd = rnd_delta[i, j]
            if rnd <= 0.5:
                xy = 1.0 - delta1
                val = 2.0 * rnd + (1.0 - 2.0 * rnd) * (xy ** (self.eta + 1.0))
                deltaq = val**mut_pow - 1.0
            else:
                xy = 1.0 - delta2
                val = 2.0 * (1.0 - rnd) + 2.0 * (rnd - 0.5) * (xy ** (self.eta + 1.0))
                deltaq = 1.0 - val**mut_pow
            y += deltaq * (yu - yl)
            X[i, j] = min(max(y, yl), yu)
        return X


class UniformMutation(Mutation):
    """Uniform perturbation in ``[-perturb, perturb]`` scaled by each variable's range."""

    def __init__(self, prob_mutation: float | None = None, perturb: float = 0.5, *, lower, upper) -> None:
        super().__init__(prob_mutation, lower=lower, upper=upper)
        self.perturb = float(np.clip(perturb, 0.0, 1.0))

    def __call__(self, X: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        X = self._as_positions(X)
        mask = rng.random(X.shape) <= self.prob
        if not np.any(mask):
            return X
        delta = rng.uniform(-self.perturb, self.perturb, size=X.shape)
        X += np.where(mask, delta * self.span, 0.0)
        np.clip(X, self.lower, self.upper, out=X)
        return X


class NonUniformMutation(Mutation):
    """
    Non-uniform mutation whose steps shrink as the run progresses.

    The step is ``(1 - u ** ((1 - progress) ** perturbation)) * span`` with a
    random sign; ``progress`` is the fraction of the run completed, so steps
    span the whole range at the start and vanish at the last generation.
    """

    def __init__(self, prob_mutation: float | None = None, perturbation: float = 0.5, *, lower, upper) -> None:
        super().__init__(prob_mutation, lower=lower, upper=upper)
        self.perturbation = max(float(perturbation), 1e-8)
        self.progress = 0.0

    def set_progress(self, progress: float) -> None:
        self.progress = float(np.clip(progress, 0.0, 1.0))

    def __call__(self, X: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        X = self._as_positions(X)
        mask = rng.random(X.shape) <= self.prob
        if not np.any(mask):
            return X
        exponent = (1.0 - self.progress) ** self.perturbation
        delta = (1.0 - rng.random(X.shape) ** exponent) * self.span
        direction = np.where(rng.random(X.shape) <= 0.5, -1.0, 1.0)
        X += np.where(mask, delta * direction, 0.0)
        np.clip(X, self.lower, self.upper, out=X)
        return X


__all__ = ["Mutation", "PolynomialMutation", "UniformMutation", "NonUniformMutation"]
