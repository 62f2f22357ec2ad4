from __future__ import annotations

import numpy as np
import pytest

from moselect import Solution


def make_population(F, *, variables=None):
    """Solutions carrying the rows of ``F`` as objective vectors."""
    F = np.asarray(F, dtype=float)
    if variables is None:
        return [Solution(objectives=row) for row in F]
    return [Solution(objectives=row, variables=var) for row, var in zip(F, variables)]


def objectives_of(population):
    return np.array([ind.objectives for ind in population], dtype=float)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def biobjective_population():
    """Twelve points: a convex front of six plus six dominated points."""
    t = np.linspace(0.0, 1.0, 6)
    front = np.column_stack([t, (1.0 - np.sqrt(t))])
    dominated = front + np.array([0.3, 0.4])
    return make_population(np.vstack([front, dominated]))


@pytest.fixture
def triobjective_population():
    gen = np.random.default_rng(7)
    F = gen.random((20, 3))
    return make_population(F)
