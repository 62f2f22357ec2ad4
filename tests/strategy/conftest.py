from __future__ import annotations

import numpy as np
import pytest

from moselect import Solution, StrategyContext


N_VAR = 6


def zdt1(x: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    f1 = x[0]
    g = 1.0 + 9.0 * np.mean(x[1:])
    return np.array([f1, g * (1.0 - np.sqrt(f1 / g))])


class ToyDriver:
    """Minimal generation loop around a strategy, with blend-and-jitter variation on ZDT1."""

    def __init__(self, strategy, context: StrategyContext, seed: int = 0) -> None:
        self.strategy = strategy
        self.context = context
        self.rng = np.random.default_rng(seed)

    def solution(self, x: np.ndarray) -> Solution:
        x = np.clip(x, 0.0, 1.0)
        return Solution(objectives=zdt1(x), variables=x)

    def random_population(self, size: int) -> list[Solution]:
        return [self.solution(self.rng.random(N_VAR)) for _ in range(size)]

    def vary(self, parents, n_offspring: int) -> list[Solution]:
        offspring = []
        for k in range(n_offspring):
            a = parents[(2 * k) % len(parents)].variables
            b = parents[(2 * k + 1) % len(parents)].variables
            child = 0.5 * (a + b) + self.rng.normal(0.0, 0.1, size=N_VAR)
            offspring.append(self.solution(child))
        return offspring

    def run(self, population, generations: int, n_offspring: int | None = None):
        archive = self.strategy.initialize(population)
        history = []
        for _ in range(generations):
            parents = self.strategy.mating_selection(population, archive)
            count = len(population) if n_offspring is None else n_offspring
            offspring = self.vary(parents, count)
            before = [ind.objectives.copy() for ind in population]
            survivors = self.strategy.environmental_selection(population, offspring, archive)
            for ind, values in zip(population, before):
                np.testing.assert_array_equal(ind.objectives, values)
            archive = self.strategy.update_archive(population, offspring, archive)
            history.append((parents, offspring, survivors))
            population = survivors
            self.context.advance()
            self.strategy.update()
        return population, archive, history


@pytest.fixture
def context2():
    return StrategyContext.create(n_obj=2, population_size=12, seed=3, max_generations=10)


@pytest.fixture
def toy_driver():
    def factory(strategy, context, seed: int = 0) -> ToyDriver:
        return ToyDriver(strategy, context, seed)

    return factory


@pytest.fixture
def front_population():
    """Four mutually non-dominated points plus one dominated point (last)."""
    F = np.array([[0.0, 1.0], [0.3, 0.6], [0.6, 0.3], [1.0, 0.0], [2.0, 2.0]])
    return [Solution(objectives=row) for row in F]
