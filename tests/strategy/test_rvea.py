from __future__ import annotations

import numpy as np
import pytest

from moselect import Solution, StrategyContext, make_strategy
from moselect.engine.strategy import RVEA
from moselect.engine.strategy.rvea import adapt_reference_vectors, angle_penalized_distance


def _population(seed: int, n: int = 12) -> list[Solution]:
    rng = np.random.default_rng(seed)
    # f2 spans ten times the range of f1
    return [Solution(objectives=[rng.random(), 10.0 * rng.random()]) for _ in range(n)]


def test_default_vectors_for_three_objectives():
    strategy = RVEA(StrategyContext.create(n_obj=3, population_size=91))
    assert strategy.initial_reference_vectors.shape == (91, 3)
    np.testing.assert_allclose(np.linalg.norm(strategy.reference_vectors, axis=1), 1.0)


def test_one_elite_per_vector_then_fill():
    context = StrategyContext.create(n_obj=2, population_size=6, seed=0)
    strategy = make_strategy("rvea", context, {"p1": 2})
    population = [Solution(objectives=row) for row in [[0.0, 1.0], [0.1, 0.9], [0.2, 0.8]]]
    offspring = [Solution(objectives=row) for row in [[1.0, 0.0], [0.9, 0.1], [0.8, 0.2]]]
    strategy.initialize(population)

    survivors = strategy.environmental_selection(population, offspring, None)

    assert len(survivors) == 6
    # Vectors (0, 1), diagonal, (1, 0); the diagonal one stays empty and the
    # smallest norm wins along each axis.
    assert survivors[0] is population[2]
    assert survivors[1] is offspring[2]
    merged = population + offspring
    assert all(not any(s is m for m in merged) for s in survivors[2:])


def test_vectors_adapt_on_schedule():
    context = StrategyContext.create(n_obj=2, population_size=12, seed=0, max_generations=10)
    strategy = make_strategy("rvea", context, {"p1": 11, "fr": 0.5})
    population = _population(1)
    strategy.initialize(population)
    initial = strategy.reference_vectors

    survivors = strategy.environmental_selection(population, _population(2), None)
    for _ in range(4):
        context.advance()
        strategy.update()
    np.testing.assert_allclose(strategy.reference_vectors, initial)

    context.advance()
    strategy.update()
    adapted = strategy.reference_vectors
    assert not np.allclose(adapted, initial)
    F = np.array([s.objectives for s in survivors])
    np.testing.assert_allclose(adapted, adapt_reference_vectors(strategy.initial_reference_vectors, F))


def test_zero_frequency_never_adapts():
    context = StrategyContext.create(n_obj=2, population_size=12, seed=0, max_generations=4)
    strategy = make_strategy("rvea", context, {"p1": 11, "fr": 0})
    population = _population(1)
    strategy.initialize(population)
    initial = strategy.reference_vectors
    strategy.environmental_selection(population, _population(2), None)
    for _ in range(4):
        context.advance()
        strategy.update()
    np.testing.assert_allclose(strategy.reference_vectors, initial)


def test_apd_without_penalty_is_norm():
    F = np.array([[3.0, 4.0], [0.0, 2.0]])
    V = np.array([[1.0, 0.0], [0.0, 1.0]])

    assignment, apd = angle_penalized_distance(F, V, 0.0, 2.0)

    np.testing.assert_array_equal(assignment, [1, 1])
    np.testing.assert_allclose(apd, [5.0, 2.0])


def test_apd_penalizes_angle():
    F = np.array([[1.0, 1.0]])
    V = np.array([[1.0, 0.0], [0.0, 1.0]])

    _, apd = angle_penalized_distance(F, V, 1.0, 2.0)

    # theta = pi/4 against gamma = pi/2
    assert apd[0] == pytest.approx((1.0 + 2.0 * 0.5) * np.sqrt(2.0))


def test_lone_vector_has_no_angle_penalty():
    F = np.array([[1.0, 1.0]])
    _, apd = angle_penalized_distance(F, np.array([[1.0, 0.0]]), 1.0, 2.0)
    assert apd[0] == pytest.approx(np.sqrt(2.0))


def test_adaptation_floor_for_flat_objective():
    initial = np.array([[1.0, 0.0], [0.5, 0.5], [0.0, 1.0]])
    F = np.array([[0.0, 3.0], [2.0, 3.0]])

    adapted = adapt_reference_vectors(initial, F)

    np.testing.assert_allclose(np.linalg.norm(adapted, axis=1), 1.0)
    assert np.all(adapted[:2, 1] < 1e-3)
    np.testing.assert_allclose(adapted[2], [0.0, 1.0])
