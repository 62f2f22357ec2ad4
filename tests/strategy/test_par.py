from __future__ import annotations

import numpy as np
import pytest

from moselect import ConfigurationError, MissingConfigError, Solution, StrategyContext, make_strategy
from moselect.engine.strategy import PAR
from moselect.engine.strategy.config import PARConfig
from moselect.engine.strategy.par import normalize_reference, region_of_interest
from moselect.foundation.objectives import Objective


@pytest.fixture
def linear_front():
    return [Solution(objectives=[a, 1.0 - a]) for a in np.linspace(0.0, 1.0, 10)]


def test_reference_point_required():
    with pytest.raises(MissingConfigError):
        make_strategy("par", StrategyContext.create(n_obj=2, population_size=4))


def test_reference_point_length_checked():
    context = StrategyContext.create(n_obj=2, population_size=4)
    with pytest.raises(ConfigurationError):
        PAR(context, PARConfig.default([0.1, 0.2, 0.3]))


def test_reference_point_bounds_checked():
    context = StrategyContext(
        objectives=[Objective(lower=0.0, upper=1.0), Objective(lower=0.0, upper=1.0)],
        population_size=4,
    )
    with pytest.raises(ConfigurationError):
        PAR(context, PARConfig.default([0.5, 2.0]))


def test_reference_point_from_mapping():
    config = PARConfig.from_settings({"reference-point": {"obj2": 0.5, "obj1": 0.2}})
    assert config.reference_point == (0.2, 0.5)


def test_selection_prefers_region_near_reference(linear_front):
    context = StrategyContext.create(n_obj=2, population_size=3, seed=0)
    strategy = make_strategy("par", context, {"reference-point": [0.0, 1.0]})
    population, offspring = linear_front[:5], linear_front[5:]
    strategy.initialize(population)

    survivors = strategy.environmental_selection(population, offspring, None)

    f1 = sorted(float(s.objectives[0]) for s in survivors)
    np.testing.assert_allclose(f1, [0.0, 1.0 / 9.0, 2.0 / 9.0])


def test_crowded_region_reduced_to_population_size(linear_front):
    context = StrategyContext.create(n_obj=2, population_size=4, seed=0)
    strategy = make_strategy("par", context, {"reference-point": [0.5, 0.5]})
    dominated = [Solution(objectives=[2.0, 2.0])]
    strategy.initialize(linear_front)

    survivors = strategy.environmental_selection(linear_front, dominated, None)

    assert len(survivors) == 4
    assert len({id(s) for s in survivors}) == 4


def test_mating_draws_population_size(linear_front):
    context = StrategyContext.create(n_obj=2, population_size=6, seed=0)
    strategy = make_strategy("par", context, {"ref-point": [0.5, 0.5]})
    strategy.initialize(linear_front)
    assert len(strategy.mating_selection(linear_front, None)) == 6


def test_normalize_reference_keeps_outside_points():
    F = np.array([[0.0, 10.0], [2.0, 20.0]])
    np.testing.assert_allclose(normalize_reference(np.array([4.0, 0.0]), F), [2.0, -1.0])


def test_region_of_interest_on_linear_front():
    G = np.array([[0.0, 1.0], [0.25, 0.75], [0.5, 0.5], [0.75, 0.25], [1.0, 0.0]])
    inside, asf_values = region_of_interest(G, np.array([0.5, 0.5]), 1e-7)
    assert inside[2]
    assert int(np.argmin(asf_values)) == 2
