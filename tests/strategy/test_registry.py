from __future__ import annotations

import pytest

from moselect import (
    ConfigurationError,
    InvalidStrategyError,
    StrategyContext,
    available_strategies,
    make_strategy,
)
from moselect.engine.strategy import MOCHC, NSGAII, PAESLambda, SelectionStrategy
from moselect.engine.strategy.registry import Registry, get_strategy_registry

EXPECTED = (
    "grea",
    "hype",
    "ibea",
    "mochc",
    "moead",
    "nsgaii",
    "nsgaiii",
    "omopso",
    "paes",
    "paes-lambda",
    "par",
    "rvea",
    "smpso",
    "smsemoa",
    "spea2",
    "ssemoea",
)


def test_available_strategies():
    assert available_strategies() == EXPECTED


def test_registry_is_cached():
    assert get_strategy_registry() is get_strategy_registry()


def test_names_are_normalized():
    context = StrategyContext.create(n_obj=2, population_size=4)
    assert isinstance(make_strategy("  NSGAII ", context), NSGAII)
    assert isinstance(make_strategy("PAES_Lambda", context), PAESLambda)


def test_unknown_name_suggests_close_match():
    context = StrategyContext.create(n_obj=2, population_size=4)
    with pytest.raises(InvalidStrategyError) as excinfo:
        make_strategy("nsga2", context)
    assert "Did you mean" in str(excinfo.value)
    assert "nsgaii" in str(excinfo.value)
    assert excinfo.value.details["available"] == list(EXPECTED)


def test_unknown_setting_rejected():
    context = StrategyContext.create(n_obj=2, population_size=4)
    with pytest.raises(ConfigurationError, match="Unknown NSGA-II setting 'colour'"):
        make_strategy("nsgaii", context, {"colour": "red"})


def test_collaborators_forwarded():
    context = StrategyContext.create(n_obj=2, population_size=4)

    def mutator(individuals):
        return list(individuals)

    strategy = make_strategy("mochc", context, mutator=mutator)

    assert isinstance(strategy, MOCHC)
    assert strategy.mutator is mutator


@pytest.mark.parametrize(
    "name,settings,context_kwargs",
    [
        ("nsgaii", None, {}),
        ("nsgaiii", {"p1": 4}, {}),
        ("spea2", None, {}),
        ("moead", {"h": 11, "t": 4}, {}),
        ("paes", None, {}),
        ("paes-lambda", None, {}),
        ("ibea", None, {}),
        ("hype", None, {}),
        ("grea", None, {}),
        ("smsemoa", None, {}),
        ("omopso", None, {"genotype_bounds": ([0.0, 0.0], [1.0, 1.0])}),
        ("smpso", None, {"genotype_bounds": ([0.0, 0.0], [1.0, 1.0])}),
        ("ssemoea", None, {}),
        ("mochc", None, {}),
        ("par", {"reference-point": [0.5, 0.5]}, {}),
        ("rvea", {"p1": 11}, {}),
    ],
)
def test_every_strategy_builds(name, settings, context_kwargs):
    context = StrategyContext.create(n_obj=2, population_size=12, **context_kwargs)
    strategy = make_strategy(name, context, settings)
    assert isinstance(strategy, SelectionStrategy)


class TestRegistry:
    def test_register_and_get(self):
        registry: Registry[int] = Registry("Numbers")
        registry.register("One_Thing", 1)
        assert registry.get("one-thing") == 1
        assert "ONE_THING" in registry
        assert len(registry) == 1

    def test_decorator_registration(self):
        registry: Registry = Registry("Funcs")

        @registry.register("double")
        def double(x):
            return 2 * x

        assert registry["double"](3) == 6

    def test_duplicate_rejected(self):
        registry: Registry[int] = Registry("Numbers")
        registry.register("one", 1)
        with pytest.raises(ConfigurationError):
            registry.register("ONE", 2)
        registry.register("one", 3, override=True)
        assert registry.get("one") == 3
