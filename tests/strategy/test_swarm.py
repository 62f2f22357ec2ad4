from __future__ import annotations

import numpy as np
import pytest

from moselect import ConfigurationError, DegenerateInputError, Particle, StrategyContext, make_strategy
from moselect.engine.strategy import OMOPSO, SMPSO
from moselect.engine.strategy.mopso import NonUniformMutation, PolynomialMutation, UniformMutation
from moselect.engine.strategy.mopso.helpers import (
    bound_positions,
    constriction_coefficient,
    leader_tournament,
    truncate_by_crowding,
)

N_VAR = 3
LOWER = np.zeros(N_VAR)
UPPER = np.ones(N_VAR)


def evaluate(x: np.ndarray) -> np.ndarray:
    # Schaffer-like bi-objective on the first variable, penalized by the rest
    g = 1.0 + np.sum(x[1:])
    return np.array([x[0] * g, (1.0 - x[0]) * g])


def make_swarm(n: int, seed: int = 0) -> list[Particle]:
    rng = np.random.default_rng(seed)
    swarm = []
    for _ in range(n):
        x = rng.random(N_VAR)
        swarm.append(Particle(objectives=evaluate(x), variables=x))
    return swarm


@pytest.fixture
def swarm_context():
    return StrategyContext.create(n_obj=2, population_size=8, seed=1, genotype_bounds=(LOWER, UPPER))


@pytest.mark.parametrize("cls", [OMOPSO, SMPSO])
def test_genotype_bounds_required(cls):
    with pytest.raises(ConfigurationError):
        cls(StrategyContext.create(n_obj=2, population_size=8))


@pytest.mark.parametrize("name", ["omopso", "smpso"])
class TestLeaderArchive:
    def test_initial_archive_holds_copies_of_non_dominated(self, name, swarm_context):
        strategy = make_strategy(name, swarm_context)
        swarm = make_swarm(8)

        archive = strategy.initialize(swarm)

        assert 1 <= len(archive) <= 8
        assert all(all(member is not p for p in swarm) for member in archive)
        assert strategy.archive_comparator is not None

    def test_leaders_come_from_archive(self, name, swarm_context):
        strategy = make_strategy(name, swarm_context)
        swarm = make_swarm(8)
        archive = strategy.initialize(swarm)

        leaders = strategy.mating_selection(swarm, archive)

        assert len(leaders) == len(swarm)
        assert all(any(leader is member for member in archive) for leader in leaders)

    def test_empty_archive_has_no_leaders(self, name, swarm_context):
        strategy = make_strategy(name, swarm_context)
        swarm = make_swarm(8)
        strategy.initialize(swarm)
        with pytest.raises(DegenerateInputError):
            strategy.mating_selection(swarm, [])

    def test_offspring_replace_swarm(self, name, swarm_context):
        strategy = make_strategy(name, swarm_context)
        swarm = make_swarm(8)
        strategy.initialize(swarm)
        moved = make_swarm(8, seed=3)
        assert strategy.environmental_selection(swarm, moved, None) == moved

    def test_archive_respects_capacity(self, name, swarm_context):
        strategy = make_strategy(name, swarm_context, {"archive-size": 3, "epsilon-values": [1e-6, 1e-6]})
        swarm = make_swarm(8)
        archive = strategy.initialize(swarm)

        for seed in range(1, 5):
            archive = strategy.update_archive(swarm, make_swarm(8, seed=seed), archive)

        assert 1 <= len(archive) <= 3
        values = [tuple(member.objectives) for member in archive]
        assert len(set(values)) == len(values)

    def test_full_swarm_loop(self, name, swarm_context):
        strategy = make_strategy(name, swarm_context)
        swarm = make_swarm(8)
        archive = strategy.initialize(swarm)
        for _ in range(5):
            leaders = strategy.mating_selection(swarm, archive)
            strategy.update_velocities(swarm, leaders)
            strategy.update_positions(swarm)
            swarm = strategy.turbulence(swarm)
            for particle in swarm:
                particle.objectives = evaluate(particle.position)
            swarm = strategy.environmental_selection(swarm, swarm, archive)
            strategy.update_personal_bests(swarm)
            archive = strategy.update_archive(swarm, swarm, archive)
            swarm_context.advance()
            strategy.update()

        positions = np.array([p.position for p in swarm])
        assert np.all(positions >= LOWER) and np.all(positions <= UPPER)
        assert len(archive) >= 1


@pytest.mark.parametrize("cls,factor", [(OMOPSO, -1.0), (SMPSO, 0.001)])
def test_positions_bounce_off_bounds(cls, factor, swarm_context):
    strategy = cls(swarm_context)
    swarm = make_swarm(4)
    strategy.initialize(swarm)
    for particle in swarm:
        particle.velocity = np.array([5.0, 0.0, -5.0])

    strategy.update_positions(swarm)

    for particle in swarm:
        np.testing.assert_array_equal(particle.position[[0, 2]], [1.0, 0.0])
        np.testing.assert_allclose(particle.velocity, [5.0 * factor, 0.0, -5.0 * factor])


def test_smpso_velocity_clamped_to_half_range(swarm_context):
    strategy = SMPSO(swarm_context)
    swarm = make_swarm(4)
    archive = strategy.initialize(swarm)
    for particle in swarm:
        particle.velocity = np.full(N_VAR, 10.0)

    strategy.update_velocities(swarm, strategy.mating_selection(swarm, archive))

    for particle in swarm:
        assert np.all(np.abs(particle.velocity) <= 0.5 + 1e-12)


def test_velocity_update_needs_one_leader_per_particle(swarm_context):
    strategy = OMOPSO(swarm_context)
    swarm = make_swarm(4)
    archive = strategy.initialize(swarm)
    with pytest.raises(DegenerateInputError):
        strategy.update_velocities(swarm, archive[:1])


def test_velocity_pulls_toward_memory_and_leader(swarm_context):
    strategy = OMOPSO(swarm_context)
    x = np.full(N_VAR, 0.5)
    particle = Particle(objectives=evaluate(x), variables=x, best_position=np.full(N_VAR, 0.9))
    leader = Particle(objectives=evaluate(x), variables=x, best_position=np.full(N_VAR, 0.9))
    strategy.initialize([particle])

    strategy.update_velocities([particle], [leader])

    assert np.all(particle.velocity > 0.0)


def test_personal_best_replaced_unless_dominating(swarm_context):
    strategy = OMOPSO(swarm_context)
    better = Particle(objectives=[0.2, 0.2], variables=np.full(N_VAR, 0.1), best_objectives=np.array([0.5, 0.5]))
    worse = Particle(objectives=[0.9, 0.9], variables=np.full(N_VAR, 0.3), best_objectives=np.array([0.1, 0.1]))
    worse_memory = worse.best_position.copy()
    strategy.initialize([better, worse])

    replaced = strategy.update_personal_bests([better, worse])

    assert replaced == 1
    np.testing.assert_array_equal(better.best_objectives, [0.2, 0.2])
    np.testing.assert_array_equal(worse.best_objectives, [0.1, 0.1])
    np.testing.assert_array_equal(worse.best_position, worse_memory)


@pytest.mark.parametrize("cls", [OMOPSO, SMPSO])
def test_turbulence_returns_copies(cls, swarm_context):
    strategy = cls(swarm_context)
    swarm = make_swarm(9)
    before = [p.position.copy() for p in swarm]
    strategy.initialize(swarm)

    disturbed = strategy.turbulence(swarm)

    assert len(disturbed) == len(swarm)
    assert all(d is not p for d, p in zip(disturbed, swarm))
    for particle, position in zip(swarm, before):
        np.testing.assert_array_equal(particle.position, position)
    positions = np.array([p.position for p in disturbed])
    assert np.all(positions >= LOWER) and np.all(positions <= UPPER)


def test_constriction_coefficient():
    assert constriction_coefficient(1.5, 1.5) == 1.0
    assert constriction_coefficient(2.0, 2.0) == 1.0
    assert constriction_coefficient(2.5, 2.5) == pytest.approx(2.0 / (3.0 + np.sqrt(5.0)))


def test_bound_positions_in_place():
    X = np.array([[1.5, -0.2, 0.5]])
    V = np.array([[1.0, -1.0, 1.0]])

    bound_positions(X, V, LOWER, UPPER, -1.0)

    np.testing.assert_array_equal(X, [[1.0, 0.0, 0.5]])
    np.testing.assert_array_equal(V, [[-1.0, 1.0, 1.0]])


def test_leader_tournament_prefers_sparse_members():
    rng = np.random.default_rng(0)
    crowding = np.array([np.inf, 0.0])
    winners = leader_tournament(crowding, 200, rng)
    assert np.count_nonzero(winners == 0) > np.count_nonzero(winners == 1)


def test_truncate_by_crowding_keeps_widest():
    rng = np.random.default_rng(0)
    kept = truncate_by_crowding(np.array([0.1, np.inf, 0.5, 0.2]), 2, rng)
    assert sorted(kept.tolist()) == [1, 2]


class TestMutation:
    @pytest.mark.parametrize(
        "operator",
        [
            PolynomialMutation(1.0, 20.0, lower=LOWER, upper=UPPER),
            UniformMutation(1.0, 0.5, lower=LOWER, upper=UPPER),
            NonUniformMutation(1.0, 0.5, lower=LOWER, upper=UPPER),
        ],
    )
    def test_stays_within_bounds(self, operator):
        rng = np.random.default_rng(4)
        X = rng.random((20, N_VAR))

        Y = operator(X.copy(), rng)

        assert Y.shape == X.shape
        assert np.all(Y >= LOWER) and np.all(Y <= UPPER)
        assert not np.array_equal(X, Y)

    def test_zero_probability_leaves_positions(self):
        rng = np.random.default_rng(4)
        X = rng.random((5, N_VAR))
        operator = PolynomialMutation(0.0, lower=LOWER, upper=UPPER)
        np.testing.assert_array_equal(operator(X.copy(), rng), X)

    def test_non_uniform_steps_shrink_with_progress(self):
        X = np.full((200, N_VAR), 0.5)
        operator = NonUniformMutation(1.0, 0.5, lower=LOWER, upper=UPPER)

        early = np.abs(operator(X.copy(), np.random.default_rng(7)) - X).mean()
        operator.set_progress(0.9)
        late = np.abs(operator(X.copy(), np.random.default_rng(7)) - X).mean()
        operator.set_progress(1.0)
        final = operator(X.copy(), np.random.default_rng(7))

        assert late < early
        np.testing.assert_allclose(final, X)

    def test_omopso_feeds_generation_progress_to_non_uniform_mutation(self, swarm_context):
        strategy = OMOPSO(swarm_context)
        swarm_context.generation = 25

        strategy.turbulence(make_swarm(6))

        assert strategy.non_uniform_mutation.progress == pytest.approx(25 / swarm_context.max_generations)

    def test_default_probability_is_inverse_of_variables(self):
        assert UniformMutation(lower=LOWER, upper=UPPER).prob == pytest.approx(1.0 / N_VAR)

    def test_invalid_probability_rejected(self):
        with pytest.raises(ConfigurationError):
            PolynomialMutation(1.5, lower=LOWER, upper=UPPER)

    def test_wrong_width_rejected(self):
        operator = UniformMutation(1.0, lower=LOWER, upper=UPPER)
        with pytest.raises(ConfigurationError):
            operator(np.zeros((2, N_VAR + 1)), np.random.default_rng(0))
