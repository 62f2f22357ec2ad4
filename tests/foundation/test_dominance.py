from __future__ import annotations

import numpy as np
import pytest

from moselect.foundation.dominance import (
    DOMINATED,
    DOMINATES,
    INCOMPARABLE,
    ConstrainedComparator,
    EpsilonDominanceComparator,
    ParetoComparator,
    ViolationComparator,
    dominance_matrix,
    make_comparator,
)
from moselect.foundation.exceptions import ConfigurationError, ObjectiveAccessError
from moselect.foundation.individual import Solution
from moselect.foundation.objectives import Objective, minimize_all


class TestParetoComparator:
    """Direction-aware Pareto dominance."""

    def test_minimization(self):
        cmp = ParetoComparator(minimize_all(2))
        a = Solution(objectives=[1.0, 2.0])
        b = Solution(objectives=[2.0, 3.0])
        c = Solution(objectives=[0.0, 4.0])
        assert cmp.compare(a, b) == DOMINATES
        assert cmp.compare(b, a) == DOMINATED
        assert cmp.compare(a, c) == INCOMPARABLE
        assert cmp.dominates(a, b)

    def test_equal_vectors_are_incomparable(self):
        cmp = ParetoComparator(minimize_all(2))
        a = Solution(objectives=[1.0, 1.0])
        assert cmp.compare(a, a.copy()) == INCOMPARABLE

    def test_mixed_directions(self):
        objectives = [Objective(maximize=True), Objective(maximize=False)]
        cmp = ParetoComparator(objectives)
        a = Solution(objectives=[5.0, 1.0])
        b = Solution(objectives=[3.0, 2.0])
        assert cmp.compare(a, b) == DOMINATES
        assert cmp.compare_values(np.array([3.0, 1.0]), np.array([5.0, 1.0])) == DOMINATED

    def test_missing_objectives_raise(self):
        cmp = ParetoComparator(minimize_all(2))
        with pytest.raises(ObjectiveAccessError):
            cmp.compare(Solution(objectives=[1.0, 1.0]), Solution())

    def test_missing_objectives_zero_policy(self):
        cmp = ParetoComparator(minimize_all(2), policy="zero")
        assert cmp.compare(Solution(objectives=[1.0, 1.0]), Solution()) == DOMINATED

    def test_wrong_length_raises(self):
        cmp = ParetoComparator(minimize_all(3))
        with pytest.raises(ObjectiveAccessError, match="expected 3"):
            cmp.compare(Solution(objectives=[1.0, 1.0]), Solution(objectives=[1.0, 1.0, 1.0]))


class TestEpsilonDominance:
    """Dominance over hypercube coordinates."""

    def test_coordinates_floor_for_minimization(self):
        cmp = EpsilonDominanceComparator([Objective(lower=0.0, upper=10.0)], epsilon=1.0)
        assert cmp.coordinates(np.array([2.6])).tolist() == [2]

    def test_coordinates_ceil_for_maximization(self):
        cmp = EpsilonDominanceComparator([Objective(maximize=True, lower=0.0, upper=10.0)], epsilon=1.0)
        assert cmp.coordinates(np.array([2.6])).tolist() == [3]

    def test_same_box_is_incomparable(self):
        cmp = EpsilonDominanceComparator(minimize_all(2), epsilon=[1.0, 1.0])
        a = Solution(objectives=[0.1, 0.2])
        b = Solution(objectives=[0.9, 0.8])
        assert cmp.compare(a, b) == INCOMPARABLE
        c = Solution(objectives=[1.5, 1.5])
        assert cmp.compare(a, c) == DOMINATES

    def test_epsilon_from_hypercubes(self):
        objectives = [Objective(lower=0.0, upper=10.0), Objective(lower=0.0, upper=5.0)]
        cmp = EpsilonDominanceComparator(objectives, n_hypercubes=5)
        np.testing.assert_allclose(cmp.epsilon, [2.0, 1.0])

    def test_hypercubes_need_bounds(self):
        with pytest.raises(ConfigurationError, match="unbounded"):
            EpsilonDominanceComparator(minimize_all(2), n_hypercubes=5)


class TestConstrainedComparators:
    """Feasibility-first wrappers."""

    def test_feasible_beats_infeasible(self):
        cmp = ConstrainedComparator(ParetoComparator(minimize_all(2)))
        good = Solution(objectives=[5.0, 5.0])
        bad = Solution(objectives=[0.0, 0.0], constraint_violation=1.0)
        assert cmp.compare(good, bad) == DOMINATES
        assert cmp.compare(bad, good) == DOMINATED

    def test_two_infeasible(self):
        a = Solution(objectives=[0.0, 0.0], constraint_violation=1.0)
        b = Solution(objectives=[1.0, 1.0], constraint_violation=2.0)
        assert ConstrainedComparator(ParetoComparator(minimize_all(2))).compare(a, b) == INCOMPARABLE
        assert ViolationComparator(ParetoComparator(minimize_all(2))).compare(a, b) == DOMINATES

    def test_make_comparator_modes(self):
        assert isinstance(make_comparator(minimize_all(2)), ParetoComparator)
        assert isinstance(make_comparator(minimize_all(2), "feasibility"), ConstrainedComparator)
        assert isinstance(make_comparator(minimize_all(2), "violation"), ViolationComparator)
        with pytest.raises(ConfigurationError):
            make_comparator(minimize_all(2), "lexicographic")


class TestDominanceMatrix:
    """Vectorized dominance relation."""

    def test_matrix(self):
        F = np.array([[0.0, 0.0], [1.0, 1.0], [0.0, 2.0]])
        D = dominance_matrix(F)
        assert D[0, 1] and D[0, 2]
        assert not D[1, 2] and not D[2, 1]
        assert not D.diagonal().any()

    def test_violation_mode(self):
        F = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0]])
        cv = np.array([2.0, 1.0, 0.0])
        D = dominance_matrix(F, cv, "violation")
        assert D[2, 0] and D[2, 1]
        assert D[1, 0]
        assert not D[0, 1]

    def test_empty(self):
        assert dominance_matrix(np.empty((0, 2))).shape == (0, 0)


class TestDominanceOrdering:
    """The relation is a strict partial order on random populations."""

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_comparison_is_antisymmetric(self, seed):
        rng = np.random.default_rng(seed)
        objectives = [Objective(maximize=True), Objective(maximize=False), Objective(maximize=False)]
        cmp = ParetoComparator(objectives)
        population = [Solution(objectives=row) for row in rng.integers(0, 4, size=(15, 3)).astype(float)]

        for a in population:
            for b in population:
                assert cmp.compare(a, b) == -cmp.compare(b, a)

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_no_dominance_cycles(self, seed):
        rng = np.random.default_rng(seed)
        F = rng.integers(0, 4, size=(15, 3)).astype(float)
        D = dominance_matrix(F)

        assert not np.any(D & D.T)
        # i > j > k > i would need a true entry on the diagonal of D @ D @ D.
        paths = D.astype(int) @ D.astype(int) @ D.astype(int)
        assert not np.any(np.diagonal(paths))
        # Transitivity: any two-step path is also a direct edge.
        two_step = (D.astype(int) @ D.astype(int)) > 0
        assert np.all(D[two_step])
