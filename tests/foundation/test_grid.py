from __future__ import annotations

import numpy as np
import pytest

from moselect.foundation.exceptions import ConfigurationError
from moselect.foundation.grid import (
    AdaptiveGrid,
    cell_corner_distance,
    epsilon_grid,
    grid_coordinates,
    grid_crowding,
    grid_difference,
    grid_front_reduction,
    grid_ranking,
    grid_setup,
    hypercube_coordinates,
    resolve_epsilon,
)


class TestHypercubes:
    """Epsilon boxes."""

    def test_coordinate_example(self):
        coords = hypercube_coordinates(np.array([[2.6]]), np.array([1.0]), np.array([0.0]))
        assert coords.tolist() == [[2]]

    def test_maximized_uses_ceil(self):
        coords = hypercube_coordinates(np.array([[2.6, 2.6]]), np.ones(2), np.zeros(2), np.array([False, True]))
        assert coords.tolist() == [[2, 3]]

    def test_resolve_broadcast(self):
        np.testing.assert_allclose(resolve_epsilon(0.5, 3), [0.5, 0.5, 0.5])

    def test_resolve_wrong_length(self):
        with pytest.raises(ConfigurationError, match="Expected 1 or 2"):
            resolve_epsilon([0.1, 0.2, 0.3], 2)

    def test_resolve_non_positive(self):
        with pytest.raises(ConfigurationError, match="positive"):
            resolve_epsilon([0.1, 0.0], 2)

    def test_epsilon_grid_falls_back_to_data_range(self):
        F = np.array([[0.0, 2.0], [4.0, 2.0]])
        eps, origin = epsilon_grid(None, 4, [-np.inf, 0.0], [np.inf, 8.0], F)
        np.testing.assert_allclose(eps, [1.0, 2.0])
        np.testing.assert_allclose(origin, [0.0, 0.0])

    def test_epsilon_grid_explicit_values(self):
        eps, origin = epsilon_grid(0.25, None, [1.0, 1.0], [2.0, 2.0], np.empty((0, 2)))
        np.testing.assert_allclose(eps, [0.25, 0.25])
        np.testing.assert_allclose(origin, [1.0, 1.0])

    def test_corner_distance(self):
        F = np.array([[1.3, 2.4]])
        d = cell_corner_distance(F, np.array([[1, 2]]), np.ones(2), np.zeros(2))
        assert d[0] == pytest.approx(0.5)


class TestGrEAGrid:
    """Grid ranking, crowding and critical-front reduction."""

    def test_setup_pads_half_a_cell(self):
        spec = grid_setup(np.array([[0.0, 0.0], [1.0, 2.0]]), 4)
        np.testing.assert_allclose(spec.lower, [-0.125, -0.25])
        np.testing.assert_allclose(spec.upper, [1.125, 2.25])
        np.testing.assert_allclose(spec.width, [0.3125, 0.625])

    def test_extremes_fall_inside(self):
        F = np.random.default_rng(2).random((15, 3))
        spec = grid_setup(F, 5)
        G = grid_coordinates(F, spec)
        assert G.min() >= 0 and G.max() <= 4

    def test_ranking_and_difference(self):
        G = np.array([[0, 2], [1, 1], [3, 0]])
        np.testing.assert_allclose(grid_ranking(G), [2, 2, 3])
        np.testing.assert_allclose(grid_difference(G)[0], [0, 2, 5])
        np.testing.assert_allclose(grid_difference(G, "chebyshev")[0], [0, 1, 3])
        with pytest.raises(ConfigurationError):
            grid_difference(G, "euclidean")

    def test_crowding_counts_close_neighbours(self):
        G = np.array([[0, 0], [0, 1], [5, 5]])
        np.testing.assert_allclose(grid_crowding(G), [1, 1, 0])

    def test_reduction_selects_distinct_rows(self):
        F = np.random.default_rng(4).random((12, 2))
        F = F[np.argsort(F[:, 0])]
        F[:, 1] = 1.0 - F[:, 0]
        picked = grid_front_reduction(F, 5, 4)
        assert len(picked) == 5
        assert len(set(picked)) == 5

    def test_reduction_edge_cases(self):
        F = np.array([[0.0, 1.0], [1.0, 0.0]])
        assert grid_front_reduction(F, 3, 4) == [0, 1]
        assert grid_front_reduction(F, 0, 4) == []

    def test_invalid_divisions(self):
        with pytest.raises(ConfigurationError):
            grid_setup(np.zeros((2, 2)), 0)


class TestAdaptiveGrid:
    """PAES bisection grid."""

    def test_locations_and_counts(self):
        grid = AdaptiveGrid(2, 1)
        assert grid.n_locations == 4
        F = np.array([[0.0, 0.0], [0.1, 0.2], [1.0, 1.0]])
        locations = grid.update(F)
        assert locations.tolist() == [0, 0, 3]
        assert grid.count(0) == 2
        assert grid.most_crowded() == 0

    def test_add_and_remove(self):
        grid = AdaptiveGrid(2, 2)
        grid.add(5)
        grid.add(5)
        grid.remove(5)
        assert grid.count(5) == 1
        grid.remove(5)
        assert grid.count(5) == 0
        assert grid.most_crowded() == -1

    def test_invalid_bisections(self):
        with pytest.raises(ConfigurationError):
            AdaptiveGrid(2, 0)
