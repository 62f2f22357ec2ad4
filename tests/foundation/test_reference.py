from __future__ import annotations

from math import comb

import numpy as np
import pytest

from moselect.foundation.exceptions import ConfigurationError, ReferencePointsError
from moselect.foundation.reference import (
    count_lattice_points,
    das_dennis,
    load_reference_points,
    uniform_weight_vectors,
)
from moselect.foundation.scalarizing import asf, augmented_asf, get_scalarizer, tchebycheff, weighted_sum


class TestDasDennis:
    """Simplex-lattice reference points."""

    @pytest.mark.parametrize(
        "n_obj, p1, p2, expected",
        [(3, 12, None, 91), (5, 6, None, 210), (3, 2, 1, 9), (8, 3, 2, 156)],
    )
    def test_counts(self, n_obj, p1, p2, expected):
        points = das_dennis(n_obj, p1, p2)
        assert points.shape == (expected, n_obj)

    def test_rows_sum_to_one(self):
        points = das_dennis(4, 3, 2)
        np.testing.assert_allclose(points.sum(axis=1), 1.0)
        assert points.min() >= 0.0

    def test_boundary_count_formula(self):
        assert count_lattice_points(3, 12) == comb(14, 2)
        assert das_dennis(2, 4).shape[0] == count_lattice_points(2, 4)

    def test_inner_layer_is_shrunk_towards_centre(self):
        points = das_dennis(3, 3, 1)
        inner = points[count_lattice_points(3, 3) :]
        np.testing.assert_allclose(inner[0], [(0.0 + 1 / 3) / 2, (0.0 + 1 / 3) / 2, (1.0 + 1 / 3) / 2])

    def test_too_few_divisions(self):
        with pytest.raises(ConfigurationError, match="lower than the number of objectives"):
            das_dennis(3, 2)

    def test_invalid_inputs(self):
        with pytest.raises(ConfigurationError):
            das_dennis(1, 4)
        with pytest.raises(ConfigurationError):
            das_dennis(3, 0)


class TestUniformWeights:
    """MOEA/D weight vectors."""

    def test_two_objectives(self):
        W = uniform_weight_vectors(4, 2)
        assert W.shape == (5, 2)
        np.testing.assert_allclose(W[:, 0], [0.0, 0.25, 0.5, 0.75, 1.0])

    def test_count_and_sum(self):
        W = uniform_weight_vectors(12, 3)
        assert W.shape[0] == comb(14, 2)
        assert np.all(np.abs(W.sum(axis=1) - 1.0) < 1e-8)

    def test_invalid_h(self):
        with pytest.raises(ConfigurationError):
            uniform_weight_vectors(0, 2)


class TestReferenceFile:
    """User supplied reference points."""

    def test_load(self, tmp_path):
        path = tmp_path / "points.csv"
        path.write_text("2,3\n0.5,0.25,0.25\n0.1,0.1,0.8\n", encoding="utf-8")
        points = load_reference_points(str(path), 3)
        np.testing.assert_allclose(points, [[0.5, 0.25, 0.25], [0.1, 0.1, 0.8]])

    def test_dimension_mismatch(self, tmp_path):
        path = tmp_path / "points.csv"
        path.write_text("1,2\n0.5,0.5\n", encoding="utf-8")
        with pytest.raises(ReferencePointsError, match="2 dimensions"):
            load_reference_points(str(path), 3)

    def test_row_count_mismatch(self, tmp_path):
        path = tmp_path / "points.csv"
        path.write_text("3,2\n0.5,0.5\n", encoding="utf-8")
        with pytest.raises(ReferencePointsError, match="expected 3x2"):
            load_reference_points(str(path), 2)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReferencePointsError, match="does not exist"):
            load_reference_points(str(tmp_path / "nope.csv"), 2)

    def test_bad_header(self, tmp_path):
        path = tmp_path / "points.csv"
        path.write_text("two,three\n", encoding="utf-8")
        with pytest.raises(ReferencePointsError, match="malformed header"):
            load_reference_points(str(path), 3)


class TestScalarizing:
    """ASF and decomposition functions."""

    def test_asf(self):
        value = asf(np.array([[1.0, 2.0]]), np.zeros(2), np.array([0.5, 0.5]))
        np.testing.assert_allclose(value, [4.0])

    def test_asf_clamps_small_weights(self):
        value = asf(np.array([1.0, 1.0]), np.zeros(2), np.array([1.0, 0.0]))
        assert value == pytest.approx(1e6)

    def test_augmented_asf(self):
        value = augmented_asf(np.array([[1.0, 3.0]]), np.zeros(2), 0.1)
        np.testing.assert_allclose(value, [3.4])

    def test_decomposition(self):
        f = np.array([2.0, 1.0])
        w = np.array([0.5, 0.5])
        assert tchebycheff(f, w, np.zeros(2)) == pytest.approx(1.0)
        assert weighted_sum(f, w, np.zeros(2)) == pytest.approx(1.5)
        assert get_scalarizer("weighted_sum") is weighted_sum
        with pytest.raises(ConfigurationError):
            get_scalarizer("pbi")
