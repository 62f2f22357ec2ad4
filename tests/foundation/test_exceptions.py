"""Tests for the moselect exception hierarchy."""

from __future__ import annotations

import pytest


class TestMOSelectError:
    """Test base MOSelectError class."""

    def test_basic_error(self):
        """MOSelectError should work with just a message."""
        from moselect.foundation.exceptions import MOSelectError

        err = MOSelectError("Something went wrong")
        assert str(err) == "Something went wrong"
        assert err.message == "Something went wrong"
        assert err.suggestion is None
        assert err.details == {}

    def test_error_with_suggestion(self):
        """MOSelectError should append the suggestion to the message."""
        from moselect.foundation.exceptions import MOSelectError

        err = MOSelectError("Something went wrong", suggestion="Try this instead")
        assert str(err) == "Something went wrong\n\nSuggestion: Try this instead"


class TestConfigurationErrors:
    """Test configuration-related errors."""

    def test_missing_config_error(self):
        """MissingConfigError should point at the default() builder."""
        from moselect.foundation.exceptions import ConfigurationError, MissingConfigError

        err = MissingConfigError("h", config_class="MOEADConfig")
        assert isinstance(err, ConfigurationError)
        assert "'h'" in str(err)
        assert "MOEADConfig.default()" in str(err)

    def test_invalid_strategy_error(self):
        """InvalidStrategyError should list available names and close matches."""
        from moselect.foundation.exceptions import InvalidStrategyError

        err = InvalidStrategyError("nsga2", available=["nsgaii", "nsgaiii"], close_matches=["nsgaii"])
        assert "Unknown strategy 'nsga2'" in str(err)
        assert "Did you mean 'nsgaii'?" in str(err)
        assert "nsgaiii" in str(err)
        assert err.details["strategy"] == "nsga2"

    def test_mixed_directions_error(self):
        from moselect.foundation.exceptions import MixedDirectionsError

        err = MixedDirectionsError("HypE")
        assert "HypE requires all objectives" in str(err)

    def test_reference_points_error(self):
        from moselect.foundation.exceptions import ReferencePointsError

        err = ReferencePointsError("points.csv", "file does not exist")
        assert "points.csv" in str(err)
        assert "n_points,dim" in str(err)


class TestRuntimeErrors:
    """Test errors raised while a strategy runs."""

    def test_objective_access_error_is_lookup_error(self):
        from moselect.foundation.exceptions import ObjectiveAccessError

        err = ObjectiveAccessError(3, expected=2, found=None)
        assert isinstance(err, LookupError)
        assert "position 3 has no objective values" in str(err)
        assert "objective_access='zero'" in str(err)

    def test_objective_access_error_wrong_length(self):
        from moselect.foundation.exceptions import ObjectiveAccessError

        err = ObjectiveAccessError(0, expected=3, found=2)
        assert "has 2 objective values, expected 3" in str(err)

    def test_degenerate_input_is_value_error(self):
        from moselect.foundation.exceptions import DegenerateInputError, MOSelectError

        with pytest.raises(ValueError):
            raise DegenerateInputError("Need at least two individuals.")
        assert issubclass(DegenerateInputError, MOSelectError)

    def test_strategy_state_error(self):
        from moselect.foundation.exceptions import StrategyStateError

        err = StrategyStateError("NSGA-II", "update")
        assert isinstance(err, RuntimeError)
        assert "NSGA-II.update() called before initialize()" in str(err)


class TestCatchAll:
    """Every library error is a MOSelectError."""

    def test_hierarchy(self):
        from moselect.foundation import exceptions

        for name in exceptions.__all__:
            assert issubclass(getattr(exceptions, name), exceptions.MOSelectError)
