"""Tests for model configuration."""

import numpy as np
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from isingchain.basis import MAX_SITES
from isingchain.config import ConfigurationError, ModelConfig, make_config


class TestMakeConfig:
    """Tests for validation and broadcasting."""

    def test_full_length_kept(self):
        """Length-N strengths are used as given."""
        config = make_config(3, [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        assert config.field_strength == (0.1, 0.2, 0.3)
        assert config.coupling_strength == (1.0, 2.0, 3.0)

    def test_length_one_broadcast(self):
        """Length-1 strengths are repeated N times."""
        config = make_config(4, [0.5], [2.0])
        assert config.field_strength == (0.5,) * 4
        assert config.coupling_strength == (2.0,) * 4

    def test_broadcast_equals_explicit(self):
        """[1.0] and [1.0, 1.0, 1.0] give the same configuration."""
        assert make_config(3, [1.0], [1.0]) == make_config(3, [1.0, 1.0, 1.0], [1.0])

    def test_numpy_input(self):
        """Numpy arrays and integer values are accepted."""
        config = make_config(np.int64(2), np.array([1, 2]), np.array([3.0]))
        assert config.num_sites == 2
        assert config.field_strength == (1.0, 2.0)
        assert all(isinstance(x, float) for x in config.field_strength)

    def test_dim(self):
        """dim is 2^N."""
        assert make_config(5, [1.0], [1.0]).dim == 32

    def test_immutable(self):
        """Configuration cannot be mutated."""
        config = make_config(2, [1.0], [1.0])
        with pytest.raises(AttributeError):
            config.num_sites = 3

    def test_returns_model_config(self):
        assert isinstance(make_config(1, [1.0], [1.0]), ModelConfig)


class TestConfigErrors:
    """Tests for rejected configurations."""

    def test_field_length_mismatch(self):
        """field_strength with length neither 1 nor N is rejected."""
        with pytest.raises(ConfigurationError, match="field_strength"):
            make_config(3, [1.0, 1.0], [1.0])

    def test_coupling_length_mismatch(self):
        """coupling_strength with length neither 1 nor N is rejected."""
        with pytest.raises(ConfigurationError, match="coupling_strength"):
            make_config(3, [1.0], [1.0, 1.0, 1.0, 1.0])

    def test_empty_strength(self):
        with pytest.raises(ConfigurationError):
            make_config(2, [], [1.0])

    def test_message_names_expected_length(self):
        """Error message states the expected length."""
        with pytest.raises(ConfigurationError, match="num_sites=4"):
            make_config(4, [1.0, 2.0], [1.0])

    @pytest.mark.parametrize("num_sites", [0, -1, 2.5, True, "3"])
    def test_bad_num_sites(self, num_sites):
        """num_sites must be an integer >= 1."""
        with pytest.raises(ConfigurationError):
            make_config(num_sites, [1.0], [1.0])

    def test_scalar_strength_rejected(self):
        """Strengths must be sequences."""
        with pytest.raises(ConfigurationError):
            make_config(2, 1.0, [1.0])

    def test_nested_strength_rejected(self):
        with pytest.raises(ConfigurationError):
            make_config(2, [[1.0, 1.0]], [1.0])

    def test_non_numeric_strength_rejected(self):
        with pytest.raises(ConfigurationError):
            make_config(2, ["a", "b"], [1.0])

    def test_numeric_strings_rejected(self):
        """Strings are not converted to numbers."""
        with pytest.raises(ConfigurationError, match="field_strength"):
            make_config(2, ["1", "2"], [1.0])

    def test_complex_strength_rejected(self):
        with pytest.raises(ConfigurationError):
            make_config(2, [1.0], [1.0 + 1j])

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite_strength_rejected(self, bad):
        """NaN and inf strengths are rejected."""
        with pytest.raises(ConfigurationError, match="finite"):
            make_config(2, [bad], [1.0])
        with pytest.raises(ConfigurationError, match="coupling_strength"):
            make_config(2, [1.0], [1.0, bad])

    def test_too_many_sites_overflow(self):
        """Oversized chains raise OverflowError before any broadcasting."""
        with pytest.raises(OverflowError):
            make_config(10**12, [1.0], [1.0])
        with pytest.raises(OverflowError):
            make_config(MAX_SITES + 1, [1.0], [1.0])

    def test_is_value_error(self):
        """ConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            make_config(2, [1.0, 2.0, 3.0], [1.0])
