"""
Unit tests for configuration loading.
"""

import numpy as np
import pytest

from moving_average.accumulation.moving import DEFAULT_THRESHOLD, Moving
from moving_average.utils.config_parser import get_nested_value, load_config
from moving_average.utils.exceptions import ConfigurationError


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a config file and return its path."""

    def _write(text):
        path = tmp_path / "moving_average.yaml"
        path.write_text(text)
        return path

    return _write


class TestLoadConfig:
    """Test load_config."""

    def test_valid_config(self, write_config):
        """Test a complete configuration loads."""
        path = write_config(
            "moving_average:\n"
            "  kind: uint32\n"
            "  threshold: 100.0\n"
            "  track_mode: false\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        config = load_config(path)
        assert config["moving_average"]["kind"] == "uint32"
        assert config["moving_average"]["threshold"] == 100.0
        assert config["logging"]["level"] == "DEBUG"

    def test_empty_section(self, write_config):
        """Test an empty accumulator section is valid."""
        config = load_config(write_config("moving_average:\n"))
        assert config["moving_average"] is None

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, write_config):
        """Test malformed YAML raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="parsing YAML"):
            load_config(write_config("moving_average: [unclosed\n"))

    def test_not_a_mapping(self, write_config):
        """Test a non-mapping document is rejected."""
        with pytest.raises(ConfigurationError):
            load_config(write_config("- 1\n- 2\n"))

    def test_missing_section(self, write_config):
        """Test the accumulator section is required."""
        with pytest.raises(ConfigurationError, match="moving_average"):
            load_config(write_config("logging:\n  level: INFO\n"))

    @pytest.mark.parametrize(
        "body",
        [
            "  threshold: high\n",
            "  threshold: true\n",
            "  track_mode: 'sometimes'\n",
            "  kind: complex128\n",
            "  kind: text\n",
        ],
    )
    def test_invalid_fields(self, write_config, body):
        """Test invalid accumulator fields are rejected."""
        with pytest.raises(ConfigurationError):
            load_config(write_config("moving_average:\n" + body))

    def test_invalid_log_level(self, write_config):
        """Test unknown log levels are rejected."""
        with pytest.raises(ConfigurationError, match="log level"):
            load_config(write_config("moving_average:\n  threshold: 1\nlogging:\n  level: LOUD\n"))

    def test_invalid_log_file(self, write_config):
        """Test a non-string log file is rejected."""
        with pytest.raises(ConfigurationError, match="logging.file"):
            load_config(write_config("moving_average:\nlogging:\n  file: 5\n"))

    def test_empty_logging_section(self, write_config):
        """Test an empty logging section is valid."""
        config = load_config(write_config("moving_average:\nlogging:\n"))
        assert config["logging"] is None


class TestFromConfig:
    """Test building accumulators from configuration."""

    def test_from_loaded_config(self, write_config):
        """Test an accumulator built from a loaded file."""
        path = write_config("moving_average:\n  kind: uint16\n  threshold: 10\n")
        moving = Moving.from_config(load_config(path))
        assert moving.kind.name == "uint16"
        assert moving.threshold == 10.0
        assert moving.track_mode is True

    def test_from_section(self):
        """Test an accumulator built from just the section."""
        moving = Moving.from_config({"threshold": 5.5, "track_mode": False})
        assert moving.threshold == 5.5
        assert moving.track_mode is False
        assert moving.kind is None

    def test_defaults(self):
        """Test an empty section gives default settings."""
        moving = Moving.from_config({"moving_average": None})
        assert moving.threshold == DEFAULT_THRESHOLD
        assert moving.track_mode is True

    def test_invalid_section(self):
        """Test invalid sections raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            Moving.from_config({"moving_average": {"kind": "bool"}})

    def test_configured_accumulator_behaves(self):
        """Test a configured accumulator enforces its kind and threshold."""
        moving = Moving.from_config({"moving_average": {"kind": "uint8", "threshold": 10.0}})
        assert moving.add_with_result(np.uint8(4)) == 4.0
        moving.add(30)
        assert moving >= 10


class TestGetNestedValue:
    """Test dotted lookups."""

    def test_nested_lookup(self):
        """Test a nested value is found."""
        config = {"moving_average": {"threshold": 10.0}}
        assert get_nested_value(config, "moving_average.threshold") == 10.0

    def test_missing_key_default(self):
        """Test missing keys return the default."""
        config = {"moving_average": {"threshold": 10.0}}
        assert get_nested_value(config, "moving_average.kind") is None
        assert get_nested_value(config, "logging.level", "INFO") == "INFO"

    def test_non_dict_intermediate(self):
        """Test lookups through non-mappings return the default."""
        assert get_nested_value({"a": 1}, "a.b", "x") == "x"
