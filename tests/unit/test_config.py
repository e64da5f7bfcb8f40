"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pytest

from abistruct.core.config import AbistructConfig, get_config, reload_config


class TestAbistructConfig:
    """Tests for AbistructConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            config = AbistructConfig(_env_file=None)

            assert config.synthetic_name_prefix == "S_"
            assert config.strict_identifiers is True
            assert config.json_indent == 2
            assert config.log_level == "WARNING"

    def test_env_override(self) -> None:
        """Test environment variable override."""
        with patch.dict(
            os.environ,
            {
                "ABISTRUCT_SYNTHETIC_NAME_PREFIX": "Struct",
                "ABISTRUCT_STRICT_IDENTIFIERS": "false",
                "ABISTRUCT_JSON_INDENT": "4",
                "ABISTRUCT_LOG_LEVEL": "debug",
            },
        ):
            config = AbistructConfig(_env_file=None)
            assert config.synthetic_name_prefix == "Struct"
            assert config.strict_identifiers is False
            assert config.json_indent == 4
            assert config.log_level == "DEBUG"

    def test_validation_prefix(self) -> None:
        """Test synthesized name prefix must be an identifier."""
        with patch.dict(os.environ, {"ABISTRUCT_SYNTHETIC_NAME_PREFIX": "1x"}):
            with pytest.raises(ValueError):
                AbistructConfig(_env_file=None)

        with patch.dict(os.environ, {"ABISTRUCT_SYNTHETIC_NAME_PREFIX": "S-"}):
            with pytest.raises(ValueError):
                AbistructConfig(_env_file=None)

    def test_validation_json_indent(self) -> None:
        """Test JSON indent bounds."""
        with patch.dict(os.environ, {"ABISTRUCT_JSON_INDENT": "-1"}):
            with pytest.raises(ValueError):
                AbistructConfig(_env_file=None)

        with patch.dict(os.environ, {"ABISTRUCT_JSON_INDENT": "9"}):
            with pytest.raises(ValueError):
                AbistructConfig(_env_file=None)

    def test_validation_log_level(self) -> None:
        """Test unknown log levels are rejected."""
        with patch.dict(os.environ, {"ABISTRUCT_LOG_LEVEL": "LOUD"}):
            with pytest.raises(ValueError):
                AbistructConfig(_env_file=None)


class TestConfigCaching:
    """Tests for configuration caching."""

    def test_get_config_cached(self) -> None:
        """Test that get_config returns cached instance."""
        reload_config()
        config1 = get_config()
        config2 = get_config()
        assert config1 is config2

    def test_reload_config_clears_cache(self) -> None:
        """Test that reload_config clears cache."""
        config1 = get_config()
        config2 = reload_config()
        config3 = get_config()

        assert config1 is not config2
        assert config2 is config3
