"""Unit tests for configuration loading and the application context."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from loguru import logger

from src.dashboard.runtime.config.config_data import ConfigData
from src.dashboard.runtime.config.config_template import (
    load_templated_yaml,
    substitute_env_vars,
)
from src.dashboard.runtime.context import get_config, with_context
from src.dashboard.runtime.logging_setup import configure_logging

REPO_CONFIG = Path(__file__).resolve().parents[3] / "config.yaml"


class TestSubstituteEnvVars:
    """Tests for ${...} placeholders."""

    def test_default_used_when_unset(self):
        """Should fall back to the inline default."""
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("url: ${API_URL:-http://x}") == "url: http://x"

    def test_environment_wins(self):
        """Should prefer the environment over the default."""
        with patch.dict(os.environ, {"API_URL": "http://y"}, clear=True):
            assert substitute_env_vars("${API_URL:-http://x}") == "http://y"

    def test_required_variable_missing(self):
        """Should fail for a required variable with its message."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="set the token"):
                substitute_env_vars("${TOKEN:?set the token}")


    def test_plain_placeholder_is_required(self):
        """Should fail for a bare ${VAR} that is not set."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="TOKEN not set"):
                substitute_env_vars("token: ${TOKEN}")

    def test_unrelated_text_untouched(self):
        """Should leave text without placeholders alone."""
        assert substitute_env_vars("level: $INFO {x}") == "level: $INFO {x}"


class TestLoadTemplatedYaml:
    """Tests for reading config.yaml."""

    def test_repository_defaults(self):
        """Should load the shipped config.yaml with its defaults."""
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(REPO_CONFIG)

        assert config.app.environment == "development"
        assert config.api.base_url == "http://localhost:5000/api"
        assert config.api.timeout_seconds == 10.0
        assert config.session.backend == "file"
        assert config.logging.file == ""

    def test_environment_prefixed_override(self):
        """Should let PRODUCTION_* variables shadow their plain names."""
        env = {
            "APP_ENVIRONMENT": "production",
            "PRODUCTION_DASHBOARD_API_URL": "https://shop.test/api/",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(REPO_CONFIG)

        assert config.app.environment == "production"
        assert config.api.normalized_base_url == "https://shop.test/api"

    def test_invalid_values_rejected(self, tmp_path):
        """Should report validation problems as ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  session:\n    backend: redis\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)

    def test_empty_file_rejected(self, tmp_path):
        """Should refuse an empty configuration file."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        with pytest.raises(ValueError):
            load_templated_yaml(path)


class TestWithContext:
    """Tests for temporary configuration overrides."""

    def test_only_set_fields_override(self):
        """Should keep values that the override does not set."""
        override = ConfigData()
        override.api.timeout_seconds = 3.0

        with with_context(override):
            assert get_config().api.timeout_seconds == 3.0
            assert get_config().api.base_url == "http://backend.test/api"
            assert get_config().session.backend == "memory"

        assert get_config().api.timeout_seconds == 1.0

    def test_rejects_other_types(self):
        """Should refuse anything but ConfigData."""
        with pytest.raises(ValueError):
            with with_context({"api": {}}):
                pass


class TestConfigureLogging:
    """Tests for the loguru setup."""

    def test_file_sink_written(self, tmp_path):
        """Should write plain log lines to the configured file."""
        override = ConfigData()
        override.logging.file = str(tmp_path / "logs" / "dashboard.log")

        with with_context(override):
            configure_logging("debug")
            logger.info("catalog loaded")
            logger.complete()
        logger.remove()

        assert "catalog loaded" in (tmp_path / "logs" / "dashboard.log").read_text()
