"""Loading config.yaml with environment variable placeholders."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.dashboard.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _resolve_placeholder(expression: str) -> str:
    # ${VAR:-default}
    if ":-" in expression:
        name, default = expression.split(":-", 1)
        return os.getenv(name, default)

    # ${VAR:?message} and ${VAR} both require the variable
    name, _, message = expression.partition(":?")
    value = os.getenv(name)
    if value is None:
        raise ValueError(
            f"Required environment variable {name}: {message}"
            if message
            else f"Required environment variable {name} not set"
        )
    return value


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    return _PLACEHOLDER.sub(lambda match: _resolve_placeholder(match.group(1)), text)


def _apply_environment_overrides(environment: str) -> None:
    """Copy ``<ENVIRONMENT>_NAME`` variables onto ``NAME``."""
    prefix = f"{environment.upper()}_"
    for name, value in list(os.environ.items()):
        if name.startswith(prefix):
            os.environ[name[len(prefix):]] = value
            logger.debug(f"Set environment variable {name[len(prefix):]} from {name}")


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Load the dashboard configuration from a templated YAML file.

    Variables prefixed with the upper-cased ``APP_ENVIRONMENT`` value
    (e.g. ``PRODUCTION_DASHBOARD_API_URL``) shadow their unprefixed names
    before substitution.

    Args:
        file_path: Path to the YAML file

    Returns:
        The validated configuration

    Raises:
        ValueError: If required environment variables are missing, the YAML
            is malformed or the configuration does not validate
        FileNotFoundError: If the YAML file doesn't exist
    """
    content = Path(file_path).read_text()

    environment = os.getenv("APP_ENVIRONMENT", "development")
    logger.debug(f"Loading dashboard configuration for environment: {environment}")
    _apply_environment_overrides(environment)

    try:
        loaded = yaml.safe_load(substitute_env_vars(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not isinstance(loaded, dict):
        raise ValueError(f"{file_path} does not contain a configuration mapping")

    # Settings live under the top-level 'config' key
    try:
        config = ConfigData(**(loaded.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    # Tokens travel in the Authorization header
    if config.app.environment == "production" and config.api.base_url.startswith("http://"):
        logger.warning("Backend URL is not using HTTPS in production mode")

    return config
