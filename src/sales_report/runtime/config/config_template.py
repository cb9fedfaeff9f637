"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.sales_report.runtime.config.config_data import ConfigData


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    def replacer(match):
        var_expr = match.group(1)

        # ${VAR:-default}
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)

        # ${VAR:?message}
        elif ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        else:
            var_name = var_expr
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name} not set")
            return value

    pattern = r'\$\{([^}]+)\}'
    # Comment lines are copied through untouched
    return "".join(
        line if line.lstrip().startswith("#") else re.sub(pattern, replacer, line)
        for line in text.splitlines(keepends=True)
    )


def apply_environment_overrides(env_mode: str) -> None:
    """Promote ``<ENV>_``-prefixed variables over their unprefixed names.

    With ``APP_ENVIRONMENT=test``, ``TEST_DATABASE_URL`` is copied into
    ``DATABASE_URL`` before the YAML template is rendered.
    """
    prefix = f"{env_mode.upper()}_"
    env_variables = [(var, value) for var, value in os.environ.items() if var.startswith(prefix)]
    if env_variables:
        logger.info(f"Applying environment-specific overrides: {[name for name, _ in env_variables]}")

    for var_name, var_value in env_variables:
        new_var_name = var_name[len(prefix):]
        os.environ[new_var_name] = var_value
        logger.debug(f"Set environment variable {new_var_name} from {var_name}")


def parse_config(content: str) -> ConfigData:
    """Render a YAML config template and validate it into ConfigData."""
    substituted_content = substitute_env_vars(content)

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    try:
        config_data = loaded.get('config', {}) or {}
        return ConfigData(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_templated_yaml(file_path: Path, env_mode: str = "development") -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file
        env_mode: Active environment, used to resolve prefixed overrides

    Returns:
        Parsed configuration with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing or the YAML is invalid
        FileNotFoundError: If the YAML file doesn't exist
    """
    with open(file_path) as f:
        content = f.read()

    logger.info(f"Loading configuration for environment: {env_mode}")
    apply_environment_overrides(env_mode)

    config = parse_config(content)
    if config.app.environment != env_mode:
        logger.debug(
            f"config.yaml declares environment '{config.app.environment}', "
            f"process environment is '{env_mode}'"
        )
    return config
