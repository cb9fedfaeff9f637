from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from src.sales_report.runtime.config.config_data import ConfigData
from src.sales_report.runtime.config.config_template import load_templated_yaml
from src.sales_report.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Load config.yaml (or the file named by CONFIG_FILE) for the active environment."""
    env = EnvironmentVariables()
    config_path = Path(env.config_file)
    if not config_path.exists():
        logger.warning("Configuration file {} not found; using defaults", config_path)
        return ConfigData()
    return load_templated_yaml(config_path, env_mode=env.environment)


_default_context = AppContext(config=load_default_config())

_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _explicitly_set(model: BaseModel) -> dict:
    """Dump only the fields that were explicitly set, at any nesting depth.

    A nested model is included whole as soon as any of its own fields were set,
    so that the merge below can overlay it onto the base configuration.
    """
    result = {}
    for field_name in model.__class__.model_fields:
        value = getattr(model, field_name)
        if isinstance(value, BaseModel):
            nested = _explicitly_set(value)
            if nested:
                result[field_name] = nested
            elif field_name in model.model_fields_set:
                result[field_name] = value.model_dump()
        elif field_name in model.model_fields_set:
            result[field_name] = value
    return result


def _deep_merge(base: dict, override: dict) -> dict:
    merged = base.copy()
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Overlay the explicitly set parts of ``override_config`` onto ``base_config``."""
    merged = _deep_merge(
        base_config.model_dump(),
        _explicitly_set(override_config),
    )
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the application configuration.

    Only fields that were explicitly set on ``config_override`` replace the
    current values; everything else is inherited.

    Example:
        override = ConfigData()
        override.database.url = "sqlite:///./test.db"
        with with_context(override):
            assert get_config().database.url == "sqlite:///./test.db"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
