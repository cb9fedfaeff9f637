"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import make_url

DEFAULT_SEED_SOURCE_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./sqlite.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def password(self) -> str | None:
        """
        Get the database password from the appropriate source.
        1. A mounted secrets file specified by `password_file`
        2. The environment variable named by `password_env_var`
        3. Whatever is embedded in the URL itself
        """
        if self.password_file:
            try:
                with open(self.password_file, "r") as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e

        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if password:
                return password
            raise ValueError(f"Environment variable {self.password_env_var} not set")

        return make_url(self.url).password

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with the resolved password."""
        base_url = make_url(self.url)
        if self.is_sqlite:
            return self.url

        resolved_password = self.password
        if base_url.password and resolved_password != base_url.password:
            logger.warning(
                "Database password from secrets does not match the one in the URL. "
                "Using the password from secrets."
            )
        if resolved_password:
            base_url = base_url.set(password=resolved_password)
        return base_url.render_as_string(hide_password=False)


class SeedConfig(BaseModel):
    """Seed data source configuration."""

    source_url: str = Field(
        default=DEFAULT_SEED_SOURCE_URL,
        description="URL of the JSON array of product records",
    )
    timeout_seconds: float = Field(
        default=30.0, description="Timeout for fetching the seed feed"
    )


class ReportsConfig(BaseModel):
    """Configuration for the combined-data fan-out."""

    base_url: str | None = Field(
        default=None,
        description="Base URL the combined endpoint calls; defaults to this process over plain http",
    )
    timeout_seconds: float = Field(
        default=10.0, description="Timeout for each report sub-request"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=3000, description="Application port")


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    seed: SeedConfig = Field(
        default_factory=SeedConfig, description="Seed data configuration"
    )
    reports: ReportsConfig = Field(
        default_factory=ReportsConfig, description="Report fan-out configuration"
    )

    @property
    def reports_base_url(self) -> str:
        """Where /combined-data sends its sub-requests.

        The fallback targets this uvicorn process, which serves plain http in
        every environment.
        """
        return self.reports.base_url or f"http://{self.app.host}:{self.app.port}"
