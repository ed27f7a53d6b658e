"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, computed_field


class ApiConfig(BaseModel):
    """Dashboard REST backend configuration."""

    base_url: str = Field(
        default="http://localhost:5000/api", description="Backend base URL"
    )
    timeout_seconds: float = Field(
        default=10.0, description="Per-request timeout in seconds"
    )

    @computed_field
    @property
    def normalized_base_url(self) -> str:
        """Base URL without a trailing slash."""
        return self.base_url.rstrip("/")


class SessionConfig(BaseModel):
    """Admin session storage configuration."""

    backend: Literal["memory", "file"] = Field(
        default="file", description="Where the admin session is kept"
    )
    file: str = Field(
        default="~/.dashboard/session.json",
        description="Session file path for the file backend",
    )
    ttl_seconds: int = Field(
        default=86400, description="Lifetime of a stored admin session in seconds"
    )

    @property
    def file_path(self) -> Path:
        return Path(self.file).expanduser()


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str = Field(default="", description="Log file path (empty = no file sink)")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    api: ApiConfig = Field(default_factory=ApiConfig, description="Backend API configuration")
    session: SessionConfig = Field(
        default_factory=SessionConfig, description="Session storage configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
