"""Pydantic models for parsing the config.yaml configuration file.

These models handle validation and type conversion of the YAML configuration
data. Every section has defaults so a missing file still yields a usable
development configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str = Field(
        default="logs/identity.log",
        description="Log file path; empty disables the file sink",
    )
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./identity.db", description="Database connection URL"
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class IdentityConfig(BaseModel):
    """Identity resolution and account linking configuration."""

    magic_provider: str = Field(
        default="magic",
        description="Provider name recorded for magic-link accounts",
    )
    allowed_providers: list[str] = Field(
        default_factory=list,
        description="SSO providers accepted for signup and linking (empty = any)",
    )

    def is_provider_allowed(self, provider: str) -> bool:
        return not self.allowed_providers or provider in self.allowed_providers


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    identity: IdentityConfig = Field(
        default_factory=IdentityConfig, description="Identity configuration"
    )
