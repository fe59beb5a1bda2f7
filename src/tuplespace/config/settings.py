"""Configuration settings and loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tuplespace.errors import ConfigValidationError, ErrorContext

# Largest list a relation filter will materialize (signed 32-bit range).
MAX_MATERIALIZED = 2**31 - 1

DEFAULT_SHUFFLE_SEED = 52

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class TupleSpaceConfig(BaseSettings):
    """Configuration for tuplespace generators and the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="TUPLESPACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    shuffle_seed: int = Field(
        default=DEFAULT_SHUFFLE_SEED,
        description="Seed for the relation filter's deterministic shuffle",
    )
    max_materialized: int = Field(
        default=MAX_MATERIALIZED,
        description="Largest number of tuples a relation filter may hold",
    )
    log_level: str = "WARNING"
    default_strength: int = Field(default=2, description="Interaction strength used by the CLI")

    @field_validator("max_materialized")
    @classmethod
    def validate_max_materialized(cls, v: int) -> int:
        if v < 1 or v > MAX_MATERIALIZED:
            raise ConfigValidationError(
                message=f"max_materialized must be between 1 and {MAX_MATERIALIZED}",
                field="max_materialized",
                value=v,
                context=ErrorContext(extra={"upper_bound": MAX_MATERIALIZED}),
            )
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in _LOG_LEVELS:
            raise ConfigValidationError(
                message=f"Invalid log level: {v}. Valid: {list(_LOG_LEVELS)}",
                field="log_level",
                value=v,
                context=ErrorContext(extra={"valid_levels": list(_LOG_LEVELS)}),
            )
        return level

    @field_validator("default_strength")
    @classmethod
    def validate_default_strength(cls, v: int) -> int:
        if v < 1:
            raise ConfigValidationError(
                message="default_strength must be at least 1",
                field="default_strength",
                value=v,
            )
        return v

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level)


def load_config(config_path: str | Path | None = None) -> TupleSpaceConfig:
    """Load configuration from file and environment.

    Priority: env vars > config file > defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigValidationError(
                message=f"Configuration file not found: {config_path}",
                field="config_path",
                value=str(config_path),
            )
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ConfigValidationError(
                message=f"Configuration file must contain a mapping: {config_path}",
                field="config_path",
                value=str(config_path),
            )

    # Init kwargs outrank environment variables in pydantic-settings, so drop
    # file values that the environment overrides.
    config_data = {
        key: value for key, value in config_data.items()
        if key not in _get_env_overrides()
    }

    try:
        return TupleSpaceConfig(**config_data)
    except ValidationError as e:
        raise ConfigValidationError(
            message=f"Invalid configuration: {e.errors()[0]['msg']}",
            field=".".join(str(p) for p in e.errors()[0]["loc"]) or None,
            context=ErrorContext(extra={"errors": e.error_count()}),
        ) from e


def _get_env_overrides() -> set[str]:
    """Names of settings currently provided through the environment."""
    prefix = TupleSpaceConfig.model_config.get("env_prefix", "")
    return {
        name for name in TupleSpaceConfig.model_fields
        if f"{prefix}{name}".upper() in os.environ
    }


__all__ = [
    "DEFAULT_SHUFFLE_SEED",
    "MAX_MATERIALIZED",
    "TupleSpaceConfig",
    "load_config",
]
