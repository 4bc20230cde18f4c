"""Configuration system for RentLedger Core.

This module provides Pydantic Settings-based configuration with environment
variable support and sensible defaults, plus the structlog setup used by
the engine.

Usage:
    from rentledger_core.config import configure_logging, load_config

    # Load from environment variables and .env file
    config = load_config()
    configure_logging(config)

    print(config.default_schedule_years)
"""

import logging
from decimal import Decimal
from typing import Optional

import structlog
from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class RentLedgerConfig(BaseSettings):
    """Root configuration for RentLedger Core.

    Environment Variables:
        RENTLEDGER_ENV: Environment name (development, staging, production, test)
        RENTLEDGER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        RENTLEDGER_DEFAULT_SCHEDULE_YEARS: Years shown in a depreciation schedule
        RENTLEDGER_EXPENSE_RATIO_WARNING_THRESHOLD: Expense/income ratio that
            triggers a validation warning

    Example:
        config = RentLedgerConfig(env="production", log_level="warning")
        assert config.log_level == "WARNING"
    """

    model_config = SettingsConfigDict(
        env_prefix="RENTLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    default_schedule_years: int = Field(
        default=5,
        ge=1,
        le=40,
        description="Number of years in a generated depreciation schedule",
    )
    expense_ratio_warning_threshold: Decimal = Field(
        default=Decimal("1.5"),
        gt=0,
        description="Expense-to-income ratio above which validation warns",
    )

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.env == "development"


def load_config(**overrides) -> RentLedgerConfig:
    """Load settings from the environment and .env file.

    Keyword arguments override individual settings.

    Raises:
        ConfigurationError: If a setting fails validation.
    """
    try:
        return RentLedgerConfig(**overrides)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field_name = str(error["loc"][0]) if error["loc"] else "config"
        raise ConfigurationError(
            f"Invalid configuration for {field_name}: {error['msg']}",
            config_key=f"RENTLEDGER_{field_name.upper()}",
            expected=error["msg"],
            actual=error.get("input"),
        ) from e


def configure_logging(config: Optional[RentLedgerConfig] = None) -> None:
    """Configure structlog for the engine.

    Production emits JSON lines; every other environment uses the
    console renderer. Events below the configured level are dropped.
    """
    config = config or load_config()
    level = logging.getLevelName(config.log_level)

    if config.is_production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
