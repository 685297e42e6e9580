"""Configuration loading for zigunit.

This module provides centralized configuration management:
- Load settings from ZIGUNIT_* environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_prefix="ZIGUNIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Discovery configuration
    test_keyword: str = Field(
        default="test",
        description="Keyword introducing a named test block",
    )
    symbol_tag: str = Field(
        default="test_",
        description="Prefix of generated test symbols and fallback ids",
    )
    collision_policy: Literal["error", "alias"] = Field(
        default="error",
        description="What to do when two tests resolve to the same symbol",
    )
    source_encoding: str = Field(
        default="utf-8",
        description="Encoding used to read source fragments",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # CLI configuration
    output_format: Literal["json", "text"] = Field(
        default="json",
        description="Output format of CLI commands",
    )

    @field_validator("test_keyword")
    @classmethod
    def validate_test_keyword(cls, v: str) -> str:
        """Ensure the keyword can be matched as a whole word."""
        if not v.isidentifier():
            raise ValueError("test_keyword must be a valid identifier")
        return v

    @field_validator("symbol_tag")
    @classmethod
    def validate_symbol_tag(cls, v: str) -> str:
        """Ensure generated symbols are valid identifiers."""
        if not v.isidentifier():
            raise ValueError("symbol_tag must be a valid identifier")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
