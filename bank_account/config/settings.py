"""
Configuration Management for the Bank Account

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing in here changes the account rules themselves; the state
machine's behavior is fixed. Settings only shape the surroundings
(logging, history, display).
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AccountSettings(BaseSettings):
    """Account session configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BANK_ACCOUNT_",
        extra="ignore"
    )

    history_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="How many transition outcomes a session keeps in memory"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=5,
        description="Symbol shown next to amounts in the UI"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for local logs"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON (False gives console output)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def account(self) -> AccountSettings:
        return AccountSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry for each failure.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.account
        results["account"] = True
    except Exception as e:
        results["account"] = False
        results["account_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
