"""Configuration package."""

from bank_account.config.settings import (
    AccountSettings,
    AppSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AccountSettings",
    "AppSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
