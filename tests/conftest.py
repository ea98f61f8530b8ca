"""Shared fixtures for the bank account tests."""

import pytest

from bank_account.audit import AuditLogger
from bank_account.config import get_settings
from bank_account.machine import transition
from bank_account.models.account import INITIAL_STATE, Action
from bank_account.session import AccountSession


@pytest.fixture
def open_state():
    """A freshly opened account (balance 500)."""
    return transition(INITIAL_STATE, Action.open_account())


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def session(audit_logger):
    return AccountSession(audit_logger=audit_logger)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
