"""
Data Models Package

This package contains all Pydantic models used by the bank account.
Every state and every command flowing through the system conforms to these schemas.
"""

from bank_account.models.account import (
    INITIAL_STATE,
    PAYLOAD_ACTIONS,
    AccountState,
    Action,
    ActionType,
    TransitionOutcome,
)
from bank_account.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Account models
    "INITIAL_STATE",
    "PAYLOAD_ACTIONS",
    "AccountState",
    "Action",
    "ActionType",
    "TransitionOutcome",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
