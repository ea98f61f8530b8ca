"""
Audit Models for the Bank Account

Every dispatched action is logged for audit purposes.
This provides:
1. Traceability of every balance and loan change
2. Visibility into rejected operations
3. A loud record of caller bugs (unknown actions)

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from bank_account.models.account import AccountState, Action, ActionType


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every accepted action kind has its own event type.
    """
    # Lifecycle
    ACCOUNT_OPENED = "account_opened"
    ACCOUNT_CLOSED = "account_closed"

    # Staged amounts
    DEPOSIT_STAGED = "deposit_staged"
    WITHDRAWAL_STAGED = "withdrawal_staged"
    LOAN_REQUEST_STAGED = "loan_request_staged"

    # Money movement
    DEPOSIT_CONFIRMED = "deposit_confirmed"
    WITHDRAWAL_CONFIRMED = "withdrawal_confirmed"
    LOAN_GRANTED = "loan_granted"
    LOAN_PAID = "loan_paid"

    # Rejections and failures
    TRANSITION_REJECTED = "transition_rejected"
    UNKNOWN_ACTION = "unknown_action"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_ACCEPTED_EVENT_TYPES: dict[ActionType, AuditEventType] = {
    ActionType.OPEN_ACCOUNT: AuditEventType.ACCOUNT_OPENED,
    ActionType.SET_PENDING_DEPOSIT: AuditEventType.DEPOSIT_STAGED,
    ActionType.CONFIRM_DEPOSIT: AuditEventType.DEPOSIT_CONFIRMED,
    ActionType.SET_PENDING_WITHDRAWAL: AuditEventType.WITHDRAWAL_STAGED,
    ActionType.CONFIRM_WITHDRAWAL: AuditEventType.WITHDRAWAL_CONFIRMED,
    ActionType.SET_PENDING_LOAN_REQUEST: AuditEventType.LOAN_REQUEST_STAGED,
    ActionType.REQUEST_LOAN: AuditEventType.LOAN_GRANTED,
    ActionType.PAY_LOAN: AuditEventType.LOAN_PAID,
    ActionType.CLOSE_ACCOUNT: AuditEventType.ACCOUNT_CLOSED,
}


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every dispatched action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g. stage + confirm)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transition_applied(action, previous, current)
        event = AuditEventBuilder.unknown_action("teleport")
    """

    @staticmethod
    def transition_applied(
        action: Action,
        previous: AccountState,
        current: AccountState,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        event_type = _ACCEPTED_EVENT_TYPES[action.type]
        return AuditEvent(
            event_type=event_type,
            correlation_id=correlation_id,
            description=f"{event_type.value.replace('_', ' ').capitalize()}: balance {current.balance}, loan {current.loan}",
            details={
                **action.to_log_dict(),
                "before": previous.to_log_dict(),
                "after": current.to_log_dict(),
            },
        )

    @staticmethod
    def transition_rejected(
        action: Action,
        state: AccountState,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSITION_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Action not applicable: {action.type.value}",
            details={
                **action.to_log_dict(),
                "state": state.to_log_dict(),
            },
        )

    @staticmethod
    def unknown_action(
        action_type: object,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UNKNOWN_ACTION,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description="Unknown action dispatched",
            error_message=error_message,
            details={
                "action_type": repr(action_type),
            },
        )
