"""
Audit Logger

DESIGN DECISION: Every dispatched action is logged.
This provides:
1. Complete traceability of balance and loan changes
2. Debugging capability
3. User can see history of their interactions

The audit logger:
- Writes a structured local log line per event
- Keeps the events of the current session in memory (nothing is persisted)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from bank_account.config import AppSettings
from bank_account.models.account import AccountState, Action
from bank_account.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Configure structlog for local logging.

    Call once at startup. JSON output unless the settings ask for
    console rendering.
    """
    settings = settings or AppSettings()

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, settings.log_level),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory list (for display in the UI)
    """

    def __init__(self, max_events: Optional[int] = None):
        """
        Initialize audit logger.

        Args:
            max_events: How many events to keep in memory.
                    If None, keeps all of them.
        """
        self._events: list[AuditEvent] = []
        self._max_events = max_events
        self._logger = structlog.get_logger("bank_account.audit")

    @property
    def events(self) -> tuple[AuditEvent, ...]:
        """Events recorded so far, oldest first."""
        return tuple(self._events)

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Log an audit event.

        Always logs locally, then records the event in memory.
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            del self._events[: len(self._events) - self._max_events]

        return event

    def log_transition_applied(
        self,
        action: Action,
        previous: AccountState,
        current: AccountState,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        """Log an action that changed the account."""
        event = AuditEventBuilder.transition_applied(
            action=action,
            previous=previous,
            current=current,
            correlation_id=correlation_id,
        )
        return self.log(event)

    def log_transition_rejected(
        self,
        action: Action,
        state: AccountState,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        """Log an action that was a guarded no-op."""
        event = AuditEventBuilder.transition_rejected(
            action=action,
            state=state,
            correlation_id=correlation_id,
        )
        return self.log(event)

    def log_unknown_action(
        self,
        action_type: object,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        """Log a dispatch of an action kind the account does not know."""
        event = AuditEventBuilder.unknown_action(
            action_type=action_type,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        return self.log(event)

    def clear(self) -> None:
        self._events.clear()


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per user operation (e.g. stage + confirm of a deposit).
    """
    return uuid4()
