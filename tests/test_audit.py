"""Tests for audit models and the audit logger."""

import pytest
import structlog
from decimal import Decimal
from structlog.testing import capture_logs
from uuid import uuid4

from bank_account.audit import AuditLogger, configure_logging, create_correlation_id
from bank_account.config import AppSettings
from bank_account.models.account import INITIAL_STATE, AccountState, Action
from bank_account.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.ACCOUNT_OPENED,
            description="Account opened",
        )
        assert event.event_type == AuditEventType.ACCOUNT_OPENED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        correlation_id = uuid4()
        event = AuditEvent(
            event_type=AuditEventType.LOAN_GRANTED,
            description="Loan granted",
            correlation_id=correlation_id,
            details={"payload": "300"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "loan_granted"
        assert log_dict["correlation_id"] == str(correlation_id)
        assert log_dict["details"]["payload"] == "300"

    def test_builder_transition_applied(self):
        """Test AuditEventBuilder.transition_applied."""
        current = AccountState(is_active=True, balance=Decimal("500"))
        event = AuditEventBuilder.transition_applied(
            action=Action.open_account(),
            previous=INITIAL_STATE,
            current=current,
        )
        assert event.event_type == AuditEventType.ACCOUNT_OPENED
        assert event.details["before"]["is_active"] is False
        assert event.details["after"]["balance"] == "500"
        assert "balance 500" in event.description

    def test_builder_transition_rejected(self):
        """Test AuditEventBuilder.transition_rejected."""
        event = AuditEventBuilder.transition_rejected(
            action=Action.pay_loan(),
            state=INITIAL_STATE,
        )
        assert event.event_type == AuditEventType.TRANSITION_REJECTED
        assert event.severity == AuditSeverity.WARNING
        assert event.details["state"]["is_active"] is False

    def test_builder_unknown_action(self):
        """Test AuditEventBuilder.unknown_action."""
        event = AuditEventBuilder.unknown_action("teleport", "Action unknown: 'teleport'")
        assert event.severity == AuditSeverity.ERROR
        assert event.details["action_type"] == "'teleport'"
        assert event.error_message == "Action unknown: 'teleport'"


class TestAuditLogger:

    def test_events_are_kept_in_order(self):
        logger = AuditLogger()
        first = logger.log_transition_rejected(Action.pay_loan(), INITIAL_STATE)
        second = logger.log_unknown_action("x", "Action unknown: 'x'")
        assert logger.events == (first, second)

    def test_max_events_drops_oldest(self):
        logger = AuditLogger(max_events=2)
        for _ in range(3):
            logger.log_transition_rejected(Action.pay_loan(), INITIAL_STATE)
        last = logger.log_unknown_action("x", "boom")
        assert len(logger.events) == 2
        assert logger.events[-1] is last

    def test_clear(self):
        logger = AuditLogger()
        logger.log_transition_rejected(Action.pay_loan(), INITIAL_STATE)
        logger.clear()
        assert logger.events == ()

    def test_log_level_follows_severity(self):
        """Test that events are logged locally at their severity."""
        with capture_logs() as logs:
            logger = AuditLogger()
            logger.log_transition_applied(
                Action.open_account(),
                INITIAL_STATE,
                AccountState(is_active=True, balance=Decimal("500")),
            )
            logger.log_transition_rejected(Action.pay_loan(), INITIAL_STATE)
            logger.log_unknown_action("x", "boom")

        assert [entry["log_level"] for entry in logs] == ["info", "warning", "error"]
        assert all(entry["event"] == "audit_event" for entry in logs)
        assert logs[0]["event_type"] == "account_opened"

    def test_create_correlation_id_is_unique(self):
        assert create_correlation_id() != create_correlation_id()


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_configure_logging_json(self):
        configure_logging(AppSettings(log_json=True))
        assert structlog.is_configured()

    def test_configure_logging_console(self):
        configure_logging(AppSettings(log_json=False, log_level="debug"))
        assert structlog.is_configured()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
