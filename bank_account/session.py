"""
Account Session

The state machine is pure: it never stores anything. This module is the
single owner of the current account state. It:
1. Serializes read -> transition -> store so no update is lost
2. Audits every dispatched action
3. Keeps a bounded history of what each action did

DESIGN DECISION: The front end talks in two steps, exactly like the
input boxes it renders: stage an amount, then confirm it. The helpers
below (deposit, withdraw, request_loan) dispatch both steps under one
correlation ID.
"""

import threading
from collections import deque
from decimal import Decimal
from typing import Optional
from uuid import UUID

from bank_account.audit import AuditLogger, create_correlation_id
from bank_account.config import get_settings
from bank_account.machine import UnknownActionError, transition
from bank_account.models.account import (
    INITIAL_STATE,
    AccountState,
    Action,
    TransitionOutcome,
)


class AccountSession:
    """
    Owns one account's state for the lifetime of a user session.

    Usage:
        session = AccountSession()
        session.open_account()
        session.deposit(Decimal("250"))
        session.state.balance  # Decimal("750")
    """

    def __init__(
        self,
        audit_logger: Optional[AuditLogger] = None,
        history_limit: int = 100,
        initial_state: AccountState = INITIAL_STATE,
    ):
        self._state = initial_state
        self._audit_logger = audit_logger
        self._history: deque[TransitionOutcome] = deque(maxlen=history_limit)
        self._lock = threading.Lock()

    @property
    def state(self) -> AccountState:
        return self._state

    @property
    def history(self) -> tuple[TransitionOutcome, ...]:
        """Outcomes of dispatched actions, oldest first."""
        return tuple(self._history)

    @property
    def last_outcome(self) -> Optional[TransitionOutcome]:
        return self._history[-1] if self._history else None

    def dispatch(
        self,
        action: Action,
        correlation_id: Optional[UUID] = None,
    ) -> AccountState:
        """
        Apply an action to the current state and store the result.

        Returns the new current state (unchanged if the action was
        not applicable).

        Raises:
            UnknownActionError: if the action kind is not recognized.
                    The state is left untouched.
        """
        with self._lock:
            previous = self._state
            try:
                current = transition(previous, action)
            except UnknownActionError as e:
                if self._audit_logger:
                    self._audit_logger.log_unknown_action(
                        action_type=e.action_type,
                        error_message=str(e),
                        correlation_id=correlation_id,
                    )
                raise

            applied = current is not previous
            self._state = current
            self._history.append(
                TransitionOutcome(
                    action=action,
                    previous=previous,
                    current=current,
                    applied=applied,
                )
            )

        if self._audit_logger:
            if applied:
                self._audit_logger.log_transition_applied(
                    action=action,
                    previous=previous,
                    current=current,
                    correlation_id=correlation_id,
                )
            else:
                self._audit_logger.log_transition_rejected(
                    action=action,
                    state=previous,
                    correlation_id=correlation_id,
                )

        return current

    # -------------------------------------------------------------------------
    # Two-step helpers
    # -------------------------------------------------------------------------

    def open_account(self) -> AccountState:
        return self.dispatch(Action.open_account(), create_correlation_id())

    def deposit(self, amount: Decimal) -> AccountState:
        """Stage and confirm a deposit."""
        correlation_id = create_correlation_id()
        self.dispatch(Action.set_pending_deposit(amount), correlation_id)
        return self.dispatch(Action.confirm_deposit(), correlation_id)

    def withdraw(self, amount: Decimal) -> AccountState:
        """Stage and confirm a withdrawal. No-op if it exceeds the balance."""
        correlation_id = create_correlation_id()
        self.dispatch(Action.set_pending_withdrawal(amount), correlation_id)
        return self.dispatch(Action.confirm_withdrawal(), correlation_id)

    def request_loan(self, amount: Decimal) -> AccountState:
        """Stage and request a loan. No-op while a loan is outstanding."""
        correlation_id = create_correlation_id()
        self.dispatch(Action.set_pending_loan_request(amount), correlation_id)
        return self.dispatch(Action.request_loan(), correlation_id)

    def pay_loan(self) -> AccountState:
        return self.dispatch(Action.pay_loan(), create_correlation_id())

    def close_account(self) -> AccountState:
        return self.dispatch(Action.close_account(), create_correlation_id())

    def reset(self) -> None:
        """Drop back to the initial state and forget the history."""
        with self._lock:
            self._state = INITIAL_STATE
            self._history.clear()


def create_session(use_audit: bool = True) -> AccountSession:
    """
    Factory function to create a session wired to the configured settings.

    Args:
        use_audit: Whether to attach an AuditLogger.
                    Set to False for a silent session.
    """
    settings = get_settings()
    history_limit = settings.account.history_limit

    audit_logger = AuditLogger(max_events=history_limit) if use_audit else None

    return AccountSession(
        audit_logger=audit_logger,
        history_limit=history_limit,
    )
