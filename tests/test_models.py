"""
Tests for the account models

Test strategy:
1. States and actions are immutable values
2. Structural rules are enforced at construction
3. Convenience constructors produce the right tagged actions
"""

import pytest
from decimal import Decimal

from bank_account.models.account import (
    INITIAL_STATE,
    PAYLOAD_ACTIONS,
    AccountState,
    Action,
    ActionType,
    TransitionOutcome,
)


class TestAccountState:
    """Tests for the AccountState model."""

    def test_initial_state_is_all_zero_and_inactive(self):
        """Test the initial state shape."""
        assert INITIAL_STATE.balance == 0
        assert INITIAL_STATE.loan == 0
        assert INITIAL_STATE.pending_deposit == 0
        assert INITIAL_STATE.pending_withdrawal == 0
        assert INITIAL_STATE.pending_loan_request == 0
        assert INITIAL_STATE.is_active is False

    def test_state_is_immutable(self):
        """Test that fields cannot be assigned."""
        state = AccountState(is_active=True, balance=Decimal("500"))
        with pytest.raises(ValueError):
            state.balance = Decimal("1000")

    def test_inactive_state_with_balance_rejected(self):
        """Test that a closed account cannot hold money."""
        with pytest.raises(ValueError, match="Inactive account must have zero balance and loan"):
            AccountState(is_active=False, balance=Decimal("100"))

    def test_inactive_state_with_loan_rejected(self):
        """Test that a closed account cannot hold a loan."""
        with pytest.raises(ValueError):
            AccountState(is_active=False, loan=Decimal("300"))

    def test_inactive_state_may_hold_pending_amounts(self):
        """Test that staged amounts are allowed on an inactive state."""
        state = AccountState(pending_deposit=Decimal("50"))
        assert state.pending_deposit == Decimal("50")

    def test_states_compare_by_value(self):
        """Test equality of separately built states."""
        assert AccountState(is_active=True, balance=500) == AccountState(
            is_active=True, balance=Decimal("500")
        )

    def test_has_loan(self):
        assert AccountState(is_active=True, loan=Decimal("1")).has_loan is True
        assert AccountState(is_active=True).has_loan is False

    def test_to_log_dict(self):
        """Test conversion to log dictionary."""
        log_dict = AccountState(is_active=True, balance=Decimal("800"), loan=Decimal("300")).to_log_dict()
        assert log_dict["balance"] == "800"
        assert log_dict["loan"] == "300"
        assert log_dict["is_active"] is True


class TestAction:
    """Tests for the Action model."""

    def test_payload_required_for_staging_actions(self):
        """Test that set_pending_* actions need an amount."""
        for action_type in PAYLOAD_ACTIONS:
            with pytest.raises(ValueError, match="requires a payload"):
                Action(type=action_type)

    def test_payload_coerced_to_decimal(self):
        """Test that plain numbers become Decimals."""
        action = Action.set_pending_deposit(300)
        assert action.payload == Decimal("300")
        assert isinstance(action.payload, Decimal)

    def test_negative_payload_is_not_rejected(self):
        """Test that the model does not police the sign of amounts."""
        action = Action.set_pending_withdrawal(Decimal("-5"))
        assert action.payload == Decimal("-5")

    def test_non_finite_payload_rejected(self):
        """Test that NaN and infinity cannot be staged."""
        with pytest.raises(ValueError):
            Action.set_pending_deposit(Decimal("NaN"))
        with pytest.raises(ValueError):
            Action.set_pending_loan_request(Decimal("Infinity"))

    def test_type_must_be_known(self):
        """Test that an unknown type string fails validation."""
        with pytest.raises(ValueError):
            Action(type="teleport")

    def test_constructors(self):
        """Test each convenience constructor's tag."""
        assert Action.open_account().type == ActionType.OPEN_ACCOUNT
        assert Action.confirm_deposit().type == ActionType.CONFIRM_DEPOSIT
        assert Action.confirm_withdrawal().type == ActionType.CONFIRM_WITHDRAWAL
        assert Action.request_loan().type == ActionType.REQUEST_LOAN
        assert Action.pay_loan().type == ActionType.PAY_LOAN
        assert Action.close_account().type == ActionType.CLOSE_ACCOUNT
        assert Action.set_pending_loan_request(Decimal("1")).type == ActionType.SET_PENDING_LOAN_REQUEST

    def test_action_to_log_dict(self):
        assert Action.set_pending_deposit(Decimal("12.50")).to_log_dict() == {
            "action_type": "set_pending_deposit",
            "payload": "12.50",
        }
        assert Action.pay_loan().to_log_dict()["payload"] is None


class TestTransitionOutcome:
    """Tests for the TransitionOutcome record."""

    def test_outcome_creation(self):
        current = AccountState(is_active=True, balance=Decimal("500"))
        outcome = TransitionOutcome(
            action=Action.open_account(),
            previous=INITIAL_STATE,
            current=current,
            applied=True,
        )
        assert outcome.current.balance == Decimal("500")
        assert outcome.applied is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
