"""
Account Data Models

The account is a single immutable value. Every accepted operation
produces a new AccountState; nothing is ever mutated in place.

DESIGN DECISION: The amount being typed in by the user (pending_*) and
the money actually registered on the account (balance, loan) live in
separate fields. Staging an amount never moves money; only the matching
confirm action does.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ActionType(str, Enum):
    """
    Every command the account understands.

    The set is closed. Anything outside it is a caller bug and is
    rejected loudly by the state machine.
    """
    OPEN_ACCOUNT = "open_account"
    SET_PENDING_DEPOSIT = "set_pending_deposit"
    CONFIRM_DEPOSIT = "confirm_deposit"
    SET_PENDING_WITHDRAWAL = "set_pending_withdrawal"
    CONFIRM_WITHDRAWAL = "confirm_withdrawal"
    SET_PENDING_LOAN_REQUEST = "set_pending_loan_request"
    REQUEST_LOAN = "request_loan"
    PAY_LOAN = "pay_loan"
    CLOSE_ACCOUNT = "close_account"


# Actions that stage an amount and therefore need a payload
PAYLOAD_ACTIONS = frozenset({
    ActionType.SET_PENDING_DEPOSIT,
    ActionType.SET_PENDING_WITHDRAWAL,
    ActionType.SET_PENDING_LOAN_REQUEST,
})


# =============================================================================
# ACCOUNT STATE
# =============================================================================

class AccountState(BaseModel):
    """
    Snapshot of the account.

    CRITICAL: An inactive account never holds money or debt.
    Closing is only possible at zero, and opening always starts fresh.
    """
    model_config = ConfigDict(frozen=True)

    balance: Decimal = Field(
        default=Decimal("0"),
        description="Current funds"
    )
    loan: Decimal = Field(
        default=Decimal("0"),
        description="Outstanding loan principal"
    )
    pending_deposit: Decimal = Field(
        default=Decimal("0"),
        description="Deposit amount staged for confirmation"
    )
    pending_withdrawal: Decimal = Field(
        default=Decimal("0"),
        description="Withdrawal amount staged for confirmation"
    )
    pending_loan_request: Decimal = Field(
        default=Decimal("0"),
        description="Loan amount staged for confirmation"
    )
    is_active: bool = Field(
        default=False,
        description="Whether the account is open"
    )

    @model_validator(mode='after')
    def validate_inactive_is_empty(self) -> 'AccountState':
        """An inactive account must not hold a balance or a loan."""
        if not self.is_active and (self.balance != 0 or self.loan != 0):
            raise ValueError("Inactive account must have zero balance and loan")
        return self

    @property
    def has_loan(self) -> bool:
        return self.loan > 0

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "balance": str(self.balance),
            "loan": str(self.loan),
            "pending_deposit": str(self.pending_deposit),
            "pending_withdrawal": str(self.pending_withdrawal),
            "pending_loan_request": str(self.pending_loan_request),
            "is_active": self.is_active,
        }


INITIAL_STATE = AccountState()


# =============================================================================
# ACTIONS
# =============================================================================

class Action(BaseModel):
    """
    A tagged command with an optional amount.

    Usage:
        Action.set_pending_deposit(Decimal("500"))
        Action.confirm_deposit()
    """
    model_config = ConfigDict(frozen=True)

    type: ActionType = Field(
        ...,
        description="Which command this is"
    )
    payload: Optional[Decimal] = Field(
        default=None,
        description="Amount for the set_pending_* commands. Sign is not checked; NaN and infinity are rejected"
    )

    @model_validator(mode='after')
    def validate_payload(self) -> 'Action':
        """Staging commands need an amount."""
        if self.type in PAYLOAD_ACTIONS and self.payload is None:
            raise ValueError(f"{self.type.value} requires a payload")
        return self

    def to_log_dict(self) -> dict:
        return {
            "action_type": self.type.value,
            "payload": str(self.payload) if self.payload is not None else None,
        }

    @classmethod
    def open_account(cls) -> 'Action':
        return cls(type=ActionType.OPEN_ACCOUNT)

    @classmethod
    def set_pending_deposit(cls, amount: Decimal) -> 'Action':
        return cls(type=ActionType.SET_PENDING_DEPOSIT, payload=amount)

    @classmethod
    def confirm_deposit(cls) -> 'Action':
        return cls(type=ActionType.CONFIRM_DEPOSIT)

    @classmethod
    def set_pending_withdrawal(cls, amount: Decimal) -> 'Action':
        return cls(type=ActionType.SET_PENDING_WITHDRAWAL, payload=amount)

    @classmethod
    def confirm_withdrawal(cls) -> 'Action':
        return cls(type=ActionType.CONFIRM_WITHDRAWAL)

    @classmethod
    def set_pending_loan_request(cls, amount: Decimal) -> 'Action':
        return cls(type=ActionType.SET_PENDING_LOAN_REQUEST, payload=amount)

    @classmethod
    def request_loan(cls) -> 'Action':
        return cls(type=ActionType.REQUEST_LOAN)

    @classmethod
    def pay_loan(cls) -> 'Action':
        return cls(type=ActionType.PAY_LOAN)

    @classmethod
    def close_account(cls) -> 'Action':
        return cls(type=ActionType.CLOSE_ACCOUNT)


class TransitionOutcome(BaseModel):
    """Record of one dispatched action and what it did to the account."""
    model_config = ConfigDict(frozen=True)

    action: Action
    previous: AccountState
    current: AccountState
    applied: bool = Field(
        ...,
        description="False when the action was a guarded no-op"
    )
