"""Account state machine package."""

from bank_account.machine.errors import (
    AccountError,
    InvalidAmountError,
    UnknownActionError,
)
from bank_account.machine.state_machine import (
    OPENING_BALANCE,
    available_actions,
    is_applicable,
    parse_action,
    transition,
)

__all__ = [
    # Exceptions
    "AccountError",
    "InvalidAmountError",
    "UnknownActionError",
    # Reducer
    "OPENING_BALANCE",
    "available_actions",
    "is_applicable",
    "parse_action",
    "transition",
]
