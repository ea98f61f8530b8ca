"""
Account State Machine

A flat command/response reducer: the current state plus one action in,
the next state out.

RULES:
1. An inactive account ignores everything except open_account
2. A rejected action returns the SAME state object (guarded no-op)
3. An unknown action kind on an active account raises UnknownActionError

The functions here are pure. Whoever calls them owns the state value
and is responsible for storing the result.
"""

from decimal import Decimal
from typing import Any, Callable, Mapping

from bank_account.machine.errors import UnknownActionError
from bank_account.models.account import (
    INITIAL_STATE,
    AccountState,
    Action,
    ActionType,
)


# Minimum deposit required to open an account
OPENING_BALANCE = Decimal("500")


def _open_account(state: AccountState, action: Action) -> AccountState:
    return state.model_copy(update={"is_active": True, "balance": OPENING_BALANCE})


def _set_pending_deposit(state: AccountState, action: Action) -> AccountState:
    return state.model_copy(update={"pending_deposit": action.payload})


def _confirm_deposit(state: AccountState, action: Action) -> AccountState:
    return state.model_copy(update={"balance": state.balance + state.pending_deposit})


def _set_pending_withdrawal(state: AccountState, action: Action) -> AccountState:
    return state.model_copy(update={"pending_withdrawal": action.payload})


def _confirm_withdrawal(state: AccountState, action: Action) -> AccountState:
    if state.pending_withdrawal > state.balance:
        return state
    return state.model_copy(update={"balance": state.balance - state.pending_withdrawal})


def _set_pending_loan_request(state: AccountState, action: Action) -> AccountState:
    return state.model_copy(update={"pending_loan_request": action.payload})


def _request_loan(state: AccountState, action: Action) -> AccountState:
    # One loan at a time
    if state.loan > 0:
        return state
    return state.model_copy(update={
        "loan": state.loan + state.pending_loan_request,
        "balance": state.balance + state.pending_loan_request,
    })


def _pay_loan(state: AccountState, action: Action) -> AccountState:
    if state.balance < state.loan:
        return state
    return state.model_copy(update={
        "balance": state.balance - state.loan,
        "loan": Decimal("0"),
    })


def _close_account(state: AccountState, action: Action) -> AccountState:
    if state.loan != 0 or state.balance != 0:
        return state
    return INITIAL_STATE


_HANDLERS: dict[ActionType, Callable[[AccountState, Action], AccountState]] = {
    ActionType.OPEN_ACCOUNT: _open_account,
    ActionType.SET_PENDING_DEPOSIT: _set_pending_deposit,
    ActionType.CONFIRM_DEPOSIT: _confirm_deposit,
    ActionType.SET_PENDING_WITHDRAWAL: _set_pending_withdrawal,
    ActionType.CONFIRM_WITHDRAWAL: _confirm_withdrawal,
    ActionType.SET_PENDING_LOAN_REQUEST: _set_pending_loan_request,
    ActionType.REQUEST_LOAN: _request_loan,
    ActionType.PAY_LOAN: _pay_loan,
    ActionType.CLOSE_ACCOUNT: _close_account,
}


def transition(state: AccountState, action: Action) -> AccountState:
    """
    Apply one action to the account.

    Returns the next state, or `state` itself when the action is not
    applicable (inactive account, insufficient funds, existing loan,
    non-empty account on close).

    Raises:
        UnknownActionError: if the action kind is not recognized
    """
    action_type = getattr(action, "type", None)

    # Inactive guard runs before dispatch, unknown kinds included
    if not state.is_active and action_type != ActionType.OPEN_ACCOUNT:
        return state

    try:
        handler = _HANDLERS[action_type]
    except (KeyError, TypeError):
        raise UnknownActionError(action_type) from None

    return handler(state, action)


def is_applicable(state: AccountState, action: Action) -> bool:
    """Would `transition` accept the action? False for guarded no-ops."""
    return transition(state, action) is not state


def available_actions(state: AccountState) -> frozenset[ActionType]:
    """
    Action kinds a front end should offer for this state.

    A closed account can only be opened; an open one can do everything
    except open again.
    """
    if not state.is_active:
        return frozenset({ActionType.OPEN_ACCOUNT})
    return frozenset(_HANDLERS) - {ActionType.OPEN_ACCOUNT}


def parse_action(data: Mapping[str, Any]) -> Action:
    """
    Build an Action from a raw {"type": ..., "payload": ...} mapping.

    Raises:
        UnknownActionError: if "type" is missing or not a known kind
        ValidationError: if the payload is malformed
    """
    raw_type = data.get("type")
    try:
        action_type = ActionType(raw_type)
    except ValueError:
        raise UnknownActionError(raw_type) from None

    return Action(type=action_type, payload=data.get("payload"))
