"""
Streamlit Frontend for the Bank Account

A single page that shows the account and lets the user operate it.

DESIGN PRINCIPLES:
1. The page never changes the account itself; it only dispatches actions
2. Amounts are staged from the input boxes, then confirmed by a button
3. Buttons that cannot apply to the current state are disabled
4. Clear messages when an action was not applicable
"""

from decimal import Decimal
from typing import Callable

import streamlit as st

from bank_account.audit import configure_logging
from bank_account.config import get_settings
from bank_account.machine import InvalidAmountError, available_actions
from bank_account.models.account import AccountState, ActionType
from bank_account.session import AccountSession, create_session
from bank_account.validation import parse_amount


# Page configuration
st.set_page_config(
    page_title="Bank Account",
    page_icon="🏦",
    layout="centered",
)

# Shown when the confirm step turns out to be a no-op
REJECTION_MESSAGES = {
    ActionType.CONFIRM_WITHDRAWAL: "Not enough funds for this withdrawal.",
    ActionType.REQUEST_LOAN: "You already have a loan. Pay it back first.",
    ActionType.PAY_LOAN: "Not enough funds to pay back the loan.",
    ActionType.CLOSE_ACCOUNT: "Pay back the loan and withdraw all money before closing.",
}


@st.cache_resource
def init_logging():
    """Configure logging once per server process."""
    configure_logging(get_settings().app)
    return True


def get_session() -> AccountSession:
    """Get this browser session's account (created on first visit)."""
    if "account_session" not in st.session_state:
        st.session_state.account_session = create_session()
    return st.session_state.account_session


def flash(message: str, level: str = "warning") -> None:
    """Keep a message across the rerun that follows a button click."""
    st.session_state.flash = (level, message)


def show_flash() -> None:
    level, message = st.session_state.pop("flash", (None, None))
    if level == "error":
        st.error(message)
    elif level == "warning":
        st.warning(message)


def report_outcome(session: AccountSession) -> None:
    outcome = session.last_outcome
    if outcome and not outcome.applied:
        message = REJECTION_MESSAGES.get(outcome.action.type)
        if message:
            flash(message)


def stage_and_confirm(
    session: AccountSession,
    raw: str,
    operation: Callable[[Decimal], AccountState],
) -> None:
    """Parse the input box, then run the session's stage-and-confirm helper."""
    try:
        amount = parse_amount(raw)
    except InvalidAmountError as e:
        flash(str(e), level="error")
        return

    operation(amount)
    report_outcome(session)


def render_amount_row(
    session: AccountSession,
    label: str,
    button: str,
    current: object,
    operation: Callable[[Decimal], AccountState],
    enabled: bool,
) -> None:
    raw = st.text_input(label, value=str(current))
    if st.button(button, disabled=not enabled):
        stage_and_confirm(session, raw, operation)
        st.rerun()


def main():
    """Main application entry point."""
    init_logging()
    session = get_session()
    symbol = get_settings().account.currency_symbol

    st.title("🏦 Bank Account")
    show_flash()

    state = session.state
    enabled = available_actions(state)

    col1, col2, col3 = st.columns(3)
    col1.metric("Balance", f"{symbol}{state.balance:,}")
    col2.metric("Loan", f"{symbol}{state.loan:,}")
    col3.metric("Status", "Open" if state.is_active else "Closed")

    st.markdown("---")

    if st.button(
        "Open account",
        disabled=ActionType.OPEN_ACCOUNT not in enabled,
        type="primary",
    ):
        session.open_account()
        st.rerun()

    render_amount_row(
        session, "Deposit amount", "Deposit", state.pending_deposit,
        session.deposit,
        ActionType.CONFIRM_DEPOSIT in enabled,
    )
    render_amount_row(
        session, "Withdrawal amount", "Withdraw", state.pending_withdrawal,
        session.withdraw,
        ActionType.CONFIRM_WITHDRAWAL in enabled,
    )
    render_amount_row(
        session, "Loan amount", "Request a loan", state.pending_loan_request,
        session.request_loan,
        ActionType.REQUEST_LOAN in enabled,
    )

    st.markdown("---")

    if st.button("Pay loan", disabled=ActionType.PAY_LOAN not in enabled):
        session.pay_loan()
        report_outcome(session)
        st.rerun()

    if st.button("Close account", disabled=ActionType.CLOSE_ACCOUNT not in enabled):
        session.close_account()
        report_outcome(session)
        st.rerun()

    # Activity (collapsible)
    with st.expander("📋 Recent activity"):
        if not session.history:
            st.markdown("*Nothing yet.*")
        for outcome in reversed(session.history[-10:]):
            mark = "✅" if outcome.applied else "⛔"
            st.markdown(
                f"{mark} `{outcome.action.type.value}` → "
                f"balance {symbol}{outcome.current.balance:,}, loan {symbol}{outcome.current.loan:,}"
            )


if __name__ == "__main__":
    main()
