"""
Amount Parsing

The state machine trusts its numbers. Turning what the user typed into
a number is the front end's job, and it happens here.

IMPORTANT: Parsing NEVER silently fixes input.
Garbage is rejected with a message the user can act on.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from bank_account.machine.errors import InvalidAmountError


def parse_amount(raw: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Convert user input into an amount.

    An empty box counts as zero, so clearing an input field stages
    nothing rather than failing.

    Raises:
        InvalidAmountError: if the input is not a finite, non-negative number
    """
    if raw is None:
        return Decimal("0")

    text = str(raw).strip().replace(",", "")
    if not text:
        return Decimal("0")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise InvalidAmountError(str(raw), f"'{raw}' is not a number") from None

    if not amount.is_finite():
        raise InvalidAmountError(str(raw), f"'{raw}' is not a finite amount")
    if amount < 0:
        raise InvalidAmountError(str(raw), "Amount cannot be negative")

    return amount
