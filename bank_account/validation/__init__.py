"""Input validation package."""

from bank_account.validation.amount import parse_amount

__all__ = ["parse_amount"]
