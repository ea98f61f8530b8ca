"""Exceptions raised by the account core."""


class AccountError(Exception):
    """Base exception for account errors."""
    pass


class UnknownActionError(AccountError):
    """Action kind outside the known set. Always a caller bug."""

    def __init__(self, action_type: object, message: str = ""):
        self.action_type = action_type
        super().__init__(message or f"Action unknown: {action_type!r}")


class InvalidAmountError(AccountError):
    """User-supplied amount could not be turned into a number."""

    def __init__(self, raw: str, message: str):
        self.raw = raw
        super().__init__(message)
