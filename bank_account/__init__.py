"""
Bank Account - Source Package

The state-transition logic of a single bank account: deposits,
withdrawals, one loan at a time, and the open/close lifecycle.

DESIGN PRINCIPLES:
1. State is an immutable value, replaced on every accepted action
2. Rejected actions are no-ops, never errors
3. Unknown actions fail loudly
4. Every dispatched action is auditable
"""

__version__ = "1.0.0"
__author__ = "Bank Account Team"
