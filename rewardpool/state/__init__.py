"""
Account-side state used by the reward pool shell
"""

from .balances import BalanceTable, InsufficientBalance

__all__ = [
    "BalanceTable",
    "InsufficientBalance",
]
