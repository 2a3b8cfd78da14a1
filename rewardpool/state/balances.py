"""
Account balance tracking for the assets a reward pool moves.

Implements BalanceTable[AccountId, AssetId] -> Amount. The pool's custody
account is an ordinary entry; deposits and payouts are `transfer()` calls.
"""

from typing import Dict, Tuple


# Type aliases
AccountId = str  # stable, already-authenticated account identifier
AssetId = str
Amount = int  # Non-negative integer (arbitrary precision)


class InsufficientBalance(ValueError):
    """Raised when a debit would take a balance below zero."""


class BalanceTable:
    """
    Balance table mapping (account, asset) -> amount.

    Zero balances are not stored. Callers that need a stable order (snapshots,
    reports) must sort keys explicitly.
    """

    def __init__(self):
        self._balances: Dict[Tuple[AccountId, AssetId], Amount] = {}

    def get(self, account: AccountId, asset: AssetId) -> Amount:
        """Get balance for (account, asset). Returns 0 if not found."""
        return self._balances.get((account, asset), 0)

    def set(self, account: AccountId, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (account, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop((account, asset), None)
        else:
            self._balances[(account, asset)] = amount

    def credit(self, account: AccountId, asset: AssetId, amount: Amount) -> None:
        """Add a non-negative amount to a balance."""
        if amount < 0:
            raise ValueError(f"Credit must be non-negative: {amount}")
        self.set(account, asset, self.get(account, asset) + amount)

    def debit(self, account: AccountId, asset: AssetId, amount: Amount) -> None:
        """
        Remove a non-negative amount from a balance.

        Raises:
            ValueError: If amount is negative
            InsufficientBalance: If the balance is smaller than amount
        """
        if amount < 0:
            raise ValueError(f"Debit must be non-negative: {amount}")
        current = self.get(account, asset)
        if current < amount:
            raise InsufficientBalance(
                f"Insufficient balance for {account}: {current} < {amount}"
            )
        self.set(account, asset, current - amount)

    def transfer(self, src: AccountId, dst: AccountId, asset: AssetId, amount: Amount) -> None:
        """
        Move amount from src to dst. Either both sides change or neither does.
        """
        self.debit(src, asset, amount)
        self.credit(dst, asset, amount)

    def get_all_balances(self) -> Dict[Tuple[AccountId, AssetId], Amount]:
        """Copy of all non-zero balances keyed by (account, asset)."""
        return dict(self._balances)

    def total_supply(self, asset: AssetId) -> Amount:
        """Sum of all balances of one asset (conserved by transfer())."""
        return sum(amount for (_, a), amount in self._balances.items() if a == asset)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
