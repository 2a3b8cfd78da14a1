"""
Asset ledger adapter.

The pool never moves assets itself: the shell calls `pull()` to take a deposit
from a participant into custody and `push()` to pay a participant out of
custody. Both calls are synchronous and must either complete or report
failure, by raising `LedgerError` or returning False; the shell commits the
new pool state only after the call returned successfully.
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..state.balances import AccountId, AssetId, BalanceTable

DEFAULT_POOL_ACCOUNT = "rewardpool:custody"


class LedgerError(Exception):
    """Raised by a ledger when it refuses or cannot perform a transfer."""


class AssetLedger(Protocol):
    def pull(self, account: AccountId, amount: int) -> Optional[bool]:
        """Move `amount` from `account` into pool custody."""
        ...

    def push(self, account: AccountId, amount: int) -> Optional[bool]:
        """Move `amount` from pool custody to `account`."""
        ...


class BalanceLedger:
    """
    `AssetLedger` backed by an in-process `BalanceTable`.

    The reward budget is expected to be funded into the custody account up
    front (see `fund()`); payouts fail with `LedgerError` if custody runs dry.
    """

    def __init__(
        self,
        balances: BalanceTable,
        asset: AssetId,
        *,
        pool_account: AccountId = DEFAULT_POOL_ACCOUNT,
    ) -> None:
        self.balances = balances
        self.asset = asset
        self.pool_account = pool_account

    def fund(self, amount: int) -> None:
        """Credit custody with reward budget."""
        self.balances.credit(self.pool_account, self.asset, amount)

    def custody_balance(self) -> int:
        return self.balances.get(self.pool_account, self.asset)

    def pull(self, account: AccountId, amount: int) -> None:
        self._move(account, self.pool_account, amount)

    def push(self, account: AccountId, amount: int) -> None:
        self._move(self.pool_account, account, amount)

    def _move(self, src: AccountId, dst: AccountId, amount: int) -> None:
        try:
            self.balances.transfer(src, dst, self.asset, amount)
        except ValueError as exc:
            raise LedgerError(str(exc)) from exc
