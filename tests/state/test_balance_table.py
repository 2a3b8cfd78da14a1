from __future__ import annotations

import pytest

from rewardpool.state import BalanceTable, InsufficientBalance

ASSET = "0x01"


def test_unknown_balance_is_zero() -> None:
    assert BalanceTable().get("alice", ASSET) == 0


def test_zero_balances_are_not_stored() -> None:
    t = BalanceTable()
    t.set("alice", ASSET, 5)
    t.set("alice", ASSET, 0)
    assert t.get_all_balances() == {}


def test_negative_set_rejected() -> None:
    with pytest.raises(ValueError):
        BalanceTable().set("alice", ASSET, -1)


def test_credit_and_debit() -> None:
    t = BalanceTable()
    t.credit("alice", ASSET, 10)
    t.debit("alice", ASSET, 4)
    assert t.get("alice", ASSET) == 6


def test_overdraw_raises_and_keeps_balance() -> None:
    t = BalanceTable()
    t.credit("alice", ASSET, 3)
    with pytest.raises(InsufficientBalance):
        t.debit("alice", ASSET, 4)
    assert t.get("alice", ASSET) == 3


def test_insufficient_balance_is_value_error() -> None:
    assert issubclass(InsufficientBalance, ValueError)


@pytest.mark.parametrize("method", ["credit", "debit"])
def test_negative_amounts_rejected(method: str) -> None:
    t = BalanceTable()
    t.credit("alice", ASSET, 10)
    with pytest.raises(ValueError):
        getattr(t, method)("alice", ASSET, -1)


def test_transfer_conserves_supply() -> None:
    t = BalanceTable()
    t.credit("alice", ASSET, 100)
    t.credit("pool", ASSET, 50)
    t.credit("alice", "0x02", 7)
    t.transfer("alice", "pool", ASSET, 60)
    assert t.get("alice", ASSET) == 40
    assert t.get("pool", ASSET) == 110
    assert t.total_supply(ASSET) == 150
    assert t.total_supply("0x02") == 7


def test_failed_transfer_changes_nothing() -> None:
    t = BalanceTable()
    t.credit("alice", ASSET, 5)
    with pytest.raises(InsufficientBalance):
        t.transfer("alice", "pool", ASSET, 6)
    assert t.get_all_balances() == {("alice", ASSET): 5}


def test_get_all_balances_is_a_copy() -> None:
    t = BalanceTable()
    t.credit("alice", ASSET, 5)
    t.get_all_balances()[("alice", ASSET)] = 999
    assert t.get("alice", ASSET) == 5
    assert repr(t) == "BalanceTable(1 entries)"
