#!/usr/bin/env python3
"""
Replay an operation trace against a fresh reward pool and print one JSON line
per operation.

Trace format (YAML or JSON):

    pool:
      asset_id: "0x01"
      distribution_budget: 1000
      duration_days: 10
      lockin_days: 0
      start_time: 0
    funding: 1000            # reward budget credited to custody (default: budget)
    balances:
      alice: 100
      bob: 100
    ops:
      - {at: 0, op: stake, who: alice, amount: 100}
      - {at: 432000, op: pending, who: alice}
      - {at: 864000, op: unstake, who: alice}

`at` is an absolute timestamp; it must not decrease along the trace.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rewardpool.core.errors import RewardPoolError
from rewardpool.integration import BalanceLedger, ManualClock, RecordingSink, RewardPool, load_pool_config
from rewardpool.state import BalanceTable

_OPS = ("stake", "unstake", "claim", "advance", "pending", "detail", "totals")


def _load_trace(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        obj = json.loads(text)
    else:
        obj = yaml.safe_load(text)
    if not isinstance(obj, dict):
        raise ValueError("trace must be a mapping")
    return obj


def _run_op(pool: RewardPool, op: Dict[str, Any]) -> Dict[str, Any]:
    kind = op.get("op")
    who = str(op.get("who", ""))
    if kind == "stake":
        eff = pool.stake(who, int(op["amount"]))
        return {"principal": eff.principal}
    if kind == "unstake":
        eff = pool.unstake(who)
        return {"principal": eff.principal, "reward": eff.reward}
    if kind == "claim":
        eff = pool.claim_reward(who)
        return {"reward": eff.reward}
    if kind == "advance":
        state = pool.advance()
        return {"acc_per_share": state.acc_per_share}
    if kind == "pending":
        return {"pending": pool.pending_reward(who)}
    if kind == "detail":
        d = pool.staker_detail(who)
        if d is None:
            return {"detail": None}
        return {"detail": {
            "amount_staked": d.amount_staked,
            "reward_claimed": d.reward_claimed,
            "stake_timestamp": d.stake_timestamp,
            "is_active": d.is_active,
        }}
    if kind == "totals":
        return {
            "total_staked": pool.total_staked(),
            "remaining_budget": pool.remaining_budget(),
            "active_count": pool.active_count(),
        }
    raise ValueError(f"unknown op {kind!r} (expected one of {', '.join(_OPS)})")


def replay(trace: Dict[str, Any]) -> List[Dict[str, Any]]:
    config = load_pool_config(data=trace.get("pool") or {}, env={})
    balances = BalanceTable()
    ledger = BalanceLedger(balances, config.asset_id)
    ledger.fund(int(trace.get("funding", config.distribution_budget)))
    for account, amount in (trace.get("balances") or {}).items():
        balances.credit(str(account), config.asset_id, int(amount))

    clock = ManualClock(config.start_time)
    pool = RewardPool(config, ledger, clock=clock, sink=RecordingSink())

    out: List[Dict[str, Any]] = []
    for i, op in enumerate(trace.get("ops") or []):
        clock.set(int(op.get("at", clock.now())))
        row: Dict[str, Any] = {"i": i, "at": clock.now(), "op": op.get("op"), "who": op.get("who")}
        try:
            row.update(ok=True, **_run_op(pool, op))
        except RewardPoolError as exc:
            row.update(ok=False, error=type(exc).__name__)
        out.append(row)
    return out


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Replay an operation trace against a reward pool.")
    ap.add_argument("trace", type=Path, help="YAML or JSON trace file")
    ap.add_argument("-v", "--verbose", action="store_true", help="log engine decisions")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        rows = replay(_load_trace(args.trace))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"[pool-replay] FAIL: {exc}", file=sys.stderr)
        return 1
    for row in rows:
        print(json.dumps(row, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
