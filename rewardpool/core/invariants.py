"""Invariant checkers for the reward pool engine.

Each ``inv_*`` function returns True when the invariant holds for a state.
``check_all()`` returns the list of violated invariant IDs (empty = all pass).

``check_transition()`` covers the properties that relate two consecutive
states (monotonicity) and cannot be seen on a single state.
"""

from __future__ import annotations

from typing import Callable

from .math import accumulated
from .types import Participant, PoolConfig, PoolState, StakerRecord


def inv_totals_nonneg(s: PoolState, config: PoolConfig) -> bool:
    return (
        s.total_staked >= 0
        and s.total_reward_paid >= 0
        and s.active_count >= 0
        and s.acc_per_share >= 0
    )


def inv_budget_conserved(s: PoolState, config: PoolConfig) -> bool:
    return s.total_reward_paid <= config.distribution_budget


def inv_total_staked_matches_active(s: PoolState, config: PoolConfig) -> bool:
    return s.total_staked == sum(r.amount_staked for r in s.stakers.values() if r.is_active)


def inv_active_count_matches_records(s: PoolState, config: PoolConfig) -> bool:
    return s.active_count == sum(1 for r in s.stakers.values() if r.is_active)


def inv_active_count_within_roster(s: PoolState, config: PoolConfig) -> bool:
    return s.active_count <= len(s.active_participants)


def inv_active_iff_staked(s: PoolState, config: PoolConfig) -> bool:
    for r in s.stakers.values():
        if r.is_active != (r.amount_staked > 0):
            return False
    return True


def inv_inactive_debt_zeroed(s: PoolState, config: PoolConfig) -> bool:
    return all(r.reward_debt == 0 for r in s.stakers.values() if not r.is_active)


def inv_debt_within_accumulated(s: PoolState, config: PoolConfig) -> bool:
    for r in s.stakers.values():
        if r.reward_debt < 0 or r.reward_debt > accumulated(r.amount_staked, s.acc_per_share):
            return False
    return True


def inv_claimed_sum_matches_paid(s: PoolState, config: PoolConfig) -> bool:
    return s.total_reward_paid == sum(r.reward_claimed for r in s.stakers.values())


def inv_roster_unique(s: PoolState, config: PoolConfig) -> bool:
    return len(set(s.all_participants)) == len(s.all_participants)


def inv_roster_matches_records(s: PoolState, config: PoolConfig) -> bool:
    return set(s.all_participants) == set(s.stakers)


def inv_active_roster_known(s: PoolState, config: PoolConfig) -> bool:
    known = set(s.all_participants)
    return all(p in known for p in s.active_participants)


def inv_active_records_listed(s: PoolState, config: PoolConfig) -> bool:
    listed = set(s.active_participants)
    return all(p in listed for p, r in s.stakers.items() if r.is_active)


def inv_record_keys_match(s: PoolState, config: PoolConfig) -> bool:
    return all(p == r.participant for p, r in s.stakers.items())


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[PoolState, PoolConfig], bool]] = {
    "inv_totals_nonneg": inv_totals_nonneg,
    "inv_budget_conserved": inv_budget_conserved,
    "inv_total_staked_matches_active": inv_total_staked_matches_active,
    "inv_active_count_matches_records": inv_active_count_matches_records,
    "inv_active_count_within_roster": inv_active_count_within_roster,
    "inv_active_iff_staked": inv_active_iff_staked,
    "inv_inactive_debt_zeroed": inv_inactive_debt_zeroed,
    "inv_debt_within_accumulated": inv_debt_within_accumulated,
    "inv_claimed_sum_matches_paid": inv_claimed_sum_matches_paid,
    "inv_roster_unique": inv_roster_unique,
    "inv_roster_matches_records": inv_roster_matches_records,
    "inv_active_roster_known": inv_active_roster_known,
    "inv_active_records_listed": inv_active_records_listed,
    "inv_record_keys_match": inv_record_keys_match,
}


def check_all(state: PoolState, config: PoolConfig) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state, config)
    ]


def check_transition(pre: PoolState, post: PoolState) -> list[str]:
    """Return violated monotonicity IDs between two consecutive states."""
    violations: list[str] = []
    if post.acc_per_share < pre.acc_per_share:
        violations.append("mono_acc_per_share")
    if post.last_advance_time < pre.last_advance_time:
        violations.append("mono_last_advance_time")
    if post.total_reward_paid < pre.total_reward_paid:
        violations.append("mono_total_reward_paid")
    for participant, rec in pre.stakers.items():
        after = post.stakers.get(participant)
        if after is None:
            violations.append("mono_records_kept")
            break
        if after.reward_claimed < rec.reward_claimed:
            violations.append("mono_reward_claimed")
            break
    if post.all_participants[: len(pre.all_participants)] != pre.all_participants:
        violations.append("mono_all_participants_append_only")
    if post.active_participants[: len(pre.active_participants)] != pre.active_participants:
        violations.append("mono_active_participants_append_only")
    return violations


# ---------------------------------------------------------------------------
# Per-step check
# ---------------------------------------------------------------------------

def _active_amount(rec: StakerRecord) -> int:
    return rec.amount_staked if rec.is_active else 0


def check_step(pre: PoolState, post: PoolState, config: PoolConfig, participant: Participant) -> list[str]:
    """Violations introduced by one step that touched at most ``participant``.

    Same ids as ``check_all`` + ``check_transition``, but only the touched
    record is inspected and the aggregates are checked by their deltas, so the
    cost does not grow with the number of stakers. Untouched records keep their
    validity: their fields are unchanged and ``acc_per_share`` only grows.
    Assumes ``pre`` satisfied ``check_all``.
    """
    violations = [
        inv_id
        for inv_id, check_fn in (
            ("inv_totals_nonneg", inv_totals_nonneg),
            ("inv_budget_conserved", inv_budget_conserved),
            ("inv_active_count_within_roster", inv_active_count_within_roster),
        )
        if not check_fn(post, config)
    ]

    before = pre.stakers.get(participant)
    after = post.stakers.get(participant)
    if before is not None and after is None:
        violations.append("mono_records_kept")
    old = before if before is not None else StakerRecord(participant=participant)
    new = after if after is not None else StakerRecord(participant=participant)

    if after is not None:
        if after.participant != participant:
            violations.append("inv_record_keys_match")
        if after.is_active != (after.amount_staked > 0):
            violations.append("inv_active_iff_staked")
        if not after.is_active and after.reward_debt != 0:
            violations.append("inv_inactive_debt_zeroed")
        if after.reward_debt < 0 or after.reward_debt > accumulated(after.amount_staked, post.acc_per_share):
            violations.append("inv_debt_within_accumulated")

    if post.total_staked - pre.total_staked != _active_amount(new) - _active_amount(old):
        violations.append("inv_total_staked_matches_active")
    if post.active_count - pre.active_count != int(new.is_active) - int(old.is_active):
        violations.append("inv_active_count_matches_records")
    if post.total_reward_paid - pre.total_reward_paid != new.reward_claimed - old.reward_claimed:
        violations.append("inv_claimed_sum_matches_paid")
    if len(post.stakers) - len(pre.stakers) != int(before is None and after is not None):
        violations.append("inv_roster_matches_records")

    # Rosters: unchanged (same tuple) or exactly one append of the touched participant.
    grown = len(post.all_participants) - len(pre.all_participants)
    if grown == 0:
        if post.all_participants is not pre.all_participants:
            violations.append("mono_all_participants_append_only")
    elif grown != 1 or post.all_participants[-1] != participant or before is not None:
        violations.append("mono_all_participants_append_only")
    if len(post.all_participants) != len(post.stakers):
        violations.append("inv_roster_unique")

    grown = len(post.active_participants) - len(pre.active_participants)
    if grown == 0:
        if post.active_participants is not pre.active_participants:
            violations.append("mono_active_participants_append_only")
        if new.is_active and not old.is_active:
            violations.append("inv_active_records_listed")
    elif grown != 1 or post.active_participants[-1] != participant:
        violations.append("mono_active_participants_append_only")
    elif after is None:
        violations.append("inv_active_roster_known")

    if post.acc_per_share < pre.acc_per_share:
        violations.append("mono_acc_per_share")
    if post.last_advance_time < pre.last_advance_time:
        violations.append("mono_last_advance_time")
    if post.total_reward_paid < pre.total_reward_paid:
        violations.append("mono_total_reward_paid")
    if new.reward_claimed < old.reward_claimed:
        violations.append("mono_reward_claimed")
    return violations
