"""Accumulator engine: lazy advance of the global reward-per-share value.

The accumulator is advanced synchronously at the top of every lifecycle action
(and may be advanced on its own through ``Action.ADVANCE``). There is no
background timer: elapsed time is priced in whenever the pool is touched.

``pending_reward()`` projects the advance without committing it and must agree
exactly with ``advance()`` followed by a read.
"""

from __future__ import annotations

from dataclasses import replace

from .math import (
    acc_increment,
    accrual_window,
    accrued_reward,
    campaign_end,
    clamp_to_budget,
    daily_rate,
    pending,
)
from .types import Participant, PoolConfig, PoolState


def projected_acc_per_share(state: PoolState, config: PoolConfig, now: int) -> int:
    """Accumulator value ``advance(state, config, now)`` would produce."""
    if now <= state.last_advance_time or state.total_staked == 0:
        return state.acc_per_share
    elapsed = accrual_window(
        state.last_advance_time, now,
        campaign_end(config.start_time, config.duration_days),
    )
    accrued = accrued_reward(daily_rate(config.distribution_budget, config.duration_days), elapsed)
    return state.acc_per_share + acc_increment(accrued, state.total_staked)


def advance(state: PoolState, config: PoolConfig, now: int) -> PoolState:
    """Bring the accumulator up to ``now``.

    - ``now <= last_advance_time``: no-op (duplicate or stale timestamp).
    - nothing staked: only the timestamp moves; the interval's emission is forfeited.
    - otherwise: price the elapsed emission into ``acc_per_share``.
    """
    if now <= state.last_advance_time:
        return state
    return replace(
        state,
        acc_per_share=projected_acc_per_share(state, config, now),
        last_advance_time=now,
    )


def pending_reward(state: PoolState, config: PoolConfig, participant: Participant, now: int) -> int:
    """Reward the participant could settle at ``now``. 0 without an active stake."""
    rec = state.stakers.get(participant)
    if rec is None or not rec.is_active or rec.amount_staked == 0:
        return 0
    acc = projected_acc_per_share(state, config, now)
    return pending(rec.amount_staked, acc, rec.reward_debt)


def payable_reward(state: PoolState, config: PoolConfig, participant: Participant) -> int:
    """Settlement amount against the current (already advanced) accumulator.

    Equal to the pending reward, capped at the unpaid budget.
    """
    rec = state.stakers.get(participant)
    if rec is None or not rec.is_active or rec.amount_staked == 0:
        return 0
    reward = pending(rec.amount_staked, state.acc_per_share, rec.reward_debt)
    return clamp_to_budget(reward, config.distribution_budget, state.total_reward_paid)
