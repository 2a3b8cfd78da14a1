"""State transition functions for the reward pool engine.

One pure function per action. Each receives the state *after* the accumulator
advance and returns the post-state; guards have already passed.

Settlement rules:
- ``stake`` recomputes ``reward_debt`` from the post-deposit balance, so any
  accrual on the pre-existing balance that was not claimed beforehand is
  forfeited. This is intentional and preserved exactly.
- ``unstake`` and ``claim_reward`` pay the pending reward (capped at the
  unpaid budget) and reset the debt.
"""

from __future__ import annotations

from dataclasses import replace

from .accumulator import advance, payable_reward
from .math import accumulated
from .types import ActionParams, PoolConfig, PoolState, StakerRecord


def _with_record(state: PoolState, rec: StakerRecord) -> dict[str, StakerRecord]:
    stakers = dict(state.stakers)
    stakers[rec.participant] = rec
    return stakers


def apply_advance(state: PoolState, config: PoolConfig, params: ActionParams) -> PoolState:
    return advance(state, config, params.now)


def apply_stake(state: PoolState, config: PoolConfig, params: ActionParams) -> PoolState:
    participant = params.participant
    rec = state.record(participant)

    all_participants = state.all_participants
    if participant not in state.stakers:
        all_participants = all_participants + (participant,)

    active_participants = state.active_participants
    active_count = state.active_count
    if not rec.is_active:
        # Append-only: a returning participant is listed again.
        active_participants = active_participants + (participant,)
        active_count += 1

    new_amount = rec.amount_staked + params.amount
    new_rec = replace(
        rec,
        amount_staked=new_amount,
        reward_debt=accumulated(new_amount, state.acc_per_share),
        stake_timestamp=params.now,
        is_active=True,
    )
    return replace(
        state,
        stakers=_with_record(state, new_rec),
        all_participants=all_participants,
        active_participants=active_participants,
        active_count=active_count,
        total_staked=state.total_staked + params.amount,
    )


def apply_unstake(state: PoolState, config: PoolConfig, params: ActionParams) -> PoolState:
    rec = state.record(params.participant)
    reward = payable_reward(state, config, params.participant)
    new_rec = replace(
        rec,
        amount_staked=0,
        reward_debt=0,
        reward_claimed=rec.reward_claimed + reward,
        is_active=False,
    )
    return replace(
        state,
        stakers=_with_record(state, new_rec),
        active_count=state.active_count - 1,
        total_staked=state.total_staked - rec.amount_staked,
        total_reward_paid=state.total_reward_paid + reward,
    )


def apply_claim_reward(state: PoolState, config: PoolConfig, params: ActionParams) -> PoolState:
    rec = state.record(params.participant)
    reward = payable_reward(state, config, params.participant)
    new_rec = replace(
        rec,
        reward_debt=accumulated(rec.amount_staked, state.acc_per_share),
        reward_claimed=rec.reward_claimed + reward,
    )
    return replace(
        state,
        stakers=_with_record(state, new_rec),
        total_reward_paid=state.total_reward_paid + reward,
    )
