"""Guard functions for the reward pool engine.

One pure function per action. Each is evaluated against the state *after* the
accumulator has been advanced to ``params.now`` and returns ``None`` when the
action is allowed, or the rejection code otherwise.
"""

from __future__ import annotations

from .accumulator import payable_reward
from .errors import CampaignClosed, InvalidAmount, NoRewardDue, NothingToWithdraw, StillLocked
from .math import campaign_end, unlock_time
from .types import ActionParams, PoolConfig, PoolState


def guard_advance(state: PoolState, config: PoolConfig, params: ActionParams) -> str | None:
    return None


def guard_stake(state: PoolState, config: PoolConfig, params: ActionParams) -> str | None:
    if params.amount <= 0:
        return InvalidAmount.code
    if params.now >= campaign_end(config.start_time, config.duration_days):
        return CampaignClosed.code
    return None


def guard_unstake(state: PoolState, config: PoolConfig, params: ActionParams) -> str | None:
    rec = state.record(params.participant)
    if rec.amount_staked == 0:
        return NothingToWithdraw.code
    if params.now < unlock_time(rec.stake_timestamp, config.lockin_days):
        return StillLocked.code
    return None


def guard_claim_reward(state: PoolState, config: PoolConfig, params: ActionParams) -> str | None:
    rec = state.record(params.participant)
    if not rec.is_active or rec.amount_staked == 0:
        return NothingToWithdraw.code
    if payable_reward(state, config, params.participant) <= 0:
        return NoRewardDue.code
    return None
