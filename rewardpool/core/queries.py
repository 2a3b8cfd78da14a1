"""Read-only query surface.

Pure functions of the current state; none of them advances the accumulator.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import math as pmath
from .types import Participant, PoolConfig, PoolState


@dataclass(frozen=True)
class StakerDetail:
    participant: Participant
    amount_staked: int
    reward_claimed: int
    stake_timestamp: int
    is_active: bool


def daily_emission_rate(config: PoolConfig) -> int:
    return pmath.daily_rate(config.distribution_budget, config.duration_days)


def hourly_emission_rate(config: PoolConfig) -> int:
    return pmath.hourly_rate(config.distribution_budget, config.duration_days)


def remaining_budget(state: PoolState, config: PoolConfig) -> int:
    """Budget not yet paid out: ``distribution_budget - total_reward_paid``."""
    return config.distribution_budget - state.total_reward_paid


def active_count(state: PoolState) -> int:
    return state.active_count


def total_staked(state: PoolState) -> int:
    return state.total_staked


def all_participants(state: PoolState) -> list[Participant]:
    return list(state.all_participants)


def active_participants(state: PoolState) -> list[Participant]:
    """Active roster as recorded (append-only; may repeat returning participants)."""
    return list(state.active_participants)


def staker_detail(state: PoolState, participant: Participant) -> StakerDetail | None:
    """Per-participant detail, or None for a participant never seen."""
    rec = state.stakers.get(participant)
    if rec is None:
        return None
    return StakerDetail(
        participant=rec.participant,
        amount_staked=rec.amount_staked,
        reward_claimed=rec.reward_claimed,
        stake_timestamp=rec.stake_timestamp,
        is_active=rec.is_active,
    )


def campaign_end(config: PoolConfig) -> int:
    return pmath.campaign_end(config.start_time, config.duration_days)


def is_campaign_open(config: PoolConfig, now: int) -> bool:
    return now < campaign_end(config)


def unlock_time(state: PoolState, config: PoolConfig, participant: Participant) -> int | None:
    """When the participant's current deposit may be withdrawn (None if no position)."""
    rec = state.stakers.get(participant)
    if rec is None or not rec.is_active:
        return None
    return pmath.unlock_time(rec.stake_timestamp, config.lockin_days)
