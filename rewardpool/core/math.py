"""Pure arithmetic for the reward pool engine.

Every function is stateless and operates on plain Python ints, which are
arbitrary precision, so the scaled accumulator and debt values cannot overflow.

Rounding is explicit: every division is Python's ``//`` on non-negative
operands, i.e. truncation toward zero, applied in the same order as the
emission formula (rate first, then elapsed time, then per-share scaling).
"""

from __future__ import annotations

# Fixed-point scale for acc_per_share (1e18)
SCALE: int = 10**18
SECONDS_PER_DAY: int = 86_400
HOURS_PER_DAY: int = 24


# -- Emission rate -----------------------------------------------------------

def daily_rate(distribution_budget: int, duration_days: int) -> int:
    """Reward released per day: ``budget // duration_days``."""
    return distribution_budget // duration_days


def hourly_rate(distribution_budget: int, duration_days: int) -> int:
    """Reward released per hour (truncated daily rate / 24)."""
    return daily_rate(distribution_budget, duration_days) // HOURS_PER_DAY


# -- Campaign window ---------------------------------------------------------

def campaign_end(start_time: int, duration_days: int) -> int:
    """First instant at which deposits are refused and emission stops."""
    return start_time + duration_days * SECONDS_PER_DAY


def unlock_time(stake_timestamp: int, lockin_days: int) -> int:
    """First instant at which a deposit made at ``stake_timestamp`` may be withdrawn."""
    return stake_timestamp + lockin_days * SECONDS_PER_DAY


def accrual_window(last_advance_time: int, now: int, end_time: int) -> int:
    """Seconds of emission between the last advance and ``now``.

    Emission stops at ``end_time``; the result is never negative.
    """
    upto = now if now < end_time else end_time
    if upto <= last_advance_time:
        return 0
    return upto - last_advance_time


# -- Accumulator -------------------------------------------------------------

def accrued_reward(rate_per_day: int, elapsed: int) -> int:
    """Reward emitted over ``elapsed`` seconds: ``rate * elapsed // 86400``."""
    return (rate_per_day * elapsed) // SECONDS_PER_DAY


def acc_increment(accrued: int, total_staked: int) -> int:
    """Accumulator delta: ``accrued * SCALE // total_staked``."""
    if total_staked == 0:
        return 0
    return (accrued * SCALE) // total_staked


def accumulated(amount_staked: int, acc_per_share: int) -> int:
    """Reward units owed to ``amount_staked`` at ``acc_per_share`` since inception."""
    return (amount_staked * acc_per_share) // SCALE


def pending(amount_staked: int, acc_per_share: int, reward_debt: int) -> int:
    """Reward accrued since the last settlement."""
    return accumulated(amount_staked, acc_per_share) - reward_debt


def clamp_to_budget(reward: int, distribution_budget: int, total_reward_paid: int) -> int:
    """Cap a payout at the budget that has not been paid yet."""
    remaining = distribution_budget - total_reward_paid
    if remaining <= 0:
        return 0
    return reward if reward < remaining else remaining
