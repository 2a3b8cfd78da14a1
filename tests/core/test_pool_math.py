"""Tests for rewardpool/core/math.py: pure arithmetic functions."""

from rewardpool.core.math import (
    SCALE,
    SECONDS_PER_DAY,
    acc_increment,
    accrual_window,
    accrued_reward,
    accumulated,
    campaign_end,
    clamp_to_budget,
    daily_rate,
    hourly_rate,
    pending,
    unlock_time,
)

DAY = SECONDS_PER_DAY


# ---------------------------------------------------------------------------
# Emission rate
# ---------------------------------------------------------------------------

class TestRates:
    def test_daily_exact(self):
        assert daily_rate(1000, 10) == 100

    def test_daily_truncates(self):
        assert daily_rate(1000, 3) == 333

    def test_hourly(self):
        assert hourly_rate(2400, 1) == 100

    def test_hourly_truncates_daily_first(self):
        # 1000 // 10 = 100, 100 // 24 = 4
        assert hourly_rate(1000, 10) == 4


# ---------------------------------------------------------------------------
# Campaign window
# ---------------------------------------------------------------------------

class TestWindow:
    def test_campaign_end(self):
        assert campaign_end(1_000, 10) == 1_000 + 10 * DAY

    def test_unlock_time(self):
        assert unlock_time(500, 2) == 500 + 2 * DAY

    def test_unlock_time_no_lockin(self):
        assert unlock_time(500, 0) == 500

    def test_accrual_window_inside_campaign(self):
        assert accrual_window(100, 400, 10 * DAY) == 300

    def test_accrual_window_capped_at_end(self):
        assert accrual_window(9 * DAY, 20 * DAY, 10 * DAY) == DAY

    def test_accrual_window_after_end(self):
        assert accrual_window(11 * DAY, 20 * DAY, 10 * DAY) == 0

    def test_accrual_window_never_negative(self):
        assert accrual_window(500, 100, 10 * DAY) == 0


# ---------------------------------------------------------------------------
# Accumulator arithmetic
# ---------------------------------------------------------------------------

class TestAccumulator:
    def test_accrued_full_day(self):
        assert accrued_reward(100, DAY) == 100

    def test_accrued_truncates(self):
        # 100 * 1 / 86400 < 1
        assert accrued_reward(100, 1) == 0
        assert accrued_reward(100, 864) == 1

    def test_increment(self):
        assert acc_increment(500, 100) == 5 * SCALE

    def test_increment_truncates(self):
        assert acc_increment(333, 7) == 47_571_428_571_428_571_428

    def test_increment_no_stake(self):
        assert acc_increment(500, 0) == 0

    def test_accumulated(self):
        assert accumulated(100, 5 * SCALE) == 500

    def test_accumulated_truncates(self):
        assert accumulated(7, 47_571_428_571_428_571_428) == 332

    def test_pending(self):
        assert pending(100, 7 * SCALE, 500) == 200


class TestClamp:
    def test_below_remaining(self):
        assert clamp_to_budget(10, 1000, 0) == 10

    def test_capped(self):
        assert clamp_to_budget(150, 1000, 900) == 100

    def test_exhausted(self):
        assert clamp_to_budget(5, 1000, 1000) == 0
