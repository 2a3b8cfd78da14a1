"""Tests for rewardpool/core/state.py and types.py: construction + serialization."""

import json

import pytest

from rewardpool.core import (
    Action,
    ActionParams,
    PoolConfig,
    PoolConfigError,
    SECONDS_PER_DAY,
    config_from_dict,
    config_to_dict,
    initial_state,
    state_from_dict,
    state_to_dict,
    step,
)

DAY = SECONDS_PER_DAY
CFG = PoolConfig(asset_id="0x01", distribution_budget=1000, duration_days=10, lockin_days=1, start_time=50)


def _busy_state():
    s = initial_state(CFG)
    for params in (
        ActionParams(action=Action.STAKE, now=50, participant="alice", amount=100),
        ActionParams(action=Action.STAKE, now=50 + DAY, participant="bob", amount=300),
        ActionParams(action=Action.UNSTAKE, now=50 + 3 * DAY, participant="alice"),
        ActionParams(action=Action.STAKE, now=50 + 4 * DAY, participant="alice", amount=7),
    ):
        r = step(s, CFG, params)
        assert r.accepted, r.rejection
        s = r.state
    return s


class TestInitialState:
    def test_anchored_at_start(self):
        s = initial_state(CFG)
        assert s.last_advance_time == 50
        assert s.acc_per_share == 0
        assert s.total_staked == 0
        assert s.stakers == {}

    def test_record_for_unseen_participant(self):
        rec = initial_state(CFG).record("nobody")
        assert rec.participant == "nobody"
        assert rec.amount_staked == 0
        assert rec.is_active is False


class TestRoundTrip:
    def test_initial(self):
        s = initial_state(CFG)
        assert state_from_dict(state_to_dict(s)) == s

    def test_busy(self):
        s = _busy_state()
        assert state_from_dict(state_to_dict(s)) == s

    def test_json_compatible(self):
        s = _busy_state()
        assert state_from_dict(json.loads(json.dumps(state_to_dict(s)))) == s

    def test_config(self):
        assert config_from_dict(config_to_dict(CFG)) == CFG

    def test_records_follow_roster_order(self):
        d = state_to_dict(_busy_state())
        assert [r["participant"] for r in d["stakers"]] == ["alice", "bob"]
        assert d["active_participants"] == ["alice", "bob", "alice"]


class TestDecodeErrors:
    def test_missing_field(self):
        d = state_to_dict(initial_state(CFG))
        del d["acc_per_share"]
        with pytest.raises(KeyError):
            state_from_dict(d)

    def test_bool_rejected_as_int(self):
        d = state_to_dict(initial_state(CFG))
        d["total_staked"] = True
        with pytest.raises(TypeError):
            state_from_dict(d)

    def test_duplicate_record(self):
        d = state_to_dict(_busy_state())
        d["stakers"].append(dict(d["stakers"][0]))
        with pytest.raises(ValueError):
            state_from_dict(d)


class TestPoolConfigValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(asset_id="", distribution_budget=1, duration_days=1),
            dict(asset_id="0x01", distribution_budget=0, duration_days=1),
            dict(asset_id="0x01", distribution_budget=1, duration_days=0),
            dict(asset_id="0x01", distribution_budget=1, duration_days=1, lockin_days=-1),
            dict(asset_id="0x01", distribution_budget=1, duration_days=1, start_time=-1),
            dict(asset_id="0x01", distribution_budget=1.5, duration_days=1),
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(PoolConfigError):
            PoolConfig(**kwargs)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            PoolConfig(asset_id="0x01", distribution_budget=-1, duration_days=1)
