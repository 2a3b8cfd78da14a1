"""State construction and serialization for the reward pool.

`initial_state(config)` returns the state of a freshly created pool: nothing
staked, accumulator at zero, clock anchored at the campaign start.

Round-trip property (tested): `state_from_dict(state_to_dict(s)) == s` and
`config_from_dict(config_to_dict(c)) == c`.
"""

from __future__ import annotations

from typing import Any, Mapping

from .types import PoolConfig, PoolState, StakerRecord

# Auto-derived from the dataclass field definitions (single source of truth).
CONFIG_VAR_NAMES: tuple[str, ...] = tuple(PoolConfig.__dataclass_fields__)
RECORD_VAR_NAMES: tuple[str, ...] = tuple(StakerRecord.__dataclass_fields__)
_SCALAR_STATE_VARS: tuple[str, ...] = (
    "last_advance_time",
    "acc_per_share",
    "total_staked",
    "total_reward_paid",
    "active_count",
)


def initial_state(config: PoolConfig) -> PoolState:
    """Return the state of a pool created at ``config.start_time``."""
    return PoolState(last_advance_time=config.start_time)


def _int_field(d: Mapping[str, Any], name: str) -> int:
    val = d[name]
    if not isinstance(val, int) or isinstance(val, bool):
        raise TypeError(f"{name!r} must be int, got {type(val).__name__}")
    return int(val)  # normalize int subclasses


def _str_field(d: Mapping[str, Any], name: str) -> str:
    val = d[name]
    if not isinstance(val, str):
        raise TypeError(f"{name!r} must be str, got {type(val).__name__}")
    return val


def config_to_dict(config: PoolConfig) -> dict[str, Any]:
    return {name: getattr(config, name) for name in CONFIG_VAR_NAMES}


def config_from_dict(d: Mapping[str, Any]) -> PoolConfig:
    """Deserialize a PoolConfig. Raises KeyError on missing fields."""
    return PoolConfig(
        asset_id=_str_field(d, "asset_id"),
        distribution_budget=_int_field(d, "distribution_budget"),
        duration_days=_int_field(d, "duration_days"),
        lockin_days=_int_field(d, "lockin_days"),
        start_time=_int_field(d, "start_time"),
    )


def record_to_dict(rec: StakerRecord) -> dict[str, Any]:
    return {name: getattr(rec, name) for name in RECORD_VAR_NAMES}


def record_from_dict(d: Mapping[str, Any]) -> StakerRecord:
    is_active = d["is_active"]
    if not isinstance(is_active, bool):
        raise TypeError(f"'is_active' must be bool, got {type(is_active).__name__}")
    return StakerRecord(
        participant=_str_field(d, "participant"),
        amount_staked=_int_field(d, "amount_staked"),
        reward_debt=_int_field(d, "reward_debt"),
        reward_claimed=_int_field(d, "reward_claimed"),
        stake_timestamp=_int_field(d, "stake_timestamp"),
        is_active=is_active,
    )


def state_to_dict(state: PoolState) -> dict[str, Any]:
    """Serialize a PoolState to plain JSON-compatible values.

    Records are emitted in ``all_participants`` order so the output does not
    depend on dict iteration order.
    """
    out: dict[str, Any] = {name: getattr(state, name) for name in _SCALAR_STATE_VARS}
    out["stakers"] = [record_to_dict(state.stakers[p]) for p in state.all_participants]
    out["all_participants"] = list(state.all_participants)
    out["active_participants"] = list(state.active_participants)
    return out


def state_from_dict(d: Mapping[str, Any]) -> PoolState:
    """Deserialize a dict to a PoolState. Raises KeyError on missing fields."""
    kwargs: dict[str, Any] = {name: _int_field(d, name) for name in _SCALAR_STATE_VARS}
    stakers: dict[str, StakerRecord] = {}
    for item in d["stakers"]:
        rec = record_from_dict(item)
        if rec.participant in stakers:
            raise ValueError(f"duplicate staker record {rec.participant!r}")
        stakers[rec.participant] = rec
    for name in ("all_participants", "active_participants"):
        seq = d[name]
        if not isinstance(seq, (list, tuple)) or not all(isinstance(p, str) for p in seq):
            raise TypeError(f"{name!r} must be a list of str")
        kwargs[name] = tuple(seq)
    return PoolState(stakers=stakers, **kwargs)
