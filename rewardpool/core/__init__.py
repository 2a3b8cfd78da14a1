"""`rewardpool.core`: pure-Python functional core of the reward pool.

- deterministic, integer-only transitions,
- immutable state (frozen dataclasses),
- fail-closed guards and invariant checks.

Public API:
- `initial_state(config) -> PoolState`
- `step(state, config, params) -> StepResult`
- `step_or_raise(state, config, params) -> StepResult` (raises on rejection)
- `advance(state, config, now)` / `pending_reward(state, config, participant, now)`
"""

from .accumulator import advance, pending_reward, projected_acc_per_share
from .engine import step, step_or_raise
from .errors import (
    CampaignClosed,
    InvalidAmount,
    InvalidParameter,
    NoRewardDue,
    NothingToWithdraw,
    PoolConfigError,
    PoolInvariantError,
    RewardPoolError,
    StillLocked,
    TransferFailed,
)
from .math import SCALE, SECONDS_PER_DAY
from .queries import StakerDetail
from .state import config_from_dict, config_to_dict, initial_state, state_from_dict, state_to_dict
from .types import (
    Action,
    ActionParams,
    Effect,
    Event,
    Notification,
    PoolConfig,
    PoolState,
    StakerRecord,
    StepResult,
    Transfer,
    TransferKind,
)

__all__ = [
    "advance",
    "pending_reward",
    "projected_acc_per_share",
    "step",
    "step_or_raise",
    "initial_state",
    "state_from_dict",
    "state_to_dict",
    "config_from_dict",
    "config_to_dict",
    "SCALE",
    "SECONDS_PER_DAY",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "Notification",
    "PoolConfig",
    "PoolState",
    "StakerRecord",
    "StakerDetail",
    "StepResult",
    "Transfer",
    "TransferKind",
    "RewardPoolError",
    "InvalidAmount",
    "CampaignClosed",
    "NothingToWithdraw",
    "StillLocked",
    "NoRewardDue",
    "TransferFailed",
    "InvalidParameter",
    "PoolInvariantError",
    "PoolConfigError",
]
