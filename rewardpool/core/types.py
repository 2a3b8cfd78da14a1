"""Data types for the reward pool engine.

All types are frozen dataclasses (immutable). Transitions build new values via
``dataclasses.replace()``; the ``stakers`` mapping of a ``PoolState`` is never
mutated in place, a new dict is built on every change.

Units/conventions:
- timestamps and durations are integer seconds (``*_days`` fields are days),
- amounts are integer asset units,
- ``acc_per_share`` is reward-per-unit-staked scaled by ``SCALE`` (1e18),
- ``reward_debt`` is in asset units (``amount_staked * acc_per_share // SCALE``
  at the last settlement).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Mapping

from .errors import PoolConfigError

Participant = str


@unique
class Action(Enum):
    """One member per engine action."""
    ADVANCE = "advance"
    STAKE = "stake"
    UNSTAKE = "unstake"
    CLAIM_REWARD = "claim_reward"


@unique
class Event(Enum):
    """Notification kinds observed by external consumers."""
    ADVANCED = "Advanced"
    STAKED = "Staked"
    UNSTAKED = "Unstaked"
    REWARD_CLAIMED = "RewardClaimed"


@unique
class TransferKind(Enum):
    PULL = "pull"  # participant -> pool
    PUSH = "push"  # pool -> participant


@dataclass(frozen=True)
class PoolConfig:
    """Pool parameters, fixed at creation."""

    asset_id: str
    distribution_budget: int
    duration_days: int
    lockin_days: int = 0
    start_time: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.asset_id, str) or not self.asset_id:
            raise PoolConfigError("asset_id must be a non-empty str")
        for name in ("distribution_budget", "duration_days", "lockin_days", "start_time"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise PoolConfigError(f"{name} must be an int")
        if self.distribution_budget <= 0:
            raise PoolConfigError("distribution_budget must be positive")
        if self.duration_days <= 0:
            raise PoolConfigError("duration_days must be positive")
        if self.lockin_days < 0:
            raise PoolConfigError("lockin_days must be non-negative")
        if self.start_time < 0:
            raise PoolConfigError("start_time must be non-negative")


@dataclass(frozen=True)
class StakerRecord:
    """Per-participant ledger entry. Created on first stake, never deleted."""

    participant: Participant
    amount_staked: int = 0
    reward_debt: int = 0
    reward_claimed: int = 0
    stake_timestamp: int = 0
    is_active: bool = False


@dataclass(frozen=True)
class PoolState:
    """Complete mutable-by-replacement state of one reward pool."""

    # Accumulator
    last_advance_time: int = 0
    acc_per_share: int = 0

    # Totals
    total_staked: int = 0
    total_reward_paid: int = 0
    active_count: int = 0

    # Staker ledger + rosters
    stakers: Mapping[Participant, StakerRecord] = field(default_factory=dict)
    all_participants: tuple[Participant, ...] = ()
    active_participants: tuple[Participant, ...] = ()

    def record(self, participant: Participant) -> StakerRecord:
        """Return the participant's record, or an empty one if unseen."""
        rec = self.stakers.get(participant)
        if rec is None:
            return StakerRecord(participant=participant)
        return rec


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. ``now`` is read from the clock by the caller."""

    action: Action
    now: int
    participant: Participant = ""   # stake / unstake / claim_reward
    amount: int = 0                 # stake


@dataclass(frozen=True)
class Transfer:
    """Asset movement the shell must perform before committing the post-state."""

    kind: TransferKind
    participant: Participant
    amount: int


@dataclass(frozen=True)
class Notification:
    event: Event
    participant: Participant
    amount: int


@dataclass(frozen=True)
class Effect:
    """Post-state observables emitted after a successful step."""

    event: Event
    transfer: Transfer | None = None
    notifications: tuple[Notification, ...] = ()
    principal: int = 0
    reward: int = 0
    acc_per_share_after: int = 0
    total_staked_after: int = 0
    total_reward_paid_after: int = 0


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step."""

    accepted: bool
    state: PoolState | None = None
    effect: Effect | None = None
    rejection: str | None = None
