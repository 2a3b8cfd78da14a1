"""Exception types for the reward pool engine.

The functional core never raises for a rejected action; ``step()`` returns a
``StepResult`` carrying a rejection code. ``step_or_raise()`` and the
integration shell translate those codes into the exceptions below.

Every error leaves the pool exactly as it was before the call.
"""

from __future__ import annotations


class RewardPoolError(Exception):
    """Base class for all reward pool errors."""

    code = "error"


class InvalidAmount(RewardPoolError):
    """Raised when a stake amount is zero or negative."""

    code = "invalid_amount"


class CampaignClosed(RewardPoolError):
    """Raised when a deposit arrives at or after the end of the campaign."""

    code = "campaign_closed"


class NothingToWithdraw(RewardPoolError):
    """Raised when unstake/claim is called without an active position."""

    code = "nothing_to_withdraw"


class StillLocked(RewardPoolError):
    """Raised when unstake is called before the lock-in period has elapsed."""

    code = "still_locked"


class NoRewardDue(RewardPoolError):
    """Raised when claim is called while the pending reward is zero."""

    code = "no_reward_due"


class TransferFailed(RewardPoolError):
    """Raised when the asset ledger rejects a pull or push."""

    code = "transfer_failed"


class InvalidParameter(RewardPoolError):
    """Raised when an action parameter is outside its domain (type or bounds)."""

    code = "param_domain"


class PoolInvariantError(RewardPoolError):
    """Raised when a post-state violates one or more invariants."""

    code = "invariant"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class PoolConfigError(RewardPoolError, ValueError):
    """Raised when pool creation parameters are invalid."""

    code = "config"


_GUARD_ERRORS: dict[str, type[RewardPoolError]] = {
    cls.code: cls
    for cls in (
        InvalidAmount,
        CampaignClosed,
        NothingToWithdraw,
        StillLocked,
        NoRewardDue,
        TransferFailed,
    )
}


def error_for_rejection(reason: str) -> RewardPoolError:
    """Build the exception matching a ``StepResult.rejection`` string."""
    if reason.startswith("param_domain:"):
        return InvalidParameter(reason)
    if reason.startswith("invariant:"):
        return PoolInvariantError(reason.removeprefix("invariant:").split(","))
    cls = _GUARD_ERRORS.get(reason)
    if cls is None:
        return RewardPoolError(reason)
    return cls(reason)
