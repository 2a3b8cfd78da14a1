"""Dispatch-table engine for the reward pool.

``step(state, config, params)`` is the single entry point. It:

1. Validates parameter domains (types and bounds).
2. Advances the accumulator to ``params.now`` (every action, unconditionally).
3. Dispatches to the action's guard / update / effect functions.
4. Checks the invariants the step could have broken (touched record + totals).
5. Returns a ``StepResult`` (accepted, or rejected with a reason).

A rejected step returns no state at all: the caller keeps the state it passed
in, so the accumulator advance of a rejected action is discarded as well.
"""

from __future__ import annotations

from typing import Callable

from .accumulator import advance
from .effects import effect_advance, effect_claim_reward, effect_stake, effect_unstake
from .errors import error_for_rejection
from .guards import guard_advance, guard_claim_reward, guard_stake, guard_unstake
from .invariants import check_step
from .types import Action, ActionParams, Effect, PoolConfig, PoolState, StepResult
from .updates import apply_advance, apply_claim_reward, apply_stake, apply_unstake

GuardFn = Callable[[PoolState, PoolConfig, ActionParams], "str | None"]
UpdateFn = Callable[[PoolState, PoolConfig, ActionParams], PoolState]
EffectFn = Callable[[PoolState, PoolState, ActionParams], Effect]

_DISPATCH: dict[Action, tuple[GuardFn, UpdateFn, EffectFn]] = {
    Action.ADVANCE: (guard_advance, apply_advance, effect_advance),
    Action.STAKE: (guard_stake, apply_stake, effect_stake),
    Action.UNSTAKE: (guard_unstake, apply_unstake, effect_unstake),
    Action.CLAIM_REWARD: (guard_claim_reward, apply_claim_reward, effect_claim_reward),
}

# -- Parameter domain bounds -------------------------------------------------

MAX_AMOUNT: int = 10**36
MAX_TIMESTAMP: int = 2**63 - 1
MAX_PARTICIPANT_LEN: int = 256

_NEEDS_PARTICIPANT = frozenset({Action.STAKE, Action.UNSTAKE, Action.CLAIM_REWARD})


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_scalar_text(value: str) -> bool:
    # Lone surrogates cannot be stored or hashed as UTF-8.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _validate_params(params: ActionParams) -> str | None:
    """Check parameter domains. Returns rejection reason or None.

    ``amount <= 0`` is not a domain error: the stake guard reports it as
    ``invalid_amount``.
    """
    if not _is_int(params.now) or params.now < 0 or params.now > MAX_TIMESTAMP:
        return "param_domain:now"
    if params.action in _NEEDS_PARTICIPANT:
        who = params.participant
        if not isinstance(who, str) or not who or len(who) > MAX_PARTICIPANT_LEN:
            return "param_domain:participant"
        if not _is_scalar_text(who):
            return "param_domain:participant"
    if not _is_int(params.amount) or params.amount > MAX_AMOUNT:
        return "param_domain:amount"
    return None


def step(state: PoolState, config: PoolConfig, params: ActionParams) -> StepResult:
    """Execute one action against the given state.

    Returns ``StepResult`` with ``accepted=True`` on success,
    or ``accepted=False`` with a ``rejection`` reason string.
    """
    entry = _DISPATCH.get(params.action)
    if entry is None:
        return StepResult(accepted=False, rejection=f"unknown_action:{params.action}")

    domain_err = _validate_params(params)
    if domain_err is not None:
        return StepResult(accepted=False, rejection=domain_err)

    guard_fn, update_fn, effect_fn = entry

    advanced = advance(state, config, params.now)

    reason = guard_fn(advanced, config, params)
    if reason is not None:
        return StepResult(accepted=False, rejection=reason)

    new_state = update_fn(advanced, config, params)

    violations = check_step(state, new_state, config, params.participant)
    if violations:
        return StepResult(
            accepted=False,
            rejection=f"invariant:{','.join(violations)}",
        )

    effect = effect_fn(advanced, new_state, params)
    return StepResult(accepted=True, state=new_state, effect=effect)


def step_or_raise(state: PoolState, config: PoolConfig, params: ActionParams) -> StepResult:
    """Like ``step()`` but raises on rejection instead of returning a result.

    Raises:
        InvalidParameter: Parameter outside its domain.
        InvalidAmount, CampaignClosed, NothingToWithdraw, StillLocked,
        NoRewardDue: Guard condition not satisfied.
        PoolInvariantError: Post-state violates one or more invariants.
    """
    result = step(state, config, params)
    if result.accepted:
        return result
    raise error_for_rejection(result.rejection or "")
