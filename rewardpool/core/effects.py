"""Effect functions for the reward pool engine.

One pure function per action. Each computes the ``Effect`` from the advanced
PRE-state and the POST-state: the asset transfer the shell has to perform and
the notifications to publish once the post-state is committed.
"""

from __future__ import annotations

from .types import (
    ActionParams,
    Effect,
    Event,
    Notification,
    PoolState,
    Transfer,
    TransferKind,
)


def _common_effects(post: PoolState) -> dict[str, int]:
    return dict(
        acc_per_share_after=post.acc_per_share,
        total_staked_after=post.total_staked,
        total_reward_paid_after=post.total_reward_paid,
    )


def _reward_paid(pre: PoolState, post: PoolState) -> int:
    return post.total_reward_paid - pre.total_reward_paid


def effect_advance(pre: PoolState, post: PoolState, params: ActionParams) -> Effect:
    return Effect(event=Event.ADVANCED, **_common_effects(post))


def effect_stake(pre: PoolState, post: PoolState, params: ActionParams) -> Effect:
    who = params.participant
    return Effect(
        event=Event.STAKED,
        transfer=Transfer(TransferKind.PULL, who, params.amount),
        notifications=(Notification(Event.STAKED, who, params.amount),),
        principal=params.amount,
        **_common_effects(post),
    )


def effect_unstake(pre: PoolState, post: PoolState, params: ActionParams) -> Effect:
    who = params.participant
    principal = pre.record(who).amount_staked
    reward = _reward_paid(pre, post)
    return Effect(
        event=Event.UNSTAKED,
        transfer=Transfer(TransferKind.PUSH, who, principal + reward),
        notifications=(
            Notification(Event.UNSTAKED, who, principal),
            Notification(Event.REWARD_CLAIMED, who, reward),
        ),
        principal=principal,
        reward=reward,
        **_common_effects(post),
    )


def effect_claim_reward(pre: PoolState, post: PoolState, params: ActionParams) -> Effect:
    who = params.participant
    reward = _reward_paid(pre, post)
    return Effect(
        event=Event.REWARD_CLAIMED,
        transfer=Transfer(TransferKind.PUSH, who, reward),
        notifications=(Notification(Event.REWARD_CLAIMED, who, reward),),
        reward=reward,
        **_common_effects(post),
    )
