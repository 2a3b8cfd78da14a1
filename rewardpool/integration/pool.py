"""
Reward pool service: imperative shell around the functional core.

Each mutating call runs, under one writer lock:

1. read the clock,
2. `core.engine.step()` (accumulator advance, guards, update, invariants),
3. the asset transfer the step asks for (`pull` for stake, `push` for payouts),
4. commit of the post-state (single reference swap) and optional snapshot save.

A rejected step or a failed transfer raises before step 4, so the pool is left
exactly as it was. Notifications are published after the lock is released and
only for committed steps.

Queries do not take the lock: the committed state is an immutable object, so
reading the current reference always yields a consistent snapshot.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from ..core import queries
from ..core.accumulator import pending_reward
from ..core.engine import step
from ..core.errors import PoolInvariantError, TransferFailed, error_for_rejection
from ..core.invariants import check_all
from ..core.state import initial_state
from ..core.types import (
    Action,
    ActionParams,
    Effect,
    Notification,
    Participant,
    PoolConfig,
    PoolState,
    Transfer,
    TransferKind,
)
from .clock import Clock, SystemClock
from .ledger import AssetLedger, LedgerError
from .notifications import LoggingSink, NotificationSink
from .snapshot import PoolSnapshot, SnapshotStore, pool_from_snapshot, snapshot_from_pool

logger = logging.getLogger(__name__)


class RewardPool:
    """
    One reward pool with fixed parameters.

    Usage:
        pool = RewardPool(config, ledger, clock=ManualClock(config.start_time))
        pool.stake("alice", 100)
        pool.pending_reward("alice")
        pool.claim_reward("alice")
        pool.unstake("alice")
    """

    def __init__(
        self,
        config: PoolConfig,
        ledger: AssetLedger,
        *,
        clock: Optional[Clock] = None,
        sink: Optional[NotificationSink] = None,
        state: Optional[PoolState] = None,
        store: Optional[SnapshotStore] = None,
    ) -> None:
        self._config = config
        self._ledger = ledger
        self._clock = clock if clock is not None else SystemClock()
        self._sink = sink if sink is not None else LoggingSink()
        self._store = store
        self._lock = threading.Lock()

        if state is None:
            state = initial_state(config)
        violations = check_all(state, config)
        if violations:
            raise PoolInvariantError(violations)
        self._state = state

    @classmethod
    def restore(
        cls,
        store: SnapshotStore,
        ledger: AssetLedger,
        *,
        clock: Optional[Clock] = None,
        sink: Optional[NotificationSink] = None,
    ) -> "RewardPool":
        """Rebuild a pool from the snapshot held by `store` and keep saving to it."""
        state, config = pool_from_snapshot(store.load().data)
        logger.info("restored pool asset=%s participants=%d", config.asset_id, len(state.all_participants))
        return cls(config, ledger, clock=clock, sink=sink, state=state, store=store)

    @property
    def config(self) -> PoolConfig:
        return self._config

    @property
    def state(self) -> PoolState:
        return self._state

    # -- Lifecycle -------------------------------------------------------------

    def advance(self) -> PoolState:
        """Bring the accumulator up to the current time without any other change."""
        self._execute(Action.ADVANCE)
        return self._state

    def stake(self, participant: Participant, amount: int) -> Effect:
        """Deposit `amount`. Unclaimed accrual on an existing deposit is forfeited."""
        return self._execute(Action.STAKE, participant, amount)

    def unstake(self, participant: Participant) -> Effect:
        """Withdraw the whole deposit together with the pending reward."""
        return self._execute(Action.UNSTAKE, participant)

    def claim_reward(self, participant: Participant) -> Effect:
        """Pay out the pending reward, keeping the deposit in place."""
        return self._execute(Action.CLAIM_REWARD, participant)

    def _execute(self, action: Action, participant: Participant = "", amount: int = 0) -> Effect:
        with self._lock:
            params = ActionParams(action=action, now=self._clock.now(), participant=participant, amount=amount)
            result = step(self._state, self._config, params)
            if not result.accepted or result.state is None or result.effect is None:
                logger.warning(
                    "rejected %s participant=%s amount=%d now=%d: %s",
                    action.value, participant, amount, params.now, result.rejection,
                )
                raise error_for_rejection(result.rejection or "")

            effect = result.effect
            encoded: Optional[bytes] = None
            if self._store is not None:
                # Encode before moving assets: an unencodable state must abort the step.
                _, encoded = self._store.encode(snapshot_from_pool(result.state, self._config))

            if effect.transfer is not None:
                self._transfer(effect.transfer)

            self._state = result.state
            if self._store is not None and encoded is not None:
                self._store.write(encoded)
            logger.debug(
                "accepted %s participant=%s now=%d principal=%d reward=%d acc=%d",
                action.value, participant, params.now, effect.principal, effect.reward,
                effect.acc_per_share_after,
            )

        for notification in effect.notifications:
            self._notify(notification)
        return effect

    def _transfer(self, transfer: Transfer) -> None:
        try:
            if transfer.kind is TransferKind.PULL:
                ok = self._ledger.pull(transfer.participant, transfer.amount)
            else:
                ok = self._ledger.push(transfer.participant, transfer.amount)
            if ok is False:
                raise LedgerError("ledger refused the transfer")
        except LedgerError as exc:
            logger.error(
                "%s of %d for %s failed: %s",
                transfer.kind.value, transfer.amount, transfer.participant, exc,
            )
            raise TransferFailed(
                f"{transfer.kind.value} of {transfer.amount} for {transfer.participant} failed: {exc}"
            ) from exc

    def _notify(self, notification: Notification) -> None:
        try:
            self._sink.emit(notification)
        except Exception:
            # The step is already committed; a broken consumer must not undo it.
            logger.exception("notification sink failed for %s", notification.event.value)

    # -- Queries ---------------------------------------------------------------

    def pending_reward(self, participant: Participant) -> int:
        """Reward the participant would settle right now (does not advance)."""
        return pending_reward(self._state, self._config, participant, self._clock.now())

    def daily_emission_rate(self) -> int:
        return queries.daily_emission_rate(self._config)

    def hourly_emission_rate(self) -> int:
        return queries.hourly_emission_rate(self._config)

    def remaining_budget(self) -> int:
        return queries.remaining_budget(self._state, self._config)

    def active_count(self) -> int:
        return queries.active_count(self._state)

    def total_staked(self) -> int:
        return queries.total_staked(self._state)

    def all_participants(self) -> List[Participant]:
        return queries.all_participants(self._state)

    def active_participants(self) -> List[Participant]:
        return queries.active_participants(self._state)

    def staker_detail(self, participant: Participant) -> Optional[queries.StakerDetail]:
        return queries.staker_detail(self._state, participant)

    def unlock_time(self, participant: Participant) -> Optional[int]:
        return queries.unlock_time(self._state, self._config, participant)

    def campaign_end(self) -> int:
        return queries.campaign_end(self._config)

    def is_campaign_open(self) -> bool:
        return queries.is_campaign_open(self._config, self._clock.now())

    def snapshot(self) -> PoolSnapshot:
        return snapshot_from_pool(self._state, self._config)
