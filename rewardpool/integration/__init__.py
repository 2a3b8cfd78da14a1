"""
Integration shell for the reward pool: ledger, clock, notifications, config,
snapshots and the `RewardPool` service.
"""

from .clock import Clock, ManualClock, SystemClock
from .config import load_pool_config
from .ledger import AssetLedger, BalanceLedger, LedgerError
from .notifications import LoggingSink, NotificationSink, RecordingSink
from .pool import RewardPool
from .snapshot import PoolSnapshot, SnapshotStore, pool_from_snapshot, snapshot_from_pool

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "load_pool_config",
    "AssetLedger",
    "BalanceLedger",
    "LedgerError",
    "LoggingSink",
    "NotificationSink",
    "RecordingSink",
    "RewardPool",
    "PoolSnapshot",
    "SnapshotStore",
    "pool_from_snapshot",
    "snapshot_from_pool",
]
