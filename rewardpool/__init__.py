"""
Time-weighted reward pool: participants stake an asset for a bounded campaign
and accrue a pro-rata share of a fixed reward budget released continuously.
"""

from .core import PoolConfig, PoolState, StakerRecord
from .integration import BalanceLedger, ManualClock, RewardPool, SystemClock

__all__ = [
    "PoolConfig",
    "PoolState",
    "StakerRecord",
    "BalanceLedger",
    "ManualClock",
    "RewardPool",
    "SystemClock",
]

__version__ = "0.1.0"
