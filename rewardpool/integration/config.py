"""
Pool configuration loading.

Sources, later ones win:
1. a YAML file (either the fields at top level or under a `pool:` mapping),
2. `REWARDPOOL_*` environment variables.

Example file:

    pool:
      asset_id: "0x01"
      distribution_budget: 1000000
      duration_days: 30
      lockin_days: 7
      start_time: 1700000000

The result is an immutable `PoolConfig`; parameters cannot change after the
pool is created.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..core.errors import PoolConfigError
from ..core.types import PoolConfig

ENV_PREFIX = "REWARDPOOL_"

# field -> (env suffix, lo, hi)
_INT_FIELDS: dict[str, tuple[str, int, int]] = {
    "distribution_budget": ("BUDGET", 1, 10**36),
    "duration_days": ("DURATION_DAYS", 1, 36_500),
    "lockin_days": ("LOCKIN_DAYS", 0, 36_500),
    "start_time": ("START_TIME", 0, 2**63 - 1),
}


def _env_int(env: Mapping[str, str], name: str, default: Optional[int], *, lo: int, hi: int) -> Optional[int]:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        v = int(raw.strip())
    except ValueError as exc:
        raise PoolConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if v < lo or v > hi:
        raise PoolConfigError(f"{name} out of range [{lo}, {hi}]: {v}")
    return v


def _env_str(env: Mapping[str, str], name: str, default: Optional[str]) -> Optional[str]:
    raw = env.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Read the pool mapping out of a YAML file."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        obj = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise PoolConfigError(f"invalid YAML in {path}: {exc}") from exc
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise PoolConfigError(f"{path}: top level must be a mapping")
    section = obj.get("pool", obj)
    if not isinstance(section, dict):
        raise PoolConfigError(f"{path}: 'pool' must be a mapping")
    return dict(section)


def load_pool_config(
    path: str | Path | None = None,
    *,
    data: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> PoolConfig:
    """Build a `PoolConfig` from a file and/or mapping, then env overrides."""
    merged: dict[str, Any] = {}
    if path is not None:
        merged.update(read_config_file(path))
    if data is not None:
        merged.update(data)
    env = os.environ if env is None else env

    unknown = set(merged) - {"asset_id", *_INT_FIELDS}
    if unknown:
        raise PoolConfigError(f"unknown pool config fields: {sorted(unknown)}")

    merged["asset_id"] = _env_str(env, ENV_PREFIX + "ASSET_ID", merged.get("asset_id"))
    for name, (suffix, lo, hi) in _INT_FIELDS.items():
        value = _env_int(env, ENV_PREFIX + suffix, merged.get(name), lo=lo, hi=hi)
        if value is not None:
            merged[name] = value

    missing = [name for name in ("asset_id", "distribution_budget", "duration_days") if merged.get(name) is None]
    if missing:
        raise PoolConfigError(f"missing pool config fields: {missing}")
    return PoolConfig(**{k: v for k, v in merged.items() if v is not None})
