"""
Pool snapshot encoding and file persistence.

Goals:
- Deterministic JSON serialization for hashing / audit.
- Round-trippable into the functional-core `PoolState` / `PoolConfig` types.
- Explicit versioning.
- Atomic replacement on disk (write temp file, fsync, `os.replace`).
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from ..core.invariants import check_all
from ..core.state import config_from_dict, config_to_dict, state_from_dict, state_to_dict
from ..core.types import PoolConfig, PoolState
from ..state.canonical import canonical_json_bytes, commitment_digest


POOL_SNAPSHOT_VERSION = 1
MAX_SNAPSHOT_BYTES = 64_000_000


@dataclass(frozen=True)
class PoolSnapshot:
    """
    Deterministic, versioned snapshot of one pool.

    The commitment is *not* included inside `data` to avoid self-reference.
    """

    version: int
    data: Dict[str, Any]

    def canonical_bytes(self) -> bytes:
        return canonical_json_bytes(self.data)

    def commitment_bytes(self) -> bytes:
        return commitment_digest("pool_snapshot", self.version, self.canonical_bytes())

    def commitment_hex(self) -> str:
        return "0x" + self.commitment_bytes().hex()


def snapshot_from_pool(state: PoolState, config: PoolConfig, *, version: int = POOL_SNAPSHOT_VERSION) -> PoolSnapshot:
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    data: Dict[str, Any] = {
        "version": int(version),
        "config": config_to_dict(config),
        "state": state_to_dict(state),
    }
    return PoolSnapshot(version=version, data=data)


def pool_from_snapshot(snapshot: Mapping[str, Any]) -> tuple[PoolState, PoolConfig]:
    """Decode snapshot data; rejects unknown versions and invariant-violating states."""
    if not isinstance(snapshot, Mapping):
        raise TypeError("snapshot must be a mapping")
    version = snapshot.get("version", POOL_SNAPSHOT_VERSION)
    if version != POOL_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version!r}")
    config = config_from_dict(snapshot["config"])
    state = state_from_dict(snapshot["state"])
    violations = check_all(state, config)
    if violations:
        raise ValueError(f"invalid pool snapshot (invariants {', '.join(violations)})")
    return state, config


class SnapshotStore:
    """Single-file snapshot store with atomic replace semantics."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, snapshot: PoolSnapshot) -> str:
        """Write the snapshot and return its commitment hex."""
        commitment, raw = self.encode(snapshot)
        self.write(raw)
        return commitment

    @staticmethod
    def encode(snapshot: PoolSnapshot) -> tuple[str, bytes]:
        """File bytes for `snapshot` and its commitment. Raises before anything touches disk."""
        commitment = snapshot.commitment_hex()
        return commitment, canonical_json_bytes({"commitment": commitment, "snapshot": snapshot.data})

    def write(self, raw: bytes) -> None:
        """Atomically replace the file with already encoded bytes."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=self.path.name + ".", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(raw)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def load(self) -> PoolSnapshot:
        raw = self.path.read_bytes()
        if len(raw) > MAX_SNAPSHOT_BYTES:
            raise ValueError("snapshot too large")
        payload = json.loads(raw.decode("utf-8"))
        if not isinstance(payload, dict) or "snapshot" not in payload:
            raise ValueError("malformed snapshot file")
        data = payload["snapshot"]
        if not isinstance(data, dict):
            raise ValueError("malformed snapshot file")
        snap = PoolSnapshot(version=int(data.get("version", POOL_SNAPSHOT_VERSION)), data=data)
        expected = payload.get("commitment")
        if expected != snap.commitment_hex():
            raise ValueError("snapshot commitment mismatch")
        return snap
