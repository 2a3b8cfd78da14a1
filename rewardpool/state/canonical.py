"""
Canonical byte encoding for pool snapshots.

Two processes holding the same pool state must produce byte-identical
encodings, and therefore the same commitment. Commitments are sha256 over a
domain tag followed by the canonical JSON body, so a snapshot digest can never
collide with a digest of some other kind of document.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


DOMAIN_PREFIX = b"rewardpool:"


def _check_encodable(value: Any) -> None:
    """Reject values whose JSON text is not stable across encoders.

    Floats (amounts and the 1e18-scaled accumulator are ints), non-str keys and
    strings holding lone surrogates.
    """
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise TypeError("surrogate code points are not allowed in canonical encoding") from exc
        return
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
            _check_encodable(k)
            _check_encodable(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _check_encodable(item)


def canonical_json_bytes(value: Any) -> bytes:
    """UTF-8 JSON with sorted keys, no whitespace, no NaN and no floats."""
    _check_encodable(value)
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """`rewardpool:<label>:v<version>` followed by NUL, so tag and body never run together."""
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if isinstance(version, bool) or not isinstance(version, int) or version <= 0:
        raise ValueError("version must be a positive int")
    if not label.isascii() or "\x00" in label:
        raise ValueError(f"label must be ASCII without NUL: {label!r}")
    return DOMAIN_PREFIX + f"{label}:v{version}".encode("ascii") + b"\x00"


def commitment_digest(label: str, version: int, body: bytes) -> bytes:
    """sha256 of the domain tag for (`label`, `version`) followed by `body`."""
    return hashlib.sha256(domain_sep_bytes(label, version) + body).digest()
