from __future__ import annotations

import hashlib

import pytest

from rewardpool.state.canonical import canonical_json_bytes, commitment_digest, domain_sep_bytes


def test_key_order_does_not_matter() -> None:
    a = canonical_json_bytes({"b": 1, "a": [1, 2], "c": {"y": 0, "x": None}})
    b = canonical_json_bytes({"c": {"x": None, "y": 0}, "a": [1, 2], "b": 1})
    assert a == b
    assert a == b'{"a":[1,2],"b":1,"c":{"x":null,"y":0}}'


def test_large_ints_are_exact() -> None:
    value = 10**18 * 123456789
    assert canonical_json_bytes({"acc": value}) == b'{"acc":' + str(value).encode() + b"}"


def test_utf8_not_escaped() -> None:
    assert canonical_json_bytes("Ω") == "\"Ω\"".encode("utf-8")


@pytest.mark.parametrize("value", [1.5, {"a": 0.0}, [1, [2.0]]])
def test_floats_rejected(value) -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes(value)


def test_non_str_keys_rejected() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({1: "a"})


def test_surrogates_rejected() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({"who": "\ud800"})


def test_commitment_is_domain_separated() -> None:
    body = b'{"a":1}'
    expected = hashlib.sha256(b"rewardpool:pool_snapshot:v1\x00" + body).digest()
    assert commitment_digest("pool_snapshot", 1, body) == expected
    assert commitment_digest("pool_snapshot", 2, body) != expected
    assert commitment_digest("other", 1, body) != expected


def test_domain_separator_shape() -> None:
    assert domain_sep_bytes("pool_snapshot") == b"rewardpool:pool_snapshot:v1\x00"
    assert domain_sep_bytes("pool_snapshot", 2) != domain_sep_bytes("pool_snapshot", 1)


@pytest.mark.parametrize(
    "label, version, exc",
    [
        ("", 1, TypeError),
        ("a\x00b", 1, ValueError),
        ("Ω", 1, ValueError),
        ("ok", 0, ValueError),
        ("ok", True, ValueError),
    ],
)
def test_domain_separator_rejects(label, version, exc) -> None:
    with pytest.raises(exc):
        domain_sep_bytes(label, version)


def test_surrogate_in_nested_key_rejected() -> None:
    with pytest.raises(TypeError, match="surrogate"):
        canonical_json_bytes({"stakers": [{"x\udc80": 1}]})
