from __future__ import annotations

import pytest

from rewardpool.core import PoolConfig, PoolConfigError
from rewardpool.integration import load_pool_config
from rewardpool.integration.config import read_config_file

_YAML = """\
pool:
  asset_id: "0x01"
  distribution_budget: 1000000
  duration_days: 30
  lockin_days: 7
  start_time: 1700000000
"""


def test_load_from_yaml_section(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text(_YAML, encoding="utf-8")
    cfg = load_pool_config(path, env={})
    assert cfg == PoolConfig(
        asset_id="0x01",
        distribution_budget=1_000_000,
        duration_days=30,
        lockin_days=7,
        start_time=1_700_000_000,
    )


def test_top_level_mapping_accepted(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text('asset_id: "0x02"\ndistribution_budget: 10\nduration_days: 2\n', encoding="utf-8")
    cfg = load_pool_config(path, env={})
    assert (cfg.asset_id, cfg.lockin_days, cfg.start_time) == ("0x02", 0, 0)


def test_env_overrides_file(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text(_YAML, encoding="utf-8")
    env = {
        "REWARDPOOL_BUDGET": " 500 ",
        "REWARDPOOL_LOCKIN_DAYS": "0",
        "REWARDPOOL_ASSET_ID": "0xff",
        "REWARDPOOL_START_TIME": "",
    }
    cfg = load_pool_config(path, env=env)
    assert cfg.distribution_budget == 500
    assert cfg.lockin_days == 0
    assert cfg.asset_id == "0xff"
    assert cfg.start_time == 1_700_000_000


def test_env_alone_is_enough() -> None:
    env = {"REWARDPOOL_ASSET_ID": "0x01", "REWARDPOOL_BUDGET": "100", "REWARDPOOL_DURATION_DAYS": "4"}
    cfg = load_pool_config(env=env)
    assert cfg.distribution_budget == 100
    assert cfg.duration_days == 4


def test_process_environment_is_default(monkeypatch) -> None:
    monkeypatch.setenv("REWARDPOOL_DURATION_DAYS", "3")
    cfg = load_pool_config(data={"asset_id": "0x01", "distribution_budget": 9, "duration_days": 1})
    assert cfg.duration_days == 3


@pytest.mark.parametrize(
    "env",
    [
        {"REWARDPOOL_BUDGET": "lots"},
        {"REWARDPOOL_BUDGET": "0"},
        {"REWARDPOOL_LOCKIN_DAYS": "-1"},
        {"REWARDPOOL_DURATION_DAYS": "99999999"},
    ],
)
def test_bad_env_values_raise(env) -> None:
    data = {"asset_id": "0x01", "distribution_budget": 9, "duration_days": 1}
    with pytest.raises(PoolConfigError):
        load_pool_config(data=data, env=env)


def test_missing_fields_raise() -> None:
    with pytest.raises(PoolConfigError, match="distribution_budget"):
        load_pool_config(data={"asset_id": "0x01", "duration_days": 1}, env={})


def test_unknown_fields_raise() -> None:
    with pytest.raises(PoolConfigError, match="reward_rate"):
        load_pool_config(data={"asset_id": "0x01", "reward_rate": 5}, env={})


def test_out_of_domain_file_value_raises() -> None:
    with pytest.raises(PoolConfigError):
        load_pool_config(data={"asset_id": "0x01", "distribution_budget": 10, "duration_days": 0}, env={})


def test_bad_yaml_raises(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("pool: [unclosed\n", encoding="utf-8")
    with pytest.raises(PoolConfigError):
        read_config_file(path)


def test_non_mapping_section_raises(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("pool: 5\n", encoding="utf-8")
    with pytest.raises(PoolConfigError):
        read_config_file(path)


def test_empty_file_is_empty_mapping(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("", encoding="utf-8")
    assert read_config_file(path) == {}
