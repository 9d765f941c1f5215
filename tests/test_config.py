"""Tests for fruitlink.config.load_config."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fruitlink.config import AppConfig, load_config

_TOML = """
[api]
base_url = "http://proxy.internal:3001/"

[forecast]
cache_ttl_seconds = 60
horizon_months = 3

[matching]
normalize_fruit_names = true

[logging]
level = "debug"
"""

_ENV_VARS = (
    "FRUITLINK_API_BASE_URL",
    "FRUITLINK_FRONTEND_BASE_URL",
    "FRUITLINK_PORT",
    "FRUITLINK_LOG_LEVEL",
    "FRUITLINK_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "default.toml"
    path.write_text(_TOML)
    return path


def test_defaults_without_sections(tmp_path):
    path = tmp_path / "empty.toml"
    path.write_text("")
    assert load_config(path) == AppConfig()


def test_toml_values_applied(config_file):
    config = load_config(config_file)
    assert config.api.base_url == "http://proxy.internal:3001"
    assert config.forecast.cache_ttl_seconds == 60
    assert config.forecast.horizon_months == 3
    assert config.matching.normalize_fruit_names is True
    assert config.logging.level == "DEBUG"
    assert config.chat.navigation_delay_seconds == 1.0


def test_local_toml_overrides(config_file):
    (config_file.parent / "local.toml").write_text("[forecast]\nhorizon_months = 12\n")
    config = load_config(config_file)
    assert config.forecast.horizon_months == 12
    assert config.forecast.cache_ttl_seconds == 60


def test_env_overrides(config_file, monkeypatch):
    monkeypatch.setenv("FRUITLINK_API_BASE_URL", "http://env.test")
    monkeypatch.setenv("FRUITLINK_PORT", "4000")
    monkeypatch.setenv("FRUITLINK_DEBUG", "true")
    config = load_config(config_file)
    assert config.api.base_url == "http://env.test"
    assert config.server.port == 4000
    assert config.debug is True


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")


def test_bad_log_level(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text('[logging]\nlevel = "LOUD"\n')
    with pytest.raises(ValidationError):
        load_config(path)


def test_non_positive_ttl_rejected(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("[forecast]\ncache_ttl_seconds = 0\n")
    with pytest.raises(ValidationError):
        load_config(path)


def test_committed_default_toml_loads():
    config = load_config()
    assert config.forecast.cache_ttl_seconds == 600
    assert config.insights.cache_ttl_seconds == 120
    assert config.matching.normalize_fruit_names is False
