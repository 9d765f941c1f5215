"""Smoke tests for the Typer CLI (offline commands only)."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from fruitlink.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr("fruitlink.utils.logging.configure_logging", lambda config: None)


def test_validate_config():
    result = runner.invoke(app, ["validate-config"])
    assert result.exit_code == 0
    assert "[OK] Config is valid." in result.output


def test_validate_config_missing_file(tmp_path):
    result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "nope.toml")])
    assert result.exit_code == 1


def test_suppliers_filtered_by_country():
    result = runner.invoke(app, ["suppliers", "--country", "Colombia"])
    assert result.exit_code == 0
    assert "=== Suppliers (2) ===" in result.output
    assert "Vitassous" in result.output
    assert "Truong Ton" not in result.output


def test_buyers_rejects_unknown_volume():
    result = runner.invoke(app, ["buyers", "--volume", "huge"])
    assert result.exit_code == 1


def test_buyers_filtered_by_volume():
    result = runner.invoke(app, ["buyers", "--volume", "large"])
    assert result.exit_code == 0
    assert "=== Buyers (2) ===" in result.output


def test_matches_for_buyer_shows_risk():
    result = runner.invoke(app, ["matches", "--buyer", "1"])
    assert result.exit_code == 0
    assert "Trade risk: Medium" in result.output
    assert "Truong Ton" in result.output


def test_matches_requires_exactly_one_side():
    assert runner.invoke(app, ["matches"]).exit_code == 1
    assert runner.invoke(app, ["matches", "--buyer", "1", "--supplier", "1"]).exit_code == 1


def test_matches_unknown_supplier():
    assert runner.invoke(app, ["matches", "--supplier", "99"]).exit_code == 1


def test_forecast_without_explanation():
    result = runner.invoke(app, ["forecast", "apple"])
    assert result.exit_code == 0
    assert "=== Price forecast: apple ===" in result.output


def test_insights_without_ai():
    result = runner.invoke(app, ["insights"])
    assert result.exit_code == 0
    assert "Top supplier country:       Colombia" in result.output
    assert "=== Trade flows (6) ===" in result.output
