"""Tests for fruitlink.reporting.formatters."""

from __future__ import annotations

from fruitlink.directory.analytics import summarize_directory
from fruitlink.forecast.engine import ForecastEngine
from fruitlink.matching.matcher import build_trade_links
from fruitlink.models.entity import Buyer, PriceRange, Supplier
from fruitlink.models.trade import TradeRisk
from fruitlink.reporting.formatters import (
    format_buyer_card,
    format_buyer_table,
    format_directory_summary,
    format_prediction,
    format_range,
    format_supplier_card,
    format_supplier_matches,
    format_supplier_table,
    format_trade_links,
)
from fruitlink.taxonomy.trade_taxonomy import RiskLevel


def test_format_range_is_per_kg():
    assert format_range(PriceRange(min=1.2, max=2.0)) == "1.20-2.00 USD/kg"


class TestTables:
    def test_supplier_table_lists_every_row(self, suppliers):
        out = format_supplier_table(suppliers)
        assert f"=== Suppliers ({len(suppliers)}) ===" in out
        for s in suppliers:
            assert s.name in out

    def test_empty_supplier_table(self):
        assert "(no suppliers match the current filters)" in format_supplier_table([])

    def test_buyer_table_shows_volume(self, buyers):
        out = format_buyer_table(buyers)
        assert "Large" in out
        assert "Wismettac" in out

    def test_empty_buyer_table(self):
        assert "(no buyers match the current filters)" in format_buyer_table([])


class TestCards:
    def test_blank_fields_render_na(self):
        out = format_supplier_card(Supplier(id="9", name="Bare", fruits_offered=["mango"]))
        assert "Country:        N/A" in out
        assert "Established:    N/A" in out
        assert "mango" in out and "N/A" in out.splitlines()[-1]

    def test_supplier_card_price_ranges(self, suppliers):
        out = format_supplier_card(suppliers[0])
        assert "=== Supplier 1: PT Nusantara Segar Abadi ===" in out
        assert "USD/kg" in out

    def test_buyer_card(self):
        buyer = Buyer(
            id="7",
            name="Nordic Fruit",
            fruits_interested=["apple"],
            budget_range={"apple": PriceRange(min=1.0, max=1.5)},
        )
        out = format_buyer_card(buyer)
        assert "=== Buyer 7: Nordic Fruit ===" in out
        assert "1.00-1.50 USD/kg" in out
        assert "Volume:         Medium" in out


def test_supplier_matches_shows_risk(suppliers, buyers):
    risk = TradeRisk(level=RiskLevel.MEDIUM, average_reliability=88.5, matched_count=2)
    out = format_supplier_matches(
        buyers[0], [(suppliers[0], ["banana"]), (suppliers[3], ["banana"])], risk
    )
    assert "Trade risk: Medium (avg reliability 88.5 over 2 supplier(s))" in out
    assert "shared: banana" in out


def test_supplier_matches_empty():
    risk = TradeRisk(level=RiskLevel.HIGH, average_reliability=0.0, matched_count=0)
    out = format_supplier_matches(Buyer(id="9", name="X"), [], risk)
    assert "(no matching suppliers)" in out


class TestPrediction:
    def test_header_and_forecast_months(self, clock):
        prediction = ForecastEngine(clock=clock).predict("apple")
        out = format_prediction(prediction)
        assert "=== Price forecast: apple ===" in out
        assert "2024-07" in out
        assert "2024-12" in out
        assert "Explanation" not in out

    def test_explanation_appended(self, clock):
        prediction = ForecastEngine(clock=clock).predict("apple")
        assert format_prediction(prediction, "Seasonal.").endswith("Explanation: Seasonal.")


class TestDirectorySummary:
    def test_top_values(self, suppliers, buyers):
        out = format_directory_summary(summarize_directory(suppliers, buyers))
        assert "Top supplier country:       Colombia" in out
        assert "Top buyer fruit:            banana" in out
        assert "AI insight" not in out

    def test_empty_directory(self):
        out = format_directory_summary(summarize_directory([], []), insight="Nothing yet.")
        assert "Top supplier country:       N/A" in out
        assert "(none)" in out
        assert out.endswith("AI insight: Nothing yet.")


class TestTradeLinks:
    def test_names_resolved(self, suppliers, buyers):
        out = format_trade_links(build_trade_links(suppliers, buyers), suppliers, buyers)
        assert "=== Trade flows (6) ===" in out
        assert "PT Nusantara Segar Abadi" in out
        assert "(banana)" in out

    def test_no_links(self):
        assert "(no supplier shares a fruit with any buyer)" in format_trade_links([], [], [])
