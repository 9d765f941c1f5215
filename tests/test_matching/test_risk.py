"""Tests for fruitlink.matching.risk."""

from __future__ import annotations

import pytest

from fruitlink.matching.risk import assess_trade_risk, average_reliability, classify_risk
from fruitlink.models.entity import Buyer, Supplier
from fruitlink.taxonomy.trade_taxonomy import RiskLevel


class TestClassifyRisk:
    @pytest.mark.parametrize(
        "avg, expected",
        [
            (95, RiskLevel.LOW),
            (90.01, RiskLevel.LOW),
            (90, RiskLevel.MEDIUM),
            (80, RiskLevel.MEDIUM),
            (75, RiskLevel.HIGH),
            (50, RiskLevel.HIGH),
            (0, RiskLevel.HIGH),
        ],
    )
    def test_thresholds(self, avg, expected):
        assert classify_risk(avg) == expected


class TestAssessTradeRisk:
    def test_seed_banana_buyer_is_medium(self, suppliers, buyers):
        risk = assess_trade_risk(buyers[0], suppliers)
        assert risk.matched_count == 2
        assert risk.average_reliability == pytest.approx(88.5)
        assert risk.level == RiskLevel.MEDIUM

    def test_no_matches_is_high(self, suppliers):
        risk = assess_trade_risk(Buyer(id="x", name="X", fruits_interested=["kiwi"]), suppliers)
        assert risk.matched_count == 0
        assert risk.average_reliability == 0.0
        assert risk.level == RiskLevel.HIGH

    def test_reliable_suppliers_are_low_risk(self):
        buyer = Buyer(id="b", name="B", fruits_interested=["mango"])
        suppliers = [
            Supplier(id="1", name="A", fruits_offered=["mango"], reliability=95),
            Supplier(id="2", name="B", fruits_offered=["mango"], reliability=97),
        ]
        assert assess_trade_risk(buyer, suppliers).level == RiskLevel.LOW

    def test_average_of_empty_is_zero(self):
        assert average_reliability([]) == 0.0
