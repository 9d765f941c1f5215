"""
Buyer-side trade risk.

The risk shown on a buyer's detail page is the average ``reliability`` of the
suppliers matched to that buyer, bucketed as:

    average > 90  → Low
    average > 75  → Medium
    otherwise     → High

With no matched suppliers the average is 0, which lands in High.
"""

from __future__ import annotations

from typing import Sequence

from fruitlink.models.entity import Buyer, Supplier
from fruitlink.models.trade import TradeRisk
from fruitlink.matching.matcher import match_suppliers
from fruitlink.taxonomy.trade_taxonomy import RiskLevel

LOW_RISK_ABOVE = 90.0
MEDIUM_RISK_ABOVE = 75.0


def average_reliability(suppliers: Sequence[Supplier]) -> float:
    """Mean reliability of ``suppliers``; 0 for an empty sequence."""
    if not suppliers:
        return 0.0
    return sum(s.reliability for s in suppliers) / len(suppliers)


def classify_risk(avg_reliability: float) -> RiskLevel:
    """Map an average reliability to a ``RiskLevel``."""
    if avg_reliability > LOW_RISK_ABOVE:
        return RiskLevel.LOW
    if avg_reliability > MEDIUM_RISK_ABOVE:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def assess_trade_risk(
    buyer: Buyer,
    suppliers: Sequence[Supplier],
    normalize: bool = False,
) -> TradeRisk:
    """Match ``buyer`` against ``suppliers`` and score the result."""
    matched = match_suppliers(buyer, suppliers, normalize=normalize)
    avg = average_reliability(matched)
    return TradeRisk(
        level=classify_risk(avg),
        average_reliability=avg,
        matched_count=len(matched),
    )
