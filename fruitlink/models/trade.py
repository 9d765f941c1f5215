"""
Matching outputs: buyer-side trade risk and supplier → buyer trade links.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from fruitlink.taxonomy.trade_taxonomy import RiskLevel


class TradeRisk(BaseModel):
    """Risk assessment shown on a buyer's detail view.

    Attributes:
        level: ``Low`` / ``Medium`` / ``High``.
        average_reliability: Mean reliability of matched suppliers (0 when
            there are none).
        matched_count: Number of matched suppliers.
    """

    model_config = ConfigDict(frozen=True)

    level: RiskLevel
    average_reliability: float
    matched_count: int


class TradeLink(BaseModel):
    """A supplier → buyer edge for the trade-flow diagram.

    ``value`` is the number of shared fruits and drives the edge width.
    """

    model_config = ConfigDict(frozen=True)

    supplier_id: str
    buyer_id: str
    shared_fruits: tuple[str, ...]

    @property
    def value(self) -> int:
        return len(self.shared_fruits)
