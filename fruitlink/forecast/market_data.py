"""
Historical fruit prices.

There is no live market feed: prices come from a small static table of weekly
observations (USD per kg, June 2024). Lookup is case-insensitive; fruits not
in the table fall back to the reference series so every fruit in the
directory still gets a deterministic prediction.
"""

from __future__ import annotations

import logging
from typing import Mapping, Protocol

from fruitlink.models.forecast import PricePoint

logger = logging.getLogger(__name__)

REFERENCE_FRUIT = "apple"

MOCK_PRICES: dict[str, tuple[PricePoint, ...]] = {
    "apple": (
        PricePoint(date="2024-06-01", price=1.20),
        PricePoint(date="2024-06-08", price=1.25),
        PricePoint(date="2024-06-15", price=1.22),
        PricePoint(date="2024-06-22", price=1.30),
        PricePoint(date="2024-06-29", price=1.28),
    ),
    "mango": (
        PricePoint(date="2024-06-01", price=2.10),
        PricePoint(date="2024-06-08", price=2.15),
        PricePoint(date="2024-06-15", price=2.12),
        PricePoint(date="2024-06-22", price=2.18),
        PricePoint(date="2024-06-29", price=2.20),
    ),
    "durian": (
        PricePoint(date="2024-06-01", price=5.00),
        PricePoint(date="2024-06-08", price=5.10),
        PricePoint(date="2024-06-15", price=5.05),
        PricePoint(date="2024-06-22", price=5.20),
        PricePoint(date="2024-06-29", price=5.15),
    ),
}


class PriceSource(Protocol):
    """Anything that can return a fruit's historical series."""

    def recent_prices(self, fruit: str) -> tuple[PricePoint, ...]: ...


class StaticPriceTable:
    """``PriceSource`` over an in-memory table with a reference fallback.

    Args:
        table: Lower-cased fruit name → ascending price series.
            Defaults to ``MOCK_PRICES``.
        reference_fruit: Key used for unknown fruits. If the reference key is
            itself missing, unknown fruits get an empty series.
    """

    def __init__(
        self,
        table: Mapping[str, tuple[PricePoint, ...]] | None = None,
        reference_fruit: str = REFERENCE_FRUIT,
    ) -> None:
        self._table = dict(MOCK_PRICES if table is None else table)
        self.reference_fruit = reference_fruit.lower()

    def known_fruits(self) -> list[str]:
        return sorted(self._table)

    def recent_prices(self, fruit: str) -> tuple[PricePoint, ...]:
        key = fruit.strip().lower()
        if key in self._table:
            return self._table[key]
        logger.debug(
            "No price history for %r; using reference series %r", fruit, self.reference_fruit
        )
        return self._table.get(self.reference_fruit, ())
