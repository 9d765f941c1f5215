"""
Bidirectional fruit matching between buyers and suppliers.

A buyer and a supplier match when the buyer's ``fruits_interested`` and the
supplier's ``fruits_offered`` share at least one element. Comparison is exact
string equality by default, so ``"Mango"`` and ``"mango"`` do not match.
Passing ``normalize=True`` (wired to ``matching.normalize_fruit_names``)
compares ``strip().casefold()`` forms instead.

All functions are pure and preserve the order of the collection they filter.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from fruitlink.models.entity import Buyer, Supplier
from fruitlink.models.trade import TradeLink


def _canonical(fruit: str, normalize: bool) -> str:
    return fruit.strip().casefold() if normalize else fruit


def _fruit_set(fruits: Iterable[str], normalize: bool) -> set[str]:
    return {_canonical(f, normalize) for f in fruits}


def shared_fruits(
    interested: Sequence[str],
    offered: Sequence[str],
    normalize: bool = False,
) -> list[str]:
    """Fruits in ``interested`` that also appear in ``offered``.

    Order and spelling follow ``interested``; duplicates are kept once.

    Example::

        shared_fruits(["banana"], ["banana", "mango"])  # ["banana"]
    """
    offered_set = _fruit_set(offered, normalize)
    result: list[str] = []
    seen: set[str] = set()
    for fruit in interested:
        key = _canonical(fruit, normalize)
        if key in offered_set and key not in seen:
            seen.add(key)
            result.append(fruit)
    return result


def match_suppliers(
    buyer: Buyer,
    suppliers: Sequence[Supplier],
    normalize: bool = False,
) -> list[Supplier]:
    """Suppliers offering at least one fruit the buyer is interested in."""
    wanted = _fruit_set(buyer.fruits_interested, normalize)
    return [
        s for s in suppliers
        if not wanted.isdisjoint(_fruit_set(s.fruits_offered, normalize))
    ]


def match_buyers(
    supplier: Supplier,
    buyers: Sequence[Buyer],
    normalize: bool = False,
) -> list[Buyer]:
    """Buyers interested in at least one fruit the supplier offers."""
    offered = _fruit_set(supplier.fruits_offered, normalize)
    return [
        b for b in buyers
        if not offered.isdisjoint(_fruit_set(b.fruits_interested, normalize))
    ]


def build_trade_links(
    suppliers: Sequence[Supplier],
    buyers: Sequence[Buyer],
    normalize: bool = False,
) -> list[TradeLink]:
    """One supplier → buyer link per pair with a non-empty shared fruit set.

    Buyers form the outer loop and suppliers the inner one, so links come out
    grouped by buyer in directory order.
    """
    links: list[TradeLink] = []
    for buyer in buyers:
        for supplier in suppliers:
            shared = shared_fruits(buyer.fruits_interested, supplier.fruits_offered, normalize)
            if shared:
                links.append(
                    TradeLink(
                        supplier_id=supplier.id,
                        buyer_id=buyer.id,
                        shared_fruits=tuple(shared),
                    )
                )
    return links
