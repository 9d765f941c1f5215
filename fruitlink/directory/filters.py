"""
Directory filtering.

Every predicate is ANDed, and an empty facet matches everything:

  search         case-insensitive substring of ``name`` OR ``location``
  country        exact, case-sensitive equality with ``country``
  fruit          exact membership in the entity's fruit list
  certification  exact membership in ``certifications`` (suppliers)
  volume         exact equality with ``volume`` (buyers)

The search box is forgiving while the facets are not: ``country="colombia"``
does not match ``"Colombia"``. Facet values are expected to come from the
directory's own pick-lists.

Filtering is a linear scan that preserves directory order; it is cheap
enough to rerun on every keystroke for directories of hundreds of entries.
"""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict

from fruitlink.models.entity import Buyer, Supplier
from fruitlink.taxonomy.trade_taxonomy import Volume


class SupplierFilters(BaseModel):
    """Search text and facets for the supplier list."""

    model_config = ConfigDict(frozen=True)

    search: str = ""
    country: str = ""
    fruit: str = ""
    certification: str = ""


class BuyerFilters(BaseModel):
    """Search text and facets for the buyer list."""

    model_config = ConfigDict(frozen=True)

    search: str = ""
    country: str = ""
    fruit: str = ""
    volume: Optional[Volume] = None


def matches_search(name: str, location: str, search: str) -> bool:
    """Case-insensitive substring match on name or location."""
    needle = search.lower()
    return needle in name.lower() or needle in location.lower()


def supplier_matches(supplier: Supplier, filters: SupplierFilters) -> bool:
    return (
        matches_search(supplier.name, supplier.location, filters.search)
        and (not filters.country or supplier.country == filters.country)
        and (not filters.fruit or filters.fruit in supplier.fruits_offered)
        and (not filters.certification or filters.certification in supplier.certifications)
    )


def buyer_matches(buyer: Buyer, filters: BuyerFilters) -> bool:
    return (
        matches_search(buyer.name, buyer.location, filters.search)
        and (not filters.country or buyer.country == filters.country)
        and (not filters.fruit or filters.fruit in buyer.fruits_interested)
        and (not filters.volume or buyer.volume == filters.volume)
    )


def filter_suppliers(
    suppliers: Sequence[Supplier],
    filters: Optional[SupplierFilters] = None,
) -> list[Supplier]:
    """Suppliers passing every predicate in ``filters``, in input order."""
    filters = filters or SupplierFilters()
    return [s for s in suppliers if supplier_matches(s, filters)]


def filter_buyers(
    buyers: Sequence[Buyer],
    filters: Optional[BuyerFilters] = None,
) -> list[Buyer]:
    """Buyers passing every predicate in ``filters``, in input order."""
    filters = filters or BuyerFilters()
    return [b for b in buyers if buyer_matches(b, filters)]
