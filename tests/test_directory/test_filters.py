"""Tests for fruitlink.directory.filters."""

from __future__ import annotations

from fruitlink.directory.filters import (
    BuyerFilters,
    SupplierFilters,
    filter_buyers,
    filter_suppliers,
    matches_search,
)
from fruitlink.taxonomy.trade_taxonomy import Volume


def _ids(entities) -> list[str]:
    return [e.id for e in entities]


class TestSupplierFilters:
    def test_no_filters_returns_everything_in_order(self, suppliers):
        assert _ids(filter_suppliers(suppliers)) == ["1", "2", "3", "4"]

    def test_country_is_exact(self, suppliers):
        assert _ids(filter_suppliers(suppliers, SupplierFilters(country="Colombia"))) == ["2", "3"]
        assert filter_suppliers(suppliers, SupplierFilters(country="colombia")) == []

    def test_search_is_case_insensitive_on_name(self, suppliers):
        assert _ids(filter_suppliers(suppliers, SupplierFilters(search="NUSANTARA"))) == ["1"]

    def test_search_matches_location(self, suppliers):
        assert _ids(filter_suppliers(suppliers, SupplierFilters(search="vietnam"))) == ["4"]

    def test_fruit_facet(self, suppliers):
        assert _ids(filter_suppliers(suppliers, SupplierFilters(fruit="banana"))) == ["1", "4"]

    def test_certification_facet(self, suppliers):
        assert _ids(filter_suppliers(suppliers, SupplierFilters(certification="Organic"))) == ["1", "3"]

    def test_facets_are_anded(self, suppliers):
        filters = SupplierFilters(country="Colombia", fruit="raspberry")
        assert _ids(filter_suppliers(suppliers, filters)) == ["3"]


class TestBuyerFilters:
    def test_volume_facet(self, buyers):
        assert _ids(filter_buyers(buyers, BuyerFilters(volume=Volume.LARGE))) == ["1", "4"]

    def test_fruit_and_country(self, buyers):
        assert _ids(filter_buyers(buyers, BuyerFilters(fruit="banana", country="Japan"))) == ["4"]

    def test_no_match(self, buyers):
        assert filter_buyers(buyers, BuyerFilters(search="zzz")) == []


def test_matches_search_empty_needle_matches_everything():
    assert matches_search("Anything", "", "")
