"""Tests for fruitlink.store.state.AppState.

Covers:
  - seeded collections and id allocation
  - entity creation from drafts and prototypes (defaults, kg units)
  - wholesale replacement
  - chat log
  - navigation and selection
"""

from __future__ import annotations

from datetime import date

import pytest

from fruitlink.models.entity import BuyerDraft, PriceRange, Supplier, SupplierDraft
from fruitlink.store.state import PLACEHOLDER_PHONE, AppState
from fruitlink.taxonomy.trade_taxonomy import SenderType, ViewType, Volume


class TestSeededState:
    def test_seed_counts(self, state):
        assert len(state.suppliers) == 4
        assert len(state.buyers) == 4
        assert state.messages == []
        assert state.current_view == ViewType.MAIN

    def test_first_id_follows_seed(self, state):
        assert state.next_id() == "5"

    def test_empty_state_starts_at_one(self):
        assert AppState(suppliers=[], buyers=[]).next_id() == "1"

    def test_collections_are_copies(self, state):
        state.suppliers.clear()
        assert len(state.suppliers) == 4


class TestAddSupplier:
    def test_from_draft_gets_defaults(self, state):
        s = state.add_supplier(
            SupplierDraft(name="Golden Orchard", country="Thailand", fruits_offered=["mango", "durian"])
        )
        assert s.id == "5"
        assert s.location == "Thailand"
        assert s.certifications == ["GLOBALG.A.P"]
        assert s.contact_email == "info@goldenorchard.com"
        assert s.contact_phone == PLACEHOLDER_PHONE
        assert s.description == "Premium fruit supplier from Thailand"
        assert s.reliability == 85
        assert s.established == date.today().year - 5
        assert set(s.price_range) == {"mango", "durian"}
        assert s.price_range["mango"] == PriceRange(min=2.0, max=5.0, currency="USD", unit="kg")
        assert state.suppliers[-1] == s

    def test_prototype_gets_fresh_id_and_kg_units(self, state):
        proto = Supplier(
            id="999",
            name="Proto",
            price_range={"kiwi": PriceRange(min=1, max=2, unit="lb")},
        )
        s = state.add_supplier(proto)
        assert s.id == "5"
        assert s.price_range["kiwi"].unit == "kg"

    def test_ids_never_reused(self, state):
        draft = SupplierDraft(name="A", country="X", fruits_offered=["kiwi"])
        ids = [state.add_supplier(draft).id for _ in range(3)]
        ids.append(state.add_buyer(BuyerDraft(name="B", fruits_interested=["kiwi"])).id)
        ids.append(state.add_message(SenderType.USER, "hi").id)
        assert len(set(ids)) == len(ids)


class TestAddBuyer:
    def test_from_draft_without_country(self, state):
        b = state.add_buyer(BuyerDraft(name="Fresh Direct", fruits_interested=["limes", "mango"]))
        assert b.country == ""
        assert b.location == "Location not specified"
        assert b.contact_email == "procurement@freshdirect.com"
        assert b.description == "Fruit buyer interested in limes, mango"
        assert b.volume == Volume.MEDIUM
        assert b.budget_range["limes"] == PriceRange(min=1.5, max=4.0)
        assert b.established == date.today().year - 3


class TestReplace:
    def test_replace_supplier(self, state):
        original = state.get_supplier("2")
        state.replace_supplier(original.model_copy(update={"reliability": 99}))
        assert state.get_supplier("2").reliability == 99
        assert len(state.suppliers) == 4

    def test_replace_unknown_raises(self, state):
        with pytest.raises(KeyError):
            state.replace_supplier(Supplier(id="404", name="Ghost"))

    def test_replace_buyer(self, state):
        buyer = state.get_buyer("3")
        state.replace_buyer(buyer.model_copy(update={"volume": Volume.SMALL}))
        assert state.get_buyer("3").volume == Volume.SMALL


class TestMessages:
    def test_append_order_and_timestamp(self, state):
        first = state.add_message(SenderType.USER, "hello")
        second = state.add_message(SenderType.BOT, "hi there")
        assert [m.content for m in state.messages] == ["hello", "hi there"]
        assert first.id != second.id
        assert first.timestamp.tzinfo is not None
        assert second.action is None


class TestNavigation:
    def test_view_supplier(self, state):
        state.view_supplier("3")
        assert state.current_view == ViewType.SUPPLIER
        assert state.selected_supplier.name == "Vitassous"
        assert state.selected_buyer is None

    def test_view_buyer(self, state):
        state.view_buyer("4")
        assert state.selected_buyer.name == "Wismettac"
        assert state.selected_supplier is None

    def test_unknown_selection_is_none(self, state):
        state.view_supplier("404")
        assert state.selected_supplier is None

    def test_back_to_main(self, state):
        state.view_buyer("1")
        state.go_back_to_main()
        assert state.current_view == ViewType.MAIN
        assert state.selected_buyer_id == ""
        assert state.selected_buyer is None
