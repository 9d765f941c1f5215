"""
In-memory session state.

``AppState`` owns the supplier and buyer collections, the chat log and the
navigation state (current view plus selected entity). Everything is lost at
process exit.

Identifiers come from a per-state counter that starts above the highest
seeded numeric id, so an id is never handed out twice within a session.

Entities created from chat or form drafts receive the same defaults the
directory cards expect to render: a contact address derived from the name,
a placeholder phone, a per-fruit price (or budget) range in USD per kg, and
a founding year a few years back.
"""

from __future__ import annotations

import itertools
import logging
import re
from datetime import date
from typing import Iterable, Optional

from fruitlink.models.chat import ChatAction, ChatMessage
from fruitlink.models.entity import Buyer, BuyerDraft, PriceRange, Supplier, SupplierDraft
from fruitlink.store.seed import seed_buyers, seed_suppliers
from fruitlink.taxonomy.trade_taxonomy import SenderType, ViewType, Volume
from fruitlink.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

PLACEHOLDER_PHONE = "+1-234-567-8900"
DEFAULT_SUPPLIER_RELIABILITY = 85
DEFAULT_SUPPLIER_PRICE = PriceRange(min=2.0, max=5.0)
DEFAULT_BUYER_BUDGET = PriceRange(min=1.5, max=4.0)


def _slug(name: str) -> str:
    return re.sub(r"\s+", "", name.lower())


def _per_kg(ranges: dict[str, PriceRange]) -> dict[str, PriceRange]:
    return {fruit: r.model_copy(update={"unit": "kg"}) for fruit, r in ranges.items()}


def supplier_from_draft(draft: SupplierDraft, entity_id: str, year: int) -> Supplier:
    """Expand a ``SupplierDraft`` into a full ``Supplier`` with directory defaults."""
    return Supplier(
        id=entity_id,
        name=draft.name,
        location=draft.country,
        country=draft.country,
        fruits_offered=list(draft.fruits_offered),
        certifications=["GLOBALG.A.P"],
        contact_email=f"info@{_slug(draft.name)}.com",
        contact_phone=PLACEHOLDER_PHONE,
        description=f"Premium fruit supplier from {draft.country}",
        price_range={fruit: DEFAULT_SUPPLIER_PRICE for fruit in draft.fruits_offered},
        reliability=DEFAULT_SUPPLIER_RELIABILITY,
        established=year - 5,
    )


def buyer_from_draft(draft: BuyerDraft, entity_id: str, year: int) -> Buyer:
    """Expand a ``BuyerDraft`` into a full ``Buyer`` with directory defaults."""
    fruits = list(draft.fruits_interested)
    return Buyer(
        id=entity_id,
        name=draft.name,
        location=draft.country or "Location not specified",
        country=draft.country,
        fruits_interested=fruits,
        contact_email=f"procurement@{_slug(draft.name)}.com",
        contact_phone=PLACEHOLDER_PHONE,
        description=f"Fruit buyer interested in {', '.join(fruits)}",
        budget_range={fruit: DEFAULT_BUYER_BUDGET for fruit in fruits},
        volume=Volume.MEDIUM,
        established=year - 3,
    )


class AppState:
    """Process-wide collections and navigation for one session.

    Args:
        suppliers: Initial suppliers. Defaults to the demo seed.
        buyers: Initial buyers. Defaults to the demo seed.
    """

    def __init__(
        self,
        suppliers: Optional[Iterable[Supplier]] = None,
        buyers: Optional[Iterable[Buyer]] = None,
    ) -> None:
        self._suppliers: list[Supplier] = list(seed_suppliers() if suppliers is None else suppliers)
        self._buyers: list[Buyer] = list(seed_buyers() if buyers is None else buyers)
        self._messages: list[ChatMessage] = []

        self.current_view: ViewType = ViewType.MAIN
        self.selected_supplier_id: str = ""
        self.selected_buyer_id: str = ""

        start = 1 + max(
            (int(e.id) for e in [*self._suppliers, *self._buyers] if e.id.isdigit()),
            default=0,
        )
        self._ids = itertools.count(start)

    # ── Collections ───────────────────────────────────────────────────────────

    @property
    def suppliers(self) -> list[Supplier]:
        return list(self._suppliers)

    @property
    def buyers(self) -> list[Buyer]:
        return list(self._buyers)

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    def next_id(self) -> str:
        return str(next(self._ids))

    def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        return next((s for s in self._suppliers if s.id == supplier_id), None)

    def get_buyer(self, buyer_id: str) -> Optional[Buyer]:
        return next((b for b in self._buyers if b.id == buyer_id), None)

    def add_supplier(self, draft: SupplierDraft | Supplier) -> Supplier:
        """Create a supplier from a draft (or a prototype) and append it.

        A fresh id is always assigned; any id on a prototype is ignored.
        Price ranges are normalized to ``unit="kg"``.
        """
        entity_id = self.next_id()
        if isinstance(draft, SupplierDraft):
            supplier = supplier_from_draft(draft, entity_id, date.today().year)
        else:
            supplier = draft.model_copy(
                update={"id": entity_id, "price_range": _per_kg(draft.price_range)}
            )
        self._suppliers.append(supplier)
        logger.info("Supplier added id=%s name=%r", supplier.id, supplier.name)
        return supplier

    def add_buyer(self, draft: BuyerDraft | Buyer) -> Buyer:
        """Create a buyer from a draft (or a prototype) and append it."""
        entity_id = self.next_id()
        if isinstance(draft, BuyerDraft):
            buyer = buyer_from_draft(draft, entity_id, date.today().year)
        else:
            buyer = draft.model_copy(
                update={"id": entity_id, "budget_range": _per_kg(draft.budget_range)}
            )
        self._buyers.append(buyer)
        logger.info("Buyer added id=%s name=%r", buyer.id, buyer.name)
        return buyer

    def replace_supplier(self, supplier: Supplier) -> None:
        """Swap the supplier with the same id for ``supplier``.

        Raises:
            KeyError: If no supplier has that id.
        """
        for i, existing in enumerate(self._suppliers):
            if existing.id == supplier.id:
                self._suppliers[i] = supplier
                return
        raise KeyError(f"No supplier with id {supplier.id!r}.")

    def replace_buyer(self, buyer: Buyer) -> None:
        """Swap the buyer with the same id for ``buyer``.

        Raises:
            KeyError: If no buyer has that id.
        """
        for i, existing in enumerate(self._buyers):
            if existing.id == buyer.id:
                self._buyers[i] = buyer
                return
        raise KeyError(f"No buyer with id {buyer.id!r}.")

    # ── Chat log ──────────────────────────────────────────────────────────────

    def add_message(
        self,
        sender: SenderType,
        content: str,
        action: Optional[ChatAction] = None,
    ) -> ChatMessage:
        message = ChatMessage(
            id=self.next_id(),
            sender=sender,
            content=content,
            timestamp=utcnow(),
            action=action,
        )
        self._messages.append(message)
        return message

    # ── Navigation ────────────────────────────────────────────────────────────

    def view_supplier(self, supplier_id: str) -> None:
        self.selected_supplier_id = supplier_id
        self.current_view = ViewType.SUPPLIER

    def view_buyer(self, buyer_id: str) -> None:
        self.selected_buyer_id = buyer_id
        self.current_view = ViewType.BUYER

    def go_back_to_main(self) -> None:
        self.current_view = ViewType.MAIN
        self.selected_supplier_id = ""
        self.selected_buyer_id = ""

    @property
    def selected_supplier(self) -> Optional[Supplier]:
        if self.current_view != ViewType.SUPPLIER:
            return None
        return self.get_supplier(self.selected_supplier_id)

    @property
    def selected_buyer(self) -> Optional[Buyer]:
        if self.current_view != ViewType.BUYER:
            return None
        return self.get_buyer(self.selected_buyer_id)
