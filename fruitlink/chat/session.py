"""
Chat session: applies router replies to the store.

``send(text)`` appends the user message, asks the router for a reply,
creates any proposed entity, appends the bot message and schedules
navigation to the new entity ``navigation_delay_seconds`` later. Navigation
only happens when the scheduler is driven (``tick()`` or ``flush()``), and
``close()`` cancels whatever is still pending.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from fruitlink.chat.router import ChatRouter
from fruitlink.config import ChatConfig
from fruitlink.models.chat import (
    AddBuyerAction,
    AddSupplierAction,
    ChatMessage,
    ChatReply,
    ViewBuyerAction,
    ViewSupplierAction,
)
from fruitlink.models.entity import Buyer, Supplier
from fruitlink.store.scheduler import DelayedTaskScheduler
from fruitlink.store.state import AppState
from fruitlink.taxonomy.trade_taxonomy import SenderType

logger = logging.getLogger(__name__)

GREETING = (
    "Hello! I'm your fruit trade assistant. You can ask me to add suppliers or "
    "buyers to our platform using natural language.\n"
    "Example: Add supplier FreshMart SG from Singapore that have mango and pineapple\n"
    "Example: Add buyer named Great Giant Pineapple from Indonesia that's going to import banana."
)


class ChatSession:
    """One user's conversation against an ``AppState``.

    Args:
        state: Store receiving messages and created entities.
        router: Intent router producing replies.
        scheduler: Queue for delayed navigation. A private one is created
            when omitted.
        config: Navigation delay settings.
    """

    def __init__(
        self,
        state: AppState,
        router: ChatRouter,
        scheduler: Optional[DelayedTaskScheduler] = None,
        config: Optional[ChatConfig] = None,
    ) -> None:
        self.state = state
        self.router = router
        self.scheduler = scheduler or DelayedTaskScheduler()
        self.config = config or ChatConfig()
        self.last_created: Optional[Union[Supplier, Buyer]] = None

    def __enter__(self) -> "ChatSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def send(self, text: str) -> Optional[ChatMessage]:
        """Process one user message; returns the bot reply, or ``None`` if blank."""
        text = text.strip()
        if not text:
            return None

        self.state.add_message(SenderType.USER, text)
        reply = self.router.process(text)
        self._apply(reply)
        return self.state.add_message(SenderType.BOT, reply.content, reply.action)

    def tick(self) -> int:
        """Run navigations whose delay has elapsed."""
        return self.scheduler.run_due()

    def flush(self) -> int:
        """Run every pending navigation now."""
        return self.scheduler.drain()

    def close(self) -> None:
        self.scheduler.cancel_all()

    def _apply(self, reply: ChatReply) -> None:
        action = reply.action
        self.last_created = None
        delay = self.config.navigation_delay_seconds

        if isinstance(action, AddSupplierAction):
            supplier = self.state.add_supplier(action.draft)
            self.last_created = supplier
            self.scheduler.schedule(
                delay, lambda: self.state.view_supplier(supplier.id), f"view supplier {supplier.id}"
            )
        elif isinstance(action, AddBuyerAction):
            buyer = self.state.add_buyer(action.draft)
            self.last_created = buyer
            self.scheduler.schedule(
                delay, lambda: self.state.view_buyer(buyer.id), f"view buyer {buyer.id}"
            )
        elif isinstance(action, ViewSupplierAction):
            self.state.view_supplier(action.supplier_id)
        elif isinstance(action, ViewBuyerAction):
            self.state.view_buyer(action.buyer_id)
