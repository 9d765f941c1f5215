"""
Chat message models.

Bot replies may carry a structured action. ``ChatAction`` is a discriminated
union on ``kind``; each member carries its own typed payload:

  ``add_supplier``   → ``SupplierDraft``
  ``add_buyer``      → ``BuyerDraft``
  ``view_supplier``  → ``supplier_id``
  ``view_buyer``     → ``buyer_id``

The message log is append-only; insertion order is display order.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from fruitlink.models.entity import BuyerDraft, SupplierDraft
from fruitlink.taxonomy.trade_taxonomy import ActionKind, SenderType


class AddSupplierAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[ActionKind.ADD_SUPPLIER] = ActionKind.ADD_SUPPLIER
    draft: SupplierDraft


class AddBuyerAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[ActionKind.ADD_BUYER] = ActionKind.ADD_BUYER
    draft: BuyerDraft


class ViewSupplierAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[ActionKind.VIEW_SUPPLIER] = ActionKind.VIEW_SUPPLIER
    supplier_id: str


class ViewBuyerAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[ActionKind.VIEW_BUYER] = ActionKind.VIEW_BUYER
    buyer_id: str


ChatAction = Annotated[
    Union[AddSupplierAction, AddBuyerAction, ViewSupplierAction, ViewBuyerAction],
    Field(discriminator="kind"),
]


class ChatReply(BaseModel):
    """What the intent router returns: display text plus an optional action."""

    model_config = ConfigDict(frozen=True)

    content: str
    action: Optional[ChatAction] = None


class ChatMessage(BaseModel):
    """One entry in the session's chat log.

    Attributes:
        id: Store-assigned identifier.
        sender: ``user`` or ``bot``.
        content: Display text.
        timestamp: Creation time (UTC).
        action: Structured action for bot replies, if any.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    sender: SenderType
    content: str
    timestamp: datetime
    action: Optional[ChatAction] = None
