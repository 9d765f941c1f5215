"""Tests for the chat action union in fruitlink.models.chat."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from fruitlink.models.chat import (
    AddBuyerAction,
    AddSupplierAction,
    ChatAction,
    ChatMessage,
    ChatReply,
    ViewBuyerAction,
    ViewSupplierAction,
)
from fruitlink.models.entity import SupplierDraft
from fruitlink.taxonomy.trade_taxonomy import ActionKind, SenderType

_adapter = TypeAdapter(ChatAction)


class TestChatActionUnion:
    def test_add_supplier_payload(self):
        action = _adapter.validate_python(
            {
                "kind": "add_supplier",
                "draft": {"name": "Golden Orchard", "country": "Thailand", "fruits_offered": ["mango"]},
            }
        )
        assert isinstance(action, AddSupplierAction)
        assert action.draft.country == "Thailand"

    def test_add_buyer_payload(self):
        action = _adapter.validate_python(
            {"kind": "add_buyer", "draft": {"name": "Nordic Fruit", "fruits_interested": ["apple"]}}
        )
        assert isinstance(action, AddBuyerAction)
        assert action.draft.country == ""

    @pytest.mark.parametrize(
        "payload, cls",
        [
            ({"kind": "view_supplier", "supplier_id": "3"}, ViewSupplierAction),
            ({"kind": "view_buyer", "buyer_id": "2"}, ViewBuyerAction),
        ],
    )
    def test_view_payloads(self, payload, cls):
        assert isinstance(_adapter.validate_python(payload), cls)

    def test_payload_must_match_kind(self):
        with pytest.raises(ValidationError):
            _adapter.validate_python({"kind": "view_buyer", "supplier_id": "3"})

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            _adapter.validate_python({"kind": "delete_supplier", "supplier_id": "3"})


class TestChatReply:
    def test_action_defaults_to_none(self):
        assert ChatReply(content="hello").action is None

    def test_action_kind_defaults_from_member(self):
        draft = SupplierDraft(name="A", country="B", fruits_offered=["mango"])
        reply = ChatReply(content="ok", action=AddSupplierAction(draft=draft))
        assert reply.action.kind == ActionKind.ADD_SUPPLIER


def test_chat_message_round_trips_action_through_json():
    message = ChatMessage(
        id="10",
        sender=SenderType.BOT,
        content="Opening buyer",
        timestamp=datetime(2024, 6, 1, tzinfo=timezone.utc),
        action=ViewBuyerAction(buyer_id="2"),
    )
    restored = ChatMessage.model_validate_json(message.model_dump_json())
    assert restored == message
    assert isinstance(restored.action, ViewBuyerAction)
