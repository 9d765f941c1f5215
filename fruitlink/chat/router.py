"""
Chat intent router.

``ChatRouter.process(message)`` classifies a message by trigger phrase and
returns a ``ChatReply``. It never raises: collaborator and parse failures
degrade to the next extraction strategy and finally to a clarification.

Entity intents (``add supplier`` / ``create supplier``, ``add buyer`` /
``create buyer``) go through this chain, first success wins:

  1. strict extraction prompt → JSON
  2. stricter retry prompt    → JSON
  3. regex extractor over the retry reply, the first reply and the raw
     message, in that order
  4. clarification naming the missing fields

Anything else is forwarded to the collaborator as-is and its completion is
returned; if the collaborator is down the user sees a static message.

The router only *proposes* actions. Creating the entity and navigating to it
is ``ChatSession``'s job.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from fruitlink.chat.extraction import Extraction, extract_from_text, parse_extraction
from fruitlink.chat.prompts import extraction_prompt, strict_retry_prompt
from fruitlink.errors import CollaboratorError, ExtractionError
from fruitlink.insights.client import CollaboratorClient
from fruitlink.models.chat import AddBuyerAction, AddSupplierAction, ChatReply
from fruitlink.taxonomy.trade_taxonomy import ActionKind

logger = logging.getLogger(__name__)

SERVICE_UNAVAILABLE = "Sorry, there was an error connecting to the AI service."

_TRIGGERS = (
    (re.compile(r"\b(?:add|create)\s+suppliers?\b", re.I), ActionKind.ADD_SUPPLIER),
    (re.compile(r"\b(?:add|create)\s+buyers?\b", re.I), ActionKind.ADD_BUYER),
)

_EXAMPLES = {
    ActionKind.ADD_SUPPLIER: "Add supplier Golden Orchard from Thailand offering mango and durian",
    ActionKind.ADD_BUYER: "Add buyer Fresh Direct from Spain interested in limes",
}


def classify_intent(message: str) -> Optional[ActionKind]:
    """Return the entity intent a message triggers, or ``None`` for chat."""
    for pattern, kind in _TRIGGERS:
        if pattern.search(message):
            return kind
    return None


def success_reply(extraction: Extraction, kind: ActionKind) -> ChatReply:
    fruits = ", ".join(extraction.fruits)
    if kind == ActionKind.ADD_SUPPLIER:
        return ChatReply(
            content=(
                f"Great! I've created a new supplier profile for {extraction.name} "
                f"from {extraction.country}. They offer {fruits}. "
                "I'll redirect you to their profile page to complete the details."
            ),
            action=AddSupplierAction(draft=extraction.to_supplier_draft()),
        )
    origin = f" from {extraction.country}" if extraction.country else ""
    return ChatReply(
        content=(
            f"Excellent! I've created a new buyer profile for {extraction.name}{origin}. "
            f"They're interested in {fruits}. "
            "I'll redirect you to their profile page to add more details."
        ),
        action=AddBuyerAction(draft=extraction.to_buyer_draft()),
    )


def clarification_reply(best: Extraction, kind: ActionKind) -> ChatReply:
    noun = "supplier" if kind == ActionKind.ADD_SUPPLIER else "buyer"
    missing = best.missing_fields(kind)
    if len(missing) > 1:
        needed = ", ".join(missing[:-1]) + f" and {missing[-1]}"
    else:
        needed = missing[0] if missing else "details"
    return ChatReply(
        content=(
            f"Sorry, I couldn't extract the {noun} details. "
            f"Please provide the {needed}. "
            f'For example: "{_EXAMPLES[kind]}"'
        )
    )


class ChatRouter:
    """Routes chat messages to entity extraction or free conversation.

    Args:
        client: Collaborator used for extraction prompts and conversation.
    """

    def __init__(self, client: CollaboratorClient) -> None:
        self.client = client

    def process(self, message: str) -> ChatReply:
        kind = classify_intent(message)
        if kind is None:
            return self._converse(message)
        return self._extract_entity(message, kind)

    # ── Routes ────────────────────────────────────────────────────────────────

    def _converse(self, message: str) -> ChatReply:
        try:
            content = self.client.chat(message)
        except CollaboratorError as exc:
            logger.warning("Conversation request failed: %s", exc)
            return ChatReply(content=SERVICE_UNAVAILABLE)
        return ChatReply(content=content or SERVICE_UNAVAILABLE)

    def _extract_entity(self, message: str, kind: ActionKind) -> ChatReply:
        best = Extraction()

        first = self._ask(extraction_prompt(message, kind))
        if first is not None:
            extraction = self._parse(first)
            if extraction is not None:
                if extraction.is_complete(kind):
                    return success_reply(extraction, kind)
                best = best.merged_with(extraction)

        retry = self._ask(strict_retry_prompt(message))
        if retry is not None:
            extraction = self._parse(retry)
            if extraction is not None:
                if extraction.is_complete(kind):
                    return success_reply(extraction, kind)
                best = best.merged_with(extraction)

        for source in (retry, first, message):
            if not source:
                continue
            extraction = extract_from_text(source, kind)
            if extraction.is_complete(kind):
                logger.debug("Regex extractor resolved %s intent", kind.value)
                return success_reply(extraction, kind)
            best = best.merged_with(extraction)

        logger.info("Could not extract %s details; missing %s", kind.value, best.missing_fields(kind))
        return clarification_reply(best, kind)

    # ── Internal ──────────────────────────────────────────────────────────────

    def _ask(self, prompt: str) -> Optional[str]:
        try:
            return self.client.chat(prompt)
        except CollaboratorError as exc:
            logger.warning("Extraction request failed: %s", exc)
            return None

    @staticmethod
    def _parse(reply: str) -> Optional[Extraction]:
        try:
            return parse_extraction(reply)
        except ExtractionError as exc:
            logger.debug("Model reply not usable: %s", exc)
            return None
