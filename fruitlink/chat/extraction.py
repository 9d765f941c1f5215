"""
Turning free text into supplier and buyer drafts.

Two extractors feed the router:

  ``parse_extraction``   model output → ``Extraction``. Markdown code fences
                         are stripped and the first JSON object in the text
                         is decoded. Raises ``ExtractionError`` when there is
                         no decodable object.
  ``extract_from_text``  regex fallback over any text (a model reply or the
                         user's own message). Understands the command form
                         ("Add supplier Golden Orchard from Thailand offering
                         mango and durian") and labelled text ("Supplier
                         Name: ...", "Country: ...", "Products: ..."), with
                         fields split by line breaks, ``|`` or the next
                         "Label:".

Fruit lists split on commas, ``and`` and whitespace, and are lower-cased.
A supplier needs a name, a country and at least one fruit; a buyer needs a
name and at least one fruit.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Optional

from fruitlink.errors import ExtractionError
from fruitlink.models.entity import BuyerDraft, SupplierDraft
from fruitlink.taxonomy.trade_taxonomy import ActionKind

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_MARKUP_RE = re.compile(r"[*_`]")
_FRUIT_SPLIT_RE = re.compile(r",|\band\b|\s+", re.IGNORECASE)

_SUPPLIER_VERBS = r"(?:offering|selling|supplying|that\s+(?:has|have))"
_BUYER_VERBS = (
    r"(?:interested\s+in"
    r"|(?:that(?:['’]s|\s+is|\s+will)?\s+)?(?:going\s+to\s+)?(?:import|buy)(?:s|ing)?"
    r"|looking\s+for)"
)
_NAMED = r"(?:named\s+|called\s+)?"

_COMMAND_PATTERNS: dict[ActionKind, tuple[re.Pattern, re.Pattern, re.Pattern]] = {
    ActionKind.ADD_SUPPLIER: (
        re.compile(
            rf"(?:add|create)\s+(?:a\s+|new\s+)*suppliers?:?\s+{_NAMED}(.+?)\s+from\s+", re.I
        ),
        re.compile(rf"\bfrom\s+(.+?)\s+{_SUPPLIER_VERBS}\s+", re.I),
        re.compile(rf"\b{_SUPPLIER_VERBS}\s+([^.!?\n]+)", re.I),
    ),
    ActionKind.ADD_BUYER: (
        re.compile(
            rf"(?:add|create)\s+(?:a\s+|new\s+)*buyers?:?\s+{_NAMED}(.+?)"
            rf"(?:\s+from\s+|\s+{_BUYER_VERBS}\s+)",
            re.I,
        ),
        re.compile(rf"\bfrom\s+(.+?)\s+{_BUYER_VERBS}\s+", re.I),
        re.compile(rf"\b{_BUYER_VERBS}\s+([^.!?\n]+)", re.I),
    ),
}

# Bare field words ("fruit", "products", "country") only count as labels when
# a colon follows, so "Tropical Fruit Co" stays one name.
_FIELD_LABEL = (
    r"(?:(?:supplier|buyer|company)\s*)?"
    r"(?:name|country|products?(?:\s*\(s\))?|fruits?)"
    r"(?:\s+(?:offered|exported|exporting|imported|importing|interested(?:\s+in)?|of\s+interest))?"
    r"\s*:"
)
_LINE_END = r"[ ]*(?:\n|$)"

# A labelled value runs until the next labelled field, a phrase boundary,
# punctuation or the end of the line.
_VALUE = r"([A-Za-z0-9][A-Za-z0-9&' -]*?)"
_VALUE_STOP = (
    rf"(?=\s+{_FIELD_LABEL}"
    r"|\s+(?:from|offering|selling|supplying|interested|that|which|who)\b"
    rf"|\s*[,;:.!?]|{_LINE_END})"
)
_FRUITS_VALUE = r"([A-Za-z0-9, ]+?)"
_FRUITS_STOP = rf"(?=\s+{_FIELD_LABEL}|\s+(?:from|name\s+is)\b|\s*[;:.!?]|{_LINE_END})"

_NAME_LABELS = {
    ActionKind.ADD_SUPPLIER: (
        r"(?:(?:supplier|company)\s*name\s*(?::|\s+is\b)|name\s*(?::|\s+is\b)|named\b|called\b)"
    ),
    ActionKind.ADD_BUYER: (
        r"(?:(?:buyer|company)\s*name\s*(?::|\s+is\b)|name\s*(?::|\s+is\b)|named\b|called\b)"
    ),
}
_COUNTRY_RES = (
    re.compile(rf"\bcountry\s*(?::|\s+is\b)\s*{_VALUE}{_VALUE_STOP}", re.I),
    re.compile(rf"\bfrom\s+{_VALUE}{_VALUE_STOP}", re.I),
)
_FRUIT_LABELS = {
    ActionKind.ADD_SUPPLIER: (
        r"(?:(?:products?(?:\s*\(s\))?|fruits?)(?:\s+(?:offered|exported|exporting))?\s*:"
        r"|offering\b|supplying\b|selling\b)"
    ),
    ActionKind.ADD_BUYER: (
        r"(?:(?:products?(?:\s*\(s\))?|fruits?)"
        r"(?:\s+(?:imported|importing|interested(?:\s+in)?|of\s+interest))?\s*:"
        r"|interested\s+in\b|looking\s+for\b)"
    ),
}


@dataclass(frozen=True)
class Extraction:
    """Possibly incomplete entity facts pulled out of some text."""

    name: Optional[str] = None
    country: Optional[str] = None
    fruits: tuple[str, ...] = ()

    def missing_fields(self, kind: ActionKind) -> list[str]:
        """Human-readable names of the required fields still missing."""
        missing = []
        if not self.name:
            missing.append("name")
        if kind == ActionKind.ADD_SUPPLIER and not self.country:
            missing.append("country")
        if not self.fruits:
            missing.append(
                "fruits offered" if kind == ActionKind.ADD_SUPPLIER else "fruits of interest"
            )
        return missing

    def is_complete(self, kind: ActionKind) -> bool:
        return not self.missing_fields(kind)

    def merged_with(self, other: "Extraction") -> "Extraction":
        """Fill this extraction's blanks from ``other``."""
        return Extraction(
            name=self.name or other.name,
            country=self.country or other.country,
            fruits=self.fruits or other.fruits,
        )

    def to_supplier_draft(self) -> SupplierDraft:
        return SupplierDraft(
            name=self.name or "", country=self.country or "", fruits_offered=list(self.fruits)
        )

    def to_buyer_draft(self) -> BuyerDraft:
        return BuyerDraft(
            name=self.name or "", country=self.country or "", fruits_interested=list(self.fruits)
        )


def split_fruits(text: str) -> tuple[str, ...]:
    """``"Mango, durian and lychee."`` → ``("mango", "durian", "lychee")``."""
    fruits = []
    for part in _FRUIT_SPLIT_RE.split(text):
        fruit = part.strip(" .!?;:'\"").lower()
        if fruit and fruit != "and":
            fruits.append(fruit)
    return tuple(fruits)


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text if text and text.lower() != "null" else None


def parse_extraction(text: str) -> Extraction:
    """Decode the first JSON object in a model reply.

    Raises:
        ExtractionError: If the reply contains no decodable JSON object.
    """
    body = strip_code_fences(text)
    start = body.find("{")
    if start < 0:
        raise ExtractionError("No JSON object in model output.")
    try:
        obj, _ = json.JSONDecoder().raw_decode(body, start)
    except json.JSONDecodeError as exc:
        raise ExtractionError(f"Malformed JSON in model output: {exc}") from exc
    if not isinstance(obj, dict):
        raise ExtractionError("Model output JSON is not an object.")

    raw_fruits = obj.get("fruits")
    fruits: tuple[str, ...] = ()
    if isinstance(raw_fruits, list):
        fruits = tuple(f for f in (_clean_str(x) for x in raw_fruits) if f)
        fruits = tuple(f.lower() for f in fruits)

    return Extraction(
        name=_clean_str(obj.get("name")),
        country=_clean_str(obj.get("country")),
        fruits=fruits,
    )


def _clean_text(text: str) -> str:
    """Drop Markdown emphasis and collapse spaces; ``|`` and line breaks separate fields."""
    text = _MARKUP_RE.sub(" ", text.replace("|", "\n"))
    lines = (re.sub(r"[ \t]+", " ", line).strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def _first_group(patterns, text: str) -> Optional[str]:
    for pattern in patterns:
        if m := pattern.search(text):
            value = m.group(1).strip(" .!?;:,")
            if value:
                return value
    return None


def _command_form(text: str, kind: ActionKind) -> Extraction:
    name_re, country_re, fruits_re = _COMMAND_PATTERNS[kind]
    fruits_text = _first_group([fruits_re], text)
    return Extraction(
        name=_first_group([name_re], text),
        country=_first_group([country_re], text),
        fruits=split_fruits(fruits_text) if fruits_text else (),
    )


def _labelled(text: str, kind: ActionKind) -> Extraction:
    name_re = re.compile(rf"\b{_NAME_LABELS[kind]}[ ]*{_VALUE}{_VALUE_STOP}", re.I)
    fruits_re = re.compile(rf"\b{_FRUIT_LABELS[kind]}[ ]*{_FRUITS_VALUE}{_FRUITS_STOP}", re.I)
    fruits_text = _first_group([fruits_re], text)
    return Extraction(
        name=_first_group([name_re], text),
        country=_first_group(_COUNTRY_RES, text),
        fruits=split_fruits(fruits_text) if fruits_text else (),
    )


def extract_from_text(text: str, kind: ActionKind) -> Extraction:
    """Regex extraction; the command form wins over labelled text field by field."""
    clean = _clean_text(text)
    if not clean:
        return Extraction()
    command = _command_form(clean, kind)
    if command.is_complete(kind):
        return command
    return command.merged_with(_labelled(clean, kind))
