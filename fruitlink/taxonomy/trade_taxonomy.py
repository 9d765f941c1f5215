"""
Categorical vocabulary for the trade directory.

  - ``Volume``     — buyer purchase size.
  - ``RiskLevel``  — buyer-side trade risk derived from matched suppliers.
  - ``SenderType`` — who wrote a chat message.
  - ``ActionKind`` — structured action attached to a bot chat message.
  - ``ViewType``   — which screen the session is currently showing.

Usage example::

    from fruitlink.taxonomy.trade_taxonomy import Volume, RiskLevel

    volume = Volume.LARGE
    risk   = RiskLevel.HIGH

This module has NO imports from any other ``fruitlink`` package.
"""

from enum import StrEnum


class Volume(StrEnum):
    """Buyer purchase volume band."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class RiskLevel(StrEnum):
    """Trade risk for a buyer, from the average reliability of its suppliers."""

    LOW = "Low"
    """Average matched-supplier reliability above 90."""

    MEDIUM = "Medium"
    """Average above 75, up to and including 90."""

    HIGH = "High"
    """Average of 75 or less, including the no-match case."""


class SenderType(StrEnum):
    """Author of a chat message."""

    USER = "user"
    BOT = "bot"


class ActionKind(StrEnum):
    """Action a bot reply asks the session to perform."""

    ADD_SUPPLIER = "add_supplier"
    ADD_BUYER = "add_buyer"
    VIEW_SUPPLIER = "view_supplier"
    VIEW_BUYER = "view_buyer"


class ViewType(StrEnum):
    """Screen currently shown by the session."""

    MAIN = "main"
    SUPPLIER = "supplier"
    BUYER = "buyer"
