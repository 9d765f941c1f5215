"""
Exception hierarchy.

Library code raises these; only the insight services and the chat router
convert them into the human-readable fallback strings the views display.
"""

from __future__ import annotations


class FruitLinkError(Exception):
    """Base class for all FruitLink errors."""


class CollaboratorError(FruitLinkError):
    """The backend proxy (text model or certification lookup) failed.

    Covers transport errors, non-2xx responses and ``{"error": ...}``
    envelopes returned with a 200 status.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ExtractionError(FruitLinkError):
    """Model output could not be turned into a structured entity draft."""
