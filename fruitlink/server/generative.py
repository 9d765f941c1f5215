"""
Hosted text model access for the proxy.

``TextGenerator`` is the seam the app depends on; ``GeminiGenerator`` is the
production implementation on ``google-generativeai``. The API key comes
from ``GEMINI_API_KEY`` and is read when the first request is made, so the
app can start (and serve certification lookups) without one.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Protocol

import google.generativeai as genai

from fruitlink.errors import CollaboratorError

logger = logging.getLogger(__name__)

NO_RESPONSE = "Sorry, no response."


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


class GeminiGenerator:
    """Single-turn completions from a Gemini model.

    Args:
        model_name: Model id, e.g. ``"gemini-1.5-flash"``.
        api_key: Overrides ``GEMINI_API_KEY``.
    """

    def __init__(self, model_name: str, api_key: Optional[str] = None) -> None:
        self.model_name = model_name
        self._api_key = api_key
        self._model: Optional[genai.GenerativeModel] = None

    def _get_model(self) -> genai.GenerativeModel:
        if self._model is None:
            api_key = self._api_key or os.environ.get("GEMINI_API_KEY")
            if not api_key:
                raise CollaboratorError("GEMINI_API_KEY is not set.")
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(self.model_name)
            logger.info("Text model ready: %s", self.model_name)
        return self._model

    def generate(self, prompt: str) -> str:
        response = self._get_model().generate_content(prompt)
        try:
            text = response.text
        except ValueError:
            # Blocked or empty candidates.
            logger.warning("Model returned no text candidate")
            return NO_RESPONSE
        return text or NO_RESPONSE
