"""
Backend proxy client.

Endpoints (served by ``fruitlink.server.app``):

  POST /api/vertexChat     {"message": str}  → {"content": str}
                                             | {"error": str, "details": str}
  POST /api/givvableCerts  {"name": str}     → {"companies": [{
                                                  "credentialCategories": [...],
                                                  "credentialCount": int}, ...]}
                                             | {"error": str}

The certification endpoint reports upstream failures as an ``error`` envelope
with status 200, so envelopes are checked regardless of status code.

Every failure mode (transport error, non-2xx, error envelope, malformed body)
surfaces as ``CollaboratorError``. Converting that into display text is the
caller's job (see ``fruitlink.insights.services``).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from fruitlink.config import ApiConfig
from fruitlink.errors import CollaboratorError
from fruitlink.models.insight import CertificationSummary

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/vertexChat"
CERTS_PATH = "/api/givvableCerts"


class CollaboratorClient:
    """Thin synchronous client for the backend proxy.

    Usage::

        with CollaboratorClient.from_config(config.api) as client:
            text = client.chat("Summarise mango prices")

    Args:
        base_url: Proxy host, e.g. ``"http://localhost:3001"``.
        timeout: Per-request timeout in seconds.
        http_client: Pre-built ``httpx.Client`` (tests pass one with a
            ``MockTransport``). When given, ``base_url`` and ``timeout`` are
            applied to requests but the client's own settings are kept.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout: float = 30.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

    @classmethod
    def from_config(
        cls,
        config: ApiConfig,
        http_client: Optional[httpx.Client] = None,
    ) -> "CollaboratorClient":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            http_client=http_client,
        )

    # ── Context management ────────────────────────────────────────────────────

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "CollaboratorClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ── Endpoints ─────────────────────────────────────────────────────────────

    def chat(self, message: str) -> str:
        """Send free text to the hosted model and return the completion.

        Raises:
            CollaboratorError: On any transport, HTTP or envelope failure, or
                if the response lacks a string ``content`` field.
        """
        data = self._post(CHAT_PATH, {"message": message})
        content = data.get("content")
        if not isinstance(content, str):
            raise CollaboratorError("Chat response has no 'content' field.")
        return content

    def lookup_certifications(self, name: str) -> CertificationSummary:
        """Look up a company's credentials; uses the first company returned.

        An unknown company (empty ``companies`` list) is not an error: it
        yields an empty ``CertificationSummary``.

        Raises:
            CollaboratorError: On any transport, HTTP or envelope failure, or
                if the first company's fields have the wrong types.
        """
        data = self._post(CERTS_PATH, {"name": name})
        companies = data.get("companies") or []
        if not isinstance(companies, list):
            raise CollaboratorError(f"{CERTS_PATH} response 'companies' is not a list.")
        if not companies:
            return CertificationSummary()

        company = companies[0]
        if not isinstance(company, dict):
            raise CollaboratorError(f"{CERTS_PATH} response company is not an object.")
        try:
            return CertificationSummary(
                categories=company.get("credentialCategories") or [],
                credential_count=company.get("credentialCount") or 0,
                raw=company,
            )
        except ValidationError as exc:
            raise CollaboratorError(f"Malformed company in {CERTS_PATH} response: {exc}") from exc

    # ── Internal ──────────────────────────────────────────────────────────────

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = self._http.post(url, json=payload, timeout=self.timeout)
        except httpx.HTTPError as exc:
            logger.warning("Collaborator request to %s failed: %s", path, exc)
            raise CollaboratorError(f"Request to {path} failed: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.is_error:
            detail = data.get("error") if isinstance(data, dict) else resp.text[:200]
            logger.warning("Collaborator %s returned HTTP %d: %s", path, resp.status_code, detail)
            raise CollaboratorError(
                f"{path} returned HTTP {resp.status_code}: {detail}",
                status_code=resp.status_code,
            )
        if not isinstance(data, dict):
            raise CollaboratorError(f"{path} did not return a JSON object.", resp.status_code)
        if "error" in data:
            logger.warning("Collaborator %s reported error: %s", path, data["error"])
            raise CollaboratorError(str(data["error"]), status_code=resp.status_code)
        return data
