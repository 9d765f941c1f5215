"""
Certification lookups against the Givvable company search API.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import httpx

from fruitlink.errors import CollaboratorError

logger = logging.getLogger(__name__)


class GivvableClient:
    """``GET <url>?name=<company>`` with an ``x-api-key`` header.

    Args:
        url: Company search endpoint.
        api_key: Overrides ``GIVVABLE_API_KEY``.
        timeout: Request timeout in seconds.
        http_client: Pre-built ``httpx.Client`` (tests).
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.url = url
        self.api_key = api_key if api_key is not None else os.environ.get("GIVVABLE_API_KEY", "")
        self.timeout = timeout
        self._http = http_client or httpx.Client(timeout=timeout)

    def search(self, name: str) -> Any:
        """Return the upstream JSON for a company name.

        Raises:
            CollaboratorError: If the key is missing, the request fails, the
                upstream answers non-2xx or the body is not JSON.
        """
        if not self.api_key:
            raise CollaboratorError("GIVVABLE_API_KEY is not set.")
        try:
            resp = self._http.get(
                self.url,
                params={"name": name},
                headers={"x-api-key": self.api_key, "Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            logger.warning("Givvable request failed: %s", exc)
            raise CollaboratorError(f"Givvable request failed: {exc}") from exc

        if resp.is_error:
            logger.warning("Givvable returned HTTP %d", resp.status_code)
            raise CollaboratorError(
                f"Givvable returned HTTP {resp.status_code}", status_code=resp.status_code
            )
        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("Givvable returned non-JSON body: %.200s", resp.text)
            raise CollaboratorError("Givvable did not return JSON") from exc

    def close(self) -> None:
        self._http.close()
