"""
Fallback-safe insight services.

Every method here talks to the collaborator and *never* raises on
collaborator failure: a ``CollaboratorError`` is logged and replaced by a
static display string (or an empty ``CertificationSummary``). An empty
completion is treated the same as a failure.

The directory-wide business insight is memoized by prompt text for
``insights.cache_ttl_seconds`` (two minutes by default), so re-rendering the
dashboard with unchanged data does not re-query the model. Failures are not
memoized.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from fruitlink.config import InsightsConfig
from fruitlink.directory.analytics import DirectorySummary
from fruitlink.errors import CollaboratorError
from fruitlink.forecast.cache import TTLCache
from fruitlink.insights.client import CollaboratorClient
from fruitlink.insights.prompts import (
    business_insight_prompt,
    compliance_prompt,
    price_explanation_prompt,
)
from fruitlink.insights.tracker import InsightTracker
from fruitlink.models.entity import Supplier
from fruitlink.models.forecast import PricePrediction
from fruitlink.models.insight import CertificationSummary
from fruitlink.utils.time_utils import Clock, monotonic_clock

logger = logging.getLogger(__name__)

NO_EXPLANATION = "No explanation available."
NO_COMPLIANCE = "Compliance check not available."
NO_INSIGHT = "AI insight not available."


class InsightService:
    """AI-generated text for the detail views and the dashboard.

    Args:
        client: Collaborator client used for every request.
        config: Insight memo settings.
        clock: Time source for the business-insight memo.
    """

    def __init__(
        self,
        client: CollaboratorClient,
        config: Optional[InsightsConfig] = None,
        clock: Clock = monotonic_clock,
    ) -> None:
        self.client = client
        self.config = config or InsightsConfig()
        self.memo: TTLCache[str, str] = TTLCache(self.config.cache_ttl_seconds, clock=clock)

    def _complete(self, prompt: str, fallback: str, what: str) -> str:
        try:
            text = self.client.chat(prompt)
        except CollaboratorError as exc:
            logger.warning("%s unavailable: %s", what, exc)
            return fallback
        return text.strip() or fallback

    def explain_price(self, prediction: PricePrediction) -> str:
        prompt = price_explanation_prompt(
            prediction.fruit, prediction.history, prediction.predicted
        )
        return self._complete(prompt, NO_EXPLANATION, f"Price explanation for {prediction.fruit!r}")

    def explain_prices(
        self,
        predictions: Iterable[PricePrediction],
        tracker: InsightTracker[str, str],
    ) -> dict[str, str]:
        """Explain each prediction, applying results through ``tracker``.

        Each fruit gets a token before its request is sent; a reply is kept
        only if no newer request for that fruit started in the meantime.

        Returns:
            The tracker's current explanation per fruit after all requests.
        """
        fruits: list[str] = []
        for prediction in predictions:
            token = tracker.begin(prediction.fruit)
            tracker.resolve(prediction.fruit, token, self.explain_price(prediction))
            fruits.append(prediction.fruit)
        return {fruit: tracker.get(fruit) or NO_EXPLANATION for fruit in fruits}

    def compliance_check(self, supplier: Supplier) -> str:
        prompt = compliance_prompt(
            supplier.name, supplier.country, supplier.fruits_offered, supplier.certifications
        )
        return self._complete(prompt, NO_COMPLIANCE, f"Compliance check for {supplier.name!r}")

    def certifications(self, company_name: str) -> CertificationSummary:
        """Certification lookup; an empty summary on any failure."""
        try:
            return self.client.lookup_certifications(company_name)
        except CollaboratorError as exc:
            logger.warning("Certification lookup for %r failed: %s", company_name, exc)
            return CertificationSummary()

    def business_insight(self, summary: DirectorySummary) -> str:
        """Memoized CEO-level insight over the directory distributions."""
        prompt = business_insight_prompt(summary)
        cached = self.memo.get(prompt)
        if cached is not None:
            return cached

        try:
            text = self.client.chat(prompt).strip()
        except CollaboratorError as exc:
            logger.warning("Business insight unavailable: %s", exc)
            return NO_INSIGHT
        if not text:
            return NO_INSIGHT
        self.memo.put(prompt, text)
        return text
