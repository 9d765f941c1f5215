"""
Price forecast engine.

For a fruit name the engine returns a ``PricePrediction``:

  current    last historical price (0 for an empty series)
  predicted  (moving average + one-step OLS prediction) / 2
  history    the series used
  forecast   ``horizon_months`` points, slope·(n+i)+intercept for i = 1..h,
             labelled YYYY-MM by adding i months to the last historical date

Results are memoized per lower-cased fruit name for ``cache_ttl_seconds``
(10 minutes by default). Inside the window the *same* object is returned, so
two calls are identical; after expiry the prediction is recomputed.
"""

from __future__ import annotations

import logging
from typing import Optional

from fruitlink.config import ForecastConfig
from fruitlink.forecast.cache import TTLCache
from fruitlink.forecast.market_data import PriceSource, StaticPriceTable
from fruitlink.forecast.regression import blended_prediction, fit_linear_trend
from fruitlink.models.forecast import ForecastPoint, PricePrediction
from fruitlink.utils.time_utils import Clock, monotonic_clock, next_month_labels

logger = logging.getLogger(__name__)

# Anchor for month labels when a series has no observations.
DEFAULT_LAST_DATE = "2024-06-29"


class ForecastEngine:
    """Computes and memoizes per-fruit price predictions.

    Usage::

        engine = ForecastEngine()
        prediction = engine.predict("Mango")
        prediction.forecast[0].month   # "2024-07"

    Args:
        source: Historical price provider. Defaults to the static mock table
            with ``config.default_fruit`` as the reference series.
        config: Forecast settings (TTL, horizon, reference fruit).
        clock: Time source for the cache. Defaults to ``time.monotonic``.
    """

    def __init__(
        self,
        source: Optional[PriceSource] = None,
        config: Optional[ForecastConfig] = None,
        clock: Clock = monotonic_clock,
    ) -> None:
        self.config = config or ForecastConfig()
        self.source = source or StaticPriceTable(reference_fruit=self.config.default_fruit)
        self.cache: TTLCache[str, PricePrediction] = TTLCache(
            self.config.cache_ttl_seconds, clock=clock
        )

    def predict(self, fruit: str) -> PricePrediction:
        """Return the (possibly cached) prediction for ``fruit``."""
        key = fruit.lower()
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Forecast cache hit for %r", key)
            return cached

        prediction = self._compute(fruit)
        self.cache.put(key, prediction)
        logger.debug(
            "Forecast computed for %r: current=%.4f predicted=%.4f",
            fruit, prediction.current, prediction.predicted,
        )
        return prediction

    def predict_many(self, fruits: list[str]) -> dict[str, PricePrediction]:
        """Predict each fruit; keys are the names exactly as given."""
        return {fruit: self.predict(fruit) for fruit in fruits}

    def _compute(self, fruit: str) -> PricePrediction:
        history = tuple(self.source.recent_prices(fruit))
        prices = [p.price for p in history]

        current = prices[-1] if prices else 0.0
        predicted = blended_prediction(prices)

        trend = fit_linear_trend(prices)
        last_date = history[-1].date if history else DEFAULT_LAST_DATE
        months = next_month_labels(last_date, self.config.horizon_months)
        forecast = tuple(
            ForecastPoint(month=month, price=trend.ahead(i))
            for i, month in enumerate(months, start=1)
        )

        return PricePrediction(
            fruit=fruit,
            current=current,
            predicted=predicted,
            history=history,
            forecast=forecast,
        )
