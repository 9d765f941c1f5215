"""
fruitlink.forecast — per-fruit price prediction.

Modules:
  market_data — Static historical price table with reference-series fallback.
  regression  — Moving average and ordinary-least-squares trend helpers.
  cache       — Time-to-live memo with an injected clock.
  engine      — ``ForecastEngine``: current / predicted / 6-month forecast.
"""
