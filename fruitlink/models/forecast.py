"""
Price prediction models.

``PricePrediction`` is derived data: it is recomputed per fruit on demand and
memoized by ``ForecastEngine``; it is never persisted. It is frozen so a
cached instance handed to several callers cannot be altered by any of them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class PricePoint(BaseModel):
    """One historical observation: ISO date and price per kg."""

    model_config = ConfigDict(frozen=True)

    date: str
    price: float


class ForecastPoint(BaseModel):
    """One forward monthly point, labelled ``YYYY-MM``."""

    model_config = ConfigDict(frozen=True)

    month: str
    price: float

    @field_validator("month")
    @classmethod
    def validate_month_label(cls, v: str) -> str:
        year, sep, month = v.partition("-")
        if not sep or len(year) != 4 or len(month) != 2 or not (year + month).isdigit():
            raise ValueError(f"month must be formatted YYYY-MM, got '{v}'.")
        return v


class PricePrediction(BaseModel):
    """Current price, blended next-step prediction and forward forecast.

    Attributes:
        fruit: Fruit name as requested by the caller.
        current: Last historical price, or 0 for an empty series.
        predicted: Mean of the moving average and the one-step linear
            regression prediction.
        history: The historical series the prediction was computed from.
        forecast: Forward monthly points extrapolated from the trend line.
    """

    model_config = ConfigDict(frozen=True)

    fruit: str
    current: float
    predicted: float
    history: tuple[PricePoint, ...]
    forecast: tuple[ForecastPoint, ...]
