"""
Dashboard state and table builders.

Long-lived objects are created once per Streamlit server process
(``@st.cache_resource``) or once per browser session (``st.session_state``):

  config, forecast engine   process-wide; the engine owns its 10-minute cache
  AppState, ChatSession     per session; the directory and chat log are
                            private to one browser tab
  InsightService, tracker   per session, so the insight memo and generation
                            tokens follow the user

Table builders turn entities into ``pandas`` frames for ``st.dataframe``.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import streamlit as st

from fruitlink.chat.router import ChatRouter
from fruitlink.chat.session import ChatSession
from fruitlink.config import AppConfig, load_config
from fruitlink.forecast.engine import ForecastEngine
from fruitlink.insights.client import CollaboratorClient
from fruitlink.insights.services import InsightService
from fruitlink.insights.tracker import InsightTracker
from fruitlink.models.entity import Buyer, Supplier
from fruitlink.models.forecast import PricePrediction
from fruitlink.store.state import AppState
from fruitlink.utils.logging import configure_logging


@st.cache_resource
def get_config() -> AppConfig:
    config = load_config()
    configure_logging(config.logging)
    return config


@st.cache_resource
def get_engine() -> ForecastEngine:
    return ForecastEngine(config=get_config().forecast)


def _session_value(key: str, factory):
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def get_state() -> AppState:
    return _session_value("fruitlink_state", AppState)


def get_client() -> CollaboratorClient:
    return _session_value(
        "fruitlink_client", lambda: CollaboratorClient.from_config(get_config().api)
    )


def get_insights() -> InsightService:
    return _session_value(
        "fruitlink_insights", lambda: InsightService(get_client(), get_config().insights)
    )


def get_tracker() -> InsightTracker[str, str]:
    """Per-session tracker for keyed insight text (explanations, compliance)."""
    return _session_value("fruitlink_tracker", InsightTracker)


def get_chat_session() -> ChatSession:
    return _session_value(
        "fruitlink_chat",
        lambda: ChatSession(get_state(), ChatRouter(get_client()), config=get_config().chat),
    )


# ── Frames ────────────────────────────────────────────────────────────────────


def supplier_frame(suppliers: Sequence[Supplier]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "ID": s.id,
                "Name": s.name,
                "Country": s.country or "N/A",
                "Fruits": ", ".join(s.fruits_offered),
                "Certifications": ", ".join(s.certifications),
                "Reliability": s.reliability,
                "Established": s.established,
            }
            for s in suppliers
        ],
        columns=["ID", "Name", "Country", "Fruits", "Certifications", "Reliability", "Established"],
    )


def buyer_frame(buyers: Sequence[Buyer]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "ID": b.id,
                "Name": b.name,
                "Country": b.country or "N/A",
                "Fruits": ", ".join(b.fruits_interested),
                "Volume": b.volume.value,
                "Established": b.established,
            }
            for b in buyers
        ],
        columns=["ID", "Name", "Country", "Fruits", "Volume", "Established"],
    )


def forecast_frame(prediction: PricePrediction) -> pd.DataFrame:
    """History and forecast on one monthly index, for ``st.line_chart``.

    History is averaged per month so both series share the ``YYYY-MM`` axis.
    """
    history = pd.DataFrame(
        [{"month": p.date[:7], "actual": p.price} for p in prediction.history],
        columns=["month", "actual"],
    ).groupby("month", as_index=False)["actual"].mean()
    forecast = pd.DataFrame(
        [{"month": f.month, "forecast": f.price} for f in prediction.forecast],
        columns=["month", "forecast"],
    )
    return (
        pd.merge(history, forecast, on="month", how="outer")
        .sort_values("month")
        .set_index("month")
    )
