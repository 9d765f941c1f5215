"""
FruitLink — Streamlit Dashboard
===============================

Optional local UI over the same library the CLI uses. The directory lives
in the browser session; nothing is persisted.

App structure
-------------
  Directory  — Supplier and buyer tables with search and facet filters.
  Detail     — Shown instead of the tabs while a supplier or buyer is
               selected: profile, matches, trade risk (buyers), price
               forecasts per fruit, AI explanation / compliance buttons.
  Insights   — Country, fruit-interest and certification distributions plus
               an optional AI business insight.
  Assistant  — Chat. "Add supplier ..." / "Add buyer ..." create entities and
               open their profile shortly after.

Usage
-----
    pip install -e ".[dashboard]"
    fruitlink serve            # proxy for AI features (optional)
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# ── Ensure project root is importable ────────────────────────────────────────
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

# ── Must be the first Streamlit call ─────────────────────────────────────────
st.set_page_config(
    page_title="FruitLink",
    layout="wide",
    initial_sidebar_state="expanded",
)

import pandas as pd

from dashboard.data_loader import (
    buyer_frame,
    forecast_frame,
    get_chat_session,
    get_config,
    get_engine,
    get_insights,
    get_state,
    get_tracker,
    supplier_frame,
)
from fruitlink.chat.session import GREETING
from fruitlink.directory.analytics import summarize_directory
from fruitlink.directory.filters import BuyerFilters, SupplierFilters, filter_buyers, filter_suppliers
from fruitlink.matching.matcher import build_trade_links, match_buyers, match_suppliers, shared_fruits
from fruitlink.matching.risk import assess_trade_risk
from fruitlink.models.entity import BuyerDraft, SupplierDraft
from fruitlink.store.seed import AVAILABLE_CERTIFICATIONS, AVAILABLE_COUNTRIES, AVAILABLE_FRUITS
from fruitlink.taxonomy.trade_taxonomy import SenderType, ViewType, Volume

config = get_config()
state = get_state()
engine = get_engine()
insights = get_insights()
tracker = get_tracker()
chat = get_chat_session()
normalize = config.matching.normalize_fruit_names

# Pending post-chat navigation fires on the first rerun after its delay.
chat.tick()


def _options(suggested, values) -> list[str]:
    """Pick-list suggestions plus whatever the directory already contains."""
    return sorted({*suggested, *(v for v in values if v)})


country_options = _options(AVAILABLE_COUNTRIES, [e.country for e in [*state.suppliers, *state.buyers]])
fruit_options = _options(
    AVAILABLE_FRUITS,
    [f for s in state.suppliers for f in s.fruits_offered]
    + [f for b in state.buyers for f in b.fruits_interested],
)
cert_options = _options(AVAILABLE_CERTIFICATIONS, [c for s in state.suppliers for c in s.certifications])


# ── Sidebar ───────────────────────────────────────────────────────────────────

with st.sidebar:
    st.title("FruitLink")
    st.caption("Fruit trade directory, matching and price forecasts")
    st.divider()

    st.metric("Suppliers", len(state.suppliers))
    st.metric("Buyers", len(state.buyers))

    if state.current_view != ViewType.MAIN and st.button("Back to directory"):
        tracker.reset()
        state.go_back_to_main()
        st.rerun()

    st.divider()
    st.caption("AI features need the proxy running:")
    st.code("fruitlink serve")


def _forecast_block(fruits: list[str]) -> None:
    """Per-fruit current/predicted metrics, chart and on-demand explanation."""
    if not fruits:
        st.info("No fruits listed.")
        return
    for fruit in fruits:
        prediction = engine.predict(fruit)
        with st.expander(f"{fruit} — price forecast", expanded=False):
            c1, c2 = st.columns(2)
            c1.metric("Current ($/kg)", f"{prediction.current:.2f}")
            c2.metric(
                "Predicted next week ($/kg)",
                f"{prediction.predicted:.2f}",
                delta=f"{prediction.predicted - prediction.current:+.2f}",
            )
            st.line_chart(forecast_frame(prediction))

            key = f"explain:{fruit}"
            if st.button("Explain prediction", key=f"btn_{key}"):
                with st.spinner("Asking the text model..."):
                    token = tracker.begin(key)
                    tracker.resolve(key, token, insights.explain_price(prediction))
            if text := tracker.get(key):
                st.write(text)


# ══════════════════════════════════════════════════════════════════════════════
# Detail views
# ══════════════════════════════════════════════════════════════════════════════

def _supplier_detail() -> None:
    supplier = state.selected_supplier
    if supplier is None:
        st.warning("Supplier not found.")
        return

    st.header(supplier.name)
    st.caption(f"{supplier.location or 'N/A'} · est. {supplier.established or 'N/A'}")
    c1, c2, c3 = st.columns(3)
    c1.metric("Reliability", f"{supplier.reliability:.0f}%")
    c2.metric("Fruits", len(supplier.fruits_offered))
    c3.metric("Certifications", len(supplier.certifications))
    st.write(supplier.description or "N/A")
    st.write(f"**Contact:** {supplier.contact_email or 'N/A'} · {supplier.contact_phone or 'N/A'}")
    st.write(f"**Certifications:** {', '.join(supplier.certifications) or 'N/A'}")

    st.subheader("Price ranges")
    st.dataframe(
        pd.DataFrame(
            [
                {"Fruit": fruit, "Min": r.min, "Max": r.max, "Unit": f"{r.currency}/kg"}
                for fruit, r in supplier.price_range.items()
            ],
            columns=["Fruit", "Min", "Max", "Unit"],
        ),
        use_container_width=True,
        hide_index=True,
    )

    st.subheader("Compliance & certifications")
    col_a, col_b = st.columns(2)
    compliance_key = f"compliance:{supplier.id}"
    with col_a:
        if st.button("Run compliance check"):
            with st.spinner("Checking..."):
                token = tracker.begin(compliance_key)
                tracker.resolve(compliance_key, token, insights.compliance_check(supplier))
        if text := tracker.get(compliance_key):
            st.write(text)
    with col_b:
        if st.button("Look up certifications"):
            summary = insights.certifications(supplier.name)
            if summary.is_empty:
                st.info("No certification data available.")
            else:
                st.write(f"**Credentials:** {summary.credential_count}")
                st.write(", ".join(summary.categories))

    st.subheader("Matching buyers")
    matched = match_buyers(supplier, state.buyers, normalize)
    if not matched:
        st.info("No buyers are currently looking for these fruits.")
    for buyer in matched:
        shared = shared_fruits(buyer.fruits_interested, supplier.fruits_offered, normalize)
        cols = st.columns([4, 3, 1])
        cols[0].write(f"**{buyer.name}** ({buyer.country or 'N/A'})")
        cols[1].write(", ".join(shared))
        if cols[2].button("Open", key=f"open_buyer_{buyer.id}"):
            tracker.reset()
            state.view_buyer(buyer.id)
            st.rerun()

    st.subheader("Market prices")
    _forecast_block(supplier.fruits_offered)


def _buyer_detail() -> None:
    buyer = state.selected_buyer
    if buyer is None:
        st.warning("Buyer not found.")
        return

    st.header(buyer.name)
    st.caption(f"{buyer.location or 'N/A'} · est. {buyer.established or 'N/A'}")
    risk = assess_trade_risk(buyer, state.suppliers, normalize)
    c1, c2, c3 = st.columns(3)
    c1.metric("Volume", buyer.volume.value)
    c2.metric("Matched suppliers", risk.matched_count)
    c3.metric("Trade risk", risk.level.value, help=f"Avg reliability {risk.average_reliability:.1f}")
    st.write(buyer.description or "N/A")
    st.write(f"**Contact:** {buyer.contact_email or 'N/A'} · {buyer.contact_phone or 'N/A'}")

    st.subheader("Matching suppliers")
    matched = match_suppliers(buyer, state.suppliers, normalize)
    if not matched:
        st.info("No suppliers currently offer these fruits.")
    for supplier in matched:
        shared = shared_fruits(buyer.fruits_interested, supplier.fruits_offered, normalize)
        cols = st.columns([4, 3, 1])
        cols[0].write(f"**{supplier.name}** ({supplier.country or 'N/A'}, {supplier.reliability:.0f}%)")
        cols[1].write(", ".join(shared))
        if cols[2].button("Open", key=f"open_supplier_{supplier.id}"):
            tracker.reset()
            state.view_supplier(supplier.id)
            st.rerun()

    st.subheader("Market prices")
    _forecast_block(buyer.fruits_interested)


if state.current_view == ViewType.SUPPLIER:
    _supplier_detail()
    st.stop()
if state.current_view == ViewType.BUYER:
    _buyer_detail()
    st.stop()


# ── Tabs ──────────────────────────────────────────────────────────────────────

tab_dir, tab_bi, tab_chat = st.tabs(["Directory", "Insights", "Assistant"])


# ══════════════════════════════════════════════════════════════════════════════
# Tab 1 — Directory
# ══════════════════════════════════════════════════════════════════════════════

with tab_dir:
    st.header("Directory")
    search = st.text_input("Search name or location", key="dir_search")
    kind = st.radio("Show", ["Suppliers", "Buyers"], horizontal=True, key="dir_kind")

    col1, col2, col3 = st.columns(3)
    with col1:
        country = st.selectbox("Country", [""] + country_options, key="dir_country")
    with col2:
        fruit = st.selectbox("Fruit", [""] + fruit_options, key="dir_fruit")

    if kind == "Suppliers":
        with col3:
            cert = st.selectbox("Certification", [""] + cert_options, key="dir_cert")
        rows = filter_suppliers(
            state.suppliers,
            SupplierFilters(search=search, country=country, fruit=fruit, certification=cert),
        )
        st.dataframe(supplier_frame(rows), use_container_width=True, hide_index=True)
        options = {f"{s.name} ({s.id})": s.id for s in rows}
        picked = st.selectbox("Open supplier", [""] + list(options), key="dir_open_s")
        if picked and st.button("View supplier"):
            state.view_supplier(options[picked])
            st.rerun()

        with st.expander("Add supplier"):
            with st.form("add_supplier"):
                name = st.text_input("Name")
                s_country = st.selectbox("Country", country_options)
                fruits = st.multiselect("Fruits offered", fruit_options)
                if st.form_submit_button("Add") and name and fruits:
                    created = state.add_supplier(
                        SupplierDraft(name=name, country=s_country, fruits_offered=fruits)
                    )
                    state.view_supplier(created.id)
                    st.rerun()
    else:
        with col3:
            volume = st.selectbox("Volume", [""] + [v.value for v in Volume], key="dir_volume")
        rows = filter_buyers(
            state.buyers,
            BuyerFilters(
                search=search,
                country=country,
                fruit=fruit,
                volume=Volume(volume) if volume else None,
            ),
        )
        st.dataframe(buyer_frame(rows), use_container_width=True, hide_index=True)
        options = {f"{b.name} ({b.id})": b.id for b in rows}
        picked = st.selectbox("Open buyer", [""] + list(options), key="dir_open_b")
        if picked and st.button("View buyer"):
            state.view_buyer(options[picked])
            st.rerun()

        with st.expander("Add buyer"):
            with st.form("add_buyer"):
                name = st.text_input("Name")
                b_country = st.selectbox("Country", [""] + country_options)
                fruits = st.multiselect("Fruits of interest", fruit_options)
                if st.form_submit_button("Add") and name and fruits:
                    created = state.add_buyer(
                        BuyerDraft(name=name, country=b_country, fruits_interested=fruits)
                    )
                    state.view_buyer(created.id)
                    st.rerun()


# ══════════════════════════════════════════════════════════════════════════════
# Tab 2 — Insights
# ══════════════════════════════════════════════════════════════════════════════

with tab_bi:
    st.header("Business Intelligence")
    summary = summarize_directory(state.suppliers, state.buyers)

    c1, c2, c3 = st.columns(3)
    c1.metric("Top supplier country", summary.top_country or "N/A")
    c2.metric("Top buyer fruit", summary.top_fruit or "N/A")
    c3.metric("Top certification", summary.top_certification or "N/A")

    for title, dist in (
        ("Suppliers by country", summary.countries),
        ("Buyer fruit interest", summary.fruits),
        ("Supplier certifications", summary.certifications),
    ):
        st.subheader(title)
        if dist:
            st.bar_chart(pd.DataFrame(dist, columns=["name", "count"]).set_index("name"))
        else:
            st.info("No data.")

    st.subheader("Trade flows")
    suppliers_by_id = {s.id: s.name for s in state.suppliers}
    buyers_by_id = {b.id: b.name for b in state.buyers}
    links = build_trade_links(state.suppliers, state.buyers, normalize)
    if links:
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "Supplier": suppliers_by_id[link.supplier_id],
                        "Buyer": buyers_by_id[link.buyer_id],
                        "Shared fruits": ", ".join(link.shared_fruits),
                        "Value": link.value,
                    }
                    for link in links
                ]
            ),
            hide_index=True,
            use_container_width=True,
        )
    else:
        st.info("No supplier shares a fruit with any buyer.")

    if st.button("Generate AI insight"):
        with st.spinner("Asking the text model..."):
            st.write(insights.business_insight(summary))


# ══════════════════════════════════════════════════════════════════════════════
# Tab 3 — Assistant
# ══════════════════════════════════════════════════════════════════════════════

with tab_chat:
    st.header("Trade Assistant")
    with st.chat_message("assistant"):
        st.write(GREETING)
    for message in state.messages:
        role = "user" if message.sender == SenderType.USER else "assistant"
        with st.chat_message(role):
            st.write(message.content)
            st.caption(message.timestamp.strftime("%H:%M:%S"))

    if prompt := st.chat_input("Type a message..."):
        with st.spinner("Thinking..."):
            chat.send(prompt)
        st.rerun()
