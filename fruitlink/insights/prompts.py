"""
Prompt templates for insight text.

Prices in the directory are always per kg; every prompt says so explicitly
so the model does not invent units.
"""

from __future__ import annotations

import json
from typing import Sequence

from fruitlink.directory.analytics import DirectorySummary
from fruitlink.models.forecast import PricePoint


def price_explanation_prompt(
    fruit: str,
    history: Sequence[PricePoint],
    predicted: float,
) -> str:
    lines = "\n".join(f"{p.date}: ${p.price:.2f} per kg" for p in history)
    return (
        f"Given the following recent price data for {fruit} (per kg):\n"
        f"{lines}\n"
        f"The predicted price for next week is ${predicted:.2f} per kg.\n"
        "Explain the main factors that could affect this price, and provide a "
        "confidence score (0-100) for this prediction. Respond in 2-3 sentences."
    )


def compliance_prompt(
    name: str,
    country: str,
    fruits: Sequence[str],
    certifications: Sequence[str],
) -> str:
    return (
        "You are a global food trade compliance expert. "
        "Given the following supplier profile:\n"
        f"- Name: {name}\n"
        f"- Country: {country}\n"
        f"- Fruits: {', '.join(fruits)}\n"
        f"- Certifications: {', '.join(certifications) or 'None'}\n\n"
        "Please check and summarize:\n"
        "1. If this supplier is compliant with major requirements for exporting "
        "to the EU and US markets for these fruits.\n"
        "2. If any important certifications are missing for these markets.\n"
        "3. Any general best-practices or compliance recommendations for "
        "international trade.\n\n"
        "Assume all prices and quantities are per kg.\n"
        "Respond in 3-5 sentences, clearly mentioning EU, US, and general best practices."
    )


def business_insight_prompt(summary: DirectorySummary) -> str:
    def as_json(dist):
        return json.dumps([{"name": k, "value": v} for k, v in dist])

    return (
        "You are a business intelligence analyst for a global fruit trading "
        "platform. Here is a summary of our current supplier and buyer data:\n\n"
        f"Top supplier country: {summary.top_country}\n"
        f"Top buyer fruit: {summary.top_fruit}\n"
        f"Top supplier certification: {summary.top_certification}\n\n"
        f"Supplier country distribution: {as_json(summary.countries)}\n"
        f"Buyer fruit interest distribution: {as_json(summary.fruits)}\n"
        f"Supplier certification distribution: {as_json(summary.certifications)}\n\n"
        "Please provide a concise, actionable insight (2-4 sentences) for the CEO, "
        "highlighting any trends, risks, or opportunities you see in this data."
    )
