"""
Extraction prompts for the chat router.
"""

from __future__ import annotations

from fruitlink.taxonomy.trade_taxonomy import ActionKind

_ROLE = {
    ActionKind.ADD_SUPPLIER: "supplier name, country, and fruits",
    ActionKind.ADD_BUYER: "buyer name, country, and fruits interested",
}


def extraction_prompt(message: str, kind: ActionKind) -> str:
    """First attempt: ask for a bare JSON object."""
    return (
        f"Extract the {_ROLE[kind]} from the following message.\n"
        "Respond ONLY with a valid JSON object with these keys: "
        "name, country, fruits (as an array).\n"
        "Do not include any explanation or extra text.\n"
        "If any field is missing, use null or an empty array.\n\n"
        f'Message: "{message}"\n'
    )


def strict_retry_prompt(message: str) -> str:
    """Second attempt, after the first reply failed to parse or validate."""
    return (
        "Just respond with a JSON object with keys: name, country, fruits "
        "(as an array). No explanation, no markdown, no template, just JSON. "
        f'Message: "{message}"\n'
    )
