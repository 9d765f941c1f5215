"""
ASCII terminal formatters for CLI commands.

All formatters accept library objects (entities, predictions, summaries)
and return plain multi-line strings suitable for ``typer.echo()``.

Blank optional fields render as ``N/A``. Price and budget ranges are always
shown per kg.
"""

from __future__ import annotations

from typing import Optional, Sequence

from fruitlink.directory.analytics import DirectorySummary, Distribution
from fruitlink.models.entity import Buyer, PriceRange, Supplier
from fruitlink.models.forecast import PricePrediction
from fruitlink.models.trade import TradeLink, TradeRisk


def _na(value: object) -> str:
    if value is None or value == "" or value == []:
        return "N/A"
    return str(value)


def format_range(r: PriceRange) -> str:
    return f"{r.min:.2f}-{r.max:.2f} {r.currency}/kg"


# ── Directory ─────────────────────────────────────────────────────────────────


def format_supplier_table(suppliers: Sequence[Supplier]) -> str:
    """One row per supplier: id, name, country, reliability, fruits, certifications.

    Example::

          ID  Name                       Country         Rel.  Fruits
        ------------------------------------------------------------------
           1  PT Nusantara Segar Abadi   Indonesia      90.0  banana
    """
    lines: list[str] = ["", f"=== Suppliers ({len(suppliers)}) ==="]
    if not suppliers:
        lines.append("  (no suppliers match the current filters)")
        return "\n".join(lines)

    header = (
        f"  {'ID':>4}  {'Name':<30}  {'Country':<14}  {'Rel.':>5}  "
        f"{'Fruits':<24}  {'Certifications'}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for s in suppliers:
        lines.append(
            f"  {s.id:>4}  {s.name[:30]:<30}  {_na(s.country)[:14]:<14}  "
            f"{s.reliability:>5.1f}  {_na(', '.join(s.fruits_offered))[:24]:<24}  "
            f"{_na(', '.join(s.certifications))}"
        )
    return "\n".join(lines)


def format_buyer_table(buyers: Sequence[Buyer]) -> str:
    """One row per buyer: id, name, country, volume, fruits of interest."""
    lines: list[str] = ["", f"=== Buyers ({len(buyers)}) ==="]
    if not buyers:
        lines.append("  (no buyers match the current filters)")
        return "\n".join(lines)

    header = f"  {'ID':>4}  {'Name':<30}  {'Country':<14}  {'Volume':<6}  {'Fruits'}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2 + 16))
    for b in buyers:
        lines.append(
            f"  {b.id:>4}  {b.name[:30]:<30}  {_na(b.country)[:14]:<14}  "
            f"{b.volume.value:<6}  {_na(', '.join(b.fruits_interested))}"
        )
    return "\n".join(lines)


def format_supplier_card(supplier: Supplier) -> str:
    lines = [
        "",
        f"=== Supplier {supplier.id}: {supplier.name} ===",
        f"  Location:       {_na(supplier.location)}",
        f"  Country:        {_na(supplier.country)}",
        f"  Established:    {_na(supplier.established)}",
        f"  Reliability:    {supplier.reliability:.0f}%",
        f"  Contact:        {_na(supplier.contact_email)} / {_na(supplier.contact_phone)}",
        f"  Certifications: {_na(', '.join(supplier.certifications))}",
        f"  Description:    {_na(supplier.description)}",
    ]
    for fruit in supplier.fruits_offered:
        r = supplier.price_range.get(fruit)
        lines.append(f"    {fruit:<16} {format_range(r) if r else 'N/A'}")
    return "\n".join(lines)


def format_buyer_card(buyer: Buyer) -> str:
    lines = [
        "",
        f"=== Buyer {buyer.id}: {buyer.name} ===",
        f"  Location:       {_na(buyer.location)}",
        f"  Country:        {_na(buyer.country)}",
        f"  Established:    {_na(buyer.established)}",
        f"  Volume:         {buyer.volume.value}",
        f"  Contact:        {_na(buyer.contact_email)} / {_na(buyer.contact_phone)}",
        f"  Description:    {_na(buyer.description)}",
    ]
    for fruit in buyer.fruits_interested:
        r = buyer.budget_range.get(fruit)
        lines.append(f"    {fruit:<16} {format_range(r) if r else 'N/A'}")
    return "\n".join(lines)


# ── Matches ───────────────────────────────────────────────────────────────────


def format_supplier_matches(
    buyer: Buyer,
    matches: Sequence[tuple[Supplier, Sequence[str]]],
    risk: TradeRisk,
) -> str:
    """Suppliers matching a buyer, with the shared fruits and the trade risk."""
    lines = [
        "",
        f"=== Matching suppliers for {buyer.name} ===",
        f"  Trade risk: {risk.level.value} "
        f"(avg reliability {risk.average_reliability:.1f} over {risk.matched_count} supplier(s))",
    ]
    if not matches:
        lines.append("  (no matching suppliers)")
        return "\n".join(lines)
    for supplier, shared in matches:
        lines.append(
            f"  {supplier.id:>4}  {supplier.name[:30]:<30}  {_na(supplier.country)[:14]:<14}  "
            f"shared: {', '.join(shared)}"
        )
    return "\n".join(lines)


def format_buyer_matches(
    supplier: Supplier,
    matches: Sequence[tuple[Buyer, Sequence[str]]],
) -> str:
    lines = ["", f"=== Matching buyers for {supplier.name} ==="]
    if not matches:
        lines.append("  (no matching buyers)")
        return "\n".join(lines)
    for buyer, shared in matches:
        lines.append(
            f"  {buyer.id:>4}  {buyer.name[:30]:<30}  {_na(buyer.country)[:14]:<14}  "
            f"shared: {', '.join(shared)}"
        )
    return "\n".join(lines)


# ── Forecast ──────────────────────────────────────────────────────────────────


def format_prediction(prediction: PricePrediction, explanation: Optional[str] = None) -> str:
    """Current/predicted prices, the history used and the monthly forecast.

    Example::

        === Price forecast: mango ===
          Current:    $2.20 / kg
          Predicted:  $2.21 / kg (next week)
          History     Price     Forecast  Price
          2024-06-01  2.10      2024-07   2.24
    """
    change = prediction.predicted - prediction.current
    lines = [
        "",
        f"=== Price forecast: {prediction.fruit} ===",
        f"  Current:    ${prediction.current:.2f} / kg",
        f"  Predicted:  ${prediction.predicted:.2f} / kg (next week, {change:+.2f})",
        "",
        f"  {'History':<10}  {'Price':>7}      {'Forecast':<8}  {'Price':>7}",
        "  " + "-" * 42,
    ]
    rows = max(len(prediction.history), len(prediction.forecast))
    for i in range(rows):
        left = right = ""
        if i < len(prediction.history):
            p = prediction.history[i]
            left = f"{p.date:<10}  {p.price:>7.2f}"
        if i < len(prediction.forecast):
            f = prediction.forecast[i]
            right = f"{f.month:<8}  {f.price:>7.2f}"
        lines.append(f"  {left:<19}      {right}".rstrip())
    if explanation is not None:
        lines.append("")
        lines.append(f"  Explanation: {explanation}")
    return "\n".join(lines)


# ── Insights ──────────────────────────────────────────────────────────────────


def _format_distribution(title: str, dist: Distribution) -> list[str]:
    lines = [f"  [{title}]"]
    if not dist:
        lines.append("    (none)")
    width = max((len(label) for label, _ in dist), default=0)
    for label, count in dist:
        lines.append(f"    {label:<{width}}  {count:>3}  {'#' * count}")
    return lines


def format_trade_links(
    links: Sequence[TradeLink],
    suppliers: Sequence[Supplier],
    buyers: Sequence[Buyer],
) -> str:
    """Supplier → buyer edges, one per line, weighted by shared fruit count."""
    supplier_names = {s.id: s.name for s in suppliers}
    buyer_names = {b.id: b.name for b in buyers}
    lines = ["", f"=== Trade flows ({len(links)}) ==="]
    if not links:
        lines.append("  (no supplier shares a fruit with any buyer)")
    for link in links:
        lines.append(
            f"  {supplier_names.get(link.supplier_id, link.supplier_id)[:30]:<30}  ->  "
            f"{buyer_names.get(link.buyer_id, link.buyer_id)[:30]:<30}  "
            f"{link.value}  ({', '.join(link.shared_fruits)})"
        )
    return "\n".join(lines)


def format_directory_summary(summary: DirectorySummary, insight: Optional[str] = None) -> str:
    lines = [
        "",
        "=== Directory insights ===",
        f"  Top supplier country:       {_na(summary.top_country)}",
        f"  Top buyer fruit:            {_na(summary.top_fruit)}",
        f"  Top supplier certification: {_na(summary.top_certification)}",
        "",
    ]
    lines += _format_distribution("Suppliers by country", summary.countries)
    lines += _format_distribution("Buyer fruit interest", summary.fruits)
    lines += _format_distribution("Supplier certifications", summary.certifications)
    if insight is not None:
        lines.append("")
        lines.append(f"  AI insight: {insight}")
    return "\n".join(lines)
