"""
FruitLink — CLI entry point.

Each command loads the config (exiting 1 with ``[ERROR]`` if it is bad),
configures logging, builds a freshly seeded in-memory directory plus
whatever services it needs, and prints formatter output to stdout.

Nothing survives the command: an entity created with ``chat`` is printed
and then discarded with the rest of the state.

Install and run::

    pip install -e .
    fruitlink --help
    fruitlink validate-config
    fruitlink suppliers --country Colombia
    fruitlink matches --buyer 1
    fruitlink forecast mango --explain
    fruitlink chat "Add supplier Golden Orchard from Thailand offering mango and durian"
    fruitlink serve --port 3001
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="fruitlink",
    help="FruitLink — fruit trade directory, matching and price forecasts.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Return the merged ``AppConfig``; on any config problem print it and exit 1."""
    from fruitlink.config import load_config

    try:
        return load_config(Path(config_path) if config_path else None)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        # pydantic.ValidationError, TOMLDecodeError and bad FRUITLINK_PORT values.
        typer.echo(f"[ERROR] Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    from fruitlink.utils.logging import configure_logging
    configure_logging(config.logging)


def _client(config):
    from fruitlink.insights.client import CollaboratorClient
    return CollaboratorClient.from_config(config.api)


_CONFIG_OPTION = typer.Option(
    None, "--config", help="TOML config to load instead of config/default.toml."
)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPTION,
    show_full: bool = typer.Option(False, "--full", help="Also dump every section as JSON."),
) -> None:
    """Load the config, print the settings that matter, exit 1 if invalid."""
    config = _load_config_or_exit(config_path)

    typer.echo("Loaded configuration:")
    typer.echo("")
    typer.echo(f"  Proxy URL (client):  {config.api.base_url}  (timeout {config.api.timeout_seconds:g}s)")
    typer.echo(f"  Proxy bind:          {config.server.host}:{config.server.port}")
    typer.echo(f"  CORS origin:         {config.server.frontend_base_url}")
    typer.echo(f"  Text model:          {config.server.model_name}")
    typer.echo(f"  Forecast:            {config.forecast.horizon_months} months, "
               f"cached {config.forecast.cache_ttl_seconds:g}s")
    typer.echo(f"  Insight memo:        {config.insights.cache_ttl_seconds:g}s")
    typer.echo(f"  Fruit normalization: {'on' if config.matching.normalize_fruit_names else 'off'}")
    typer.echo(f"  Logging:             {config.logging.level}"
               f"{' (json)' if config.logging.json_format else ''}")

    if show_full:
        typer.echo("")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))

    typer.echo("")
    typer.echo("[OK] Config is valid.")


@app.command("suppliers")
def suppliers(
    search: str = typer.Option("", "--search", help="Substring of name or location."),
    country: str = typer.Option("", "--country", help="Exact country name."),
    fruit: str = typer.Option("", "--fruit", help="Fruit offered."),
    certification: str = typer.Option("", "--certification", help="Certification held."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """List suppliers in the directory, optionally filtered."""
    from fruitlink.directory.filters import SupplierFilters, filter_suppliers
    from fruitlink.reporting.formatters import format_supplier_table
    from fruitlink.store.state import AppState

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    filters = SupplierFilters(
        search=search, country=country, fruit=fruit, certification=certification
    )
    typer.echo(format_supplier_table(filter_suppliers(AppState().suppliers, filters)))


@app.command("buyers")
def buyers(
    search: str = typer.Option("", "--search", help="Substring of name or location."),
    country: str = typer.Option("", "--country", help="Exact country name."),
    fruit: str = typer.Option("", "--fruit", help="Fruit of interest."),
    volume: Optional[str] = typer.Option(None, "--volume", help="Small, Medium or Large."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """List buyers in the directory, optionally filtered."""
    from fruitlink.directory.filters import BuyerFilters, filter_buyers
    from fruitlink.reporting.formatters import format_buyer_table
    from fruitlink.store.state import AppState
    from fruitlink.taxonomy.trade_taxonomy import Volume

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        volume_filter = Volume(volume.capitalize()) if volume else None
    except ValueError:
        typer.echo(f"[ERROR] Unknown volume '{volume}'. Use Small, Medium or Large.", err=True)
        raise typer.Exit(code=1)

    filters = BuyerFilters(search=search, country=country, fruit=fruit, volume=volume_filter)
    typer.echo(format_buyer_table(filter_buyers(AppState().buyers, filters)))


@app.command("matches")
def matches(
    buyer_id: Optional[str] = typer.Option(None, "--buyer", help="Buyer id to match suppliers for."),
    supplier_id: Optional[str] = typer.Option(None, "--supplier", help="Supplier id to match buyers for."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Show matching counterparties (and trade risk for buyers)."""
    from fruitlink.matching.matcher import match_buyers, match_suppliers, shared_fruits
    from fruitlink.matching.risk import assess_trade_risk
    from fruitlink.reporting.formatters import (
        format_buyer_card,
        format_buyer_matches,
        format_supplier_card,
        format_supplier_matches,
    )
    from fruitlink.store.state import AppState

    if (buyer_id is None) == (supplier_id is None):
        typer.echo("[ERROR] Pass exactly one of --buyer or --supplier.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    normalize = config.matching.normalize_fruit_names
    state = AppState()

    if buyer_id is not None:
        buyer = state.get_buyer(buyer_id)
        if buyer is None:
            typer.echo(f"[ERROR] No buyer with id '{buyer_id}'.", err=True)
            raise typer.Exit(code=1)
        found = match_suppliers(buyer, state.suppliers, normalize)
        pairs = [
            (s, shared_fruits(buyer.fruits_interested, s.fruits_offered, normalize))
            for s in found
        ]
        risk = assess_trade_risk(buyer, state.suppliers, normalize)
        typer.echo(format_buyer_card(buyer))
        typer.echo(format_supplier_matches(buyer, pairs, risk))
        return

    supplier = state.get_supplier(supplier_id)
    if supplier is None:
        typer.echo(f"[ERROR] No supplier with id '{supplier_id}'.", err=True)
        raise typer.Exit(code=1)
    found = match_buyers(supplier, state.buyers, normalize)
    pairs = [
        (b, shared_fruits(b.fruits_interested, supplier.fruits_offered, normalize))
        for b in found
    ]
    typer.echo(format_supplier_card(supplier))
    typer.echo(format_buyer_matches(supplier, pairs))


@app.command("forecast")
def forecast(
    fruit: str = typer.Argument(..., help="Fruit name, e.g. mango."),
    explain: bool = typer.Option(False, "--explain", help="Ask the text model to explain the prediction."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Predict next week's price and a monthly forecast for a fruit."""
    from fruitlink.forecast.engine import ForecastEngine
    from fruitlink.insights.services import InsightService
    from fruitlink.reporting.formatters import format_prediction

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    prediction = ForecastEngine(config=config.forecast).predict(fruit)

    explanation = None
    if explain:
        with _client(config) as client:
            explanation = InsightService(client, config.insights).explain_price(prediction)

    typer.echo(format_prediction(prediction, explanation))


@app.command("chat")
def chat(
    message: str = typer.Argument(..., help="Message for the assistant."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Send one message through the chat router and show the result.

    Entity intents ("Add supplier ... from ... offering ...") create the
    entity in this command's in-memory directory and print its card.
    """
    from fruitlink.chat.router import ChatRouter
    from fruitlink.chat.session import ChatSession
    from fruitlink.models.entity import Supplier
    from fruitlink.reporting.formatters import format_buyer_card, format_supplier_card
    from fruitlink.store.state import AppState

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    state = AppState()
    with _client(config) as client, ChatSession(
        state, ChatRouter(client), config=config.chat
    ) as session:
        reply = session.send(message)
        if reply is None:
            typer.echo("[ERROR] Message is empty.", err=True)
            raise typer.Exit(code=1)
        typer.echo(reply.content)

        created = session.last_created
        if created is not None:
            session.flush()
            if isinstance(created, Supplier):
                typer.echo(format_supplier_card(created))
            else:
                typer.echo(format_buyer_card(created))
            typer.echo("")
            typer.echo(f"[OK] Created {state.current_view.value} {created.id}.")


@app.command("insights")
def insights(
    ai: bool = typer.Option(False, "--ai", help="Also ask the text model for a business insight."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Show directory distributions, top values and supplier → buyer trade flows."""
    from fruitlink.directory.analytics import summarize_directory
    from fruitlink.insights.services import InsightService
    from fruitlink.matching.matcher import build_trade_links
    from fruitlink.reporting.formatters import format_directory_summary, format_trade_links
    from fruitlink.store.state import AppState

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    state = AppState()
    summary = summarize_directory(state.suppliers, state.buyers)

    insight = None
    if ai:
        with _client(config) as client:
            insight = InsightService(client, config.insights).business_insight(summary)

    typer.echo(format_directory_summary(summary, insight))
    links = build_trade_links(
        state.suppliers, state.buyers, config.matching.normalize_fruit_names
    )
    typer.echo(format_trade_links(links, state.suppliers, state.buyers))


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)."),
    port: Optional[int] = typer.Option(None, "--port", help="Port (default from config)."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Run the backend proxy (text model + certification lookups)."""
    import uvicorn

    from fruitlink.server.app import create_app

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    bind_host = host or config.server.host
    bind_port = port or config.server.port
    typer.echo(f"Serving FruitLink proxy on http://{bind_host}:{bind_port}")
    uvicorn.run(create_app(config), host=bind_host, port=bind_port, log_config=None)


if __name__ == "__main__":
    app()
