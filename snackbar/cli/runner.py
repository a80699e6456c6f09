# snackbar/cli/runner.py

"""Headless CLI commands built on the async catalog engine."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from snackbar.config.settings import Settings
from snackbar.filters.nutrient_normalizer import (
    choose_scaling_mode,
    format_nutrient_value,
    infer_amount_unit,
    normalize_nutrients,
    scale_nutrient,
)
from snackbar.filters.query_tokenizer import QueryTokenizer
from snackbar.models.errors import FetchError, InvalidQuery
from snackbar.models.product import Product
from snackbar.services.alternative_recommender import AlternativeRecommender
from snackbar.services.catalog_query_engine import CatalogQueryEngine

logger = logging.getLogger("snackbar.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

_TOP_NUTRIENTS = 8


def validate_query(query: str) -> str:
    """Return the trimmed query or raise ``InvalidQuery`` if too short."""
    if not QueryTokenizer.is_searchable(query):
        msg = (
            f"Query must be at least {Settings.MIN_QUERY_LENGTH} "
            "characters"
        )
        raise InvalidQuery(msg)
    return QueryTokenizer.normalise(query)


def _print_json(payload: object) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _print_table(products: list[Product], title: str) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title=title,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", max_width=50)
    table.add_column("Brand", style="magenta")
    table.add_column("Nutri-Score", justify="center")
    table.add_column("Quantity", justify="right")
    table.add_column("Allergens", style="yellow", max_width=30)
    table.add_column("Code", style="dim")

    for idx, p in enumerate(products, 1):
        table.add_row(
            str(idx),
            p.name[:50],
            p.brand_text or "—",
            p.nutrition_score or "?",
            p.quantity or "—",
            p.allergens_text or "—",
            p.code,
        )

    Console().print(table)


def _print_nutrition(product: Product) -> None:
    """Render the normalised nutrient facts of one product."""
    entries = normalize_nutrients(product.nutrient_facts)[:_TOP_NUTRIENTS]
    mode = choose_scaling_mode(entries)
    if mode == "per100g":
        amount = 100.0
        basis = f"per 100 {infer_amount_unit(product.quantity)}"
    elif mode == "serving":
        amount = 1.0
        basis = "per serving"
    else:
        amount = 1.0
        basis = "as reported"

    table = Table(
        title=f"{product.name} ({product.brand_text or 'unknown brand'})",
        caption=f"Values {basis}",
        title_style="bold cyan",
    )
    table.add_column("Nutrient")
    table.add_column("Value", justify="right", style="green")
    for entry in entries:
        table.add_row(
            entry.label,
            format_nutrient_value(
                scale_nutrient(entry, amount, mode), entry.unit
            ),
        )

    Console().print(table)


async def cli_search(
    query: str,
    page_size: int | None,
    output_format: str,
) -> int:
    """Run a headless search and return an exit code (0=ok, 1=none, 2=bad)."""
    try:
        trimmed = validate_query(query)
    except InvalidQuery as exc:
        _err.print(f"[red]{exc}[/red]")
        return 2

    engine = CatalogQueryEngine()
    _err.print(f"[bold]Searching:[/bold] {trimmed}")
    try:
        products = await engine.search(trimmed, page_size)
    except InvalidQuery as exc:
        _err.print(f"[red]{exc}[/red]")
        return 2

    if not products:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    _err.print(f"[green]✓ {len(products)} products[/green]")
    if output_format == "table":
        _print_table(products, "Search Results")
    else:
        _print_json([p.to_dict() for p in products])
    return 0


async def cli_product(
    code: str,
    output_format: str,
    with_alternatives: bool,
    limit: int | None,
) -> int:
    """Look up one product (optionally with alternatives) by code."""
    engine = CatalogQueryEngine()
    try:
        product = await engine.get_by_code(code)
    except InvalidQuery as exc:
        _err.print(f"[red]{exc}[/red]")
        return 2
    except FetchError as exc:
        logger.error("Lookup for %s failed: %s", code, exc, exc_info=True)
        _err.print(f"[red]Catalog lookup failed: {exc}[/red]")
        return 1

    if product is None:
        _err.print(f"[yellow]Product {code} not found.[/yellow]")
        return 1

    alternatives: list[Product] = []
    if with_alternatives:
        recommender = AlternativeRecommender(engine)
        alternatives = await recommender.recommend(product, limit)

    if output_format == "table":
        _print_nutrition(product)
        if with_alternatives:
            if alternatives:
                _print_table(alternatives, "Alternatives")
            else:
                _err.print("[yellow]No alternatives found.[/yellow]")
    else:
        payload: dict[str, object] = {"product": product.to_dict()}
        if with_alternatives:
            payload["alternatives"] = [p.to_dict() for p in alternatives]
        _print_json(payload)
    return 0


async def run_health_check() -> int:
    """Run a connectivity health check against the catalog."""
    from snackbar.services.health_checker import probe_catalog

    _err.print("[bold]Running catalog health check...[/bold]")
    result = await probe_catalog()

    table = Table(
        title="Catalog Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Catalog", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    if result.status == "ok":
        status = "[green]✅ OK[/green]"
    elif result.status == "slow":
        status = "[yellow]⚠️  SLOW[/yellow]"
    else:
        status = "[red]❌ DOWN[/red]"

    latency = (
        f"{result.latency_ms:.0f}ms"
        if result.latency_ms > 0
        else "—"
    )
    table.add_row(result.source_id, status, latency, result.message)

    Console().print(table)
    return 1 if result.status == "down" else 0
