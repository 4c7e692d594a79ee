"""CLI entry point for Supermarket Compare."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import ConfigManager
from .engine import PriceComparisonEngine
from .output_formatter import OutputFormatter
from .registry import StoreNotFoundError
from .search import InvalidQueryError, ProductNotFoundError

app = typer.Typer(
    name="supermarket",
    help="Compare ingredient prices across supermarket chains",
    no_args_is_help=True,
)

# Global state for formatter and engine (set by callback)
formatter: OutputFormatter = OutputFormatter()
config: ConfigManager | None = None
engine: PriceComparisonEngine | None = None
seed: int | None = None


def configure_logging(verbose: bool) -> None:
    """Send package logs to stderr through Rich."""
    pkg_logger = logging.getLogger("supermarket_compare")
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.ERROR)
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        pkg_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def get_config() -> ConfigManager:
    """Get or create ConfigManager instance."""
    global config
    if config is None:
        config = ConfigManager()
    return config


def get_engine() -> PriceComparisonEngine:
    """Get or create the engine using config values."""
    global engine
    if engine is None:
        engine = PriceComparisonEngine(config=get_config(), seed=seed)
    return engine


def _fail(e: Exception) -> None:
    """Report an error and exit non-zero."""
    if isinstance(e, ProductNotFoundError):
        formatter.error(str(e), error_code="PRODUCT_NOT_FOUND")
    elif isinstance(e, StoreNotFoundError):
        formatter.error(str(e), error_code="STORE_NOT_FOUND")
    elif isinstance(e, InvalidQueryError):
        formatter.error(str(e), error_code="INVALID_QUERY")
    else:
        formatter.error(str(e))
    raise typer.Exit(code=1)


@app.callback()
def main(
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON for programmatic use")
    ] = False,
    seed_option: Annotated[
        int | None, typer.Option("--seed", help="Random seed for a reproducible catalog")
    ] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", help="Config file path")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logs")] = False,
) -> None:
    """Supermarket Compare CLI - find the cheapest place to buy an ingredient."""
    global formatter, config, engine, seed

    formatter = OutputFormatter(json_mode=json_output)
    configure_logging(verbose)

    config = ConfigManager(config_path=config_path)
    seed = seed_option
    engine = None


@app.command()
def search(
    ingredient: Annotated[str, typer.Argument(help="Ingredient to search for")],
) -> None:
    """Compare an ingredient's price across stores."""
    try:
        comparison = get_engine().search_products(ingredient)
        result = {
            "success": True,
            "message": f"Found {len(comparison.products)} products for {ingredient}",
            "data": {"comparison": comparison.model_dump(mode="json")},
        }
        formatter.output(result, result["message"])
    except Exception as e:
        _fail(e)


@app.command()
def compare(
    ingredients: Annotated[list[str], typer.Argument(help="Ingredients on the shopping list")],
) -> None:
    """Compare a whole shopping list. Unknown ingredients are reported, not fatal."""
    try:
        entries = get_engine().compare_shopping_list(ingredients)
        found = sum(1 for entry in entries if entry.ok)
        result = {
            "success": True,
            "message": f"Matched {found} of {len(entries)} ingredients",
            "data": {"shopping_list": [entry.model_dump(mode="json") for entry in entries]},
        }
        formatter.output(result, result["message"])
    except Exception as e:
        _fail(e)


@app.command()
def stores(
    radius: Annotated[
        float | None, typer.Option("--radius", "-r", help="Search radius in km")
    ] = None,
) -> None:
    """List stores near the user."""
    try:
        nearby = get_engine().get_nearby_stores(radius_km=radius)
        result = {
            "success": True,
            "data": {"stores": [store.model_dump(mode="json") for store in nearby]},
        }
        formatter.output(result)
    except Exception as e:
        _fail(e)


@app.command()
def chains() -> None:
    """List supermarket chains."""
    try:
        result = {
            "success": True,
            "data": {
                "chains": [c.model_dump(mode="json") for c in get_engine().get_supermarket_chains()]
            },
        }
        formatter.output(result)
    except Exception as e:
        _fail(e)


@app.command()
def delivery(
    store_id: Annotated[str, typer.Argument(help="Store ID")],
) -> None:
    """Show delivery options for a store."""
    try:
        options = get_engine().get_delivery_options(store_id)
        result = {
            "success": True,
            "data": {"delivery_options": [o.model_dump(mode="json") for o in options]},
        }
        formatter.output(result)
    except Exception as e:
        _fail(e)


@app.command()
def history(
    ingredient: Annotated[str, typer.Argument(help="Tracked ingredient name")],
    store_id: Annotated[str, typer.Argument(help="Store ID")],
) -> None:
    """Show the last 30 days of prices for an ingredient at a store."""
    try:
        price_history = get_engine().get_price_history(ingredient, store_id)
        if price_history is None:
            formatter.error(
                f"No price history for '{ingredient}' at '{store_id}'",
                error_code="HISTORY_NOT_FOUND",
            )
            raise typer.Exit(code=1)
        result = {
            "success": True,
            "data": {"history": price_history.model_dump(mode="json")},
        }
        formatter.output(result)
    except typer.Exit:
        raise
    except Exception as e:
        _fail(e)


@app.command()
def promotions(
    store_id: Annotated[str | None, typer.Option("--store", "-s", help="Filter by store")] = None,
) -> None:
    """List products currently on promotion."""
    try:
        products = get_engine().get_active_promotions(store_id)
        result = {
            "success": True,
            "data": {"promotions": [p.model_dump(mode="json") for p in products]},
        }
        formatter.output(result)
    except Exception as e:
        _fail(e)


@app.command()
def cart(
    store_id: Annotated[str, typer.Argument(help="Store ID")],
    items: Annotated[
        list[str], typer.Argument(help="Ingredients as name or name:quantity")
    ],
) -> None:
    """Build a cart with the cheapest match for each ingredient at one store."""
    try:
        eng = get_engine()
        cart_items = []
        for item in items:
            name, _, qty = item.partition(":")
            product = eng.cheapest_at_store(name, store_id)
            cart_items.append({"product": product, "quantity": float(qty) if qty else 1})

        shopping_cart = eng.create_shopping_cart(store_id, cart_items)
        result = {
            "success": True,
            "message": f"Cart total: R$ {shopping_cart.total_value:.2f}",
            "data": {"cart": shopping_cart.model_dump(mode="json")},
        }
        formatter.output(result, result["message"])
    except Exception as e:
        _fail(e)


@app.command()
def alert(
    ingredient: Annotated[str, typer.Argument(help="Ingredient to watch")],
    target_price: Annotated[float, typer.Argument(help="Target price")],
    store_id: Annotated[str | None, typer.Option("--store", "-s", help="Store ID")] = None,
) -> None:
    """Create a target-price alert for an ingredient."""
    try:
        price_alert = get_engine().create_price_alert(ingredient, target_price, store_id)
        result = {
            "success": True,
            "message": f"Watching {ingredient} for R$ {target_price:.2f}",
            "data": {"alert": price_alert.model_dump(mode="json")},
        }
        formatter.output(result, result["message"])
    except Exception as e:
        _fail(e)


if __name__ == "__main__":
    app()
