"""Output formatting for CLI and programmatic use."""

import json
from datetime import date, datetime
from typing import Any
from uuid import UUID

from rich.console import Console
from rich.panel import Panel
from rich.table import Table


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for output."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


def _money(value: float | None) -> str:
    if value is None:
        return "-"
    return f"R$ {value:.2f}"


class OutputFormatter:
    """Formats output for both Rich terminal and JSON modes."""

    def __init__(self, json_mode: bool = False):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode
        self.console = Console()

    def output(self, data: dict[str, Any], message: str = "") -> None:
        """Output data in appropriate format.

        Args:
            data: Data to output
            message: Optional message for Rich mode
        """
        if self.json_mode:
            self._output_json(data)
        else:
            self._output_rich(data, message)

    def _output_json(self, data: dict[str, Any]) -> None:
        """Output as JSON to stdout."""
        print(json.dumps(data, cls=JSONEncoder, indent=2))

    def _output_rich(self, data: dict[str, Any], message: str) -> None:
        """Output with Rich formatting."""
        if message:
            self.console.print(f"[green]✓[/green] {message}")

        payload = data.get("data", {})
        if "comparison" in payload:
            self._render_comparison(payload["comparison"])
        elif "shopping_list" in payload:
            self._render_shopping_list(data)
        elif "stores" in payload:
            self._render_stores(data)
        elif "chains" in payload:
            self._render_chains(data)
        elif "delivery_options" in payload:
            self._render_delivery_options(data)
        elif "history" in payload:
            self._render_price_history(data)
        elif "promotions" in payload:
            self._render_promotions(data)
        elif "cart" in payload:
            self._render_cart(data)
        elif "alert" in payload:
            self._render_alert(data)

    def _product_table(self, products: list[dict], title: str | None = None) -> Table:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Product", style="cyan")
        table.add_column("Brand")
        table.add_column("Unit", style="magenta")
        table.add_column("Store", style="green")
        table.add_column("Price", justify="right")
        table.add_column("", justify="center")

        for product in products:
            markers = []
            if product.get("discount"):
                markers.append(f"[yellow]-{_money(product['discount'])}[/yellow]")
            if not product.get("availability", True):
                markers.append("[red]unavailable[/red]")
            table.add_row(
                product["name"],
                product.get("brand") or "-",
                product.get("unit", ""),
                product["store"]["name"],
                _money(product["price"]),
                " ".join(markers),
            )
        return table

    def _render_comparison(self, comp: dict) -> None:
        """Render a price comparison across stores."""
        self.console.print(f"\n[bold]Price Comparison: {comp['ingredient']}[/bold]")
        self.console.print(self._product_table(comp["products"]))

        price_range = comp["price_range"]
        self.console.print(
            f"Average: {_money(comp['average_price'])}  "
            f"Range: {_money(price_range['min'])} - {_money(price_range['max'])}"
        )

        if comp.get("recommendations"):
            self.console.print("\n[dim]Recommendations:[/dim]")
            for rec in comp["recommendations"]:
                product = rec["product"]
                line = (
                    f"  [bold]{rec['type']}[/bold]: {product['name']} at "
                    f"{product['store']['name']} ({_money(product['price'])}) - {rec['reason']}"
                )
                if rec.get("savings"):
                    line += f" [green]saves {_money(rec['savings'])}[/green]"
                self.console.print(line)

    def _render_shopping_list(self, data: dict) -> None:
        """Render per-ingredient best prices for a shopping list."""
        entries = data["data"]["shopping_list"]

        table = Table(title="Shopping List", show_header=True, header_style="bold cyan")
        table.add_column("Ingredient", style="cyan")
        table.add_column("Best", style="green")
        table.add_column("Price", justify="right")
        table.add_column("Average", justify="right")

        total = 0.0
        for entry in entries:
            comp = entry.get("comparison")
            if comp is None:
                table.add_row(entry["ingredient"], f"[red]{entry.get('error_code')}[/red]", "-", "-")
                continue
            best = comp["best_price"]
            total += best["price"]
            table.add_row(
                entry["ingredient"],
                f"{best['name']} @ {best['store']['name']}",
                _money(best["price"]),
                _money(comp["average_price"]),
            )

        self.console.print(table)
        self.console.print(f"\nCheapest total: {_money(total)}")

    def _render_stores(self, data: dict) -> None:
        """Render store list."""
        stores = data["data"]["stores"]

        if not stores:
            self.console.print("[dim]No stores in range[/dim]")
            return

        table = Table(title="Stores", show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim")
        table.add_column("Store", style="cyan")
        table.add_column("Distance", justify="right")
        table.add_column("Delivery")
        table.add_column("Rating", justify="right")

        for store in stores:
            if store.get("delivery_available"):
                delivery = (
                    f"{_money(store.get('delivery_fee'))} / "
                    f"{store.get('estimated_delivery_time') or '-'} min"
                )
            else:
                delivery = "[dim]no[/dim]"
            distance = store.get("distance")
            table.add_row(
                store["id"],
                store["name"],
                f"{distance:.1f} km" if distance is not None else "-",
                delivery,
                f"{store['rating']:.1f}" if store.get("rating") is not None else "-",
            )

        self.console.print(table)

    def _render_chains(self, data: dict) -> None:
        """Render supermarket chains."""
        table = Table(title="Chains", show_header=True, header_style="bold cyan")
        table.add_column("Chain", style="cyan")
        table.add_column("Delivery")
        table.add_column("Regions")

        for chain in data["data"]["chains"]:
            table.add_row(
                chain["display_name"],
                "yes" if chain.get("has_delivery") else "no",
                ", ".join(chain.get("supported_regions", [])),
            )

        self.console.print(table)

    def _render_delivery_options(self, data: dict) -> None:
        """Render delivery options for a store."""
        options = data["data"]["delivery_options"]

        if not options:
            self.console.print("[dim]No delivery options[/dim]")
            return

        table = Table(title="Delivery Options", show_header=True, header_style="bold cyan")
        table.add_column("Provider", style="cyan")
        table.add_column("Fee", justify="right")
        table.add_column("Time", justify="right")
        table.add_column("Min. order", justify="right")

        for option in options:
            table.add_row(
                option["provider"],
                _money(option["fee"]),
                f"{option['estimated_time']} min",
                _money(option["min_order_value"]),
            )

        self.console.print(table)

    def _render_price_history(self, data: dict) -> None:
        """Render price history."""
        history = data["data"]["history"]

        self.console.print(f"\n[bold]Price History: {history['ingredient']}[/bold]")
        self.console.print(f"Store: {history['store']['name']}")

        points = history.get("history", [])
        if not points:
            return

        prices = [p["price"] for p in points]
        self.console.print(f"Current: {_money(prices[-1])}")
        self.console.print(f"Average: {_money(sum(prices) / len(prices))}")
        self.console.print(f"Lowest: {_money(min(prices))}")
        self.console.print(f"Highest: {_money(max(prices))}")

        self.console.print("\n[dim]Recent prices:[/dim]")
        for pp in points[-5:]:  # Show last 5
            promo_marker = " [yellow](promo)[/yellow]" if pp.get("promotion") else ""
            self.console.print(f"  {pp['date']}: {_money(pp['price'])}{promo_marker}")

    def _render_promotions(self, data: dict) -> None:
        """Render active promotions."""
        promotions = data["data"]["promotions"]

        if not promotions:
            self.console.print("[dim]No active promotions[/dim]")
            return

        self.console.print(self._product_table(promotions, title="Active Promotions"))

    def _render_cart(self, data: dict) -> None:
        """Render a shopping cart."""
        cart = data["data"]["cart"]

        table = Table(show_header=True)
        table.add_column("Item")
        table.add_column("Qty", justify="right")
        table.add_column("Price", justify="right")

        for item in cart["items"]:
            product = item["product"]
            table.add_row(
                product["name"],
                f"{item['quantity']:g}",
                _money(product["price"] * item["quantity"]),
            )

        panel = Panel(
            f"""[bold]{cart["store"]["name"]}[/bold]

Items: {len(cart["items"])}
Total: {_money(cart["total_value"])}
Delivery: {_money(cart["delivery_fee"])} ({cart["estimated_delivery_time"]} min)""",
            title="Shopping Cart",
            border_style="green",
        )

        self.console.print(panel)
        self.console.print(table)

    def _render_alert(self, data: dict) -> None:
        """Render a price alert."""
        alert = data["data"]["alert"]
        store = alert.get("store")

        panel = Panel(
            f"""[bold]{alert["ingredient"]}[/bold]

Target: {_money(alert["target_price"])}
Current: {_money(alert["current_price"])}
Store: {store["name"] if store else "Any"}""",
            title="Price Alert",
            border_style="green",
        )
        self.console.print(panel)

    def error(self, message: str, error_code: str | None = None) -> None:
        """Output error message.

        Args:
            message: Error message
            error_code: Optional error code
        """
        if self.json_mode:
            output = {"success": False, "error": message}
            if error_code:
                output["error_code"] = error_code
            print(json.dumps(output))
        else:
            self.console.print(f"[red]✗ Error:[/red] {message}")

    def success(self, message: str, data: dict | None = None) -> None:
        """Output success message.

        Args:
            message: Success message
            data: Optional data to include
        """
        if self.json_mode:
            output: dict[str, Any] = {"success": True, "message": message}
            if data:
                output["data"] = data
            print(json.dumps(output, cls=JSONEncoder))
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        """Output warning message.

        Args:
            message: Warning message
        """
        if self.json_mode:
            print(json.dumps({"warning": message}))
        else:
            self.console.print(f"[yellow]⚠[/yellow] {message}")
