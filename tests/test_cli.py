"""Tests for CLI commands."""

import json
import re

import pytest
from typer.testing import CliRunner

from supermarket_compare.main import app

runner = CliRunner()

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")


@pytest.fixture
def base_args(tmp_path):
    """Global options pinning config and seed."""
    return ["--json", "--seed", "7", "--config", str(tmp_path / "none.toml")]


def invoke_json(base_args, *args):
    result = runner.invoke(app, [*base_args, *args])
    return result, json.loads(result.stdout)


class TestSearchCommand:
    """Tests for search command."""

    def test_search_found(self, base_args):
        """Search returns a comparison sorted by price."""
        result, data = invoke_json(base_args, "search", "leite")
        assert result.exit_code == 0
        assert data["success"] is True

        comparison = data["data"]["comparison"]
        assert comparison["ingredient"] == "leite"
        assert {p["name"] for p in comparison["products"]} == {"Leite Integral"}
        prices = [p["price"] for p in comparison["products"]]
        assert prices == sorted(prices)
        assert comparison["best_price"]["price"] == prices[0]

    def test_search_synonym(self, base_args):
        """English names resolve through synonyms."""
        result, data = invoke_json(base_args, "search", "butter")
        assert result.exit_code == 0
        assert {p["name"] for p in data["data"]["comparison"]["products"]} == {"Manteiga"}

    def test_search_not_found(self, base_args):
        """Unknown ingredients fail with PRODUCT_NOT_FOUND."""
        result, data = invoke_json(base_args, "search", "xyzzy-nonexistent")
        assert result.exit_code == 1
        assert data["success"] is False
        assert data["error_code"] == "PRODUCT_NOT_FOUND"

    def test_search_blank(self, base_args):
        """Blank queries fail with INVALID_QUERY."""
        result, data = invoke_json(base_args, "search", " ")
        assert result.exit_code == 1
        assert data["error_code"] == "INVALID_QUERY"

    def test_search_same_seed_same_prices(self, base_args):
        """The seed makes prices, promotions and availability reproducible."""
        seeded = ("id", "price", "original_price", "discount", "availability")

        def seeded_fields(data):
            return [
                {key: p[key] for key in seeded} for p in data["data"]["comparison"]["products"]
            ]

        _, first = invoke_json(base_args, "search", "tomate")
        _, second = invoke_json(base_args, "search", "tomate")
        assert seeded_fields(first) == seeded_fields(second)

    def test_search_rich_output(self, tmp_path):
        """Rich output shows the comparison title."""
        result = runner.invoke(
            app, ["--seed", "7", "--config", str(tmp_path / "none.toml"), "search", "arroz"]
        )
        assert result.exit_code == 0
        output = ANSI_ESCAPE_RE.sub("", result.stdout)
        assert "Price Comparison: arroz" in output


class TestCompareCommand:
    """Tests for compare command."""

    def test_compare_partial_failure(self, base_args):
        """Unknown ingredients are reported per entry."""
        result, data = invoke_json(base_args, "compare", "leite", "xyzzy")
        assert result.exit_code == 0

        entries = data["data"]["shopping_list"]
        assert len(entries) == 2
        assert entries[0]["comparison"] is not None
        assert entries[1]["comparison"] is None
        assert entries[1]["error_code"] == "PRODUCT_NOT_FOUND"
        assert data["message"] == "Matched 1 of 2 ingredients"


class TestStoreCommands:
    """Tests for stores and chains commands."""

    def test_stores_default(self, base_args):
        """All default stores are within the default radius."""
        result, data = invoke_json(base_args, "stores")
        assert result.exit_code == 0
        assert len(data["data"]["stores"]) == 4

    def test_stores_radius(self, base_args):
        """Radius limits the stores."""
        _, data = invoke_json(base_args, "stores", "--radius", "2.0")
        assert [s["id"] for s in data["data"]["stores"]] == ["pda-jardins"]

    def test_chains(self, base_args):
        """All chains are listed."""
        _, data = invoke_json(base_args, "chains")
        assert len(data["data"]["chains"]) == 6


class TestDeliveryCommand:
    """Tests for delivery command."""

    def test_delivery(self, base_args):
        """Native delivery comes first."""
        result, data = invoke_json(base_args, "delivery", "extra-paulista")
        assert result.exit_code == 0
        options = data["data"]["delivery_options"]
        assert options[0]["provider"] == "native"
        assert options[0]["fee"] == 3.99

    def test_delivery_unknown_store(self, base_args):
        """Unknown stores fail with STORE_NOT_FOUND."""
        result, data = invoke_json(base_args, "delivery", "nope")
        assert result.exit_code == 1
        assert data["error_code"] == "STORE_NOT_FOUND"


class TestHistoryCommand:
    """Tests for history command."""

    def test_history_tracked(self, base_args):
        """Tracked ingredients have 31 points."""
        result, data = invoke_json(base_args, "history", "Leite Integral", "extra-paulista")
        assert result.exit_code == 0
        assert len(data["data"]["history"]["history"]) == 31

    def test_history_untracked(self, base_args):
        """Untracked ingredients fail with HISTORY_NOT_FOUND."""
        result, data = invoke_json(base_args, "history", "Mel", "extra-paulista")
        assert result.exit_code == 1
        assert data["error_code"] == "HISTORY_NOT_FOUND"


class TestPromotionsCommand:
    """Tests for promotions command."""

    def test_promotions_sorted(self, base_args):
        """Promotions are ordered by discount."""
        result, data = invoke_json(base_args, "promotions")
        assert result.exit_code == 0
        discounts = [p["discount"] for p in data["data"]["promotions"]]
        assert discounts == sorted(discounts, reverse=True)

    def test_promotions_unknown_store(self, base_args):
        """Unknown store filter fails."""
        result, data = invoke_json(base_args, "promotions", "--store", "nope")
        assert result.exit_code == 1
        assert data["error_code"] == "STORE_NOT_FOUND"

    def test_promotion_end_has_no_microseconds(self, base_args):
        """Promotion end dates are stamped to the second."""
        _, data = invoke_json(base_args, "promotions")
        for product in data["data"]["promotions"]:
            assert "." not in product["promotion_end_date"]


class TestCartCommand:
    """Tests for cart command."""

    def test_cart_total(self, base_args):
        """Cart total matches the item lines."""
        result, data = invoke_json(base_args, "cart", "extra-paulista", "leite:3", "arroz")
        assert result.exit_code == 0

        cart = data["data"]["cart"]
        assert cart["store"]["id"] == "extra-paulista"
        assert [i["quantity"] for i in cart["items"]] == [3, 1]
        expected = sum(i["product"]["price"] * i["quantity"] for i in cart["items"])
        assert abs(cart["total_value"] - expected) < 0.01

    def test_cart_unknown_store(self, base_args):
        """Unknown stores fail."""
        result, data = invoke_json(base_args, "cart", "nope", "leite")
        assert result.exit_code == 1
        assert data["success"] is False


class TestAlertCommand:
    """Tests for alert command."""

    def test_alert(self, base_args):
        """Alerts carry target and current price."""
        result, data = invoke_json(base_args, "alert", "manteiga", "7.5", "--store", "big-ibirapuera")
        assert result.exit_code == 0
        alert = data["data"]["alert"]
        assert alert["target_price"] == 7.5
        assert alert["current_price"] > 0
        assert alert["store"]["id"] == "big-ibirapuera"
        assert alert["is_active"] is True

    def test_alert_unknown_store(self, base_args):
        """An unknown store gives a store-less alert with no current price."""
        result, data = invoke_json(base_args, "alert", "manteiga", "7.0", "--store", "nope")
        assert result.exit_code == 0
        alert = data["data"]["alert"]
        assert alert["store"] is None
        assert alert["current_price"] == 0.0
