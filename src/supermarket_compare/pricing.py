"""Price rounding and aggregate statistics over matched products."""

from decimal import ROUND_HALF_UP, Decimal

from .models import PriceRange, PriceStats, Product

_CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Round to 2 decimal places, half-up."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def sort_by_price(products: list[Product]) -> list[Product]:
    """Sort ascending by price; ties keep catalog order."""
    return sorted(products, key=lambda p: p.price)


def aggregate(products: list[Product]) -> PriceStats:
    """Compute cheapest product, mean price and price range.

    Args:
        products: Matched products, in catalog order

    Returns:
        PriceStats with products sorted ascending by price

    Raises:
        ValueError: If products is empty
    """
    if not products:
        raise ValueError("Cannot aggregate prices of an empty product list")

    ordered = sort_by_price(products)
    prices = [p.price for p in ordered]

    return PriceStats(
        products=ordered,
        best_price=ordered[0],
        average_price=round_money(sum(prices) / len(prices)),
        price_range=PriceRange(min=ordered[0].price, max=ordered[-1].price),
    )
