"""Purchase recommendations derived from a matched product set."""

from .models import (
    BestPriceRecommendation,
    BestValueRecommendation,
    FastestDeliveryRecommendation,
    Product,
    Recommendation,
)
from .pricing import round_money, sort_by_price

_UNKNOWN_DELIVERY_TIME = 999


def total_cost(product: Product) -> float:
    """Product price plus its store's delivery fee."""
    return product.price + (product.store.delivery_fee or 0)


def best_price(products: list[Product]) -> BestPriceRecommendation:
    """Cheapest product, with savings over the runner-up."""
    ordered = sort_by_price(products)
    cheapest = ordered[0]
    savings = round_money(ordered[1].price - cheapest.price) if len(ordered) > 1 else 0.0
    return BestPriceRecommendation(
        product=cheapest,
        reason="Lowest price found",
        savings=savings,
    )


def fastest_delivery(products: list[Product]) -> FastestDeliveryRecommendation | None:
    """Product from the delivering store with the shortest delivery time."""
    delivering = [p for p in products if p.store.delivery_available]
    if not delivering:
        return None

    fastest = min(
        delivering,
        key=lambda p: (
            p.store.estimated_delivery_time
            if p.store.estimated_delivery_time is not None
            else _UNKNOWN_DELIVERY_TIME
        ),
    )
    minutes = fastest.store.estimated_delivery_time
    reason = f"Delivery in {minutes} minutes" if minutes is not None else "Delivery available"
    return FastestDeliveryRecommendation(
        product=fastest,
        reason=reason,
        delivery_minutes=minutes,
    )


def best_value(products: list[Product]) -> BestValueRecommendation:
    """Product with the lowest total cost including delivery."""
    winner = min(products, key=total_cost)
    return BestValueRecommendation(
        product=winner,
        reason="Best value including delivery fee",
        delivery_fee=winner.store.delivery_fee or 0.0,
        total_cost=round_money(total_cost(winner)),
    )


def rank(products: list[Product]) -> list[Recommendation]:
    """Build best_price, fastest_delivery and best_value recommendations.

    The same product may back several recommendations. fastest_delivery is
    omitted when no store delivers. Ties resolve to the earlier product.

    Raises:
        ValueError: If products is empty
    """
    if not products:
        raise ValueError("Cannot rank an empty product list")

    recommendations: list[Recommendation] = [best_price(products)]

    fastest = fastest_delivery(products)
    if fastest is not None:
        recommendations.append(fastest)

    recommendations.append(best_value(products))
    return recommendations
