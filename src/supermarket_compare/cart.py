"""Shopping cart and price alert construction."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from .catalog import Catalog
from .delivery import DEFAULT_DELIVERY_MINUTES
from .models import CartItem, PriceAlert, ShoppingCart, Store
from .pricing import round_money


def build_cart(
    store: Store,
    items: Iterable[CartItem | dict[str, Any]],
    user_id: str | None = None,
) -> ShoppingCart:
    """Package selected products into a cart for one store.

    Args:
        store: Store the order is placed with
        items: CartItem instances or dicts with product and quantity
        user_id: Owner of the cart

    Returns:
        ShoppingCart whose total is rounded once, after summing every line
    """
    cart_items = [
        item if isinstance(item, CartItem) else CartItem.model_validate(item) for item in items
    ]
    total = sum(item.product.price * item.quantity for item in cart_items)
    now = datetime.now()

    return ShoppingCart(
        user_id=user_id,
        items=cart_items,
        store=store,
        total_value=round_money(total),
        delivery_fee=store.delivery_fee or 0.0,
        estimated_delivery_time=store.estimated_delivery_time or DEFAULT_DELIVERY_MINUTES,
        created_at=now,
        updated_at=now,
    )


def build_alert(
    ingredient: str,
    target_price: float,
    catalog: Catalog,
    store_id: str | None = None,
    store: Store | None = None,
    user_id: str | None = None,
) -> PriceAlert:
    """Register a target-price watch on an ingredient.

    The current price is taken from the first catalog product whose name
    contains the ingredient, restricted to store_id when given. A miss,
    including an unknown store_id, leaves current_price at 0.

    Args:
        ingredient: Ingredient to watch
        target_price: Price at which the alert should fire
        catalog: Products to read the current price from
        store_id: Store to restrict the price lookup to
        store: Resolved store for store_id, or None if it is unknown
        user_id: Owner of the alert
    """
    if store_id is None and store is not None:
        store_id = store.id

    needle = ingredient.strip().lower()
    current = next(
        (
            p
            for p in catalog
            if needle in p.name.lower() and (not store_id or p.store.id == store_id)
        ),
        None,
    )

    return PriceAlert(
        user_id=user_id,
        ingredient=ingredient,
        target_price=target_price,
        current_price=current.price if current is not None else 0.0,
        store=store,
        is_active=True,
    )
