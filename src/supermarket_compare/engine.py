"""Price comparison engine: the entry point callers hold on to."""

import logging
import random
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from .cart import build_alert, build_cart
from .catalog import Catalog
from .config import ConfigManager
from .delivery import delivery_options
from .history import PriceHistoryBook
from .models import (
    CartItem,
    Chain,
    DeliveryOption,
    Location,
    PriceAlert,
    PriceComparison,
    PriceHistory,
    Product,
    ShoppingCart,
    ShoppingListEntry,
    Store,
)
from .pricing import aggregate
from .recommendations import rank
from .registry import StoreRegistry
from .search import InvalidQueryError, ProductNotFoundError, SearchResolver

logger = logging.getLogger(__name__)


class PriceComparisonEngine:
    """Compares supermarket prices over a catalog built once at startup.

    The catalog and price history tables are generated in the constructor and
    only read afterwards. Pass a seed (or a random.Random) to make them
    reproducible.
    """

    def __init__(
        self,
        config: ConfigManager | None = None,
        registry: StoreRegistry | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        now: datetime | None = None,
        today: date | None = None,
    ):
        """Initialize engine.

        Args:
            config: ConfigManager instance. Creates new one if not provided.
            registry: Chains and stores. Defaults to the built-in registry.
            seed: Random seed. Overrides the configured catalog seed.
            rng: Random source. Takes precedence over seed.
            now: Reference time for promotion end dates
            today: Last day of every price history series
        """
        self.config = config or ConfigManager()
        self.registry = registry or StoreRegistry()

        if rng is None:
            rng = random.Random(seed if seed is not None else self.config.catalog.seed)
        self.rng = rng

        self.catalog = Catalog.build(self.registry, self.rng, self.config.catalog, now=now)
        self.history = PriceHistoryBook.build(
            self.catalog, self.registry, self.rng, self.config.history, today=today
        )
        self.resolver = SearchResolver(self.catalog.products)

    def search_products(self, ingredient: str) -> PriceComparison:
        """Compare prices of an ingredient across every store.

        Args:
            ingredient: Free-text ingredient name

        Returns:
            PriceComparison with products sorted ascending by price

        Raises:
            InvalidQueryError: If ingredient is blank
            ProductNotFoundError: If nothing in the catalog matches
        """
        matches = self.resolver.resolve(ingredient)
        stats = aggregate(matches)

        return PriceComparison(
            ingredient=ingredient,
            searched_at=datetime.now(),
            products=stats.products,
            best_price=stats.best_price,
            average_price=stats.average_price,
            price_range=stats.price_range,
            recommendations=rank(stats.products),
        )

    def compare_shopping_list(self, ingredients: Iterable[str]) -> list[ShoppingListEntry]:
        """Search each ingredient, reporting failures per entry instead of raising."""
        entries: list[ShoppingListEntry] = []

        for ingredient in ingredients:
            try:
                comparison = self.search_products(ingredient)
            except ProductNotFoundError as e:
                logger.warning("Shopping list item %r not found", ingredient)
                entries.append(
                    ShoppingListEntry(
                        ingredient=ingredient, error=str(e), error_code="PRODUCT_NOT_FOUND"
                    )
                )
            except InvalidQueryError as e:
                logger.warning("Shopping list item %r is not a valid query", ingredient)
                entries.append(
                    ShoppingListEntry(ingredient=ingredient, error=str(e), error_code="INVALID_QUERY")
                )
            else:
                entries.append(ShoppingListEntry(ingredient=ingredient, comparison=comparison))

        return entries

    def get_nearby_stores(
        self, location: Location | None = None, radius_km: float | None = None
    ) -> list[Store]:
        """Stores within radius_km, defaulting to the configured radius."""
        if radius_km is None:
            radius_km = self.config.search.default_radius_km
        return self.registry.nearby_stores(location, radius_km)

    def get_delivery_options(self, store_id: str) -> list[DeliveryOption]:
        """Delivery options for a store.

        Raises:
            StoreNotFoundError: If store_id is unknown
        """
        store = self.registry.get_store(store_id)
        return delivery_options(store, self.rng, self.config.delivery)

    def get_price_history(self, ingredient: str, store_id: str) -> PriceHistory | None:
        """Daily price series for a tracked ingredient, or None."""
        return self.history.history_for(ingredient, store_id)

    def create_shopping_cart(
        self,
        store_id: str,
        items: Iterable[CartItem | dict[str, Any]],
        user_id: str | None = None,
    ) -> ShoppingCart:
        """Build a cart at a store.

        Raises:
            StoreNotFoundError: If store_id is unknown
        """
        store = self.registry.get_store(store_id)
        return build_cart(store, items, user_id=user_id)

    def create_price_alert(
        self,
        ingredient: str,
        target_price: float,
        store_id: str | None = None,
        user_id: str | None = None,
    ) -> PriceAlert:
        """Register a price watch.

        An unknown store_id leaves the alert store-less with a current price
        of 0.
        """
        store = self.registry.find_store(store_id) if store_id else None
        return build_alert(
            ingredient, target_price, self.catalog, store_id=store_id, store=store, user_id=user_id
        )

    def get_supermarket_chains(self) -> list[Chain]:
        """All registered chains."""
        return self.registry.chains

    def get_active_promotions(self, store_id: str | None = None) -> list[Product]:
        """Discounted products, largest discount first.

        Raises:
            StoreNotFoundError: If store_id is given and unknown
        """
        if store_id is not None:
            self.registry.get_store(store_id)
        return self.catalog.active_promotions(store_id)

    def cheapest_at_store(self, ingredient: str, store_id: str) -> Product:
        """Cheapest product matching an ingredient at one store.

        Raises:
            StoreNotFoundError: If store_id is unknown
            ProductNotFoundError: If the store sells nothing matching
        """
        self.registry.get_store(store_id)
        matches = [p for p in self.resolver.resolve(ingredient) if p.store.id == store_id]
        if not matches:
            raise ProductNotFoundError(ingredient)
        return aggregate(matches).best_price
