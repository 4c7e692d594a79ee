"""Synthetic daily price history for tracked ingredients."""

import logging
import random
from datetime import date, timedelta

from .catalog import Catalog
from .config import HistoryConfig
from .models import PriceHistory, PricePoint
from .pricing import round_money
from .registry import StoreRegistry

logger = logging.getLogger(__name__)

TRACKED_INGREDIENTS: list[str] = [
    "Leite Integral",
    "Manteiga",
    "Queijo Mussarela",
    "Arroz Branco",
    "Feijão Preto",
    "Feijão Carioca",
    "Macarrão Espaguete",
    "Óleo de Soja",
    "Azeite Extra Virgem",
    "Açúcar Cristal",
    "Farinha de Trigo",
    "Ovos",
    "Carne Moída",
    "Frango Inteiro",
    "Peito de Frango",
    "Tomate",
    "Cebola",
    "Alho",
    "Batata",
    "Cenoura",
]


def _key(ingredient: str, store_id: str) -> tuple[str, str]:
    return ingredient.strip().casefold(), store_id


class PriceHistoryBook:
    """Precomputed price series keyed by (ingredient, store)."""

    def __init__(self, histories: list[PriceHistory]):
        self._histories = {_key(h.ingredient, h.store.id): h for h in histories}

    @classmethod
    def build(
        cls,
        catalog: Catalog,
        registry: StoreRegistry,
        rng: random.Random,
        config: HistoryConfig | None = None,
        ingredients: list[str] | None = None,
        today: date | None = None,
    ) -> "PriceHistoryBook":
        """Generate one series per tracked ingredient and store.

        Each day is drawn independently around the catalog price, within
        +/- max_variation, and flagged as a promotion with
        promotion_probability.

        Args:
            catalog: Source of each series' base price
            registry: Stores to generate series for
            rng: Random source for variation and promotion draws
            config: Window length and variation bounds
            ingredients: Product names to track. Defaults to TRACKED_INGREDIENTS.
            today: Last day of every series
        """
        config = config or HistoryConfig()
        ingredients = TRACKED_INGREDIENTS if ingredients is None else ingredients
        today = today or date.today()

        histories: list[PriceHistory] = []
        for ingredient in ingredients:
            for store in registry.stores:
                product = catalog.find(ingredient, store.id)
                base_price = product.price if product is not None else config.default_price

                points = []
                for days_ago in range(config.days, -1, -1):
                    variation = rng.uniform(-config.max_variation, config.max_variation)
                    points.append(
                        PricePoint(
                            date=today - timedelta(days=days_ago),
                            price=round_money(base_price * (1 + variation)),
                            promotion=rng.random() < config.promotion_probability,
                        )
                    )

                histories.append(PriceHistory(ingredient=ingredient, store=store, history=points))

        logger.info(
            "Built %d price histories of %d days each", len(histories), config.days + 1
        )
        return cls(histories)

    def __len__(self) -> int:
        return len(self._histories)

    def history_for(self, ingredient: str, store_id: str) -> PriceHistory | None:
        """Get the series for an ingredient at a store, or None on a miss."""
        return self._histories.get(_key(ingredient, store_id))

    @property
    def ingredients(self) -> list[str]:
        """Tracked ingredient names."""
        seen: dict[str, None] = {}
        for history in self._histories.values():
            seen.setdefault(history.ingredient, None)
        return list(seen)
