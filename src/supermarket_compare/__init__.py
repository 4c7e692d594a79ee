"""Supermarket Compare - Multi-store ingredient price comparison."""

from .catalog import BASE_PRODUCTS, Catalog
from .config import ConfigManager
from .engine import PriceComparisonEngine
from .history import TRACKED_INGREDIENTS, PriceHistoryBook
from .models import (
    BaseProduct,
    BestPriceRecommendation,
    BestValueRecommendation,
    CartItem,
    Chain,
    DeliveryOption,
    DeliveryProvider,
    FastestDeliveryRecommendation,
    Location,
    PriceAlert,
    PriceComparison,
    PriceHistory,
    PricePoint,
    PriceRange,
    PriceStats,
    Product,
    Recommendation,
    RecommendationType,
    ShoppingCart,
    ShoppingListEntry,
    Store,
)
from .output_formatter import OutputFormatter
from .pricing import aggregate, round_money
from .recommendations import rank
from .registry import StoreNotFoundError, StoreRegistry
from .search import SYNONYMS, InvalidQueryError, ProductNotFoundError, SearchResolver

__version__ = "0.1.0"

__all__ = [
    "aggregate",
    "BASE_PRODUCTS",
    "BaseProduct",
    "BestPriceRecommendation",
    "BestValueRecommendation",
    "CartItem",
    "Catalog",
    "Chain",
    "ConfigManager",
    "DeliveryOption",
    "DeliveryProvider",
    "FastestDeliveryRecommendation",
    "InvalidQueryError",
    "Location",
    "OutputFormatter",
    "PriceAlert",
    "PriceComparison",
    "PriceComparisonEngine",
    "PriceHistory",
    "PriceHistoryBook",
    "PricePoint",
    "PriceRange",
    "PriceStats",
    "Product",
    "ProductNotFoundError",
    "rank",
    "Recommendation",
    "RecommendationType",
    "round_money",
    "SearchResolver",
    "ShoppingCart",
    "ShoppingListEntry",
    "Store",
    "StoreNotFoundError",
    "StoreRegistry",
    "SYNONYMS",
    "TRACKED_INGREDIENTS",
]
