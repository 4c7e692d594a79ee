"""Core data models for Supermarket Compare."""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RecommendationType(str, Enum):
    """Kinds of purchase recommendation."""

    BEST_PRICE = "best_price"
    BEST_VALUE = "best_value"
    FASTEST_DELIVERY = "fastest_delivery"
    BULK_DISCOUNT = "bulk_discount"


class DeliveryProvider(str, Enum):
    """Who performs a delivery."""

    NATIVE = "native"
    IFOOD = "ifood"
    RAPPI = "rappi"
    UBER_EATS = "uber_eats"


class Chain(BaseModel):
    """A supermarket brand operating several stores."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    display_name: str
    color: str
    logo_url: str | None = None
    has_delivery: bool = True
    supported_regions: list[str] = Field(default_factory=list)


class Store(BaseModel):
    """A concrete retail location belonging to a chain."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    chain_id: str
    address: str | None = None
    distance: float | None = None  # km from the user
    delivery_available: bool = False
    delivery_fee: float | None = None
    min_order_value: float | None = None
    estimated_delivery_time: int | None = None  # minutes
    rating: float | None = None
    price_multiplier: float = 1.0


class BaseProduct(BaseModel):
    """A product as sold everywhere, before store pricing."""

    model_config = ConfigDict(frozen=True)

    name: str
    brand: str
    category: str
    unit: str
    description: str
    barcode: str
    base_price: float = Field(ge=0)


class Product(BaseModel):
    """A priced product instance sold by one store."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    brand: str | None = None
    category: str
    unit: str
    price: float = Field(ge=0)
    original_price: float | None = None
    discount: float | None = None
    availability: bool = True
    store: Store
    description: str | None = None
    barcode: str | None = None
    promotion_end_date: datetime | None = None
    image_url: str | None = None

    @model_validator(mode="after")
    def _check_promotion(self) -> "Product":
        if self.discount is None:
            return self
        if self.original_price is None or self.promotion_end_date is None:
            raise ValueError("discounted products need original_price and promotion_end_date")
        if abs(self.original_price - self.discount - self.price) > 0.01:
            raise ValueError(
                f"original_price {self.original_price} - discount {self.discount} "
                f"does not match price {self.price}"
            )
        return self

    @property
    def on_promotion(self) -> bool:
        """Whether the product carries a discount."""
        return bool(self.discount)


class PriceRange(BaseModel):
    """Lowest and highest price in a result set."""

    min: float
    max: float


class PriceStats(BaseModel):
    """Summary statistics for a set of matched products."""

    products: list[Product]
    best_price: Product
    average_price: float
    price_range: PriceRange


class BestPriceRecommendation(BaseModel):
    """The globally cheapest product."""

    type: Literal["best_price"] = "best_price"
    product: Product
    reason: str
    savings: float = 0.0


class FastestDeliveryRecommendation(BaseModel):
    """The product whose store delivers soonest."""

    type: Literal["fastest_delivery"] = "fastest_delivery"
    product: Product
    reason: str
    delivery_minutes: int | None = None


class BestValueRecommendation(BaseModel):
    """The product with the lowest price plus delivery fee."""

    type: Literal["best_value"] = "best_value"
    product: Product
    reason: str
    delivery_fee: float = 0.0
    total_cost: float


Recommendation = Annotated[
    BestPriceRecommendation | FastestDeliveryRecommendation | BestValueRecommendation,
    Field(discriminator="type"),
]


class PriceComparison(BaseModel):
    """Result of searching one ingredient across every store."""

    ingredient: str
    searched_at: datetime = Field(default_factory=datetime.now)
    products: list[Product]
    best_price: Product
    average_price: float
    price_range: PriceRange
    recommendations: list[Recommendation] = Field(default_factory=list)

    def recommendation(self, kind: RecommendationType | str) -> Recommendation | None:
        """Get the recommendation of a given type, if present."""
        kind = RecommendationType(kind).value
        for rec in self.recommendations:
            if rec.type == kind:
                return rec
        return None


class PricePoint(BaseModel):
    """A single day's price observation."""

    date: date
    price: float
    promotion: bool = False


class PriceHistory(BaseModel):
    """Daily price series for an ingredient at a store."""

    ingredient: str
    store: Store
    history: list[PricePoint] = Field(default_factory=list)

    @property
    def current_price(self) -> float | None:
        """Get most recent price."""
        if not self.history:
            return None
        return self.history[-1].price

    @property
    def average_price(self) -> float | None:
        """Get average price."""
        if not self.history:
            return None
        return sum(p.price for p in self.history) / len(self.history)

    @property
    def lowest_price(self) -> float | None:
        """Get lowest price in the window."""
        if not self.history:
            return None
        return min(p.price for p in self.history)

    @property
    def highest_price(self) -> float | None:
        """Get highest price in the window."""
        if not self.history:
            return None
        return max(p.price for p in self.history)


class Location(BaseModel):
    """A user position."""

    lat: float
    lng: float


class DeliveryOption(BaseModel):
    """One way of getting an order from a store to the user."""

    provider: DeliveryProvider
    available: bool = True
    fee: float
    estimated_time: int  # minutes
    min_order_value: float


class CartItem(BaseModel):
    """A product and how many units of it to buy."""

    product: Product
    quantity: float = Field(default=1, gt=0)
    notes: str | None = None
    substitutions: list[Product] = Field(default_factory=list)


class ShoppingCart(BaseModel):
    """Products selected for purchase at one store."""

    id: UUID = Field(default_factory=uuid4)
    user_id: str | None = None
    items: list[CartItem]
    store: Store
    total_value: float
    delivery_fee: float = 0.0
    estimated_delivery_time: int = 60
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class PriceAlert(BaseModel):
    """A watch on an ingredient's price."""

    id: UUID = Field(default_factory=uuid4)
    user_id: str | None = None
    ingredient: str
    target_price: float = Field(ge=0)
    current_price: float = 0.0
    store: Store | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    triggered_at: datetime | None = None


class ShoppingListEntry(BaseModel):
    """Outcome of comparing one ingredient of a shopping list."""

    ingredient: str
    comparison: PriceComparison | None = None
    error: str | None = None
    error_code: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the ingredient was resolved."""
        return self.comparison is not None
