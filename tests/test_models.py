"""Tests for data models."""

from datetime import date, datetime, timedelta
from uuid import UUID

import pytest
from pydantic import TypeAdapter, ValidationError

from supermarket_compare.models import (
    BaseProduct,
    BestPriceRecommendation,
    BestValueRecommendation,
    CartItem,
    DeliveryOption,
    DeliveryProvider,
    FastestDeliveryRecommendation,
    PriceAlert,
    PriceComparison,
    PriceHistory,
    PricePoint,
    PriceRange,
    Recommendation,
    RecommendationType,
    ShoppingListEntry,
)


class TestBaseProduct:
    """Tests for BaseProduct model."""

    def test_create(self):
        """Create a base product with keyword fields."""
        base = BaseProduct(
            name="Leite Integral",
            brand="Parmalat",
            category="Laticínios",
            unit="1L",
            description="Leite integral UHT",
            barcode="7891234567890",
            base_price=4.99,
        )
        assert base.base_price == 4.99

    def test_negative_base_price_rejected(self):
        """Base prices cannot be negative."""
        with pytest.raises(ValidationError):
            BaseProduct(
                name="x",
                brand="y",
                category="z",
                unit="1u",
                description="d",
                barcode="0",
                base_price=-1.0,
            )

    def test_frozen(self):
        """Base products are immutable."""
        base = BaseProduct(
            name="x", brand="y", category="z", unit="1u", description="d", barcode="0", base_price=1.0
        )
        with pytest.raises(ValidationError):
            base.base_price = 2.0


class TestProduct:
    """Tests for Product model."""

    def test_create_minimal(self, make_product):
        """Create product with only required fields."""
        product = make_product(price=4.99)
        assert product.price == 4.99
        assert product.availability is True
        assert product.discount is None
        assert product.on_promotion is False

    def test_negative_price_rejected(self, make_product):
        """Prices cannot be negative."""
        with pytest.raises(ValidationError):
            make_product(price=-1.0)

    def test_valid_promotion(self, make_product):
        """Discounted product with consistent prices."""
        product = make_product(
            price=4.24,
            original_price=4.99,
            discount=0.75,
            promotion_end_date=datetime.now() + timedelta(days=7),
        )
        assert product.on_promotion is True

    def test_inconsistent_discount_rejected(self, make_product):
        """original_price - discount must equal price."""
        with pytest.raises(ValidationError):
            make_product(
                price=4.00,
                original_price=4.99,
                discount=0.75,
                promotion_end_date=datetime.now(),
            )

    def test_discount_requires_end_date(self, make_product):
        """A discount without a promotion end date is invalid."""
        with pytest.raises(ValidationError):
            make_product(price=4.24, original_price=4.99, discount=0.75)

    def test_frozen(self, make_product):
        """Catalog products cannot be mutated."""
        product = make_product()
        with pytest.raises(ValidationError):
            product.price = 1.0


class TestRecommendation:
    """Tests for the tagged recommendation variants."""

    def test_type_tags(self, make_product):
        """Each variant carries its own tag."""
        product = make_product()
        assert BestPriceRecommendation(product=product, reason="r").type == "best_price"
        assert FastestDeliveryRecommendation(product=product, reason="r").type == "fastest_delivery"
        assert (
            BestValueRecommendation(product=product, reason="r", total_cost=9.99).type
            == "best_value"
        )

    def test_parse_by_discriminator(self, make_product):
        """Serialized recommendations parse back to the right variant."""
        product = make_product()
        adapter = TypeAdapter(Recommendation)
        rec = adapter.validate_python(
            {
                "type": "fastest_delivery",
                "product": product.model_dump(),
                "reason": "Delivery in 45 minutes",
                "delivery_minutes": 45,
            }
        )
        assert isinstance(rec, FastestDeliveryRecommendation)
        assert rec.delivery_minutes == 45

    def test_unknown_type_rejected(self, make_product):
        """Unknown tags fail validation."""
        adapter = TypeAdapter(Recommendation)
        with pytest.raises(ValidationError):
            adapter.validate_python(
                {"type": "cheapest", "product": make_product().model_dump(), "reason": "r"}
            )

    def test_recommendation_types(self):
        """All recommendation kinds are enumerated."""
        assert {t.value for t in RecommendationType} == {
            "best_price",
            "best_value",
            "fastest_delivery",
            "bulk_discount",
        }


class TestPriceComparison:
    """Tests for PriceComparison model."""

    def test_lookup_recommendation(self, make_product):
        """Find a recommendation by type."""
        product = make_product()
        comparison = PriceComparison(
            ingredient="leite",
            products=[product],
            best_price=product,
            average_price=product.price,
            price_range=PriceRange(min=product.price, max=product.price),
            recommendations=[
                BestPriceRecommendation(product=product, reason="r"),
                BestValueRecommendation(product=product, reason="r", total_cost=9.99),
            ],
        )
        assert comparison.recommendation(RecommendationType.BEST_VALUE).total_cost == 9.99
        assert comparison.recommendation("fastest_delivery") is None
        assert isinstance(comparison.searched_at, datetime)


class TestPriceHistory:
    """Tests for PriceHistory model."""

    def test_empty_history(self, make_store):
        """Empty history returns None for stats."""
        history = PriceHistory(ingredient="Manteiga", store=make_store())
        assert history.current_price is None
        assert history.average_price is None
        assert history.lowest_price is None
        assert history.highest_price is None

    def test_stats(self, make_store):
        """Stats are derived from points, current is the newest."""
        today = date.today()
        history = PriceHistory(
            ingredient="Manteiga",
            store=make_store(),
            history=[
                PricePoint(date=today - timedelta(days=2), price=9.00),
                PricePoint(date=today - timedelta(days=1), price=8.00, promotion=True),
                PricePoint(date=today, price=10.00),
            ],
        )
        assert history.current_price == 10.00
        assert history.average_price == pytest.approx(9.00)
        assert history.lowest_price == 8.00
        assert history.highest_price == 10.00


class TestCartAndAlert:
    """Tests for cart and alert models."""

    def test_cart_item_quantity_positive(self, make_product):
        """Quantity must be positive."""
        with pytest.raises(ValidationError):
            CartItem(product=make_product(), quantity=0)

    def test_alert_defaults(self):
        """Alerts start active with an id."""
        alert = PriceAlert(ingredient="leite", target_price=4.0)
        assert isinstance(alert.id, UUID)
        assert alert.is_active is True
        assert alert.current_price == 0.0
        assert alert.triggered_at is None

    def test_alert_negative_target_rejected(self):
        """Target price cannot be negative."""
        with pytest.raises(ValidationError):
            PriceAlert(ingredient="leite", target_price=-1)

    def test_delivery_option_provider(self):
        """Provider is parsed from its string value."""
        option = DeliveryOption(provider="ifood", fee=3.5, estimated_time=40, min_order_value=30)
        assert option.provider == DeliveryProvider.IFOOD


class TestShoppingListEntry:
    """Tests for ShoppingListEntry model."""

    def test_failed_entry(self):
        """Entries without a comparison are not ok."""
        entry = ShoppingListEntry(ingredient="xyzzy", error="not found", error_code="PRODUCT_NOT_FOUND")
        assert entry.ok is False
