"""Shared test fixtures for Supermarket Compare."""

from datetime import date, datetime

import pytest

from supermarket_compare.config import ConfigManager
from supermarket_compare.engine import PriceComparisonEngine
from supermarket_compare.models import Product, Store
from supermarket_compare.registry import StoreRegistry

NOW = datetime(2026, 1, 15, 12, 0)
TODAY = date(2026, 1, 15)


@pytest.fixture
def default_config(tmp_path):
    """ConfigManager pointing at a missing file, so defaults apply."""
    return ConfigManager(config_path=tmp_path / "nonexistent.toml")


@pytest.fixture
def registry():
    """The built-in store registry."""
    return StoreRegistry()


@pytest.fixture
def engine(default_config):
    """A seeded engine with a fixed clock."""
    return PriceComparisonEngine(config=default_config, seed=1234, now=NOW, today=TODAY)


@pytest.fixture
def make_store():
    """Factory for ad-hoc stores."""

    def _make(store_id: str = "test-store", **kwargs) -> Store:
        fields = {
            "name": store_id.replace("-", " ").title(),
            "chain_id": "extra",
            "distance": 1.0,
            "delivery_available": True,
            "delivery_fee": 5.0,
            "min_order_value": 30.0,
            "estimated_delivery_time": 45,
            "rating": 4.0,
        }
        fields.update(kwargs)
        return Store(id=store_id, **fields)

    return _make


@pytest.fixture
def make_product(make_store):
    """Factory for ad-hoc products."""
    counter = iter(range(10_000))

    def _make(name: str = "Leite Integral", price: float = 4.99, store: Store | None = None, **kwargs) -> Product:
        store = store or make_store()
        fields = {
            "brand": "Parmalat",
            "category": "Laticínios",
            "unit": "1L",
            "description": "Leite integral UHT",
        }
        fields.update(kwargs)
        return Product(
            id=f"{store.id}-{next(counter)}",
            name=name,
            price=price,
            store=store,
            **fields,
        )

    return _make
