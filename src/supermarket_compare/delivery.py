"""Delivery options for a store."""

import random

from .config import DeliveryConfig
from .models import DeliveryOption, DeliveryProvider, Store
from .pricing import round_money

THIRD_PARTY_PROVIDERS = [
    DeliveryProvider.IFOOD,
    DeliveryProvider.RAPPI,
    DeliveryProvider.UBER_EATS,
]

DEFAULT_DELIVERY_MINUTES = 60


def native_option(store: Store) -> DeliveryOption | None:
    """The store's own delivery service, if it has one."""
    if not store.delivery_available:
        return None
    return DeliveryOption(
        provider=DeliveryProvider.NATIVE,
        available=True,
        fee=store.delivery_fee or 0.0,
        estimated_time=store.estimated_delivery_time or DEFAULT_DELIVERY_MINUTES,
        min_order_value=store.min_order_value or 0.0,
    )


def delivery_options(
    store: Store,
    rng: random.Random,
    config: DeliveryConfig | None = None,
) -> list[DeliveryOption]:
    """Native delivery plus simulated delivery-app offers.

    Each app is offered independently with third_party_probability, with a
    fee of 2-7, a delivery time of 30-59 minutes and a minimum order of 25-44.
    """
    config = config or DeliveryConfig()
    options: list[DeliveryOption] = []

    native = native_option(store)
    if native is not None:
        options.append(native)

    for provider in THIRD_PARTY_PROVIDERS:
        if rng.random() >= config.third_party_probability:
            continue
        options.append(
            DeliveryOption(
                provider=provider,
                available=True,
                fee=round_money(rng.uniform(2, 7)),
                estimated_time=rng.randint(30, 59),
                min_order_value=float(rng.randint(25, 44)),
            )
        )

    return options
