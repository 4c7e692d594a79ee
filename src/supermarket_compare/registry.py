"""Supermarket chain and store reference data."""

from .models import Chain, Location, Store

_LOGO_BASE = "https://logoeps.com/wp-content/uploads/2013/03"

DEFAULT_CHAINS: list[Chain] = [
    Chain(
        id="pao-de-acucar",
        name="pao_de_acucar",
        display_name="Pão de Açúcar",
        color="#00A859",
        logo_url=f"{_LOGO_BASE}/pao-de-acucar-vector-logo.png",
        has_delivery=True,
        supported_regions=["SP", "RJ", "MG", "PR", "SC", "RS", "GO", "DF", "BA", "PE"],
    ),
    Chain(
        id="extra",
        name="extra",
        display_name="Extra",
        color="#FF6B35",
        logo_url=f"{_LOGO_BASE}/extra-vector-logo.png",
        has_delivery=True,
        supported_regions=["SP", "RJ", "MG", "PR", "SC", "RS", "GO", "DF", "BA", "PE", "CE"],
    ),
    Chain(
        id="carrefour",
        name="carrefour",
        display_name="Carrefour",
        color="#0066CC",
        logo_url=f"{_LOGO_BASE}/carrefour-vector-logo.png",
        has_delivery=True,
        supported_regions=[
            "SP", "RJ", "MG", "PR", "SC", "RS", "GO", "DF", "BA", "PE", "CE", "MA",
        ],
    ),
    Chain(
        id="big",
        name="big",
        display_name="Big",
        color="#FFD700",
        logo_url=f"{_LOGO_BASE}/big-vector-logo.png",
        has_delivery=True,
        supported_regions=["SP", "RJ", "MG", "PR", "PE", "CE", "BA", "GO"],
    ),
    Chain(
        id="sendas",
        name="sendas",
        display_name="Sendas",
        color="#E31837",
        logo_url=f"{_LOGO_BASE}/sendas-vector-logo.png",
        has_delivery=True,
        supported_regions=["RJ", "ES"],
    ),
    Chain(
        id="atacadao",
        name="atacadao",
        display_name="Atacadão",
        color="#FF0000",
        logo_url=f"{_LOGO_BASE}/atacadao-vector-logo.png",
        has_delivery=False,
        supported_regions=[
            "SP", "RJ", "MG", "PR", "SC", "RS", "GO", "DF", "BA", "PE", "CE", "MA", "PA",
        ],
    ),
]

# Order matters: the catalog assigns product ids by store.
DEFAULT_STORES: list[Store] = [
    Store(
        id="pda-jardins",
        name="Pão de Açúcar Jardins",
        chain_id="pao-de-acucar",
        address="Rua Augusta, 2690 - Jardins, São Paulo - SP",
        distance=1.2,
        delivery_available=True,
        delivery_fee=4.99,
        min_order_value=50.00,
        estimated_delivery_time=45,
        rating=4.5,
        price_multiplier=1.2,
    ),
    Store(
        id="extra-paulista",
        name="Extra Hiper Paulista",
        chain_id="extra",
        address="Av. Paulista, 2073 - Bela Vista, São Paulo - SP",
        distance=2.1,
        delivery_available=True,
        delivery_fee=3.99,
        min_order_value=40.00,
        estimated_delivery_time=60,
        rating=4.2,
        price_multiplier=1.0,
    ),
    Store(
        id="carrefour-morumbi",
        name="Carrefour Morumbi",
        chain_id="carrefour",
        address="Av. Roque Petroni Jr., 1089 - Morumbi, São Paulo - SP",
        distance=3.5,
        delivery_available=True,
        delivery_fee=5.99,
        min_order_value=60.00,
        estimated_delivery_time=90,
        rating=4.0,
        price_multiplier=0.95,
    ),
    Store(
        id="big-ibirapuera",
        name="Big Ibirapuera",
        chain_id="big",
        address="Av. Ibirapuera, 3103 - Ibirapuera, São Paulo - SP",
        distance=2.8,
        delivery_available=True,
        delivery_fee=4.49,
        min_order_value=45.00,
        estimated_delivery_time=75,
        rating=4.3,
        price_multiplier=0.9,
    ),
]


class StoreNotFoundError(Exception):
    """Raised when a store id is not in the registry."""

    def __init__(self, store_id: str):
        self.store_id = store_id
        super().__init__(f"Store with ID '{store_id}' not found")


class StoreRegistry:
    """Read-only lookup over chains and stores."""

    def __init__(
        self,
        chains: list[Chain] | None = None,
        stores: list[Store] | None = None,
    ):
        """Initialize registry.

        Args:
            chains: Chains to register. Defaults to DEFAULT_CHAINS.
            stores: Stores to register, in catalog order. Defaults to DEFAULT_STORES.
        """
        self._chains = list(DEFAULT_CHAINS if chains is None else chains)
        self._stores = list(DEFAULT_STORES if stores is None else stores)
        self._stores_by_id = {store.id: store for store in self._stores}
        self._chains_by_id = {chain.id: chain for chain in self._chains}

    @property
    def chains(self) -> list[Chain]:
        """All chains, in declaration order."""
        return list(self._chains)

    @property
    def stores(self) -> list[Store]:
        """All stores, in declaration order."""
        return list(self._stores)

    def get_store(self, store_id: str) -> Store:
        """Get a store by id.

        Raises:
            StoreNotFoundError: If the id is unknown
        """
        store = self._stores_by_id.get(store_id)
        if store is None:
            raise StoreNotFoundError(store_id)
        return store

    def find_store(self, store_id: str) -> Store | None:
        """Get a store by id, or None."""
        return self._stores_by_id.get(store_id)

    def get_chain(self, chain_id: str) -> Chain | None:
        """Get a chain by id, or None."""
        return self._chains_by_id.get(chain_id)

    def chain_for(self, store: Store) -> Chain | None:
        """Get the chain a store belongs to."""
        return self._chains_by_id.get(store.chain_id)

    def nearby_stores(self, location: Location | None = None, radius_km: float = 10.0) -> list[Store]:
        """Stores within radius_km of the user.

        Distances are precomputed from the user's position and location is
        currently unused. A store without a distance
        counts as 0 km away.
        """
        return [store for store in self._stores if (store.distance or 0) <= radius_km]
