"""Synthetic product catalog across every registered store."""

import logging
import random
from datetime import datetime, timedelta
from urllib.parse import quote

from .config import CatalogConfig
from .models import BaseProduct, Product
from .pricing import round_money
from .registry import StoreRegistry

logger = logging.getLogger(__name__)


BASE_PRODUCTS: list[BaseProduct] = [
    # Laticínios
    BaseProduct(
        name="Leite Integral",
        brand="Parmalat",
        category="Laticínios",
        unit="1L",
        description="Leite integral UHT",
        barcode="7891234567890",
        base_price=4.99,
    ),
    BaseProduct(
        name="Manteiga",
        brand="Aviação",
        category="Laticínios",
        unit="200g",
        description="Manteiga com sal",
        barcode="7891234567901",
        base_price=8.99,
    ),
    BaseProduct(
        name="Queijo Mussarela",
        brand="Tirolez",
        category="Laticínios",
        unit="150g",
        description="Queijo mussarela fatiado",
        barcode="7891234567902",
        base_price=6.49,
    ),
    BaseProduct(
        name="Iogurte Natural",
        brand="Danone",
        category="Laticínios",
        unit="170g",
        description="Iogurte natural integral",
        barcode="7891234567903",
        base_price=3.99,
    ),
    BaseProduct(
        name="Requeijão",
        brand="Catupiry",
        category="Laticínios",
        unit="250g",
        description="Requeijão cremoso",
        barcode="7891234567904",
        base_price=7.49,
    ),
    # Grãos e cereais
    BaseProduct(
        name="Arroz Branco",
        brand="Tio João",
        category="Grãos",
        unit="1kg",
        description="Arroz branco tipo 1",
        barcode="7891234567891",
        base_price=5.49,
    ),
    BaseProduct(
        name="Feijão Preto",
        brand="Camil",
        category="Grãos",
        unit="1kg",
        description="Feijão preto tipo 1",
        barcode="7891234567892",
        base_price=6.99,
    ),
    BaseProduct(
        name="Feijão Carioca",
        brand="Camil",
        category="Grãos",
        unit="1kg",
        description="Feijão carioca tipo 1",
        barcode="7891234567905",
        base_price=6.49,
    ),
    BaseProduct(
        name="Macarrão Espaguete",
        brand="Barilla",
        category="Grãos",
        unit="500g",
        description="Macarrão espaguete semolina",
        barcode="7891234567906",
        base_price=4.99,
    ),
    BaseProduct(
        name="Aveia em Flocos",
        brand="Quaker",
        category="Grãos",
        unit="200g",
        description="Aveia em flocos finos",
        barcode="7891234567907",
        base_price=5.99,
    ),
    # Óleos
    BaseProduct(
        name="Óleo de Soja",
        brand="Liza",
        category="Óleos",
        unit="900ml",
        description="Óleo de soja refinado",
        barcode="7891234567893",
        base_price=4.49,
    ),
    BaseProduct(
        name="Azeite Extra Virgem",
        brand="Gallo",
        category="Óleos",
        unit="500ml",
        description="Azeite de oliva extra virgem",
        barcode="7891234567908",
        base_price=12.99,
    ),
    # Açúcares
    BaseProduct(
        name="Açúcar Cristal",
        brand="União",
        category="Açúcares",
        unit="1kg",
        description="Açúcar cristal especial",
        barcode="7891234567894",
        base_price=3.99,
    ),
    BaseProduct(
        name="Açúcar Refinado",
        brand="União",
        category="Açúcares",
        unit="1kg",
        description="Açúcar refinado especial",
        barcode="7891234567909",
        base_price=4.29,
    ),
    BaseProduct(
        name="Mel",
        brand="Karo",
        category="Açúcares",
        unit="280g",
        description="Mel de abelhas puro",
        barcode="7891234567910",
        base_price=9.99,
    ),
    # Farinhas
    BaseProduct(
        name="Farinha de Trigo",
        brand="Dona Benta",
        category="Farinhas",
        unit="1kg",
        description="Farinha de trigo especial",
        barcode="7891234567895",
        base_price=4.29,
    ),
    BaseProduct(
        name="Farinha de Mandioca",
        brand="Yoki",
        category="Farinhas",
        unit="500g",
        description="Farinha de mandioca amarela",
        barcode="7891234567911",
        base_price=3.99,
    ),
    # Ovos
    BaseProduct(
        name="Ovos",
        brand="Granja Mantiqueira",
        category="Ovos",
        unit="12 unidades",
        description="Ovos brancos grandes",
        barcode="7891234567896",
        base_price=8.99,
    ),
    # Carnes
    BaseProduct(
        name="Carne Moída",
        brand="Friboi",
        category="Carnes",
        unit="1kg",
        description="Carne bovina moída primeira",
        barcode="7891234567897",
        base_price=18.99,
    ),
    BaseProduct(
        name="Frango Inteiro",
        brand="Sadia",
        category="Carnes",
        unit="1kg",
        description="Frango inteiro congelado",
        barcode="7891234567898",
        base_price=12.99,
    ),
    BaseProduct(
        name="Peito de Frango",
        brand="Sadia",
        category="Carnes",
        unit="1kg",
        description="Peito de frango sem osso",
        barcode="7891234567912",
        base_price=16.99,
    ),
    BaseProduct(
        name="Linguiça Calabresa",
        brand="Perdigão",
        category="Carnes",
        unit="500g",
        description="Linguiça calabresa defumada",
        barcode="7891234567913",
        base_price=9.99,
    ),
    BaseProduct(
        name="Presunto Fatiado",
        brand="Sadia",
        category="Carnes",
        unit="200g",
        description="Presunto cozido fatiado",
        barcode="7891234567914",
        base_price=8.49,
    ),
    # Hortifruti
    BaseProduct(
        name="Tomate",
        brand="Hortifruti",
        category="Hortifruti",
        unit="1kg",
        description="Tomate salada",
        barcode="7891234567899",
        base_price=7.99,
    ),
    BaseProduct(
        name="Cebola",
        brand="Hortifruti",
        category="Hortifruti",
        unit="1kg",
        description="Cebola amarela",
        barcode="7891234567915",
        base_price=4.99,
    ),
    BaseProduct(
        name="Alho",
        brand="Hortifruti",
        category="Hortifruti",
        unit="100g",
        description="Alho roxo",
        barcode="7891234567916",
        base_price=12.99,
    ),
    BaseProduct(
        name="Batata",
        brand="Hortifruti",
        category="Hortifruti",
        unit="1kg",
        description="Batata inglesa",
        barcode="7891234567917",
        base_price=3.99,
    ),
    BaseProduct(
        name="Cenoura",
        brand="Hortifruti",
        category="Hortifruti",
        unit="1kg",
        description="Cenoura nacional",
        barcode="7891234567918",
        base_price=4.49,
    ),
    BaseProduct(
        name="Banana",
        brand="Hortifruti",
        category="Hortifruti",
        unit="1kg",
        description="Banana prata",
        barcode="7891234567919",
        base_price=5.99,
    ),
    BaseProduct(
        name="Maçã",
        brand="Hortifruti",
        category="Hortifruti",
        unit="1kg",
        description="Maçã gala",
        barcode="7891234567920",
        base_price=7.99,
    ),
    BaseProduct(
        name="Limão",
        brand="Hortifruti",
        category="Hortifruti",
        unit="1kg",
        description="Limão tahiti",
        barcode="7891234567921",
        base_price=6.99,
    ),
    # Temperos
    BaseProduct(
        name="Sal Refinado",
        brand="Cisne",
        category="Temperos",
        unit="1kg",
        description="Sal refinado iodado",
        barcode="7891234567922",
        base_price=2.99,
    ),
    BaseProduct(
        name="Pimenta do Reino",
        brand="Kitano",
        category="Temperos",
        unit="30g",
        description="Pimenta do reino moída",
        barcode="7891234567923",
        base_price=4.99,
    ),
    BaseProduct(
        name="Orégano",
        brand="Kitano",
        category="Temperos",
        unit="10g",
        description="Orégano desidratado",
        barcode="7891234567924",
        base_price=3.49,
    ),
    BaseProduct(
        name="Vinagre",
        brand="Castelo",
        category="Temperos",
        unit="750ml",
        description="Vinagre de álcool",
        barcode="7891234567925",
        base_price=2.99,
    ),
    # Bebidas
    BaseProduct(
        name="Água Mineral",
        brand="Crystal",
        category="Bebidas",
        unit="1,5L",
        description="Água mineral sem gás",
        barcode="7891234567926",
        base_price=2.49,
    ),
    BaseProduct(
        name="Refrigerante Cola",
        brand="Coca-Cola",
        category="Bebidas",
        unit="2L",
        description="Refrigerante cola",
        barcode="7891234567927",
        base_price=6.99,
    ),
    BaseProduct(
        name="Suco de Laranja",
        brand="Del Valle",
        category="Bebidas",
        unit="1L",
        description="Suco de laranja integral",
        barcode="7891234567928",
        base_price=8.99,
    ),
    BaseProduct(
        name="Café em Pó",
        brand="Pilão",
        category="Bebidas",
        unit="500g",
        description="Café torrado e moído",
        barcode="7891234567929",
        base_price=12.99,
    ),
    # Padaria e congelados
    BaseProduct(
        name="Pão de Açúcar",
        brand="Wickbold",
        category="Padaria",
        unit="500g",
        description="Pão de forma integral",
        barcode="7891234567930",
        base_price=4.99,
    ),
    BaseProduct(
        name="Pizza Congelada",
        brand="Sadia",
        category="Congelados",
        unit="460g",
        description="Pizza margherita congelada",
        barcode="7891234567931",
        base_price=15.99,
    ),
]

_IMAGE_URL = "https://via.placeholder.com/150x150/64748b/ffffff?text={}"


class Catalog:
    """Point-in-time snapshot of every product at every store."""

    def __init__(self, products: list[Product]):
        self._products = list(products)

    @classmethod
    def build(
        cls,
        registry: StoreRegistry,
        rng: random.Random,
        config: CatalogConfig | None = None,
        base_products: list[BaseProduct] | None = None,
        now: datetime | None = None,
    ) -> "Catalog":
        """Price every base product at every store.

        Args:
            registry: Stores to price products for, in catalog order
            rng: Random source for promotion and availability draws
            config: Promotion and availability probabilities
            base_products: Products to sell. Defaults to BASE_PRODUCTS.
            now: Reference time for promotion end dates, truncated to the second

        Returns:
            A Catalog with one product per (base product, store) pair
        """
        config = config or CatalogConfig()
        base_products = BASE_PRODUCTS if base_products is None else base_products
        now = (now or datetime.now()).replace(microsecond=0)
        promotion_end = now + timedelta(days=config.promotion_days)

        products: list[Product] = []
        for store in registry.stores:
            for index, base in enumerate(base_products):
                price = round_money(base.base_price * store.price_multiplier)
                original_price = None
                discount = None
                end_date = None

                if rng.random() < config.promotion_probability:
                    original_price = price
                    discount = round_money(price * config.promotion_discount)
                    price = round_money(price - discount)
                    end_date = promotion_end

                available = rng.random() >= config.unavailable_probability

                products.append(
                    Product(
                        id=f"{store.id}-{index}",
                        name=base.name,
                        brand=base.brand,
                        category=base.category,
                        unit=base.unit,
                        price=price,
                        original_price=original_price,
                        discount=discount,
                        availability=available,
                        store=store,
                        description=base.description,
                        barcode=base.barcode,
                        promotion_end_date=end_date,
                        image_url=_IMAGE_URL.format(quote(base.name)),
                    )
                )

        promotions = sum(1 for p in products if p.on_promotion)
        logger.info(
            "Built catalog with %d products across %d stores (%d on promotion)",
            len(products),
            len(registry.stores),
            promotions,
        )
        return cls(products)

    @property
    def products(self) -> list[Product]:
        """All products in catalog order."""
        return list(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self):
        return iter(self._products)

    def find(self, name: str, store_id: str) -> Product | None:
        """Get the product with an exact name at a store."""
        for product in self._products:
            if product.name == name and product.store.id == store_id:
                return product
        return None

    def for_store(self, store_id: str) -> list[Product]:
        """All products sold by a store."""
        return [p for p in self._products if p.store.id == store_id]

    def active_promotions(self, store_id: str | None = None) -> list[Product]:
        """Discounted products, largest discount first."""
        promotions = [p for p in self._products if p.discount and p.discount > 0]
        if store_id is not None:
            promotions = [p for p in promotions if p.store.id == store_id]
        return sorted(promotions, key=lambda p: p.discount or 0, reverse=True)


