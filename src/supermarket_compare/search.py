"""Free-text ingredient resolution against the catalog."""

import logging
from collections.abc import Iterable

from .models import Product

logger = logging.getLogger(__name__)

# Canonical key -> surface forms. Groups are tried in declaration order.
SYNONYMS: dict[str, list[str]] = {
    "manteiga": ["manteiga", "butter"],
    "leite": ["leite", "milk"],
    "queijo": ["queijo", "mussarela", "prato", "cheese"],
    "arroz": ["arroz", "rice"],
    "feijao": ["feijão", "feijao", "bean"],
    "oleo": ["óleo", "oleo", "oil"],
    "azeite": ["azeite", "oliva", "olive"],
    "acucar": ["açúcar", "acucar", "sugar"],
    "farinha": ["farinha", "flour"],
    "ovo": ["ovo", "ovos", "egg"],
    "carne": ["carne", "beef", "boi"],
    "frango": ["frango", "chicken", "galinha"],
    "tomate": ["tomate", "tomato"],
    "cebola": ["cebola", "onion"],
    "alho": ["alho", "garlic"],
    "batata": ["batata", "potato"],
    "cenoura": ["cenoura", "carrot"],
    "banana": ["banana"],
    "maca": ["maçã", "maca", "apple"],
    "limao": ["limão", "limao", "lemon"],
    "sal": ["sal", "salt"],
    "pimenta": ["pimenta", "pepper"],
    "oregano": ["orégano", "oregano"],
    "vinagre": ["vinagre", "vinegar"],
    "agua": ["água", "agua", "water"],
    "refrigerante": ["refrigerante", "coca", "pepsi", "soda"],
    "suco": ["suco", "juice"],
    "cafe": ["café", "cafe", "coffee"],
    "pao": ["pão", "pao", "bread"],
    "pizza": ["pizza"],
}

SEARCH_HINT = "leite, manteiga, arroz, feijão, carne, frango, tomate"

MIN_LOOSE_WORD_LENGTH = 3


class ProductNotFoundError(Exception):
    """Raised when no resolver tier matches a query."""

    def __init__(self, query: str, hint: str = SEARCH_HINT):
        self.query = query
        self.hint = hint
        super().__init__(f"Product '{query}' not found. Try terms like: {hint}")


class InvalidQueryError(Exception):
    """Raised for an empty or whitespace-only query."""

    def __init__(self, query: str):
        self.query = query
        super().__init__("Search query must not be empty")


def normalize_query(query: str) -> str:
    """Lowercase a query and collapse whitespace."""
    return " ".join(query.lower().split())


def _contains(field: str | None, term: str) -> bool:
    return field is not None and term in field.lower()


class SearchResolver:
    """Resolves a free-text query with exact, synonym and loose-word tiers."""

    def __init__(
        self,
        products: Iterable[Product],
        synonyms: dict[str, list[str]] | None = None,
    ):
        """Initialize resolver.

        Args:
            products: Searchable products, in catalog order
            synonyms: Synonym groups. Defaults to SYNONYMS.
        """
        self.products = list(products)
        self.synonyms = SYNONYMS if synonyms is None else synonyms

    def resolve(self, query: str) -> list[Product]:
        """Find catalog products matching a query.

        Args:
            query: Free-text ingredient name

        Returns:
            Matching products in catalog order

        Raises:
            InvalidQueryError: If query is blank
            ProductNotFoundError: If no tier yields a match
        """
        term = normalize_query(query)
        if not term:
            raise InvalidQueryError(query)

        for tier, matcher in (
            ("exact", self.match_exact),
            ("synonym", self.match_synonyms),
            ("loose", self.match_loose),
        ):
            matches = matcher(term)
            if matches:
                logger.debug("Resolved %r with %s tier: %d products", query, tier, len(matches))
                return matches

        logger.info("No products match %r", query)
        raise ProductNotFoundError(query)

    def match_exact(self, term: str) -> list[Product]:
        """Substring match against name, description or brand."""
        return [
            p
            for p in self.products
            if _contains(p.name, term) or _contains(p.description, term) or _contains(p.brand, term)
        ]

    def match_synonyms(self, term: str) -> list[Product]:
        """Expand the query through the first applicable synonym group."""
        for terms in self.synonyms.values():
            if not any(form in term or term in form for form in terms):
                continue
            matches = [
                p
                for p in self.products
                if any(_contains(p.name, form) or _contains(p.description, form) for form in terms)
            ]
            if matches:
                return matches
        return []

    def match_loose(self, term: str) -> list[Product]:
        """Match any word of the query against name, description or category."""
        words = [w for w in term.split(" ") if len(w) >= MIN_LOOSE_WORD_LENGTH]
        if not words:
            return []
        return [
            p
            for p in self.products
            if any(
                _contains(p.name, w) or _contains(p.description, w) or _contains(p.category, w)
                for w in words
            )
        ]
