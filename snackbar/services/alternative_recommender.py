# snackbar/services/alternative_recommender.py

"""Allergen-friendly alternative suggestions for a product."""

import logging
import re

from snackbar.config.settings import Settings
from snackbar.filters.alternative_ranker import AlternativeRanker
from snackbar.models.product import Product
from snackbar.services.catalog_query_engine import CatalogQueryEngine

logger = logging.getLogger("snackbar.recommender")

_LOCALE_PREFIX_RE = re.compile(r"^[a-z]{2}:")


class AlternativeRecommender:
    """Find healthier, allergen-free products similar to a given one."""

    def __init__(self, engine: CatalogQueryEngine | None = None) -> None:
        self.settings = Settings()
        self.engine = engine if engine is not None else CatalogQueryEngine()

    @staticmethod
    def derive_search_term(product: Product) -> str:
        """Pick the most specific term that describes *product*.

        Order: first category (locale prefix stripped) longer than three
        characters, the first three words of the name, the brand, and
        finally a generic term.
        """
        for category in product.categories:
            stripped = _LOCALE_PREFIX_RE.sub("", category)
            if len(stripped) > 3:
                return stripped

        name_chunk = " ".join(product.name.split()[:3])
        if name_chunk:
            return name_chunk
        if product.brand_text.strip():
            return product.brand_text
        return Settings.ALTERNATIVES_FALLBACK_TERM

    async def recommend(
        self,
        product: Product,
        limit: int | None = None,
    ) -> list[Product]:
        """Return up to *limit* ranked alternatives, never *product* itself."""
        count = limit if limit is not None else (
            self.settings.ALTERNATIVES_DEFAULT_LIMIT
        )
        term = self.derive_search_term(product)
        candidates = await self.engine.search(
            term, self.settings.ALTERNATIVES_POOL_SIZE
        )
        ranked = AlternativeRanker.rank(candidates, product, count)
        logger.info(
            "Alternatives for %s via '%s': %d of %d candidates",
            product.code,
            term,
            len(ranked),
            len(candidates),
        )
        return ranked
