# snackbar/filters/alternative_ranker.py

"""Filtering and ranking policy for alternative product candidates."""

import logging

from snackbar.models.product import Product, nutrition_rank

logger = logging.getLogger("snackbar.filters")


class AlternativeRanker:
    """Order candidate alternatives for a source product."""

    @staticmethod
    def exclude_source(
        candidates: list[Product],
        source: Product,
    ) -> list[Product]:
        """Drop every candidate that is the source product itself."""
        return [p for p in candidates if p.code != source.code]

    @staticmethod
    def prefer_same_country(
        candidates: list[Product],
        source: Product,
    ) -> list[Product]:
        """Keep candidates sold in a country of *source*, if any exist.

        Country tags compare case-insensitively.  When no candidate
        shares a country the full list is returned unchanged.
        """
        countries = {c.lower() for c in source.countries}
        matched = [
            p
            for p in candidates
            if any(c.lower() in countries for c in p.countries)
        ]
        if matched:
            logger.debug(
                "%d of %d candidates share a country with %s",
                len(matched),
                len(candidates),
                source.code,
            )
            return matched
        return candidates

    @staticmethod
    def allergen_friendly_first(
        candidates: list[Product],
    ) -> list[Product]:
        """Stable partition: products without listed allergens lead."""
        friendly = [p for p in candidates if not p.has_allergens]
        listed = [p for p in candidates if p.has_allergens]
        return friendly + listed

    @staticmethod
    def sort_by_nutrition(candidates: list[Product]) -> list[Product]:
        """Stable sort by nutrition score, best grade first."""
        return sorted(
            candidates,
            key=lambda p: nutrition_rank(p.nutrition_score),
        )

    @staticmethod
    def rank(
        candidates: list[Product],
        source: Product,
        limit: int,
    ) -> list[Product]:
        """Apply the whole policy and return at most *limit* products."""
        pool = AlternativeRanker.exclude_source(candidates, source)
        pool = AlternativeRanker.prefer_same_country(pool, source)
        pool = AlternativeRanker.allergen_friendly_first(pool)
        pool = AlternativeRanker.sort_by_nutrition(pool)
        return pool[: max(limit, 0)]
