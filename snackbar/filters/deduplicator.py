# snackbar/filters/deduplicator.py

"""Merge per-token search batches into one de-duplicated list."""

import logging

from snackbar.models.product import Product

logger = logging.getLogger("snackbar.filters")


class ProductDeduplicator:
    """Remove duplicate products by catalog code."""

    @staticmethod
    def merge_by_code(
        batches: list[list[Product]],
    ) -> tuple[list[Product], int]:
        """Concatenate *batches* keeping the first product seen per code.

        Batches are walked left to right and each batch in its own order,
        so the earliest token decides which variant of a near-duplicate
        record (image, name) survives.

        Returns the merged list and the count of removed duplicates.
        """
        seen_codes: set[str] = set()
        kept: list[Product] = []
        removed = 0

        for batch in batches:
            for product in batch:
                if product.code in seen_codes:
                    removed += 1
                    continue
                seen_codes.add(product.code)
                kept.append(product)

        if removed:
            logger.info(
                "Deduplication removed %d duplicate products",
                removed,
            )

        return kept, removed
