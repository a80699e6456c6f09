# snackbar/filters/product_validator.py

"""Product validation: drop mapped records that have no identity."""

import logging

from snackbar.models.product import Product

logger = logging.getLogger("snackbar.filters")


class ProductValidator:
    """Validate products and drop those the catalog sent without a code."""

    @staticmethod
    def validate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop products with an empty/whitespace code.

        Returns the valid products and the count of dropped items.
        """
        valid: list[Product] = []
        dropped = 0

        for product in products:
            if not product.code.strip():
                logger.debug(
                    "Dropped product without code (name=%s)",
                    product.name,
                )
                dropped += 1
                continue
            valid.append(product)

        if dropped:
            logger.info(
                "Validation dropped %d invalid products",
                dropped,
            )

        return valid, dropped
