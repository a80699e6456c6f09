# snackbar/models/product_mapper.py

"""Translate raw Open Food Facts records into :class:`Product`."""

import logging
from typing import Any

from snackbar.models.product import (
    NUTRITION_SCORES,
    UNNAMED_PRODUCT,
    Product,
)

logger = logging.getLogger("snackbar.mapper")


def _text(raw: dict[str, Any], key: str) -> str | None:
    """Return a non-blank string field, or ``None``."""
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def _tags(raw: dict[str, Any], key: str) -> tuple[str, ...]:
    """Return the string items of a list field; anything else is empty."""
    value = raw.get(key)
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _secure_url(value: Any) -> str | None:
    """Upgrade scheme-relative and ``http://`` URLs to ``https://``."""
    if not isinstance(value, str):
        return None
    url = value.strip()
    if url.startswith("//"):
        url = f"https:{url}"
    elif url.lower().startswith("http://"):
        url = f"https://{url[7:]}"
    if not url.lower().startswith("https://") or len(url) <= 8:
        return None
    return url


def _nutrition_score(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    letter = value.strip().upper()
    return letter if letter in NUTRITION_SCORES else None


def _nutrient_facts(value: Any) -> dict[str, str | float | int]:
    """Keep string keys whose values are strings or real numbers."""
    if not isinstance(value, dict):
        return {}
    facts: dict[str, str | float | int] = {}
    for key, fact in value.items():
        if not isinstance(key, str) or isinstance(fact, bool):
            continue
        if isinstance(fact, (str, int, float)):
            facts[key] = fact
    return facts


class ProductMapper:
    """Pure, total mapping from catalog records to products."""

    @staticmethod
    def map(raw: dict[str, Any]) -> Product:
        """Map one raw record.  Malformed optional fields become defaults."""
        code_value = raw.get("code")
        code = (
            str(code_value).strip()
            if isinstance(code_value, (str, int))
            and not isinstance(code_value, bool)
            else ""
        )
        return Product(
            code=code,
            name=_text(raw, "product_name") or UNNAMED_PRODUCT,
            brand_text=_text(raw, "brands") or "",
            image_url=_secure_url(raw.get("image_url")),
            image_thumb_url=_secure_url(raw.get("image_small_url")),
            nutrition_score=_nutrition_score(raw.get("nutriscore_grade")),
            quantity=_text(raw, "quantity"),
            categories=_tags(raw, "categories_tags"),
            nutrient_facts=_nutrient_facts(raw.get("nutriments")),
            ingredients_text=_text(raw, "ingredients_text"),
            allergens_text=_text(raw, "allergens"),
            origins_text=_text(raw, "origins"),
            countries=_tags(raw, "countries_tags"),
        )

    @staticmethod
    def map_many(raw_records: Any) -> list[Product]:
        """Map a list of raw records, skipping entries that are not objects."""
        if not isinstance(raw_records, list):
            return []
        products: list[Product] = []
        for raw in raw_records:
            if not isinstance(raw, dict):
                logger.debug("Skipped non-object catalog record: %r", raw)
                continue
            products.append(ProductMapper.map(raw))
        return products
