# snackbar/models/product.py

"""Canonical food product record shared by every catalog component."""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any

UNNAMED_PRODUCT = "Unnamed product"

# Ordered best to worst
NUTRITION_SCORES: tuple[str, ...] = ("A", "B", "C", "D", "E")

# Rank given to products the catalog has not graded
UNGRADED_RANK = 3


def nutrition_rank(score: str | None) -> int:
    """Map a nutrition score to its sort rank (A=0 … E=4, absent=3)."""
    if score is None or score not in NUTRITION_SCORES:
        return UNGRADED_RANK
    return NUTRITION_SCORES.index(score)


@dataclass(frozen=True)
class Product:
    """A single product as exposed by the catalog layer.

    Instances are never mutated after mapping; ``nutrient_facts`` is a
    read-only view of the raw catalog values, parsed only at presentation
    time, and is left out of the hash.
    """

    code: str
    name: str = UNNAMED_PRODUCT
    brand_text: str = ""
    image_url: str | None = None
    image_thumb_url: str | None = None
    nutrition_score: str | None = None
    quantity: str | None = None
    categories: tuple[str, ...] = ()
    nutrient_facts: Mapping[str, str | float | int] = field(
        default_factory=dict, hash=False
    )
    ingredients_text: str | None = None
    allergens_text: str | None = None
    origins_text: str | None = None
    countries: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Read-only view over a private copy of the given mapping
        facts = MappingProxyType(dict(self.nutrient_facts))
        object.__setattr__(self, "nutrient_facts", facts)

    @property
    def has_allergens(self) -> bool:
        """True when the catalog lists at least one allergen."""
        return bool(self.allergens_text and self.allergens_text.strip())

    def to_dict(self) -> dict[str, Any]:
        """Serialise to plain JSON-ready types."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["categories"] = list(self.categories)
        data["countries"] = list(self.countries)
        data["nutrient_facts"] = dict(self.nutrient_facts)
        return data
