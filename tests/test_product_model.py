# tests/test_product_model.py

"""Tests for the Product dataclass and nutrition ranking."""

import dataclasses
import unittest

from snackbar.models.product import (
    UNGRADED_RANK,
    UNNAMED_PRODUCT,
    Product,
    nutrition_rank,
)


class TestProductModel(unittest.TestCase):
    """Product dataclass unit tests."""

    def test_defaults(self) -> None:
        """Optional fields default to empty or absent values."""
        product = Product(code="6411401015090")
        self.assertEqual(product.name, UNNAMED_PRODUCT)
        self.assertEqual(product.brand_text, "")
        self.assertIsNone(product.image_url)
        self.assertIsNone(product.image_thumb_url)
        self.assertIsNone(product.nutrition_score)
        self.assertEqual(product.categories, ())
        self.assertEqual(product.countries, ())
        self.assertEqual(product.nutrient_facts, {})

    def test_is_immutable(self) -> None:
        """Products cannot be mutated after construction."""
        product = Product(code="1")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            product.name = "Changed"  # type: ignore[misc]

    def test_equality(self) -> None:
        """Two products with identical fields are equal."""
        a = Product(code="1", name="Kaurahiutale")
        b = Product(code="1", name="Kaurahiutale")
        self.assertEqual(a, b)

    def test_has_allergens(self) -> None:
        """Blank or absent allergen text counts as allergen-free."""
        self.assertFalse(Product(code="1").has_allergens)
        self.assertFalse(
            Product(code="1", allergens_text="   ").has_allergens
        )
        self.assertTrue(
            Product(code="1", allergens_text="en:milk").has_allergens
        )

    def test_to_dict_uses_plain_types(self) -> None:
        """to_dict converts tuples to lists for JSON output."""
        product = Product(
            code="1",
            categories=("fi:keitot",),
            countries=("en:finland",),
            nutrient_facts={"sugars_100g": 2.5},
        )
        data = product.to_dict()
        self.assertEqual(data["categories"], ["fi:keitot"])
        self.assertEqual(data["countries"], ["en:finland"])
        self.assertEqual(data["nutrient_facts"], {"sugars_100g": 2.5})
        self.assertEqual(data["code"], "1")
        self.assertIs(type(data["nutrient_facts"]), dict)

    def test_hashable(self) -> None:
        """Products can be hashed and used in sets."""
        a = Product(code="1", nutrient_facts={"fat_100g": 1.0})
        b = Product(code="1", nutrient_facts={"fat_100g": 1.0})
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b}), 1)

    def test_nutrient_facts_read_only(self) -> None:
        """Nutrient facts reject item assignment."""
        product = Product(code="1", nutrient_facts={"fat_100g": 1.0})
        with self.assertRaises(TypeError):
            product.nutrient_facts["fat_100g"] = 2.0  # type: ignore[index]

    def test_nutrient_facts_detached_from_input(self) -> None:
        """Changing the dict a product was built from leaves it intact."""
        facts: dict[str, str | float | int] = {"fat_100g": 1.0}
        product = Product(code="1", nutrient_facts=facts)
        facts["fat_100g"] = 99.0
        self.assertEqual(product.nutrient_facts["fat_100g"], 1.0)


class TestNutritionRank(unittest.TestCase):
    """nutrition_rank ordering."""

    def test_grades_in_order(self) -> None:
        """A is best (0) and E is worst (4)."""
        ranks = [nutrition_rank(s) for s in ("A", "B", "C", "D", "E")]
        self.assertEqual(ranks, [0, 1, 2, 3, 4])

    def test_absent_ranks_as_d(self) -> None:
        """An ungraded product ranks between C and E."""
        self.assertEqual(nutrition_rank(None), UNGRADED_RANK)
        self.assertEqual(UNGRADED_RANK, 3)

    def test_unknown_letter_ranks_as_absent(self) -> None:
        """A letter outside A-E is treated as ungraded."""
        self.assertEqual(nutrition_rank("Z"), UNGRADED_RANK)


if __name__ == "__main__":
    unittest.main()
