# tests/test_alternative_ranker.py

"""Tests for the alternative ranking policy."""

import unittest

from snackbar.filters.alternative_ranker import AlternativeRanker
from snackbar.models.product import Product

SOURCE = Product(code="source", countries=("en:finland",))


def _c(
    code: str,
    score: str | None = None,
    allergens: str | None = None,
    countries: tuple[str, ...] = ("en:finland",),
) -> Product:
    """Create a candidate product."""
    return Product(
        code=code,
        nutrition_score=score,
        allergens_text=allergens,
        countries=countries,
    )


class TestExcludeSource(unittest.TestCase):
    """AlternativeRanker.exclude_source."""

    def test_source_removed(self) -> None:
        """The product itself never appears among its alternatives."""
        pool = [_c("a"), _c("source"), _c("b")]
        result = AlternativeRanker.exclude_source(pool, SOURCE)
        self.assertEqual([p.code for p in result], ["a", "b"])


class TestPreferSameCountry(unittest.TestCase):
    """AlternativeRanker.prefer_same_country."""

    def test_matching_subset_preferred(self) -> None:
        """Only country matches survive when at least one exists."""
        pool = [
            _c("fr", countries=("en:france",)),
            _c("fi", countries=("en:finland",)),
        ]
        result = AlternativeRanker.prefer_same_country(pool, SOURCE)
        self.assertEqual([p.code for p in result], ["fi"])

    def test_case_insensitive(self) -> None:
        """Country tags compare without regard to case."""
        pool = [_c("fi", countries=("EN:Finland",))]
        result = AlternativeRanker.prefer_same_country(pool, SOURCE)
        self.assertEqual(len(result), 1)

    def test_no_match_keeps_all(self) -> None:
        """Without any country match the whole pool is used."""
        pool = [
            _c("fr", countries=("en:france",)),
            _c("se", countries=()),
        ]
        result = AlternativeRanker.prefer_same_country(pool, SOURCE)
        self.assertEqual([p.code for p in result], ["fr", "se"])


class TestOrdering(unittest.TestCase):
    """Allergen partition and nutrition sort."""

    def test_allergen_free_first_stable(self) -> None:
        """Allergen-free products lead, relative order preserved."""
        pool = [
            _c("x", allergens="en:milk"),
            _c("y"),
            _c("z", allergens="en:soybeans"),
            _c("w", allergens=""),
        ]
        result = AlternativeRanker.allergen_friendly_first(pool)
        self.assertEqual([p.code for p in result], ["y", "w", "x", "z"])

    def test_sort_by_nutrition(self) -> None:
        """Scores [E, A, C, B] order as [A, B, C, E]."""
        pool = [_c("e", "E"), _c("a", "A"), _c("c", "C"), _c("b", "B")]
        result = AlternativeRanker.sort_by_nutrition(pool)
        self.assertEqual(
            [p.nutrition_score for p in result], ["A", "B", "C", "E"]
        )

    def test_ungraded_sorts_with_d(self) -> None:
        """Missing scores rank after C and before E, stably beside D."""
        pool = [_c("e", "E"), _c("none"), _c("d", "D"), _c("c", "C")]
        result = AlternativeRanker.sort_by_nutrition(pool)
        self.assertEqual([p.code for p in result], ["c", "none", "d", "e"])

    def test_allergen_tiebreak_within_same_score(self) -> None:
        """Within one grade the allergen-free product comes first."""
        pool = [
            _c("listed", "B", allergens="en:gluten"),
            _c("free", "B"),
            _c("best", "A", allergens="en:milk"),
        ]
        result = AlternativeRanker.rank(pool, SOURCE, 4)
        self.assertEqual([p.code for p in result], ["best", "free", "listed"])


class TestRank(unittest.TestCase):
    """AlternativeRanker.rank end to end."""

    def test_limit_applied(self) -> None:
        """No more than *limit* products are returned."""
        pool = [_c(str(i), "A") for i in range(10)]
        self.assertEqual(len(AlternativeRanker.rank(pool, SOURCE, 4)), 4)

    def test_country_match_beats_better_score(self) -> None:
        """A worse-scored local product is kept over better foreign ones."""
        pool = [
            _c("fr-a", "A", countries=("en:france",)),
            _c("fi-e", "E", countries=("en:finland",)),
            _c("de-b", "B", countries=("en:germany",)),
        ]
        result = AlternativeRanker.rank(pool, SOURCE, 4)
        self.assertEqual([p.code for p in result], ["fi-e"])

    def test_empty_pool(self) -> None:
        """Zero candidates is valid output, not an error."""
        self.assertEqual(AlternativeRanker.rank([], SOURCE, 4), [])

    def test_only_source_in_pool(self) -> None:
        """A pool holding only the source yields nothing."""
        self.assertEqual(
            AlternativeRanker.rank([_c("source", "A")], SOURCE, 4), []
        )


if __name__ == "__main__":
    unittest.main()
