"""Tests for the deterministic compatibility scorer (profile table)."""
import itertools
import unittest

from core.config_loader import MatchingConfig, ProfileWeights
from core.matcher.models import (
    BuyerRequirement, ListingType, PropertyType, RequirementSource
)
from core.scorer.compatibility import CompatibilityScorer, score
from tests.mocks.matching_mocks import make_candidate


def profile_requirement(**kwargs) -> BuyerRequirement:
    return BuyerRequirement(source=RequirementSource.PROFILE, **kwargs)


def points(result, factor):
    return {f.factor: f.points for f in result.breakdown}[factor]


class TestProfileTable(unittest.TestCase):

    def setUp(self):
        self.scorer = CompatibilityScorer(MatchingConfig())
        self.requirement = profile_requirement(
            locations=frozenset({"lisboa"}),
            budget_max=300000,
            property_types=frozenset({PropertyType.APARTMENT}),
            bedrooms_min=2,
            area_min=80,
        )

    def test_perfect_match(self):
        candidate = make_candidate("a", price=290000, city="Lisboa", bedrooms=3, usable_area=90)
        result = self.scorer.score(self.requirement, candidate)
        self.assertEqual(result.score, 100)
        self.assertEqual(result.table, "profile")
        self.assertEqual(
            [f.factor for f in result.breakdown],
            ["location", "budget", "property_type", "bedrooms", "area"]
        )

    def test_near_budget_gets_three_quarters(self):
        candidate = make_candidate("a", price=320000, city="Lisboa", bedrooms=3, usable_area=90)
        result = self.scorer.score(self.requirement, candidate)
        self.assertEqual(points(result, "budget"), 30)
        self.assertEqual(result.score, 90)

    def test_outer_budget_band(self):
        requirement = profile_requirement(budget_max=200000)
        result = self.scorer.score(requirement, make_candidate("a", price=230000))
        self.assertEqual(points(result, "budget"), 15)
        # 15 / 40 = 37.5 -> rounds half up
        self.assertEqual(result.score, 38)

    def test_over_outer_band_scores_zero(self):
        requirement = profile_requirement(budget_max=200000)
        self.assertEqual(self.scorer.score(requirement, make_candidate("a", price=250000)).score, 0)

    def test_location_ignores_address(self):
        requirement = profile_requirement(locations=frozenset({"alfama"}))
        candidate = make_candidate("a", city="Lisboa", state="Lisboa", address="Rua de Alfama")
        self.assertEqual(self.scorer.score(requirement, candidate).score, 0)

    def test_location_matches_state(self):
        requirement = profile_requirement(locations=frozenset({"setúbal"}))
        candidate = make_candidate("a", city="Sesimbra", state="Setúbal")
        self.assertEqual(self.scorer.score(requirement, candidate).score, 100)

    def test_location_case_does_not_matter(self):
        requirement = profile_requirement(locations=frozenset({"Setúbal"}))
        candidate = make_candidate("a", city="SESIMBRA", state="setúbal")
        self.assertEqual(self.scorer.score(requirement, candidate).score, 100)

    def test_property_type_mismatch(self):
        requirement = profile_requirement(property_types=frozenset({PropertyType.HOUSE}))
        self.assertEqual(self.scorer.score(requirement, make_candidate("a")).score, 0)

    def test_bedrooms_one_of_two_bounds(self):
        requirement = profile_requirement(bedrooms_min=2, bedrooms_max=3)
        result = self.scorer.score(requirement, make_candidate("a", bedrooms=4))
        self.assertEqual(points(result, "bedrooms"), 5)
        self.assertEqual(result.score, 50)

    def test_bedrooms_both_bounds_violated(self):
        requirement = profile_requirement(bedrooms_min=4, bedrooms_max=1)
        self.assertEqual(self.scorer.score(requirement, make_candidate("a", bedrooms=2)).score, 0)

    def test_area_bounds(self):
        requirement = profile_requirement(area_min=60, area_max=100)
        self.assertEqual(self.scorer.score(requirement, make_candidate("a", usable_area=80)).score, 100)
        self.assertEqual(self.scorer.score(requirement, make_candidate("b", usable_area=120)).score, 0)
        self.assertEqual(self.scorer.score(requirement, make_candidate("c", usable_area=50)).score, 0)

    def test_only_present_factors_count(self):
        requirement = profile_requirement(
            locations=frozenset({"porto"}),
            property_types=frozenset({PropertyType.APARTMENT}),
        )
        # location 0/30, type 15/15 -> 15/45
        result = self.scorer.score(requirement, make_candidate("a", city="Lisboa"))
        self.assertEqual(result.score, 33)
        self.assertEqual(len(result.breakdown), 2)

    def test_custom_weights(self):
        config = MatchingConfig(profile_weights=ProfileWeights(location=50, budget=50))
        requirement = profile_requirement(locations=frozenset({"porto"}), budget_max=100000)
        result = CompatibilityScorer(config).score(requirement, make_candidate("a", city="Porto", price=500000))
        self.assertEqual(result.score, 50)


class TestNeutralScore(unittest.TestCase):

    def test_empty_requirement_scores_fifty(self):
        for candidate in (
            make_candidate("a"),
            make_candidate("b", price=0, bedrooms=None, usable_area=None, property_type=None),
            make_candidate("c", listing_type=ListingType.RENT, city=""),
        ):
            self.assertEqual(score(BuyerRequirement(), candidate).score, 50)

    def test_notes_only_scores_fifty(self):
        requirement = profile_requirement(notes="sunny")
        self.assertEqual(score(requirement, make_candidate("a")).score, 50)


class TestScoreProperties(unittest.TestCase):

    def test_scores_stay_within_bounds(self):
        requirements = [
            profile_requirement(),
            profile_requirement(budget_min=500000, budget_max=100000),
            profile_requirement(budget_max=0),
            profile_requirement(bedrooms_min=3, bedrooms_max=1, area_min=1e6),
            profile_requirement(locations=frozenset({"lisboa"}), budget_min=-10),
            BuyerRequirement(source=RequirementSource.LEAD, budget_max=100000, lead_type="vendedor"),
        ]
        candidates = [
            make_candidate(str(i), price=price, bedrooms=bedrooms, usable_area=area)
            for i, (price, bedrooms, area) in enumerate(itertools.product(
                (0, 99999, 100000, 150000, 1e9), (None, 0, 2, 9), (None, 0.0, 85.0)
            ))
        ]
        for requirement, candidate in itertools.product(requirements, candidates):
            value = score(requirement, candidate).score
            self.assertGreaterEqual(value, 0)
            self.assertLessEqual(value, 100)

    def test_budget_at_limit_beats_fifteen_percent_over(self):
        requirement = profile_requirement(budget_max=200000)
        at_limit = score(requirement, make_candidate("a", price=200000))
        over = score(requirement, make_candidate("b", price=230000))
        self.assertGreaterEqual(points(at_limit, "budget"), points(over, "budget"))
        self.assertGreater(at_limit.score, over.score)


if __name__ == '__main__':
    unittest.main()
