"""End-to-end tests for the matching service with in-memory sources."""
import pytest

from core.config_loader import MatchingConfig
from core.exceptions import InventoryFetchError, LeadNotFoundError
from core.matcher.models import (
    BuyerProfile, LeadRecord, ListingType, PropertyType, RequirementSource
)
from core.matcher.service import MatchingService, MatchRun
from tests.mocks.matching_mocks import (
    FailingRankingOracle, MockInventory, MockLeadSource, MockRankingOracle, make_candidate
)


@pytest.fixture
def inventory():
    return MockInventory([
        make_candidate("A", price=290000, city="Lisboa", bedrooms=3),
        make_candidate("B", price=500000, city="Porto", state="Porto", bedrooms=2),
        make_candidate("C", price=310000, city="Lisboa", bedrooms=2),
        make_candidate("D", price=250000, city="Lisboa", bedrooms=2, status="sold"),
        make_candidate("E", price=200000, city="Lisboa", bedrooms=2, property_type=PropertyType.HOUSE),
    ])


@pytest.fixture
def profile():
    return BuyerProfile(id="prof1", budget_max=300000, locations=("Lisboa",), bedrooms_min=2)


@pytest.fixture
def lead():
    return LeadRecord(id="lead1", buyer_name="Ana", lead_type="comprador", location="Lisboa",
                      budget=300000, property_type_interest="apartamento", profile_id="prof1")


class TestFindMatches:
    def test_profile_run(self, inventory, profile, lead):
        service = MatchingService(inventory, config=MatchingConfig())
        run = service.find_matches(lead, profile)

        assert isinstance(run, MatchRun)
        assert run.requirement.source == RequirementSource.PROFILE
        assert run.inventory_size == 5
        assert run.eligible_count == 3
        assert [r.property.id for r in run.results] == ["A", "E", "C"]
        assert [r.rank for r in run.results] == [1, 2, 3]
        assert all(r.blended_score == r.deterministic_score for r in run.results)
        assert run.oracle_used is False

    def test_excluded_ids_dropped(self, inventory, profile, lead):
        run = MatchingService(inventory).find_matches(lead, profile, exclude_ids=["A"])
        assert [r.property.id for r in run.results] == ["E", "C"]

    def test_top_k_budget(self, inventory, profile, lead):
        run = MatchingService(inventory).find_matches(lead, profile, top_k=1)
        assert [r.property.id for r in run.results] == ["A"]
        assert run.eligible_count == 3

    def test_config_top_k_default(self, inventory, profile, lead):
        run = MatchingService(inventory, config=MatchingConfig(top_k=2)).find_matches(lead, profile)
        assert len(run.results) == 2

    def test_lead_fallback_without_profile(self, inventory, lead):
        run = MatchingService(inventory).find_matches(lead)

        assert run.requirement.source == RequirementSource.LEAD
        # Lead fields rank but never exclude: only the sold listing D is gone
        assert run.eligible_count == 4
        scores = [(r.property.id, r.deterministic_score) for r in run.results]
        # E: Lisboa 30 + partial budget 25 + listing 10; B: type 20 + listing 10
        assert scores == [("A", 100), ("C", 100), ("E", 65), ("B", 30)]

    def test_lead_wider_budget_bands_reach_results(self):
        inventory = MockInventory([
            make_candidate("near", price=100000),
            make_candidate("over30", price=130000),
            make_candidate("house", price=100000, property_type=PropertyType.HOUSE),
        ])
        lead = LeadRecord(id="l", lead_type="comprador", location="Lisboa",
                          budget=100000, property_type_interest="apartamento")

        run = MatchingService(inventory).find_matches(lead)

        scores = {r.property.id: r.deterministic_score for r in run.results}
        assert [r.property.id for r in run.results] == ["near", "house", "over30"]
        assert scores == {"near": 100, "house": 80, "over30": 70}

    def test_no_requirement_lists_everything_listable(self, inventory):
        run = MatchingService(inventory).find_matches(None)

        assert run.requirement.source == RequirementSource.NONE
        assert [r.property.id for r in run.results] == ["A", "B", "C", "E"]
        assert all(r.deterministic_score == 50 for r in run.results)

    def test_empty_result_is_not_an_error(self, inventory):
        profile = BuyerProfile(id="p", locations=("Faro",))
        run = MatchingService(inventory).find_matches(None, profile)
        assert run.results == []
        assert run.is_empty
        assert run.inventory_size == 5

    def test_inventory_read_once_per_run(self, inventory, profile, lead):
        MatchingService(inventory).find_matches(lead, profile)
        assert inventory.calls == 1


class TestOracleIntegration:
    def test_oracle_reorders_results(self, inventory, profile, lead):
        oracle = MockRankingOracle({"C": 100, "A": 40})
        run = MatchingService(inventory, oracle=oracle).find_matches(lead, profile)

        scores = {r.property.id: r for r in run.results}
        assert scores["C"].blended_score == 94
        assert scores["A"].blended_score == 70
        assert scores["E"].blended_score == scores["E"].deterministic_score
        assert [r.property.id for r in run.results] == ["E", "C", "A"]
        assert run.oracle_used is True

    def test_oracle_timeout_keeps_deterministic_ranking(self, inventory, profile, lead):
        service = MatchingService(inventory, oracle=FailingRankingOracle(TimeoutError("timeout")))
        run = service.find_matches(lead, profile)

        assert run.results
        assert [r.blended_score for r in run.results] == [r.deterministic_score for r in run.results]
        assert all(r.rationale == "" for r in run.results)
        assert run.oracle_used is False

    def test_use_oracle_false(self, inventory, profile, lead):
        oracle = MockRankingOracle({"C": 100})
        MatchingService(inventory, oracle=oracle).find_matches(lead, profile, use_oracle=False)
        assert oracle.calls == []

    def test_oracle_top_n_from_config(self, inventory, profile, lead):
        oracle = MockRankingOracle({})
        config = MatchingConfig(oracle_top_n=2)
        MatchingService(inventory, oracle=oracle, config=config).find_matches(lead, profile)
        assert [c["id"] for c in oracle.calls[0]["candidates"]] == ["A", "E"]


class TestFailures:
    def test_inventory_failure_fails_the_run(self, profile, lead):
        inventory = MockInventory([], fail_with=InventoryFetchError("db down"))
        with pytest.raises(InventoryFetchError):
            MatchingService(inventory).find_matches(lead, profile)

    def test_unexpected_inventory_error_wrapped(self, profile, lead):
        inventory = MockInventory([], fail_with=ConnectionError("refused"))
        with pytest.raises(InventoryFetchError):
            MatchingService(inventory).find_matches(lead, profile)


class TestFindMatchesForLead:
    def test_loads_lead_and_profile(self, inventory, profile, lead):
        source = MockLeadSource({"lead1": lead}, {"prof1": profile})
        run = MatchingService(inventory, lead_source=source).find_matches_for_lead("lead1")
        assert run.requirement.source == RequirementSource.PROFILE

    def test_unknown_lead(self, inventory):
        service = MatchingService(inventory, lead_source=MockLeadSource())
        with pytest.raises(LeadNotFoundError):
            service.find_matches_for_lead("ghost")

    def test_requires_lead_source(self, inventory):
        with pytest.raises(LeadNotFoundError):
            MatchingService(inventory).find_matches_for_lead("lead1")


class TestReverseMatching:
    def test_new_property_matched_to_leads(self, inventory):
        candidate = make_candidate("NEW", price=280000, city="Lisboa", bedrooms=2)
        requirements = [
            (LeadRecord(id="l1"), BuyerProfile(id="p1", budget_max=300000, locations=("Lisboa",))),
            (LeadRecord(id="l2", location="Lisboa", budget=600000), None),
            (LeadRecord(id="l3"), BuyerProfile(id="p3", locations=("Porto",))),
            (LeadRecord(id="l4"), None),
            (LeadRecord(id="l5", location="Lisboa", lead_type="comprador",
                        property_type_interest="T3"), None),
        ]

        matches = MatchingService(inventory).match_leads_for_property(candidate, requirements, min_score=50)

        # l2: location 30 + outer budget band 10 + no listing points -> 40/80 = 50
        assert matches == [("l1", 100), ("l5", 67), ("l2", 50)]

    def test_threshold_from_config(self, inventory):
        candidate = make_candidate("NEW", price=280000, city="Lisboa")
        requirements = [(LeadRecord(id="l2", location="Lisboa", budget=600000), None)]
        service = MatchingService(inventory, config=MatchingConfig(reverse_match_min_score=60))
        assert service.match_leads_for_property(candidate, requirements) == []

    def test_unlisted_property_matches_nobody(self, inventory):
        candidate = make_candidate("NEW", status="draft")
        requirements = [(LeadRecord(id="l1", location="Lisboa"), None)]
        assert MatchingService(inventory).match_leads_for_property(candidate, requirements) == []
