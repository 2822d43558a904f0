#!/usr/bin/env python3
"""
Matching Service - Orchestrates one matching run.

Pipeline (strictly sequential within a run):
1. Inventory snapshot (read once; failure fails the run)
2. Requirement resolution (profile > lead > empty)
3. Eligibility filter (hard constraints)
4. Deterministic compatibility scoring
5. Oracle blending on the top-N (never fails the run)
6. Stable ranking + truncation

Runs share no mutable state, so runs for different leads are independent.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple
import logging

from core.config_loader import MatchingConfig
from core.exceptions import InventoryFetchError, LeadNotFoundError
from core.llm.interfaces import RankingOracle
from core.matcher.eligibility import EligibilityFilter
from core.matcher.models import BuyerProfile, BuyerRequirement, LeadRecord, PropertyCandidate
from core.matcher.requirement_resolver import resolve
from core.matcher.sources import InventorySource, LeadSource
from core.scorer.blender import RelevanceBlender
from core.scorer.compatibility import CompatibilityScorer
from core.scorer.models import MatchResult, ScoredCandidate
from core.scorer.ranker import rank

logger = logging.getLogger(__name__)


@dataclass
class MatchRun:
    """Outcome of a completed run. An empty results list is a valid outcome."""
    requirement: BuyerRequirement
    results: List[MatchResult] = field(default_factory=list)
    inventory_size: int = 0
    eligible_count: int = 0
    oracle_used: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.results


class MatchingService:
    """
    Service for matching a lead against the property inventory.

    Pure stages (resolve, filter, score, rank) never raise on well-typed input.
    Only the inventory fetch propagates errors; oracle failures are absorbed
    by the blender.
    """

    def __init__(
        self,
        inventory: InventorySource,
        oracle: Optional[RankingOracle] = None,
        config: Optional[MatchingConfig] = None,
        lead_source: Optional[LeadSource] = None
    ):
        self.inventory = inventory
        self.config = config or MatchingConfig()
        self.lead_source = lead_source
        self.eligibility = EligibilityFilter(self.config.tolerances)
        self.scorer = CompatibilityScorer(self.config)
        self.oracle = oracle

    def find_matches(
        self,
        lead: Optional[LeadRecord],
        profile: Optional[BuyerProfile] = None,
        top_k: Optional[int] = None,
        exclude_ids: Iterable[str] = (),
        use_oracle: bool = True
    ) -> MatchRun:
        """
        Run the full pipeline for one lead.

        Args:
            lead: Lead record (may be None)
            profile: Linked buyer profile; overrides the lead's loose fields
            top_k: Result budget; defaults to config.top_k
            exclude_ids: Property ids to leave out (already saved or contacted)
            use_oracle: Set False to skip the oracle for this run

        Returns:
            MatchRun with ranked results and run counts

        Raises:
            InventoryFetchError: when the inventory snapshot cannot be read
        """
        snapshot = self._fetch_inventory()
        requirement = resolve(lead, profile)

        excluded = set(exclude_ids)
        eligible = [
            c for c in self.eligibility.filter_eligible(requirement, snapshot)
            if c.id not in excluded
        ]

        scored = [self._score(requirement, candidate) for candidate in eligible]

        # Fresh blender per run keeps runs free of shared mutable state
        blender = RelevanceBlender(self.oracle, self.config.oracle_top_n)
        blended = blender.blend(requirement, scored, use_oracle=use_oracle)

        k = self.config.top_k if top_k is None else top_k
        results = rank(blended, k)

        lead_id = lead.id if lead is not None else None
        logger.info(
            f"Match run lead={lead_id} source={requirement.source.value}: "
            f"inventory={len(snapshot)} eligible={len(eligible)} "
            f"returned={len(results)} oracle={blender.last_used_oracle}"
        )
        return MatchRun(
            requirement=requirement,
            results=results,
            inventory_size=len(snapshot),
            eligible_count=len(eligible),
            oracle_used=blender.last_used_oracle,
        )

    def find_matches_for_lead(
        self,
        lead_id: str,
        top_k: Optional[int] = None,
        exclude_ids: Iterable[str] = (),
        use_oracle: bool = True
    ) -> MatchRun:
        """Load the lead and its linked profile, then run find_matches."""
        if self.lead_source is None:
            raise LeadNotFoundError(f"No lead source configured to load lead {lead_id}")

        lead = self.lead_source.get_lead(lead_id)
        if lead is None:
            raise LeadNotFoundError(f"Lead {lead_id} not found")

        profile = self.lead_source.get_linked_profile(lead)
        return self.find_matches(
            lead,
            profile=profile,
            top_k=top_k,
            exclude_ids=exclude_ids,
            use_oracle=use_oracle,
        )

    def match_leads_for_property(
        self,
        candidate: PropertyCandidate,
        requirements: Iterable[Tuple[LeadRecord, Optional[BuyerProfile]]],
        min_score: Optional[int] = None
    ) -> List[Tuple[str, int]]:
        """
        Reverse matching: which leads does a newly listed property suit?

        Deterministic only (eligibility + compatibility score). Leads with an
        empty requirement are skipped since they would match everything.

        Returns:
            (lead_id, score) pairs at or above min_score, best first
        """
        threshold = self.config.reverse_match_min_score if min_score is None else min_score
        if not candidate.is_listable:
            logger.debug(f"Property {candidate.id} is not listable; no reverse matches")
            return []

        matches: List[Tuple[str, int]] = []
        for lead, profile in requirements:
            requirement = resolve(lead, profile)
            if requirement.is_empty():
                continue
            if not self.eligibility.filter_eligible(requirement, [candidate]):
                continue
            result = self.scorer.score(requirement, candidate)
            if result.score >= threshold:
                matches.append((lead.id, result.score))

        matches.sort(key=lambda m: m[1], reverse=True)
        logger.info(f"Property {candidate.id} matched {len(matches)} lead(s) at >= {threshold}")
        return matches

    def _fetch_inventory(self) -> List[PropertyCandidate]:
        try:
            return list(self.inventory.list_candidates())
        except InventoryFetchError:
            raise
        except Exception as e:
            logger.error(f"Inventory fetch failed: {e}")
            raise InventoryFetchError(f"Inventory fetch failed: {e}") from e

    def _score(self, requirement: BuyerRequirement, candidate: PropertyCandidate) -> ScoredCandidate:
        result = self.scorer.score(requirement, candidate)
        return ScoredCandidate(
            property=candidate,
            deterministic_score=result.score,
            score_breakdown=result.breakdown,
        )
