#!/usr/bin/env python3
"""
Compatibility Scorer - Deterministic weighted score (0-100) per candidate.

Only factors whose requirement field is present enter the denominator, so the
percentage is always relative to what the buyer actually asked for. A
requirement with no scorable factor gets a flat 50.

Two mutually exclusive tables exist:
- profile table: explicit buyer profile (or no requirement at all)
- fallback table: requirement inferred from loose lead fields (see fallback.py)
"""
from typing import List, Optional, Tuple
import logging

from core.config_loader import MatchingConfig
from core.matcher.models import BuyerRequirement, PropertyCandidate, RequirementSource
from core.scorer.budget import profile_budget_credit
from core.scorer.fallback import score_fallback
from core.scorer.models import CompatibilityScore, ScoreFactor
from core.utils import clamp_score, round_half_up

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50

# (factor name, achieved points, weight)
FactorPoints = Tuple[str, float, float]


def to_percentage(factors: List[FactorPoints]) -> CompatibilityScore:
    """Collapse factor points into a rounded percentage with breakdown."""
    denominator = sum(weight for _, _, weight in factors)
    breakdown = [
        ScoreFactor(factor=name, points=round_half_up(points), max_points=round_half_up(weight))
        for name, points, weight in factors
    ]
    if denominator <= 0:
        return CompatibilityScore(score=NEUTRAL_SCORE, breakdown=breakdown)

    achieved = sum(points for _, points, _ in factors)
    return CompatibilityScore(
        score=clamp_score(round_half_up(achieved / denominator * 100)),
        breakdown=breakdown,
    )


class CompatibilityScorer:
    """Score candidates against a requirement using the table its source selects."""

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or MatchingConfig()

    def score(self, requirement: BuyerRequirement, candidate: PropertyCandidate) -> CompatibilityScore:
        if requirement.source == RequirementSource.LEAD:
            # Empty lead requirements stay neutral (50)
            factors = [] if requirement.is_empty() else score_fallback(
                requirement,
                candidate,
                self.config.fallback_weights,
                self.config.fallback_budget_bands,
            )
            result = to_percentage(factors)
            result.table = "fallback"
        else:
            result = to_percentage(self.profile_factors(requirement, candidate))

        logger.debug(f"Property {candidate.id}: score={result.score} table={result.table}")
        return result

    def profile_factors(
        self,
        requirement: BuyerRequirement,
        candidate: PropertyCandidate
    ) -> List[FactorPoints]:
        weights = self.config.profile_weights
        factors: List[FactorPoints] = []

        if requirement.locations:
            region = candidate.region_text
            hit = any(loc in region for loc in requirement.locations)
            factors.append(('location', weights.location if hit else 0.0, weights.location))

        if requirement.budget_min is not None or requirement.budget_max is not None:
            credit = profile_budget_credit(
                candidate.price,
                requirement.budget_min,
                requirement.budget_max,
                self.config.budget_bands,
            )
            factors.append(('budget', weights.budget * credit, weights.budget))

        if requirement.property_types:
            hit = candidate.property_type in requirement.property_types
            factors.append(('property_type', weights.property_type if hit else 0.0, weights.property_type))

        if requirement.bedrooms_min is not None or requirement.bedrooms_max is not None:
            factors.append(('bedrooms', self._bedrooms_points(requirement, candidate, weights.bedrooms), weights.bedrooms))

        if requirement.area_min is not None or requirement.area_max is not None:
            factors.append(('area', self._area_points(requirement, candidate, weights.area), weights.area))

        return factors

    @staticmethod
    def _bedrooms_points(requirement: BuyerRequirement, candidate: PropertyCandidate, weight: float) -> float:
        # Same unknown-count convention as the eligibility filter
        checks = []
        if requirement.bedrooms_min is not None:
            checks.append((candidate.bedrooms or 0) >= requirement.bedrooms_min)
        if requirement.bedrooms_max is not None:
            checks.append(candidate.bedrooms is None or candidate.bedrooms <= requirement.bedrooms_max)

        satisfied = sum(checks)
        if satisfied == len(checks):
            return weight
        if satisfied > 0:
            return weight / 2
        return 0.0

    @staticmethod
    def _area_points(requirement: BuyerRequirement, candidate: PropertyCandidate, weight: float) -> float:
        area = candidate.usable_area or 0.0
        if requirement.area_min is not None and area < requirement.area_min:
            return 0.0
        if requirement.area_max is not None and candidate.usable_area is not None and area > requirement.area_max:
            return 0.0
        return weight


def score(
    requirement: BuyerRequirement,
    candidate: PropertyCandidate,
    config: Optional[MatchingConfig] = None
) -> CompatibilityScore:
    """Module-level convenience wrapper around CompatibilityScorer."""
    return CompatibilityScorer(config).score(requirement, candidate)
