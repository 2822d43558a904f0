#!/usr/bin/env python3
"""
Fallback Scoring Table - For requirements inferred from loose lead fields.

Inferred requirements are less trustworthy than an explicit profile, so the
budget bands are wider and the listing type is judged against the lead type
instead of a stated listing preference.

Weights: location 30 / budget 40 / property type 20 / listing type 10.
"""
from typing import List, Optional, Tuple

from core.config_loader import FallbackBudgetBands, FallbackWeights
from core.matcher.models import BuyerRequirement, ListingType, PropertyCandidate
from core.matcher.synonyms import BUYER_LEAD_TYPES, SELLER_LEAD_TYPES
from core.scorer.budget import fallback_budget_points


def score_fallback(
    requirement: BuyerRequirement,
    candidate: PropertyCandidate,
    weights: FallbackWeights,
    bands: FallbackBudgetBands
) -> List[Tuple[str, float, float]]:
    """Return (factor, points, weight) for every factor the lead supports, plus listing type."""
    factors: List[Tuple[str, float, float]] = []

    if requirement.locations:
        where = candidate.location_text
        hit = any(loc in where for loc in requirement.locations)
        factors.append(('location', weights.location if hit else 0.0, weights.location))

    if requirement.budget_max is not None:
        points = fallback_budget_points(candidate.price, requirement.budget_max, weights.budget, bands)
        factors.append(('budget', points, weights.budget))

    if requirement.property_types or requirement.room_hints:
        hit = (
            candidate.property_type in requirement.property_types
            or any(hint.matches(candidate.bedrooms) for hint in requirement.room_hints)
        )
        factors.append(('property_type', weights.property_type if hit else 0.0, weights.property_type))

    # Always weighed; a lead without a type earns nothing here
    factors.append(('listing_type', _listing_points(requirement.lead_type, candidate, weights.listing_type), weights.listing_type))

    return factors


def _listing_points(lead_type: Optional[str], candidate: PropertyCandidate, weight: float) -> float:
    if lead_type in BUYER_LEAD_TYPES and candidate.listing_type == ListingType.SALE:
        return weight
    if lead_type in SELLER_LEAD_TYPES and candidate.listing_type == ListingType.RENT:
        return weight / 2
    return 0.0
