#!/usr/bin/env python3
"""
Requirement Resolver - Derive a BuyerRequirement from a profile or a lead.

A linked buyer profile wins and is passed through verbatim. Without one, the
lead's loose fields are read with the declared synonym tables. With neither,
the empty requirement is returned, which matches every listable property.
"""
from typing import Optional
import logging

from core.matcher.models import (
    BuyerProfile, BuyerRequirement, LeadRecord, ListingType, PropertyType,
    RequirementSource
)
from core.matcher import synonyms

logger = logging.getLogger(__name__)


def resolve(lead: Optional[LeadRecord], linked_profile: Optional[BuyerProfile] = None) -> BuyerRequirement:
    """Resolve the requirement for one matching run. Pure; never raises."""
    if linked_profile is not None:
        return from_profile(linked_profile)
    if lead is not None:
        return from_lead(lead)
    return BuyerRequirement()


def from_profile(profile: BuyerProfile) -> BuyerRequirement:
    property_types = frozenset(
        t for t in (PropertyType.parse(raw) for raw in profile.property_types) if t is not None
    )
    dropped = len(profile.property_types) - len(property_types)
    if dropped:
        logger.debug(f"Profile {profile.id}: ignored {dropped} unknown property type(s)")

    return BuyerRequirement(
        listing_type=ListingType.parse(profile.listing_type, default=ListingType.BOTH),
        budget_min=profile.budget_min,
        budget_max=profile.budget_max,
        locations=frozenset(profile.locations),
        property_types=property_types,
        bedrooms_min=profile.bedrooms_min,
        bedrooms_max=profile.bedrooms_max,
        bathrooms_min=profile.bathrooms_min,
        area_min=profile.area_min,
        area_max=profile.area_max,
        desired_amenities=tuple(a.strip() for a in profile.desired_amenities if a and a.strip()),
        notes=profile.notes,
        source=RequirementSource.PROFILE,
    )


def from_lead(lead: LeadRecord) -> BuyerRequirement:
    """Fallback heuristics over a lead's loose fields.

    - location string -> one-element location set
    - budget -> budget_max only, and only when positive
    - type-of-interest -> property types and room-count hints via the synonym tables
    """
    location = (lead.location or "").strip().lower()
    budget_max = lead.budget if lead.budget is not None and lead.budget > 0 else None
    interest = lead.property_type_interest or ""

    return BuyerRequirement(
        listing_type=ListingType.BOTH,
        budget_max=budget_max,
        locations=frozenset({location}) if location else frozenset(),
        property_types=synonyms.match_property_types(interest),
        room_hints=synonyms.match_room_hints(interest),
        lead_type=(lead.lead_type or "").strip().lower() or None,
        notes=lead.message,
        source=RequirementSource.LEAD,
    )
