"""Matcher Module - Requirement resolution and eligibility filtering."""
from core.matcher.models import (
    BuyerProfile, BuyerRequirement, LeadRecord, ListingType,
    PropertyCandidate, PropertyType, RequirementSource, RoomHint
)
from core.matcher.requirement_resolver import resolve
from core.matcher.eligibility import EligibilityFilter, filter_eligible

__all__ = [
    'resolve', 'EligibilityFilter', 'filter_eligible',
    'BuyerProfile', 'BuyerRequirement', 'LeadRecord', 'ListingType',
    'PropertyCandidate', 'PropertyType', 'RequirementSource', 'RoomHint'
]
