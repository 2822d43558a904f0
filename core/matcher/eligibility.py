#!/usr/bin/env python3
"""
Eligibility Filter - Hard constraints applied before scoring.

Each rule is skipped when its requirement field is absent; active rules are
ANDed. The filter never reorders: the output is a subsequence of the input.
Requirements inferred from loose lead fields only rank candidates, so for
them the filter keeps every listable property.
"""
from typing import Callable, Iterable, List, Optional, Tuple
import logging

from core.config_loader import EligibilityTolerances
from core.matcher.models import BuyerRequirement, ListingType, PropertyCandidate, RequirementSource

logger = logging.getLogger(__name__)

Rule = Callable[[PropertyCandidate], bool]


class EligibilityFilter:
    """Apply hard pass/fail constraints to an inventory snapshot."""

    def __init__(self, tolerances: Optional[EligibilityTolerances] = None):
        self.tolerances = tolerances or EligibilityTolerances()

    def filter_eligible(
        self,
        requirement: BuyerRequirement,
        inventory: Iterable[PropertyCandidate]
    ) -> List[PropertyCandidate]:
        listable = [c for c in inventory if c.is_listable]

        if requirement.source == RequirementSource.LEAD or not requirement.has_constraints():
            return listable

        rules = self.build_rules(requirement)
        eligible = [c for c in listable if all(rule(c) for _, rule in rules)]

        logger.debug(
            f"Eligibility: {len(eligible)}/{len(listable)} passed "
            f"rules={[name for name, _ in rules]}"
        )
        return eligible

    def build_rules(self, requirement: BuyerRequirement) -> List[Tuple[str, Rule]]:
        """Return the (name, predicate) pairs active for this requirement."""
        tol = self.tolerances
        rules: List[Tuple[str, Rule]] = []

        if requirement.listing_type != ListingType.BOTH:
            wanted = requirement.listing_type
            rules.append(('listing_type', lambda c: c.listing_type == wanted))

        if requirement.budget_max is not None:
            ceiling = requirement.budget_max * tol.budget_max
            rules.append(('budget_max', lambda c: c.price <= ceiling))

        if requirement.budget_min is not None:
            floor = requirement.budget_min * tol.budget_min
            rules.append(('budget_min', lambda c: c.price >= floor))

        if requirement.locations:
            locations = tuple(requirement.locations)
            rules.append((
                'locations',
                lambda c: any(loc in c.location_text for loc in locations)
            ))

        if requirement.property_types:
            types = requirement.property_types
            rules.append(('property_types', lambda c: c.property_type in types))

        if requirement.bedrooms_min is not None:
            bedrooms_min = requirement.bedrooms_min
            # Unknown bedroom count is treated as zero for the lower bound
            rules.append(('bedrooms_min', lambda c: (c.bedrooms or 0) >= bedrooms_min))

        if requirement.bedrooms_max is not None:
            bedrooms_max = requirement.bedrooms_max
            rules.append((
                'bedrooms_max',
                lambda c: c.bedrooms is None or c.bedrooms <= bedrooms_max
            ))

        if requirement.area_min is not None:
            area_floor = requirement.area_min * tol.area_min
            rules.append(('area_min', lambda c: (c.usable_area or 0.0) >= area_floor))

        if requirement.bathrooms_min is not None:
            bathrooms_min = requirement.bathrooms_min
            rules.append((
                'bathrooms_min',
                lambda c: c.bathrooms is not None and c.bathrooms >= bathrooms_min
            ))

        return rules


def filter_eligible(
    requirement: BuyerRequirement,
    inventory: Iterable[PropertyCandidate],
    tolerances: Optional[EligibilityTolerances] = None
) -> List[PropertyCandidate]:
    """Module-level convenience wrapper around EligibilityFilter."""
    return EligibilityFilter(tolerances).filter_eligible(requirement, inventory)
