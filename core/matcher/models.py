#!/usr/bin/env python3
"""
Matcher Models - Data structures for matching.

Loose records coming from the inventory and lead stores are turned into
explicit, immutable types here so that the filter/score/rank stages never
have to probe for missing keys.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from core.utils import normalize_text, to_optional_float, to_optional_int


class ListingType(Enum):
    SALE = "sale"
    RENT = "rent"
    BOTH = "both"

    @classmethod
    def parse(cls, value: Any, default: Optional["ListingType"] = None) -> Optional["ListingType"]:
        text = normalize_text(value)
        for member in cls:
            if member.value == text:
                return member
        return default


class PropertyType(Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    LAND = "land"
    BUILDING = "building"
    FARM = "farm"
    STORE = "store"
    WAREHOUSE = "warehouse"
    OFFICE = "office"

    @classmethod
    def parse(cls, value: Any) -> Optional["PropertyType"]:
        text = normalize_text(value)
        for member in cls:
            if member.value == text:
                return member
        return None


class RequirementSource(Enum):
    """Which resolver path produced a requirement; selects the scoring table."""
    PROFILE = "profile"
    LEAD = "lead"
    NONE = "none"


ACTIVE_STATUS = "active"
AVAILABLE = "available"


@dataclass(frozen=True)
class RoomHint:
    """Bedroom-count shorthand recognised in free text (e.g. T3, T4+)."""
    token: str
    bedrooms_min: int
    bedrooms_max: Optional[int] = None

    def matches(self, bedrooms: Optional[int]) -> bool:
        if bedrooms is None:
            return False
        if bedrooms < self.bedrooms_min:
            return False
        return self.bedrooms_max is None or bedrooms <= self.bedrooms_max


@dataclass(frozen=True)
class BuyerRequirement:
    """Normalized buyer requirement. Every field is optional; None means unconstrained."""
    listing_type: ListingType = ListingType.BOTH
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    locations: FrozenSet[str] = frozenset()
    property_types: FrozenSet[PropertyType] = frozenset()
    bedrooms_min: Optional[int] = None
    bedrooms_max: Optional[int] = None
    bathrooms_min: Optional[int] = None
    area_min: Optional[float] = None
    area_max: Optional[float] = None
    room_hints: Tuple[RoomHint, ...] = ()
    desired_amenities: Tuple[str, ...] = ()
    lead_type: Optional[str] = None
    notes: Optional[str] = None
    source: RequirementSource = RequirementSource.NONE

    def __post_init__(self):
        # Locations are compared against lower-cased property text
        object.__setattr__(self, 'locations', frozenset(
            loc.strip().lower() for loc in self.locations if loc and loc.strip()
        ))

    def has_constraints(self) -> bool:
        """True when at least one hard-filterable field is set."""
        return any((
            self.listing_type != ListingType.BOTH,
            self.budget_min is not None,
            self.budget_max is not None,
            bool(self.locations),
            bool(self.property_types),
            self.bedrooms_min is not None,
            self.bedrooms_max is not None,
            self.bathrooms_min is not None,
            self.area_min is not None,
        ))

    def is_empty(self) -> bool:
        return not (
            self.has_constraints() or self.room_hints or self.desired_amenities
            or self.lead_type or self.notes
        )

    def summary(self) -> Dict[str, Any]:
        """Plain-dict view used in oracle prompts and logs."""
        return {
            'listing_type': self.listing_type.value,
            'budget_min': self.budget_min,
            'budget_max': self.budget_max,
            'locations': sorted(self.locations),
            'property_types': sorted(t.value for t in self.property_types),
            'bedrooms_min': self.bedrooms_min,
            'bedrooms_max': self.bedrooms_max,
            'bathrooms_min': self.bathrooms_min,
            'area_min': self.area_min,
            'area_max': self.area_max,
            'room_hints': [h.token for h in self.room_hints],
            'desired_amenities': list(self.desired_amenities),
            'lead_type': self.lead_type,
            'notes': self.notes,
        }


@dataclass(frozen=True)
class PropertyCandidate:
    """Read-only snapshot of a property at matching time."""
    id: str
    listing_type: Optional[ListingType]
    price: float
    property_type: Optional[PropertyType]
    city: str = ""
    state: str = ""
    address: str = ""
    title: str = ""
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    usable_area: Optional[float] = None
    status: str = ACTIVE_STATUS
    availability: str = AVAILABLE
    amenities: Tuple[str, ...] = ()

    @property
    def is_listable(self) -> bool:
        return self.status == ACTIVE_STATUS and self.availability == AVAILABLE

    @property
    def location_text(self) -> str:
        """Lower-cased city + state + address, used by the eligibility filter."""
        return " ".join((self.city, self.state, self.address)).lower()

    @property
    def region_text(self) -> str:
        """Lower-cased city + state, used by the profile scoring table."""
        return " ".join((self.city, self.state)).lower()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PropertyCandidate":
        """Build a snapshot from a loose inventory record.

        Usable area prefers ``useful_area`` and falls back to ``square_feet``.
        Records without an availability field are treated as available.
        """
        usable_area = to_optional_float(record.get('useful_area'))
        if not usable_area:
            usable_area = to_optional_float(record.get('square_feet')) or usable_area

        return cls(
            id=str(record.get('id')),
            listing_type=ListingType.parse(record.get('listing_type')),
            price=to_optional_float(record.get('price')) or 0.0,
            property_type=PropertyType.parse(record.get('property_type')),
            city=record.get('city') or "",
            state=record.get('state') or "",
            address=record.get('address') or "",
            title=record.get('title') or "",
            bedrooms=to_optional_int(record.get('bedrooms')),
            bathrooms=to_optional_int(record.get('bathrooms')),
            usable_area=usable_area,
            status=normalize_text(record.get('status')),
            availability=normalize_text(record.get('availability')) or AVAILABLE,
            amenities=tuple(record.get('amenities') or ()),
        )

    def summary(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'listing_type': self.listing_type.value if self.listing_type else None,
            'property_type': self.property_type.value if self.property_type else None,
            'price': self.price,
            'city': self.city,
            'state': self.state,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'usable_area': self.usable_area,
            'amenities': list(self.amenities[:8]),
        }


@dataclass(frozen=True)
class BuyerProfile:
    """Explicit buyer requirements as stored by the buyer-profile source."""
    id: str
    listing_type: Optional[str] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    locations: Tuple[str, ...] = ()
    property_types: Tuple[str, ...] = ()
    bedrooms_min: Optional[int] = None
    bedrooms_max: Optional[int] = None
    bathrooms_min: Optional[int] = None
    area_min: Optional[float] = None
    area_max: Optional[float] = None
    desired_amenities: Tuple[str, ...] = ()
    notes: Optional[str] = None


@dataclass(frozen=True)
class LeadRecord:
    """Loose lead/opportunity fields used when no buyer profile is linked."""
    id: str
    buyer_name: str = ""
    lead_type: Optional[str] = None
    location: Optional[str] = None
    budget: Optional[float] = None
    property_type_interest: Optional[str] = None
    message: Optional[str] = None
    profile_id: Optional[str] = None
