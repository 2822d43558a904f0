"""Tests for matcher data structures and loose-record parsing."""
import pytest

from core.matcher.models import (
    BuyerRequirement, ListingType, PropertyCandidate, PropertyType,
    RequirementSource, RoomHint
)


class TestPropertyCandidateFromRecord:
    def test_full_record(self):
        candidate = PropertyCandidate.from_record({
            'id': 42,
            'title': 'T2 Alfama',
            'listing_type': 'Sale',
            'property_type': 'apartment',
            'price': '280000',
            'city': 'Lisboa',
            'state': 'Lisboa',
            'address': 'Rua da Regueira 3',
            'bedrooms': 2,
            'bathrooms': '1',
            'useful_area': 75,
            'status': 'Active',
            'availability': 'available',
            'amenities': ['elevator', 'balcony'],
        })

        assert candidate.id == '42'
        assert candidate.listing_type == ListingType.SALE
        assert candidate.property_type == PropertyType.APARTMENT
        assert candidate.price == 280000.0
        assert candidate.bathrooms == 1
        assert candidate.usable_area == 75.0
        assert candidate.amenities == ('elevator', 'balcony')
        assert candidate.is_listable

    def test_missing_optional_fields_are_unknown(self):
        candidate = PropertyCandidate.from_record({'id': 'p1', 'price': 100000, 'status': 'active'})

        assert candidate.bedrooms is None
        assert candidate.bathrooms is None
        assert candidate.usable_area is None
        assert candidate.amenities == ()
        assert candidate.city == ""

    def test_missing_availability_counts_as_available(self):
        candidate = PropertyCandidate.from_record({'id': 'p1', 'status': 'active'})
        assert candidate.availability == 'available'
        assert candidate.is_listable

    def test_missing_status_is_not_listable(self):
        candidate = PropertyCandidate.from_record({'id': 'p1', 'availability': 'available'})
        assert not candidate.is_listable

    def test_reserved_is_not_listable(self):
        candidate = PropertyCandidate.from_record({'id': 'p1', 'status': 'active', 'availability': 'reserved'})
        assert not candidate.is_listable

    def test_useful_area_preferred_over_square_feet(self):
        candidate = PropertyCandidate.from_record({'id': 'p1', 'useful_area': 80, 'square_feet': 120})
        assert candidate.usable_area == 80.0

    def test_square_feet_used_when_useful_area_missing(self):
        candidate = PropertyCandidate.from_record({'id': 'p1', 'useful_area': None, 'square_feet': 120})
        assert candidate.usable_area == 120.0

    def test_unknown_type_labels_become_none(self):
        candidate = PropertyCandidate.from_record({'id': 'p1', 'listing_type': 'lease', 'property_type': 'castle'})
        assert candidate.listing_type is None
        assert candidate.property_type is None

    def test_location_text_includes_address(self):
        candidate = PropertyCandidate.from_record({
            'id': 'p1', 'city': 'Cascais', 'state': 'Lisboa', 'address': 'Av. Marginal'
        })
        assert 'av. marginal' in candidate.location_text
        assert 'av. marginal' not in candidate.region_text
        assert candidate.region_text == 'cascais lisboa'

    def test_non_finite_numbers_become_unknown(self):
        candidate = PropertyCandidate.from_record({
            'id': 'p1', 'price': 'inf', 'bedrooms': 'nan', 'bathrooms': float('inf'), 'useful_area': 'nan',
        })
        assert candidate.price == 0.0
        assert candidate.bedrooms is None
        assert candidate.bathrooms is None
        assert candidate.usable_area is None


class TestBuyerRequirement:
    def test_default_is_empty(self):
        requirement = BuyerRequirement()
        assert not requirement.has_constraints()
        assert requirement.is_empty()
        assert requirement.source == RequirementSource.NONE

    def test_notes_alone_are_not_constraints(self):
        requirement = BuyerRequirement(notes="quiet street")
        assert not requirement.has_constraints()
        assert not requirement.is_empty()

    def test_room_hints_are_not_hard_constraints(self):
        requirement = BuyerRequirement(room_hints=(RoomHint('t2', 2, 2),))
        assert not requirement.has_constraints()

    @pytest.mark.parametrize("kwargs", [
        {'listing_type': ListingType.RENT},
        {'budget_max': 100000.0},
        {'budget_min': 0.0},
        {'locations': frozenset({'porto'})},
        {'property_types': frozenset({PropertyType.HOUSE})},
        {'bedrooms_min': 1},
        {'bathrooms_min': 1},
        {'area_min': 50.0},
    ])
    def test_single_field_is_a_constraint(self, kwargs):
        assert BuyerRequirement(**kwargs).has_constraints()

    def test_summary_is_plain_data(self):
        requirement = BuyerRequirement(
            locations=frozenset({'porto', 'braga'}),
            property_types=frozenset({PropertyType.HOUSE}),
        )
        summary = requirement.summary()
        assert summary['locations'] == ['braga', 'porto']
        assert summary['property_types'] == ['house']
        assert summary['listing_type'] == 'both'

    def test_locations_are_normalised_on_construction(self):
        requirement = BuyerRequirement(locations=frozenset({'Lisboa', ' PORTO ', '', '  '}))
        assert requirement.locations == frozenset({'lisboa', 'porto'})

    def test_desired_amenities_reach_the_summary(self):
        requirement = BuyerRequirement(desired_amenities=('garagem', 'piscina'))
        assert requirement.summary()['desired_amenities'] == ['garagem', 'piscina']
        assert not requirement.has_constraints()
        assert not requirement.is_empty()


class TestRoomHint:
    def test_exact_count(self):
        hint = RoomHint('t2', 2, 2)
        assert hint.matches(2)
        assert not hint.matches(3)
        assert not hint.matches(None)

    def test_open_ended(self):
        hint = RoomHint('t4', 4)
        assert hint.matches(4)
        assert hint.matches(7)
        assert not hint.matches(3)
