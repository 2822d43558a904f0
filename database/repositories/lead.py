import logging
from typing import List, Optional, Tuple
from sqlalchemy import select

from core.matcher.models import BuyerProfile, LeadRecord
from database.models import BuyerProfile as BuyerProfileRow, Lead
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _to_lead_record(row: Lead) -> LeadRecord:
    return LeadRecord(
        id=row.id,
        buyer_name=row.buyer_name or '',
        lead_type=row.lead_type,
        location=row.location,
        budget=row.budget,
        property_type_interest=row.property_type_interest,
        message=row.message,
        profile_id=row.profile_id,
    )


def _to_profile(row: BuyerProfileRow) -> BuyerProfile:
    return BuyerProfile(
        id=row.id,
        listing_type=row.listing_type,
        budget_min=row.budget_min,
        budget_max=row.budget_max,
        locations=tuple(row.locations or ()),
        property_types=tuple(row.property_types or ()),
        bedrooms_min=row.bedrooms_min,
        bedrooms_max=row.bedrooms_max,
        bathrooms_min=row.bathrooms_min,
        area_min=row.area_min,
        area_max=row.area_max,
        desired_amenities=tuple(row.desired_amenities or ()),
        notes=row.notes,
    )


class LeadRepository(BaseRepository):
    def get_lead(self, lead_id: str) -> Optional[LeadRecord]:
        row = self.get_by_id(Lead, lead_id)
        return _to_lead_record(row) if row is not None else None

    def get_linked_profile(self, lead: LeadRecord) -> Optional[BuyerProfile]:
        if not lead.profile_id:
            return None
        row = self.get_by_id(BuyerProfileRow, lead.profile_id)
        if row is None:
            logger.warning(f"Lead {lead.id} links missing buyer profile {lead.profile_id}")
            return None
        return _to_profile(row)

    def list_requirements(self) -> List[Tuple[LeadRecord, Optional[BuyerProfile]]]:
        """Every lead paired with its linked profile, for reverse matching."""
        rows = self.db.execute(select(Lead).order_by(Lead.created_at, Lead.id)).scalars().all()
        result = []
        for row in rows:
            lead = _to_lead_record(row)
            profile = _to_profile(row.profile) if row.profile is not None else None
            result.append((lead, profile))
        return result
