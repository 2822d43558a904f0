import logging
from typing import List, Optional
from sqlalchemy import select

from database.models import SavedMatch, STATUS_INTERESTED
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class SavedMatchRepository(BaseRepository):
    def get(self, lead_id: str, property_id: str) -> Optional[SavedMatch]:
        stmt = select(SavedMatch).where(
            SavedMatch.lead_id == lead_id,
            SavedMatch.property_id == property_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_lead(self, lead_id: str) -> List[SavedMatch]:
        stmt = select(SavedMatch).where(
            SavedMatch.lead_id == lead_id
        ).order_by(SavedMatch.added_date, SavedMatch.id)
        return list(self.db.execute(stmt).scalars().all())

    def add(
        self,
        lead_id: str,
        property_id: str,
        property_title: str = '',
        match_score: Optional[int] = None
    ) -> SavedMatch:
        """Insert a new row and flush so unique-constraint violations surface here."""
        row = SavedMatch(
            lead_id=lead_id,
            property_id=property_id,
            property_title=property_title or '',
            match_score=match_score,
            status=STATUS_INTERESTED,
        )
        self.db.add(row)
        self.db.flush()
        return row

    def delete(self, lead_id: str, property_id: str) -> bool:
        row = self.get(lead_id, property_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True
