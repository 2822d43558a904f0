import logging
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import InventoryFetchError
from core.matcher.models import PropertyCandidate
from database.models import Property
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository):
    def list_candidates(self) -> List[PropertyCandidate]:
        """Snapshot the whole inventory. Listability is decided by the eligibility filter."""
        try:
            rows = self.db.execute(select(Property).order_by(Property.created_at, Property.id)).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read property inventory: {e}")
            raise InventoryFetchError(f"Inventory fetch failed: {e}") from e
        return [PropertyCandidate.from_record(row.to_record()) for row in rows]

    def get_candidate(self, property_id: str) -> Optional[PropertyCandidate]:
        row = self.get_by_id(Property, property_id)
        if row is None:
            return None
        return PropertyCandidate.from_record(row.to_record())
