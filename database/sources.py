import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.exceptions import InventoryFetchError
from core.matcher.models import BuyerProfile, LeadRecord, PropertyCandidate
from core.matcher.sources import InventorySource, LeadSource
from database.database import db_session_scope
from database.repositories.lead import LeadRepository
from database.repositories.property import PropertyRepository

logger = logging.getLogger(__name__)


class DatabaseInventorySource(InventorySource):
    """Reads each snapshot in its own short-lived session."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory

    def list_candidates(self) -> List[PropertyCandidate]:
        try:
            with db_session_scope(self.session_factory) as session:
                return PropertyRepository(session).list_candidates()
        except SQLAlchemyError as e:
            logger.error(f"Inventory session failed: {e}")
            raise InventoryFetchError(f"Inventory fetch failed: {e}") from e

    def get_candidate(self, property_id: str) -> Optional[PropertyCandidate]:
        with db_session_scope(self.session_factory) as session:
            return PropertyRepository(session).get_candidate(property_id)


class DatabaseLeadSource(LeadSource):
    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory

    def get_lead(self, lead_id: str) -> Optional[LeadRecord]:
        with db_session_scope(self.session_factory) as session:
            return LeadRepository(session).get_lead(lead_id)

    def get_linked_profile(self, lead: LeadRecord) -> Optional[BuyerProfile]:
        with db_session_scope(self.session_factory) as session:
            return LeadRepository(session).get_linked_profile(lead)

    def list_requirements(self) -> List[Tuple[LeadRecord, Optional[BuyerProfile]]]:
        with db_session_scope(self.session_factory) as session:
            return LeadRepository(session).list_requirements()
