"""
Source Interfaces - Boundaries to the inventory and lead stores.

The matching service only depends on these; database/sources.py provides the
SQLAlchemy-backed implementations.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from core.matcher.models import BuyerProfile, LeadRecord, PropertyCandidate


class InventorySource(ABC):
    """Supplies one inventory snapshot per matching run."""

    @abstractmethod
    def list_candidates(self) -> List[PropertyCandidate]:
        """Return the full inventory. Raise InventoryFetchError when it cannot be read."""
        pass

    @abstractmethod
    def get_candidate(self, property_id: str) -> Optional[PropertyCandidate]:
        """Return one property, listable or not, for reverse matching."""
        pass


class LeadSource(ABC):
    """Supplies the lead record and its linked buyer profile."""

    @abstractmethod
    def get_lead(self, lead_id: str) -> Optional[LeadRecord]:
        pass

    @abstractmethod
    def get_linked_profile(self, lead: LeadRecord) -> Optional[BuyerProfile]:
        pass

    @abstractmethod
    def list_requirements(self) -> List[Tuple[LeadRecord, Optional[BuyerProfile]]]:
        """Every lead paired with its linked profile (or None)."""
        pass
