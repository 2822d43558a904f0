#!/usr/bin/env python3
"""
Recommendation Store - Keyed upsert/delete of saved matches.

Saved matches live independently of matching runs: a run never creates,
updates or deletes them, and a saved property that later stops matching
keeps its record until it is explicitly removed.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.exceptions import RecommendationStoreError, SavedMatchNotFoundError
from core.scorer.models import MatchResult
from database.models import SAVED_MATCH_STATUSES, SavedMatch
from database.uow import recommendation_uow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedMatchMeta:
    """Caller-supplied details stored alongside the key."""
    property_title: str = ""
    match_score: Optional[int] = None


@dataclass(frozen=True)
class SavedMatchRecord:
    """Detached snapshot of a saved_match row."""
    lead_id: str
    property_id: str
    property_title: str
    status: str
    match_score: Optional[int]
    added_date: Optional[datetime]

    @classmethod
    def from_row(cls, row: SavedMatch) -> "SavedMatchRecord":
        return cls(
            lead_id=row.lead_id,
            property_id=row.property_id,
            property_title=row.property_title or "",
            status=row.status,
            match_score=row.match_score,
            added_date=row.added_date,
        )


class RecommendationStore:
    """
    Saved-match persistence with idempotent save and remove.

    Every call runs in its own unit of work. Storage failures surface as
    RecommendationStoreError so the caller can decide whether to retry.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory

    def save(
        self,
        lead_id: str,
        property_id: str,
        meta: Optional[SavedMatchMeta] = None
    ) -> SavedMatchRecord:
        """Save (lead, property). An existing record is returned unchanged."""
        meta = meta or SavedMatchMeta()
        try:
            with recommendation_uow(self.session_factory) as repo:
                existing = repo.get(lead_id, property_id)
                if existing is not None:
                    logger.debug(f"Saved match ({lead_id}, {property_id}) already exists")
                    return SavedMatchRecord.from_row(existing)

                row = repo.add(lead_id, property_id, meta.property_title, meta.match_score)
                record = SavedMatchRecord.from_row(row)
            logger.info(f"Saved property {property_id} for lead {lead_id}")
            return record
        except IntegrityError:
            # A concurrent save for the same key won the insert
            return self._get_existing(lead_id, property_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to save match ({lead_id}, {property_id}): {e}")
            raise RecommendationStoreError(f"Failed to save match: {e}") from e

    def remove(self, lead_id: str, property_id: str) -> None:
        """Delete (lead, property). Missing records are a no-op."""
        try:
            with recommendation_uow(self.session_factory) as repo:
                deleted = repo.delete(lead_id, property_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to remove match ({lead_id}, {property_id}): {e}")
            raise RecommendationStoreError(f"Failed to remove match: {e}") from e

        if deleted:
            logger.info(f"Removed property {property_id} from lead {lead_id}")

    def update_status(self, lead_id: str, property_id: str, status: str) -> SavedMatchRecord:
        """Externally driven status transition (interested/visited/negotiating/rejected)."""
        if status not in SAVED_MATCH_STATUSES:
            raise ValueError(f"Invalid saved match status '{status}'. Expected one of {SAVED_MATCH_STATUSES}")

        try:
            with recommendation_uow(self.session_factory) as repo:
                row = repo.get(lead_id, property_id)
                if row is None:
                    raise SavedMatchNotFoundError(f"No saved match for lead {lead_id} and property {property_id}")
                row.status = status
                repo.db.flush()
                return SavedMatchRecord.from_row(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update status for ({lead_id}, {property_id}): {e}")
            raise RecommendationStoreError(f"Failed to update status: {e}") from e

    def list_for_lead(self, lead_id: str) -> List[SavedMatchRecord]:
        try:
            with recommendation_uow(self.session_factory) as repo:
                return [SavedMatchRecord.from_row(row) for row in repo.list_for_lead(lead_id)]
        except SQLAlchemyError as e:
            raise RecommendationStoreError(f"Failed to list saved matches: {e}") from e

    def save_selected(
        self,
        lead_id: str,
        results: Iterable[MatchResult],
        selected_ids: Iterable[str]
    ) -> List[SavedMatchRecord]:
        """Persist the caller-selected subset of a run's results, in result order."""
        selected = set(selected_ids)
        saved = []
        for result in results:
            if result.property.id not in selected:
                continue
            meta = SavedMatchMeta(property_title=result.property.title, match_score=result.blended_score)
            saved.append(self.save(lead_id, result.property.id, meta))
        return saved

    def _get_existing(self, lead_id: str, property_id: str) -> SavedMatchRecord:
        try:
            with recommendation_uow(self.session_factory) as repo:
                row = repo.get(lead_id, property_id)
                if row is None:
                    raise RecommendationStoreError(
                        f"Save for ({lead_id}, {property_id}) conflicted but no record exists"
                    )
                return SavedMatchRecord.from_row(row)
        except SQLAlchemyError as e:
            raise RecommendationStoreError(f"Failed to read saved match: {e}") from e
