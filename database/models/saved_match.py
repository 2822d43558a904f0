import datetime
import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Integer, UniqueConstraint, Index

from .base import Base

STATUS_INTERESTED = 'interested'
STATUS_VISITED = 'visited'
STATUS_NEGOTIATING = 'negotiating'
STATUS_REJECTED = 'rejected'

SAVED_MATCH_STATUSES = (STATUS_INTERESTED, STATUS_VISITED, STATUS_NEGOTIATING, STATUS_REJECTED)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class SavedMatch(Base):
    """
    A property the user chose to keep for a lead.

    Independent of matching runs: re-running matching never touches these
    rows, and status only changes through explicit updates.
    """
    __tablename__ = 'saved_match'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    lead_id = Column(Text, nullable=False)
    property_id = Column(Text, nullable=False)

    property_title = Column(Text, nullable=False, default='')
    match_score = Column(Integer, nullable=True)
    status = Column(Text, nullable=False, default=STATUS_INTERESTED)

    added_date = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        UniqueConstraint('lead_id', 'property_id', name='uq_saved_match_lead_property'),
        Index('idx_saved_match_lead', 'lead_id'),
        Index('idx_saved_match_status', 'status'),
    )
