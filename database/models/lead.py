import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, Numeric, Index, JSON, func
from sqlalchemy.orm import relationship

from .base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class BuyerProfile(Base):
    """Explicit buyer requirements. When linked to a lead it overrides the lead's loose fields."""
    __tablename__ = 'buyer_profile'

    id = Column(Text, primary_key=True, default=_new_id)
    listing_type = Column(Text, nullable=True)
    budget_min = Column(Numeric(14, 2, asdecimal=False), nullable=True)
    budget_max = Column(Numeric(14, 2, asdecimal=False), nullable=True)
    locations = Column(JSON, nullable=True)
    property_types = Column(JSON, nullable=True)
    bedrooms_min = Column(Integer, nullable=True)
    bedrooms_max = Column(Integer, nullable=True)
    bathrooms_min = Column(Integer, nullable=True)
    area_min = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    area_max = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    desired_amenities = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    leads = relationship("Lead", back_populates="profile")


class Lead(Base):
    """A buyer/seller lead (opportunity) with loosely typed interest fields."""
    __tablename__ = 'lead'

    id = Column(Text, primary_key=True, default=_new_id)
    buyer_name = Column(Text, nullable=False, default='')
    lead_type = Column(Text, nullable=True)
    location = Column(Text, nullable=True)
    budget = Column(Numeric(14, 2, asdecimal=False), nullable=True)
    property_type_interest = Column(Text, nullable=True)
    message = Column(Text, nullable=True)
    profile_id = Column(Text, ForeignKey('buyer_profile.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    profile = relationship("BuyerProfile", back_populates="leads")

    __table_args__ = (
        Index('idx_lead_profile', 'profile_id'),
    )
