import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Integer, Numeric, Index, JSON, func

from .base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Property(Base):
    """
    A listing in the brokerage inventory.

    Optional fields (bedrooms, bathrooms, areas, amenities) are nullable;
    the matching engine treats null as unknown.
    """
    __tablename__ = 'property'

    id = Column(Text, primary_key=True, default=_new_id)
    title = Column(Text, nullable=False, default='')
    description = Column(Text, nullable=True)

    listing_type = Column(Text, nullable=True)
    property_type = Column(Text, nullable=True)
    price = Column(Numeric(14, 2, asdecimal=False), nullable=True)

    city = Column(Text, nullable=True)
    state = Column(Text, nullable=True)
    address = Column(Text, nullable=True)

    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    useful_area = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    square_feet = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    amenities = Column(JSON, nullable=True)

    status = Column(Text, default='active')
    availability = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_property_status', 'status'),
        Index('idx_property_city', 'city'),
    )

    def to_record(self) -> dict:
        """Loose dict view consumed by PropertyCandidate.from_record."""
        return {
            'id': self.id,
            'title': self.title,
            'listing_type': self.listing_type,
            'property_type': self.property_type,
            'price': self.price,
            'city': self.city,
            'state': self.state,
            'address': self.address,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'useful_area': self.useful_area,
            'square_feet': self.square_feet,
            'amenities': self.amenities,
            'status': self.status,
            'availability': self.availability,
        }
