from .base import Base
from .property import Property
from .lead import Lead, BuyerProfile
from .saved_match import SavedMatch, SAVED_MATCH_STATUSES, STATUS_INTERESTED

__all__ = [
    'Base',
    'Property',
    'Lead',
    'BuyerProfile',
    'SavedMatch',
    'SAVED_MATCH_STATUSES',
    'STATUS_INTERESTED',
]
