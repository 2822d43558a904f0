from database.repositories.base import BaseRepository
from database.repositories.property import PropertyRepository
from database.repositories.lead import LeadRepository
from database.repositories.saved_match import SavedMatchRepository

__all__ = [
    'BaseRepository',
    'PropertyRepository',
    'LeadRepository',
    'SavedMatchRepository',
]
