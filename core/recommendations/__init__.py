"""Recommendations Module - Persisted, user-curated saved matches."""
from core.recommendations.store import RecommendationStore, SavedMatchMeta, SavedMatchRecord

__all__ = ['RecommendationStore', 'SavedMatchMeta', 'SavedMatchRecord']
