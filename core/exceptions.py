#!/usr/bin/env python3
"""
Custom exceptions for the matching engine.
"""


class MatchingError(Exception):
    """Base exception for matching engine errors."""
    pass


class InventoryFetchError(MatchingError):
    """Raised when the inventory snapshot cannot be read. Fatal to a run."""
    pass


class LeadNotFoundError(MatchingError):
    """Raised when a lead id does not resolve to a lead record."""
    pass


class OracleError(MatchingError):
    """Raised by a ranking oracle on a failed or non-conforming call.

    Never escapes the relevance blender.
    """
    pass


class RecommendationStoreError(MatchingError):
    """Raised when a saved-match write or read fails."""
    pass


class SavedMatchNotFoundError(MatchingError):
    """Raised when a status update targets a saved match that does not exist."""
    pass
