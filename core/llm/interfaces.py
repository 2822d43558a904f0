"""
Ranking Oracle Interface - Abstract base for AI relevance providers.

This module defines the interface for oracle services (OpenAI, Ollama, etc.).
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class RankingOracle(ABC):
    """
    Abstract Interface for external relevance scoring services.
    """

    @abstractmethod
    def rank(
        self,
        requirement_summary: Dict[str, Any],
        candidate_summaries: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Score candidates for a buyer requirement.

        Args:
            requirement_summary: Plain-dict view of the buyer requirement
            candidate_summaries: Plain-dict views of the candidates, each with an 'id'

        Returns:
            Raw payload of the form {'matches': [{'property_id', 'ai_score', 'rationale'}]}.
            Entries may be omitted. Implementations raise on transport failure.
        """
        pass
