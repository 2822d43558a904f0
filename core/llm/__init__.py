"""LLM Module - Ranking oracle services and interfaces."""
from core.llm.interfaces import RankingOracle
from core.llm.openai_service import OpenAIRankingOracle

__all__ = ['RankingOracle', 'OpenAIRankingOracle']
