from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import sessionmaker

from core.config_loader import AppConfig, OracleConfig
from core.llm.interfaces import RankingOracle
from core.llm.openai_service import OpenAIRankingOracle
from core.matcher.service import MatchingService
from core.recommendations.store import RecommendationStore
from database.database import make_session_factory
from database.sources import DatabaseInventorySource, DatabaseLeadSource


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Provides a single source of truth for service instantiation. No session
    is held here; every source and store call opens its own unit of work.
    """
    config: AppConfig
    session_factory: sessionmaker
    matching_service: MatchingService
    store: RecommendationStore
    oracle: Optional[RankingOracle] = None

    @classmethod
    def build(cls, config: AppConfig, session_factory: Optional[sessionmaker] = None) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            session_factory: Optional factory override (tests); defaults to config.database.url

        Returns:
            Fully wired AppContext instance
        """
        session_factory = session_factory or make_session_factory(config.database.url)

        # Oracle (optional - matching works without it)
        oracle = cls._build_oracle(config.oracle)

        matching_service = MatchingService(
            inventory=DatabaseInventorySource(session_factory),
            oracle=oracle,
            config=config.matching,
            lead_source=DatabaseLeadSource(session_factory),
        )

        return cls(
            config=config,
            session_factory=session_factory,
            matching_service=matching_service,
            store=RecommendationStore(session_factory),
            oracle=oracle,
        )

    @staticmethod
    def _build_oracle(oracle_config: OracleConfig) -> Optional[RankingOracle]:
        """Build the OpenAI ranking oracle, or None when disabled/unconfigured."""
        if not oracle_config.enabled:
            return None
        # OpenAI-compatible local servers accept any non-empty key
        if not oracle_config.api_key:
            return None

        return OpenAIRankingOracle(
            api_key=oracle_config.api_key,
            base_url=oracle_config.base_url,
            model=oracle_config.model,
            temperature=oracle_config.temperature,
            timeout_seconds=oracle_config.timeout_seconds,
            max_attempts=oracle_config.max_attempts,
        )
