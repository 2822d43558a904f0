import yaml
import os
from typing import Optional
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///matching.db"


class OracleConfig(BaseModel):
    """Configuration for the AI ranking oracle (OpenAI-compatible endpoint)."""
    enabled: bool = True
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.0
    # Per-request timeout; the whole call (retries included) is bounded by
    # timeout_seconds * max_attempts.
    timeout_seconds: float = 20.0
    max_attempts: int = 2


class EligibilityTolerances(BaseModel):
    """Hard-filter tolerance multipliers."""
    budget_max: float = 1.10
    budget_min: float = 0.80
    area_min: float = 0.90


class ProfileWeights(BaseModel):
    """Factor weights for requirements coming from an explicit buyer profile."""
    location: float = 30
    budget: float = 40
    property_type: float = 15
    bedrooms: float = 10
    area: float = 5


class FallbackWeights(BaseModel):
    """Factor weights for requirements inferred from loose lead fields."""
    location: float = 30
    budget: float = 40
    property_type: float = 20
    listing_type: float = 10


class BudgetBands(BaseModel):
    """Three-tier budget credit for the profile table."""
    near_lower: float = 0.9
    near_upper: float = 1.1
    near_credit: float = 0.75
    outer_upper: float = 1.2
    outer_credit: float = 0.375


class FallbackBudgetBands(BaseModel):
    """Wider budget bands for inferred requirements (points are absolute)."""
    full_lower: float = 0.7
    full_upper: float = 1.1
    partial_lower: float = 0.5
    partial_upper: float = 1.2
    partial_points: float = 25
    outer_upper: float = 1.5
    outer_points: float = 10


class MatchingConfig(BaseModel):
    """
    Top-level matching configuration.
    """
    # Result budget returned to the caller
    top_k: int = 10
    # Only the first N deterministic results are sent to the oracle
    oracle_top_n: int = 5

    tolerances: EligibilityTolerances = Field(default_factory=EligibilityTolerances)
    profile_weights: ProfileWeights = Field(default_factory=ProfileWeights)
    fallback_weights: FallbackWeights = Field(default_factory=FallbackWeights)
    budget_bands: BudgetBands = Field(default_factory=BudgetBands)
    fallback_budget_bands: FallbackBudgetBands = Field(default_factory=FallbackBudgetBands)

    # Reverse matching (new property -> leads) threshold
    reverse_match_min_score: int = 50


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    oracle: OracleConfig = Field(default_factory=OracleConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    log_level: str = "INFO"


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from root), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if not data.get('database'):
            data['database'] = {}
        data['database']['url'] = env_db_url

    # Allow env var override for oracle endpoint and key
    env_oracle_base_url = os.environ.get("ORACLE_LLM_BASE_URL")
    if env_oracle_base_url:
        if not data.get('oracle'):
            data['oracle'] = {}
        data['oracle']['base_url'] = env_oracle_base_url

    env_api_key = os.environ.get("OPENAI_API_KEY")
    if env_api_key:
        if not data.get('oracle'):
            data['oracle'] = {}
        if not data['oracle'].get('api_key'):
            data['oracle']['api_key'] = env_api_key

    return AppConfig(**data)
