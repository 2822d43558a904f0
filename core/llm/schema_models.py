"""
Pydantic models for the ranking oracle's structured output.

This module provides:
1. Type-safe validation of whatever the oracle sends back
2. Runtime JSON schema generation for OpenAI structured output

A response that does not validate is treated exactly like a failed call.
"""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.exceptions import OracleError


class OracleMatch(BaseModel):
    """Oracle opinion about a single candidate property."""
    model_config = ConfigDict(extra='forbid', strict=True)

    property_id: str = Field(description="Id of the candidate exactly as provided")
    ai_score: float = Field(ge=0, le=100, description="Relevance of the property for this buyer, 0-100")
    rationale: str = Field(description="One or two sentences explaining the score")


class OracleResponse(BaseModel):
    """Top-level oracle response. Candidates may be omitted."""
    model_config = ConfigDict(extra='forbid', strict=True)

    matches: List[OracleMatch] = Field(description="Scored candidates, any order")

    def by_property(self) -> Dict[str, OracleMatch]:
        """Index matches by property id. Later duplicates win."""
        return {m.property_id: m for m in self.matches}


# Generate OpenAI-compatible schema
RANKING_SCHEMA = {
    "name": "property_ranking_v1",
    "strict": True,
    "schema": OracleResponse.model_json_schema()
}


def parse_oracle_response(data: Any) -> OracleResponse:
    """Validate a raw oracle payload, raising OracleError when it does not conform."""
    if not isinstance(data, dict):
        raise OracleError(f"Oracle returned {type(data).__name__}, expected an object")
    try:
        return OracleResponse.model_validate(data)
    except ValidationError as e:
        raise OracleError(f"Oracle response failed validation: {e.error_count()} error(s)") from e
