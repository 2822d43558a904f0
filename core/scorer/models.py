#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import List, Optional
from dataclasses import dataclass, field

from core.matcher.models import PropertyCandidate


@dataclass(frozen=True)
class ScoreFactor:
    """Points one factor contributed, out of its weight."""
    factor: str
    points: int
    max_points: int = 0


@dataclass
class CompatibilityScore:
    """Deterministic score (0-100) with per-factor breakdown."""
    score: int
    breakdown: List[ScoreFactor] = field(default_factory=list)
    table: str = "profile"


@dataclass
class ScoredCandidate:
    """Intermediate result between the scorer and the ranker."""
    property: PropertyCandidate
    deterministic_score: int
    score_breakdown: List[ScoreFactor] = field(default_factory=list)
    blended_score: Optional[int] = None
    ai_score: Optional[float] = None
    rationale: str = ""


@dataclass
class MatchResult:
    """Complete ranked match result. Created fresh per run, never persisted as-is."""
    property: PropertyCandidate
    deterministic_score: int
    score_breakdown: List[ScoreFactor]
    blended_score: int
    rank: int
    ai_score: Optional[float] = None
    rationale: str = ""

    @property
    def compatibility_level(self) -> str:
        if self.blended_score >= 90:
            return 'excellent'
        if self.blended_score >= 75:
            return 'good'
        return 'moderate'
