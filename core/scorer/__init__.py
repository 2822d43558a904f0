#!/usr/bin/env python3
"""
Scoring Module - Deterministic scoring, oracle blending and ranking.

Public API:
- CompatibilityScorer: weighted 0-100 score per candidate
- RelevanceBlender: averages deterministic scores with the ranking oracle
- rank: stable sort + truncation into MatchResult objects

Modules:

- models.py: Data structures (ScoreFactor, ScoredCandidate, MatchResult)
- budget.py: Tiered budget credit shared by both scoring tables
- compatibility.py: Profile table and table dispatch
- fallback.py: Table for requirements inferred from loose lead fields
- blender.py: Oracle blending with graceful degradation
- ranker.py: Final ordering
"""

from core.scorer.models import CompatibilityScore, MatchResult, ScoreFactor, ScoredCandidate
from core.scorer.compatibility import CompatibilityScorer
from core.scorer.blender import RelevanceBlender
from core.scorer.ranker import rank

__all__ = [
    'CompatibilityScorer', 'RelevanceBlender', 'rank',
    'CompatibilityScore', 'MatchResult', 'ScoreFactor', 'ScoredCandidate'
]
