#!/usr/bin/env python3
"""
Ranker - Final ordering and truncation of blended results.
"""
from typing import List, Optional

from core.scorer.models import MatchResult, ScoredCandidate


def rank(scored: List[ScoredCandidate], top_k: Optional[int] = None) -> List[MatchResult]:
    """Stable sort on blended score (descending), keep the first top_k, assign 1-based ranks.

    Ties keep their incoming order. A candidate without a blended score ranks
    on its deterministic score. top_k=None keeps everything.
    """
    ordered = sorted(scored, key=_blended, reverse=True)
    if top_k is not None:
        ordered = ordered[:max(top_k, 0)]

    return [
        MatchResult(
            property=s.property,
            deterministic_score=s.deterministic_score,
            score_breakdown=s.score_breakdown,
            blended_score=_blended(s),
            rank=position,
            ai_score=s.ai_score,
            rationale=s.rationale,
        )
        for position, s in enumerate(ordered, start=1)
    ]


def _blended(s: ScoredCandidate) -> int:
    return s.deterministic_score if s.blended_score is None else s.blended_score
