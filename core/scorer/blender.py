#!/usr/bin/env python3
"""
Relevance Blender - Averages deterministic scores with an external oracle.

The oracle only ever sees the top-N candidates by deterministic score. Any
oracle failure degrades to the deterministic scores; matching never fails
because of the oracle.
"""
from dataclasses import replace
from typing import List, Optional
import logging

from core.llm.interfaces import RankingOracle
from core.llm.schema_models import parse_oracle_response
from core.matcher.models import BuyerRequirement
from core.scorer.models import ScoredCandidate
from core.utils import clamp_score, round_half_up

logger = logging.getLogger(__name__)


def blended_value(deterministic_score: int, ai_score: float) -> int:
    return clamp_score(round_half_up((deterministic_score + ai_score) / 2))


def with_deterministic(scored: List[ScoredCandidate]) -> List[ScoredCandidate]:
    """Copy of the list with blended == deterministic and no oracle data."""
    return [
        replace(s, blended_score=s.deterministic_score, ai_score=None, rationale="")
        for s in scored
    ]


class RelevanceBlender:
    """Blend oracle opinions into the deterministic ranking."""

    def __init__(self, oracle: Optional[RankingOracle] = None, top_n: int = 5):
        self.oracle = oracle
        self.top_n = top_n
        self.last_used_oracle = False

    def blend(
        self,
        requirement: BuyerRequirement,
        scored: List[ScoredCandidate],
        use_oracle: bool = True
    ) -> List[ScoredCandidate]:
        """Return scored candidates, in input order, with blended_score set."""
        self.last_used_oracle = False
        baseline = with_deterministic(scored)

        if not scored or self.oracle is None or not use_oracle or self.top_n <= 0:
            return baseline
        if requirement.is_empty():
            logger.debug("Skipping oracle for empty requirement")
            return baseline

        # sorted() is stable, so ties keep scorer order
        shortlist = sorted(scored, key=lambda s: s.deterministic_score, reverse=True)[:self.top_n]

        try:
            raw = self.oracle.rank(
                requirement.summary(),
                [s.property.summary() for s in shortlist],
            )
            response = parse_oracle_response(raw)
        except Exception as e:
            logger.warning(f"Oracle unavailable, using deterministic scores: {e}")
            return baseline

        shortlisted_ids = {s.property.id for s in shortlist}
        opinions = {
            pid: match for pid, match in response.by_property().items()
            if pid in shortlisted_ids
        }
        self.last_used_oracle = True

        blended: List[ScoredCandidate] = []
        for s in baseline:
            match = opinions.get(s.property.id)
            if match is None:
                blended.append(s)
                continue
            blended.append(replace(
                s,
                blended_score=blended_value(s.deterministic_score, match.ai_score),
                ai_score=match.ai_score,
                rationale=match.rationale,
            ))

        logger.info(f"Oracle scored {len(opinions)}/{len(shortlist)} shortlisted candidates")
        return blended
