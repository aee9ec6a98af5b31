"""Final interview summary with provider fallback."""
from __future__ import annotations

import logging
from typing import Sequence

from agents.types import CandidateProfile, QAPair, SummaryResult, round_half_up
from observability import span
from providers import ProviderAdapter, ProviderError

logger = logging.getLogger(__name__)

RECOMMEND_THRESHOLD = 70
RECOMMENDED = "Recommended for next round"
NEEDS_IMPROVEMENT = "Needs improvement"


def heuristic_summary(profile: CandidateProfile, qa_pairs: Sequence[QAPair]) -> SummaryResult:
    """Average the scored answers and phrase a one-line verdict."""

    scores = [pair.score for pair in qa_pairs if pair.score is not None]
    final_score = round_half_up(sum(scores) / len(scores)) if scores else 0
    recommendation = RECOMMENDED if final_score >= RECOMMEND_THRESHOLD else NEEDS_IMPROVEMENT
    name = profile.name.strip() or "Candidate"
    return SummaryResult(
        final_score=final_score,
        summary=(
            f"{name} completed a technical interview with an average score of {final_score}%. "
            f"{recommendation}. This is an automated assessment based on question responses."
        ),
        hiring_recommendation=recommendation,
        method="heuristic",
    )


class SummaryAggregator:
    def __init__(self, adapters: Sequence[ProviderAdapter]) -> None:
        self._adapters = list(adapters)

    def generate_summary(self, profile: CandidateProfile, qa_pairs: Sequence[QAPair]) -> SummaryResult:
        for adapter in self._adapters:
            try:
                with span(f"summary.{adapter.name}"):
                    result = adapter.summarize(profile, qa_pairs)
            except ProviderError as exc:
                logger.warning("Summary failed provider=%s: %s", adapter.name, exc)
                continue
            logger.info("Summary generated provider=%s final_score=%d", adapter.name, result.final_score)
            return result
        logger.info("Using heuristic summary as fallback")
        return heuristic_summary(profile, qa_pairs)


__all__ = ["SummaryAggregator", "heuristic_summary", "RECOMMENDED", "NEEDS_IMPROVEMENT"]
