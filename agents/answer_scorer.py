"""Answer scoring with provider fallback and a batch helper."""
from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Mapping, Sequence

from agents import heuristic_scorer
from agents.types import BatchScore, ScoreResult
from observability import span
from providers import ProviderAdapter, ProviderError

logger = logging.getLogger(__name__)


class AnswerScorer:
    """Score answers with the first adapter that succeeds, else the heuristic."""

    def __init__(
        self,
        adapters: Sequence[ProviderAdapter],
        *,
        batch_delay_s: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._adapters = list(adapters)
        self._batch_delay_s = batch_delay_s
        self._sleep = sleep

    @property
    def uses_network(self) -> bool:
        return bool(self._adapters)

    def score_answer(self, question: str, answer: str, difficulty: str = "easy") -> ScoreResult:
        clean_question = (question or "").strip()
        clean_answer = (answer or "").strip()
        difficulty = difficulty or "easy"
        for adapter in self._adapters:
            try:
                with span(f"score.{adapter.name}"):
                    result = adapter.score(clean_question, clean_answer, difficulty)
            except ProviderError as exc:
                logger.warning("Scoring failed provider=%s: %s", adapter.name, exc)
                continue
            logger.info("Scored answer provider=%s score=%d", adapter.name, result.score)
            return result
        result = heuristic_scorer.score(clean_answer, clean_question, difficulty)
        logger.info("Scored answer provider=heuristic score=%d", result.score)
        return result

    def score_many(self, pairs: Sequence[Mapping[str, str]]) -> List[BatchScore]:
        """Score ``{question, answer, difficulty}`` pairs one at a time.

        A failure on one pair is recorded with ``method="error"`` and a zero
        score; the rest of the batch still runs. When a network provider is
        configured, calls are spaced by ``batch_delay_s``.
        """

        results: List[BatchScore] = []
        total = len(pairs)
        for index, pair in enumerate(pairs):
            question, answer, difficulty = "", "", "easy"
            logger.info("Scoring answer %d/%d", index + 1, total)
            try:
                if not isinstance(pair, Mapping):
                    raise TypeError(f"expected an object, got {type(pair).__name__}")
                question = str(pair.get("question") or "")
                answer = str(pair.get("answer") or "")
                difficulty = str(pair.get("difficulty") or "easy")
                result = self.score_answer(question, answer, difficulty)
            except Exception as exc:  # noqa: BLE001
                logger.error("Error scoring answer %d: %s", index + 1, exc)
                results.append(
                    BatchScore(
                        question=question,
                        answer=answer,
                        difficulty=difficulty,
                        score=0,
                        reason=f"Scoring failed: {exc}",
                        method="error",
                    )
                )
                continue
            results.append(BatchScore(question=question, answer=answer, difficulty=difficulty, **result.model_dump()))
            if self.uses_network and index < total - 1:
                self._sleep(self._batch_delay_s)
        return results


def summarize_batch(results: Sequence[BatchScore]) -> Dict[str, int]:
    """Count batch results per scoring method."""

    counts: Dict[str, int] = {}
    for result in results:
        counts[result.method] = counts.get(result.method, 0) + 1
    return counts


__all__ = ["AnswerScorer", "summarize_batch"]
