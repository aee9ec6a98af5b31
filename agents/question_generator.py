"""Question generation with provider fallback."""
from __future__ import annotations

import logging
from typing import List, Sequence

from agents.question_bank import fallback_questions
from agents.types import QuestionSkeleton
from observability import span
from providers import ProviderAdapter, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "Full Stack (React/Node) developer"


class QuestionGenerator:
    """Try each adapter in order; the first valid six-question set wins.

    When every adapter fails, or none is configured, the static question bank
    is returned, so ``generate_questions`` never raises.
    """

    def __init__(self, adapters: Sequence[ProviderAdapter], *, default_role: str = DEFAULT_ROLE) -> None:
        self._adapters = list(adapters)
        self._default_role = default_role

    def generate_questions(self, role: str = "") -> List[QuestionSkeleton]:
        role = (role or "").strip() or self._default_role
        for adapter in self._adapters:
            try:
                with span(f"generate.{adapter.name}"):
                    questions = adapter.generate(role)
            except ProviderError as exc:
                logger.warning("Question generation failed provider=%s: %s", adapter.name, exc)
                continue
            logger.info("Questions generated provider=%s count=%d", adapter.name, len(questions))
            return questions
        logger.info("Using fallback questions role=%s", role)
        return fallback_questions()


__all__ = ["QuestionGenerator", "DEFAULT_ROLE"]
