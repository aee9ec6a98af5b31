from __future__ import annotations  # Wire the engine from configuration

from typing import Optional, Sequence

from agents.answer_scorer import AnswerScorer
from agents.question_generator import QuestionGenerator
from agents.summary_aggregator import SummaryAggregator
from config.providers import EngineConfig
from providers import ProviderAdapter
from storage.candidates import CandidateStore

from .interview_session import InterviewEngine


def build_engine(
    cfg: EngineConfig,
    adapters: Sequence[ProviderAdapter],
    *,
    store: Optional[CandidateStore] = None,
) -> InterviewEngine:  # One adapter list shared by the three orchestrators
    return InterviewEngine(
        store or CandidateStore(),
        generator=QuestionGenerator(adapters, default_role=cfg.default_role),
        scorer=AnswerScorer(adapters, batch_delay_s=cfg.batch_delay_s),
        summarizer=SummaryAggregator(adapters),
    )
