"""State machine tests for the interview engine."""
from __future__ import annotations

import datetime as dt
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import List

import pytest

from agents.answer_scorer import AnswerScorer
from agents.question_bank import fallback_questions
from agents.question_generator import QuestionGenerator
from agents.summary_aggregator import SummaryAggregator
from agents.types import QuestionSkeleton
from config.providers import EngineConfig
from interview_session.errors import InterviewCompletedError, NotFoundError, ValidationError
from interview_session.factory import build_engine
from interview_session.interview_session import InterviewEngine
from storage.candidates import CandidateStore

FIXED_NOW = dt.datetime(2024, 5, 1, 12, 0, tzinfo=dt.timezone.utc)
ANSWER = "React renders components from state and props; the virtual DOM diff keeps updates cheap."


class CountingAdapter:
    name = "counting"

    def __init__(self) -> None:
        self.roles: List[str] = []

    def generate(self, role: str) -> List[QuestionSkeleton]:
        self.roles.append(role)
        return fallback_questions()


@pytest.fixture
def store() -> CandidateStore:
    return CandidateStore()


@pytest.fixture
def engine(store: CandidateStore) -> InterviewEngine:
    return build_engine(EngineConfig(), [], store=store)


@pytest.fixture
def candidate_id(store: CandidateStore) -> str:
    return store.create(name="Ada", email="ada@example.com", metadata={"role": "Backend"}).candidate_id


def _answer_all(engine: InterviewEngine, candidate_id: str, order=range(6)):
    interview = None
    for index in order:
        interview = engine.submit_answer(candidate_id, index, ANSWER, time_taken_sec=30)
    return interview


def test_start_attaches_six_questions(engine: InterviewEngine, candidate_id: str) -> None:
    interview = engine.start(candidate_id)
    assert interview.status == "ongoing"
    assert interview.current_question_index == 0
    assert interview.started_at is not None
    assert len(interview.questions) == 6
    assert Counter(q.difficulty for q in interview.questions) == {"easy": 2, "medium": 2, "hard": 2}
    assert all(q.score is None and q.answer == "" for q in interview.questions)
    assert [q.text for q in interview.questions] == [q.text for q in fallback_questions()]
    assert engine.get_interview(candidate_id).model_dump() == interview.model_dump()


def test_start_is_reentrant_and_uses_candidate_role(store: CandidateStore, candidate_id: str) -> None:
    adapter = CountingAdapter()
    engine = InterviewEngine(
        store,
        generator=QuestionGenerator([adapter]),
        scorer=AnswerScorer([]),
        summarizer=SummaryAggregator([]),
    )
    first = engine.start(candidate_id)
    engine.pause_resume(candidate_id, "pause")
    second = engine.start(candidate_id)

    assert adapter.roles == ["Backend"]
    assert second.status == "ongoing"
    assert [q.text for q in second.questions] == [q.text for q in first.questions]
    assert second.started_at == first.started_at


def test_pending_candidate_can_start(engine: InterviewEngine, store: CandidateStore) -> None:
    candidate = store.create(name="Pending")
    candidate.interview.status = "pending"
    store.save(candidate)
    assert engine.start(candidate.candidate_id).status == "ongoing"


def test_submit_scores_answer_and_advances(engine: InterviewEngine, candidate_id: str) -> None:
    engine.start(candidate_id)
    interview = engine.submit_answer(candidate_id, 0, ANSWER, time_taken_sec=42)
    question = interview.questions[0]
    assert question.answer == ANSWER
    assert question.score is not None and 0 <= question.score <= 100
    assert question.time_taken_sec == 42
    assert question.answered_at is not None
    assert interview.current_question_index == 1
    assert interview.status == "ongoing"


def test_empty_answer_scores_zero(engine: InterviewEngine, candidate_id: str) -> None:
    engine.start(candidate_id)
    interview = engine.submit_answer(candidate_id, 2, None)
    assert interview.questions[2].answer == ""
    assert interview.questions[2].score == 0
    assert interview.current_question_index == 3


def test_completes_after_sixth_scored_answer(engine: InterviewEngine, candidate_id: str) -> None:
    engine.start(candidate_id)
    interview = _answer_all(engine, candidate_id, order=range(5))
    assert interview.status == "ongoing"

    interview = engine.submit_answer(candidate_id, 5, ANSWER)
    scores = [q.score for q in interview.questions]
    assert interview.status == "completed"
    assert interview.completed_at is not None
    assert interview.final_score == int(sum(scores) / 6 + 0.5)
    assert interview.summary.startswith("Ada completed a technical interview")
    assert interview.hiring_recommendation in ("Recommended for next round", "Needs improvement")


def test_out_of_order_answers_complete(engine: InterviewEngine, candidate_id: str) -> None:
    engine.start(candidate_id)
    interview = _answer_all(engine, candidate_id, order=[5, 0, 3, 1, 4])
    assert interview.status == "ongoing"
    interview = engine.submit_answer(candidate_id, 2, ANSWER)
    assert interview.status == "completed"


def test_reanswering_does_not_complete_early(engine: InterviewEngine, candidate_id: str) -> None:
    engine.start(candidate_id)
    for _ in range(6):
        interview = engine.submit_answer(candidate_id, 0, ANSWER)
    assert interview.status == "ongoing"
    assert sum(1 for q in interview.questions if q.score is not None) == 1


def test_completed_interview_is_immutable(engine: InterviewEngine, candidate_id: str) -> None:
    engine.start(candidate_id)
    completed = _answer_all(engine, candidate_id)

    with pytest.raises(InterviewCompletedError, match="Interview already completed"):
        engine.submit_answer(candidate_id, 0, "new answer")
    with pytest.raises(InterviewCompletedError):
        engine.pause_resume(candidate_id, "pause")
    assert engine.start(candidate_id).model_dump() == completed.model_dump()
    assert engine.get_interview(candidate_id).model_dump() == completed.model_dump()


def test_pause_and_resume(engine: InterviewEngine, candidate_id: str) -> None:
    engine.start(candidate_id)
    assert engine.pause_resume(candidate_id, "pause").status == "paused"
    paused = engine.submit_answer(candidate_id, 1, ANSWER)
    assert paused.status == "paused"
    assert paused.questions[1].score is not None
    resumed = engine.pause_resume(candidate_id, "resume")
    assert resumed.status == "ongoing"
    assert [q.model_dump() for q in resumed.questions] == [q.model_dump() for q in paused.questions]
    with pytest.raises(ValidationError, match="Invalid request"):
        engine.pause_resume(candidate_id, "stop")


def test_submit_before_start_is_rejected(engine: InterviewEngine, candidate_id: str) -> None:
    with pytest.raises(ValidationError, match="Interview not initialized"):
        engine.submit_answer(candidate_id, 0, ANSWER)


@pytest.mark.parametrize("index", [-1, 6, 99])
def test_out_of_range_index_is_rejected(engine: InterviewEngine, candidate_id: str, index: int) -> None:
    engine.start(candidate_id)
    with pytest.raises(ValidationError, match="Invalid question index"):
        engine.submit_answer(candidate_id, index, ANSWER)
    assert all(q.score is None for q in engine.get_interview(candidate_id).questions)


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"question_index": "1"}, "candidate_id and question_index required"),
        ({"question_index": True}, "candidate_id and question_index required"),
        ({"question_index": 0, "time_taken_sec": -5}, "time_taken_sec must be a non-negative integer"),
        ({"question_index": 0, "answer": 42}, "answer must be a string"),
    ],
)
def test_malformed_input_is_rejected(engine: InterviewEngine, candidate_id: str, kwargs, message) -> None:
    engine.start(candidate_id)
    params = {"answer": ANSWER, **kwargs}
    with pytest.raises(ValidationError, match=message):
        engine.submit_answer(candidate_id, **params)


def test_unknown_or_blank_candidate(engine: InterviewEngine) -> None:
    with pytest.raises(NotFoundError):
        engine.start("does-not-exist")
    with pytest.raises(NotFoundError):
        engine.get_interview("does-not-exist")
    with pytest.raises(ValidationError, match="candidate_id required"):
        engine.start("  ")


def test_injected_clock_stamps_transitions(store: CandidateStore, candidate_id: str) -> None:
    engine = InterviewEngine(
        store,
        generator=QuestionGenerator([]),
        scorer=AnswerScorer([]),
        summarizer=SummaryAggregator([]),
        clock=lambda: FIXED_NOW,
    )
    engine.start(candidate_id)
    interview = _answer_all(engine, candidate_id)
    assert interview.started_at == FIXED_NOW
    assert interview.completed_at == FIXED_NOW
    assert interview.questions[0].answered_at == FIXED_NOW


def test_concurrent_submissions_are_serialized(engine: InterviewEngine, store: CandidateStore, candidate_id: str) -> None:
    engine.start(candidate_id)
    with ThreadPoolExecutor(max_workers=6) as pool:
        list(pool.map(lambda i: engine.submit_answer(candidate_id, i, ANSWER), range(6)))

    interview = engine.get_interview(candidate_id)
    assert interview.status == "completed"
    assert all(q.score is not None for q in interview.questions)
    assert store.get(candidate_id).version == 7
