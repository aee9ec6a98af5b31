"""Interview lifecycle state machine.

The engine owns the transitions of one candidate's interview:

* ``start`` moves a not-started (or paused) interview to ``ongoing`` and
  attaches six generated questions the first time.
* ``submit_answer`` stores and scores one answer. When every question holds a
  score the interview completes and the summary is attached, whatever order
  the answers arrived in.
* ``pause_resume`` toggles between ``paused`` and ``ongoing``.

A completed interview is never changed again through the engine. Every
operation runs under the candidate store's per-candidate lock and saves with
an optimistic version check, so two operations for the same candidate never
interleave. The engine itself keeps no state between calls.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Callable, Optional

from agents.answer_scorer import AnswerScorer
from agents.question_generator import QuestionGenerator
from agents.summary_aggregator import SummaryAggregator
from agents.types import QUESTION_COUNT, CandidateProfile, QAPair
from observability import log_event
from storage.candidates import CandidateStore

from .errors import InterviewCompletedError, ValidationError
from .models import Candidate, Interview, Question

logger = logging.getLogger(__name__)

PAUSE_ACTIONS = ("pause", "resume")


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _require_candidate_id(candidate_id: object) -> str:
    if not isinstance(candidate_id, str) or not candidate_id.strip():
        raise ValidationError("candidate_id required")
    return candidate_id.strip()


class InterviewEngine:
    def __init__(
        self,
        store: CandidateStore,
        *,
        generator: QuestionGenerator,
        scorer: AnswerScorer,
        summarizer: SummaryAggregator,
        clock: Callable[[], dt.datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._generator = generator
        self._scorer = scorer
        self._summarizer = summarizer
        self._clock = clock

    def get_interview(self, candidate_id: str) -> Interview:
        candidate_id = _require_candidate_id(candidate_id)
        return self._store.get(candidate_id).interview

    def start(self, candidate_id: str) -> Interview:
        """Begin (or re-enter) the interview; questions are generated only once."""

        candidate_id = _require_candidate_id(candidate_id)
        with self._store.locked(candidate_id):
            candidate = self._store.get(candidate_id)
            interview = candidate.interview
            if interview.is_completed:
                logger.info("Start ignored for completed interview candidate=%s", candidate_id)
                return interview

            now = self._clock()
            if len(interview.questions) == QUESTION_COUNT:
                interview.status = "ongoing"
                interview.started_at = interview.started_at or now
                reused = True
            else:
                skeletons = self._generator.generate_questions(self._role_for(candidate))
                interview.questions = [
                    Question(text=item.text, difficulty=item.difficulty) for item in skeletons
                ]
                interview.status = "ongoing"
                interview.current_question_index = 0
                interview.started_at = now
                reused = False

            saved = self._store.save(candidate)
        log_event("interview.start", candidate_id, status=saved.interview.status, reused=reused)
        return saved.interview

    def submit_answer(
        self,
        candidate_id: str,
        question_index: int,
        answer: Optional[str],
        time_taken_sec: Optional[int] = None,
    ) -> Interview:
        """Store and score one answer, completing the interview once all are scored."""

        candidate_id = _require_candidate_id(candidate_id)
        if isinstance(question_index, bool) or not isinstance(question_index, int):
            raise ValidationError("candidate_id and question_index required")
        if time_taken_sec is not None and (
            isinstance(time_taken_sec, bool) or not isinstance(time_taken_sec, int) or time_taken_sec < 0
        ):
            raise ValidationError("time_taken_sec must be a non-negative integer")
        if answer is not None and not isinstance(answer, str):
            raise ValidationError("answer must be a string")

        with self._store.locked(candidate_id):
            candidate = self._store.get(candidate_id)
            interview = candidate.interview
            if interview.is_completed:
                raise InterviewCompletedError("Interview already completed")
            if not interview.questions:
                raise ValidationError("Interview not initialized")
            if not 0 <= question_index < len(interview.questions):
                raise ValidationError("Invalid question index")

            question = interview.questions[question_index]
            question.answer = answer or ""
            question.answered_at = self._clock()
            if time_taken_sec is not None:
                question.time_taken_sec = time_taken_sec

            result = self._scorer.score_answer(question.text, question.answer, question.difficulty)
            question.score = result.score
            interview.current_question_index = min(len(interview.questions), question_index + 1)

            completed = interview.all_scored()
            if completed:
                self._complete(candidate)

            saved = self._store.save(candidate)
        log_event(
            "interview.answer",
            candidate_id,
            question_index=question_index,
            score=result.score,
            method=result.method,
        )
        if completed:
            log_event(
                "interview.completed",
                candidate_id,
                status=saved.interview.status,
                final_score=saved.interview.final_score,
            )
        return saved.interview

    def pause_resume(self, candidate_id: str, action: str) -> Interview:
        """Force ``paused`` or ``ongoing`` on a non-completed interview."""

        candidate_id = _require_candidate_id(candidate_id)
        if action not in PAUSE_ACTIONS:
            raise ValidationError("Invalid request")
        with self._store.locked(candidate_id):
            candidate = self._store.get(candidate_id)
            if candidate.interview.is_completed:
                raise InterviewCompletedError("Interview already completed")
            candidate.interview.status = "paused" if action == "pause" else "ongoing"
            saved = self._store.save(candidate)
        log_event(f"interview.{action}", candidate_id, status=saved.interview.status)
        return saved.interview

    def _complete(self, candidate: Candidate) -> None:
        interview = candidate.interview
        interview.status = "completed"
        interview.completed_at = self._clock()
        profile = CandidateProfile(name=candidate.name, email=candidate.email, phone=candidate.phone)
        qa_pairs = [
            QAPair(question=q.text, answer=q.answer, score=q.score, difficulty=q.difficulty)
            for q in interview.questions
        ]
        summary = self._summarizer.generate_summary(profile, qa_pairs)
        interview.final_score = summary.final_score
        interview.summary = summary.summary
        interview.hiring_recommendation = summary.hiring_recommendation
        interview.strengths = summary.strengths
        interview.areas_for_improvement = summary.areas_for_improvement
        logger.info(
            "Interview completed candidate=%s final_score=%d method=%s",
            candidate.candidate_id,
            summary.final_score,
            summary.method,
        )

    @staticmethod
    def _role_for(candidate: Candidate) -> str:
        role = candidate.metadata.get("role") if candidate.metadata else None
        return role if isinstance(role, str) else ""


__all__ = ["InterviewEngine", "PAUSE_ACTIONS"]
