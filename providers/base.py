from __future__ import annotations  # Provider adapter contract shared by every vendor integration

import json
import logging
from abc import ABC, abstractmethod
from collections import Counter
from typing import Any, List, Optional, Sequence, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
    field_validator,
)

from agents.types import (
    DIFFICULTIES,
    QUESTION_COUNT,
    QUESTIONS_PER_DIFFICULTY,
    CandidateProfile,
    Difficulty,
    ProviderStatus,
    QAPair,
    QuestionSkeleton,
    ScoreResult,
    SummaryResult,
    round_half_up,
)
from config.providers import ProviderRoute
from llm_gateway import HttpClient, LlmGatewayError, parse_json_value

from . import prompts

logger = logging.getLogger(__name__)

Number = Union[StrictInt, StrictFloat]


def _in_range(value: float, field: str) -> float:
    if not 0 <= value <= 100:
        raise ValueError(f"Invalid {field}: {value}")
    return value


class ProviderError(RuntimeError):  # Any adapter failure: transport, auth, malformed or invalid reply
    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class _GeneratedQuestion(BaseModel):  # One generated item; legacy replies use "q"
    text: str = Field(validation_alias=AliasChoices("text", "q"), min_length=1)
    difficulty: Difficulty

    @field_validator("text")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("question text is blank")
        return value


class _ScoreReply(BaseModel):  # Scoring reply contract
    score: Number
    reason: str

    @field_validator("score")
    @classmethod
    def _score_in_range(cls, value: float) -> float:
        return _in_range(value, "score")

    @field_validator("reason")
    @classmethod
    def _reason_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("reason is blank")
        return value


class _SummaryReply(BaseModel):  # Summary reply contract; optional fields default when absent or blank
    finalScore: Number
    summary: str
    hiringRecommendation: Optional[Any] = None
    strengths: Optional[Any] = None
    areasForImprovement: Optional[Any] = None

    @field_validator("finalScore")
    @classmethod
    def _final_in_range(cls, value: float) -> float:
        return _in_range(value, "finalScore")

    @field_validator("summary")
    @classmethod
    def _summary_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("summary is blank")
        return value


def _text_or_default(value: Any, default: str) -> str:
    if value is None or value == "" or value == []:
        return default
    if isinstance(value, list):
        return "; ".join(str(item) for item in value)
    return str(value)


def validate_questions(raw: Any) -> List[QuestionSkeleton]:
    """Accept exactly six items with two of each difficulty, or raise ``ValueError``."""

    if not isinstance(raw, list) or len(raw) != QUESTION_COUNT:
        got = len(raw) if isinstance(raw, list) else type(raw).__name__
        raise ValueError(f"expected {QUESTION_COUNT} questions, got {got}")
    items = [_GeneratedQuestion.model_validate(entry) for entry in raw]
    counts = Counter(item.difficulty for item in items)
    if any(counts.get(level, 0) != QUESTIONS_PER_DIFFICULTY for level in DIFFICULTIES):
        raise ValueError(f"difficulty mix must be 2/2/2, got {dict(counts)}")
    return [QuestionSkeleton(text=item.text, difficulty=item.difficulty) for item in items]


class ProviderAdapter(ABC):
    """Base class for a text-generation vendor.

    Subclasses implement ``_complete`` (one prompt in, reply text out) for
    their wire format. Prompt templates and the JSON recovery policy live on
    the class so a vendor can override either.
    """

    generation_params = {"temperature": 0.7, "max_tokens": 1000}
    scoring_params = {"temperature": 0.1, "max_tokens": 300}
    summary_params = {"temperature": 0.2, "max_tokens": 500}

    def __init__(self, route: ProviderRoute, *, client: Optional[HttpClient] = None) -> None:
        self.route = route
        self.client = client

    @property
    def name(self) -> str:
        return self.route.name

    @abstractmethod
    def _complete(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        """Send one prompt and return the reply text; raise ``LlmGatewayError`` on failure."""

    def _recover(self, text: str, expect: type) -> Any:
        return parse_json_value(text, expect)

    def _ask(self, prompt: str, expect: type, params: dict) -> Any:
        try:
            text = self._complete(prompt, **params)
            logger.debug("Raw %s reply: %s", self.name, text[:500])
            return self._recover(text, expect)
        except LlmGatewayError as exc:
            raise ProviderError(self.name, str(exc)) from exc

    def generate(self, role: str) -> List[QuestionSkeleton]:
        raw = self._ask(prompts.generation_prompt(role), list, self.generation_params)
        try:
            return validate_questions(raw)
        except (ValidationError, ValueError) as exc:
            raise ProviderError(self.name, f"invalid questions: {exc}") from exc

    def score(self, question: str, answer: str, difficulty: str) -> ScoreResult:
        raw = self._ask(prompts.scoring_prompt(question, answer, difficulty), dict, self.scoring_params)
        try:
            reply = _ScoreReply.model_validate(raw)
        except ValidationError as exc:
            raise ProviderError(self.name, f"invalid score: {exc}") from exc
        value = max(0, min(100, round_half_up(reply.score)))
        return ScoreResult(score=value, reason=reply.reason, method=self.name)

    def summarize(self, profile: CandidateProfile, qa_pairs: Sequence[QAPair]) -> SummaryResult:
        prompt = prompts.summary_prompt(
            json.dumps(profile.model_dump(), indent=2),
            json.dumps([pair.model_dump() for pair in qa_pairs], indent=2),
        )
        raw = self._ask(prompt, dict, self.summary_params)
        try:
            reply = _SummaryReply.model_validate(raw)
        except ValidationError as exc:
            raise ProviderError(self.name, f"invalid summary: {exc}") from exc
        return SummaryResult(
            final_score=max(0, min(100, round_half_up(reply.finalScore))),
            summary=reply.summary,
            hiring_recommendation=_text_or_default(reply.hiringRecommendation, "Maybe"),
            strengths=_text_or_default(reply.strengths, "Not specified"),
            areas_for_improvement=_text_or_default(reply.areasForImprovement, "Not specified"),
            method=self.name,
        )

    def ping(self) -> ProviderStatus:
        """Send a tiny prompt to confirm the route is reachable; never raises."""

        try:
            self._complete("Hello", temperature=0.0, max_tokens=5)
        except LlmGatewayError as exc:
            return ProviderStatus(
                provider=self.name,
                ok=False,
                message=f"{self.name} connection failed: {exc}",
                model=self.route.model,
            )
        return ProviderStatus(
            provider=self.name,
            ok=True,
            message=f"{self.name} connection successful",
            model=self.route.model,
        )


__all__ = ["ProviderAdapter", "ProviderError", "validate_questions"]
