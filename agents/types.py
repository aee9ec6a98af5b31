"""Shared type definitions for agents."""
import math
from typing import Literal, Optional

from pydantic import BaseModel, Field

Difficulty = Literal["easy", "medium", "hard"]

DIFFICULTIES = ("easy", "medium", "hard")
QUESTIONS_PER_DIFFICULTY = 2
QUESTION_COUNT = QUESTIONS_PER_DIFFICULTY * len(DIFFICULTIES)


class QuestionSkeleton(BaseModel):
    text: str = Field(min_length=1)
    difficulty: Difficulty


class ScoreResult(BaseModel):
    score: int = Field(ge=0, le=100)
    reason: str
    method: str


class SummaryResult(BaseModel):
    final_score: int = Field(ge=0, le=100)
    summary: str
    hiring_recommendation: str = "Maybe"
    strengths: str = "Not specified"
    areas_for_improvement: str = "Not specified"
    method: str = "heuristic"


class QAPair(BaseModel):
    question: str
    answer: str = ""
    score: Optional[int] = None
    difficulty: Difficulty


class CandidateProfile(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class ProviderStatus(BaseModel):
    provider: str
    ok: bool
    message: str
    model: Optional[str] = None


class BatchScore(BaseModel):
    question: str
    answer: str = ""
    difficulty: str = "easy"
    score: int = 0
    reason: str = ""
    method: str = "heuristic"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return int(math.floor(value + 0.5))
