from __future__ import annotations  # Candidate and interview aggregate models

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from agents.types import Difficulty

InterviewStatus = Literal["pending", "not-started", "ongoing", "paused", "completed"]

INITIAL_STATUSES = ("pending", "not-started")


class Question(BaseModel):  # One interview question with the candidate's answer
    text: str
    difficulty: Difficulty
    answer: str = ""
    score: Optional[int] = Field(default=None, ge=0, le=100)
    started_at: Optional[datetime] = None
    answered_at: Optional[datetime] = None
    time_taken_sec: Optional[int] = Field(default=None, ge=0)


class Interview(BaseModel):  # Interview state embedded in a candidate
    status: InterviewStatus = "not-started"
    current_question_index: int = Field(default=0, ge=0)
    questions: List[Question] = Field(default_factory=list)
    final_score: Optional[int] = Field(default=None, ge=0, le=100)
    summary: str = ""
    hiring_recommendation: str = ""
    strengths: str = ""
    areas_for_improvement: str = ""
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    def all_scored(self) -> bool:
        return bool(self.questions) and all(question.score is not None for question in self.questions)


class Candidate(BaseModel):  # Candidate aggregate: contact fields plus exactly one interview
    candidate_id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    resume_url: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)
    interview: Interview = Field(default_factory=Interview)
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
