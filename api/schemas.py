"""Pydantic schemas for the interview HTTP API."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from agents.types import ProviderStatus
from interview_session.models import Candidate, Interview


class StartReq(BaseModel):
    candidate_id: str


class AnswerReq(BaseModel):
    candidate_id: str
    question_index: int
    answer: Optional[str] = ""
    time_taken_sec: Optional[int] = None


class PauseResumeReq(BaseModel):
    candidate_id: str
    action: Literal["pause", "resume"]


class InterviewResp(BaseModel):
    interview: Interview


class CreateCandidateReq(BaseModel):
    resume_text: str
    resume_url: str = ""
    role: Optional[str] = None


class UpdateCandidateReq(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class CandidateResp(BaseModel):
    candidate: Candidate


class CandidateListResp(BaseModel):
    candidates: List[Candidate] = Field(default_factory=list)
    total: int = 0


class ProviderCheckResp(BaseModel):
    mode: Literal["providers", "heuristic"]
    providers: List[ProviderStatus] = Field(default_factory=list)
