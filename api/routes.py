"""FastAPI routes for interview control and the candidate dashboard."""
from __future__ import annotations

import datetime as dt
import logging
from contextlib import contextmanager
from typing import Iterator, List

from fastapi import APIRouter, HTTPException, Request

from api.schemas import (
    AnswerReq,
    CandidateListResp,
    CandidateResp,
    CreateCandidateReq,
    InterviewResp,
    PauseResumeReq,
    ProviderCheckResp,
    StartReq,
    UpdateCandidateReq,
)
from candidate_management import CandidateDirectory
from interview_session.errors import EngineError, NotFoundError, PersistenceError, ValidationError
from interview_session.interview_session import InterviewEngine
from providers import ProviderAdapter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _engine(request: Request) -> InterviewEngine:
    return request.app.state.engine


def _directory(request: Request) -> CandidateDirectory:
    return request.app.state.directory


def _adapters(request: Request) -> List[ProviderAdapter]:
    return request.app.state.adapters


@contextmanager
def _engine_errors() -> Iterator[None]:
    try:
        yield
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Candidate not found") from exc
    except PersistenceError as exc:
        logger.exception("Storage failure")
        raise HTTPException(status_code=500, detail="Storage failure") from exc
    except EngineError as exc:  # pragma: no cover - every subclass is handled above
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/health")
def health() -> dict:
    return {"ok": True, "time": dt.datetime.now(dt.timezone.utc).isoformat()}


@router.post("/interview/start", response_model=InterviewResp)
def start_interview(req: StartReq, request: Request) -> InterviewResp:
    with _engine_errors():
        interview = _engine(request).start(req.candidate_id)
    return InterviewResp(interview=interview)


@router.post("/interview/answer", response_model=InterviewResp)
def submit_answer(req: AnswerReq, request: Request) -> InterviewResp:
    with _engine_errors():
        interview = _engine(request).submit_answer(
            req.candidate_id,
            req.question_index,
            req.answer,
            req.time_taken_sec,
        )
    return InterviewResp(interview=interview)


@router.post("/interview/pause-resume", response_model=InterviewResp)
def pause_resume(req: PauseResumeReq, request: Request) -> InterviewResp:
    with _engine_errors():
        interview = _engine(request).pause_resume(req.candidate_id, req.action)
    return InterviewResp(interview=interview)


@router.get("/interview/{candidate_id}", response_model=InterviewResp)
def get_interview(candidate_id: str, request: Request) -> InterviewResp:
    with _engine_errors():
        interview = _engine(request).get_interview(candidate_id)
    return InterviewResp(interview=interview)


@router.post("/candidates", response_model=CandidateResp, status_code=201)
def create_candidate(req: CreateCandidateReq, request: Request) -> CandidateResp:
    with _engine_errors():
        candidate = _directory(request).register_resume(
            req.resume_text,
            resume_url=req.resume_url,
            role=req.role,
        )
    return CandidateResp(candidate=candidate)


@router.get("/candidates", response_model=CandidateListResp)
def list_candidates(
    request: Request,
    q: str = "",
    sort: str = "-updated_at",
    page: int = 1,
    limit: int = 50,
) -> CandidateListResp:
    with _engine_errors():
        candidates, total = _directory(request).search(query=q, sort=sort, page=page, limit=limit)
    return CandidateListResp(candidates=candidates, total=total)


@router.get("/candidates/{candidate_id}", response_model=CandidateResp)
def get_candidate(candidate_id: str, request: Request) -> CandidateResp:
    with _engine_errors():
        candidate = _directory(request).get(candidate_id)
    return CandidateResp(candidate=candidate)


@router.put("/candidates/{candidate_id}", response_model=CandidateResp)
def update_candidate(candidate_id: str, req: UpdateCandidateReq, request: Request) -> CandidateResp:
    with _engine_errors():
        candidate = _directory(request).update_contact(
            candidate_id,
            name=req.name,
            email=req.email,
            phone=req.phone,
        )
    return CandidateResp(candidate=candidate)


@router.get("/providers/check", response_model=ProviderCheckResp)
def check_providers(request: Request) -> ProviderCheckResp:
    adapters = _adapters(request)
    statuses = [adapter.ping() for adapter in adapters]
    return ProviderCheckResp(mode="providers" if adapters else "heuristic", providers=statuses)
