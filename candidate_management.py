from __future__ import annotations  # Candidate intake and directory helpers

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from interview_session.errors import ValidationError
from interview_session.models import Candidate
from resume_fields import extract_fields
from storage.candidates import CandidateStore

logger = logging.getLogger(__name__)

FieldExtractor = Callable[[str], Dict[str, str]]


class CandidateDirectory:  # Create candidates from resumes and serve the dashboard listing
    def __init__(self, store: CandidateStore, *, extractor: FieldExtractor = extract_fields) -> None:
        self._store = store
        self._extractor = extractor

    def register_resume(
        self,
        resume_text: str,
        *,
        resume_url: str = "",
        role: Optional[str] = None,
    ) -> Candidate:  # Extract contact fields and persist a candidate with a not-started interview
        if not resume_text or not resume_text.strip():
            raise ValidationError("No resume text provided")
        parsed: Dict[str, Any] = dict(self._extractor(resume_text))
        if role:
            parsed["role"] = role
        candidate = self._store.create(
            name=parsed.get("name") or "",
            email=parsed.get("email") or "",
            phone=parsed.get("phone") or "",
            resume_url=resume_url,
            metadata=parsed,
        )
        logger.info("Candidate created successfully: %s", candidate.candidate_id)
        return candidate

    def search(
        self,
        *,
        query: str = "",
        sort: str = "-updated_at",
        page: int = 1,
        limit: int = 50,
    ) -> Tuple[List[Candidate], int]:  # Search by name/email/phone with paging
        return self._store.list(query=query, sort=sort, page=page, limit=limit)

    def get(self, candidate_id: str) -> Candidate:  # Full candidate detail
        return self._store.get(candidate_id)

    def update_contact(
        self,
        candidate_id: str,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Candidate:  # Administrative correction of extracted contact fields
        return self._store.update_contact(candidate_id, name=name, email=email, phone=phone)


__all__ = ["CandidateDirectory"]
