"""Persistence helpers for candidate aggregates."""
from __future__ import annotations

import datetime as dt
import json
import sqlite3
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from config.settings import settings
from interview_session.errors import NotFoundError, PersistenceError, ValidationError
from interview_session.models import Candidate, Interview

from .migrate import migrate
from .sqlite import get_conn

SORTABLE_COLUMNS = ("created_at", "updated_at", "final_score", "name")
MAX_PAGE_SIZE = 200


class _LockEntry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


# Entries live only while some caller holds or waits on them.
_LOCKS: Dict[Tuple[str, str], _LockEntry] = {}
_LOCKS_GUARD = threading.Lock()

_COLUMNS = (
    "candidate_id, name, email, phone, resume_url, metadata, interview, version, created_at, updated_at"
)


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _row_to_candidate(row: sqlite3.Row) -> Candidate:
    return Candidate(
        candidate_id=row["candidate_id"],
        name=row["name"],
        email=row["email"],
        phone=row["phone"],
        resume_url=row["resume_url"],
        metadata=json.loads(row["metadata"] or "{}"),
        interview=Interview.model_validate_json(row["interview"]),
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _order_clause(sort: str) -> str:
    descending = sort.startswith("-")
    column = sort.lstrip("-")
    if column not in SORTABLE_COLUMNS:
        raise ValidationError(f"Unsupported sort field: {sort}")
    direction = "DESC" if descending else "ASC"
    return f"ORDER BY {column} {direction}, candidate_id {direction}"


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CandidateStore:
    """SQLite-backed store for candidate aggregates.

    Each row holds one candidate with its interview serialized as JSON. Writes
    go through :meth:`save`, which only succeeds when the stored ``version``
    still matches the version that was loaded. :meth:`locked` serializes
    read-modify-write cycles for one candidate inside this process.
    """

    def __init__(self, db_path: Optional[str] = None) -> None:
        self._db_path = db_path
        self._migrated_for: Optional[str] = None

    @property
    def db_path(self) -> str:
        return self._db_path or settings.DB_PATH

    @contextmanager
    def _conn(self) -> Iterator[sqlite3.Connection]:
        path = self.db_path
        try:
            if self._migrated_for != path:
                migrate(path)
                self._migrated_for = path
            with get_conn(path) as conn:
                yield conn
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"storage failure: {exc}") from exc

    @contextmanager
    def locked(self, candidate_id: str) -> Iterator[None]:
        """Hold the per-candidate lock for the duration of the block."""

        key = (self.db_path, candidate_id)
        with _LOCKS_GUARD:
            entry = _LOCKS.get(key)
            if entry is None:
                entry = _LOCKS[key] = _LockEntry()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with _LOCKS_GUARD:
                entry.users -= 1
                if entry.users == 0:
                    del _LOCKS[key]

    def create(
        self,
        *,
        name: str = "",
        email: str = "",
        phone: str = "",
        resume_url: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Candidate:
        """Insert a candidate with a fresh, not-started interview."""

        now = _now()
        candidate = Candidate(
            candidate_id=uuid.uuid4().hex,
            name=name,
            email=email,
            phone=phone,
            resume_url=resume_url,
            metadata=metadata or {},
            interview=Interview(status="not-started"),
            version=0,
            created_at=now,
            updated_at=now,
        )
        with self._conn() as conn:
            conn.execute(
                f"INSERT INTO candidates ({_COLUMNS}, final_score) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    candidate.candidate_id,
                    candidate.name,
                    candidate.email,
                    candidate.phone,
                    candidate.resume_url,
                    json.dumps(candidate.metadata, default=str),
                    candidate.interview.model_dump_json(),
                    candidate.version,
                    now.isoformat(),
                    now.isoformat(),
                    None,
                ),
            )
        return candidate

    def get(self, candidate_id: str) -> Candidate:
        """Load one candidate or raise :class:`NotFoundError`."""

        with self._conn() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM candidates WHERE candidate_id = ?",
                (candidate_id,),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Candidate not found: {candidate_id}")
        return _row_to_candidate(row)

    def list(
        self,
        *,
        query: str = "",
        sort: str = "-updated_at",
        page: int = 1,
        limit: int = 50,
    ) -> Tuple[List[Candidate], int]:
        """Search by name, email or phone and return one page plus the total match count."""

        order = _order_clause(sort)
        limit = max(1, min(MAX_PAGE_SIZE, int(limit)))
        offset = (max(1, int(page)) - 1) * limit
        where = ""
        params: List[Any] = []
        if query.strip():
            where = "WHERE name LIKE ? ESCAPE '\\' OR email LIKE ? ESCAPE '\\' OR phone LIKE ? ESCAPE '\\'"
            pattern = _like_pattern(query.strip())
            params = [pattern, pattern, pattern]
        with self._conn() as conn:
            total = conn.execute(f"SELECT COUNT(*) FROM candidates {where}", params).fetchone()[0]
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM candidates {where} {order} LIMIT ? OFFSET ?",
                [*params, limit, offset],
            ).fetchall()
        return [_row_to_candidate(row) for row in rows], int(total)

    def save(self, candidate: Candidate) -> Candidate:
        """Write ``candidate`` if nobody else saved it since it was loaded.

        Returns the stored copy with ``version`` bumped. Raises
        :class:`PersistenceError` on a version conflict.
        """

        now = _now()
        stored = candidate.model_copy(update={"version": candidate.version + 1, "updated_at": now})
        with self._conn() as conn:
            cur = conn.execute(
                """UPDATE candidates
                   SET name = ?, email = ?, phone = ?, resume_url = ?, metadata = ?, interview = ?,
                       final_score = ?, version = ?, updated_at = ?
                   WHERE candidate_id = ? AND version = ?""",
                (
                    stored.name,
                    stored.email,
                    stored.phone,
                    stored.resume_url,
                    json.dumps(stored.metadata, default=str),
                    stored.interview.model_dump_json(),
                    stored.interview.final_score,
                    stored.version,
                    now.isoformat(),
                    candidate.candidate_id,
                    candidate.version,
                ),
            )
            if cur.rowcount != 1:
                exists = conn.execute(
                    "SELECT 1 FROM candidates WHERE candidate_id = ?", (candidate.candidate_id,)
                ).fetchone()
                if exists is None:
                    raise NotFoundError(f"Candidate not found: {candidate.candidate_id}")
                raise PersistenceError(f"Concurrent update detected for candidate {candidate.candidate_id}")
        return stored

    def update_contact(
        self,
        candidate_id: str,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Candidate:
        """Change contact fields; ``None`` leaves a field untouched."""

        updates = {key: value for key, value in (("name", name), ("email", email), ("phone", phone)) if value is not None}
        with self.locked(candidate_id):
            candidate = self.get(candidate_id)
            if not updates:
                return candidate
            return self.save(candidate.model_copy(update=updates))


__all__ = ["CandidateStore", "SORTABLE_COLUMNS"]
