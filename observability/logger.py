"""Lifecycle event logging for interviews.

``log_event`` writes one human-readable line per interview transition to
stdout. With ``ENABLE_FILE_LOGS=1`` the same events also land in a rotating
JSON-lines file (machine consumption) next to a rotating human log.
"""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from typing import Any

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_FILE_LOGS = os.getenv("ENABLE_FILE_LOGS", "0") in ("1", "true", "True")
LOG_FILE = os.getenv("LOG_FILE", "logs/interview-events.jsonl")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", "5242880"))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))

HUMAN_FIELDS = ("status", "question_index", "score", "method", "final_score", "provider", "ms")

_HUMAN_FORMAT = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s :: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

_events = logging.getLogger("interview.events")
_events.setLevel(LOG_LEVEL)
_events.propagate = False


class _JsonOnly(logging.Filter):
    def __init__(self, want_json: bool) -> None:
        super().__init__()
        self.want_json = want_json

    def filter(self, record: logging.LogRecord) -> bool:
        return bool(getattr(record, "is_json", False)) is self.want_json


def _rotating(path: str, formatter: logging.Formatter, want_json: bool) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT)
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(formatter)
    handler.addFilter(_JsonOnly(want_json))
    return handler


def _human_log_path(path: str) -> str:
    root, _ = os.path.splitext(path)
    return f"{root}-human.log"


def _ensure_handlers() -> None:
    if _events.handlers:
        return

    console = logging.StreamHandler(stream=sys.stdout)
    console.setLevel(LOG_LEVEL)
    console.setFormatter(_HUMAN_FORMAT)
    console.addFilter(_JsonOnly(False))
    _events.addHandler(console)

    if not ENABLE_FILE_LOGS:
        return
    log_dir = os.path.dirname(LOG_FILE)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    _events.addHandler(_rotating(LOG_FILE, logging.Formatter("%(message)s"), want_json=True))
    _events.addHandler(_rotating(_human_log_path(LOG_FILE), _HUMAN_FORMAT, want_json=False))


def _format_human(evt: dict[str, Any]) -> str:
    line = f"candidate={evt.get('candidate_id')} kind={evt.get('kind')}"
    extras = [f"{key}={evt[key]}" for key in HUMAN_FIELDS if key in evt]
    return " ".join([line, *extras])


def _emit(message: str, *, is_json: bool) -> None:
    record = _events.makeRecord(_events.name, logging.INFO, "", 0, message, (), None)
    record.is_json = is_json  # type: ignore[attr-defined]
    _events.handle(record)


def log_event(kind: str, candidate_id: str, **fields: Any) -> None:
    """Record one interview lifecycle event, e.g. ``interview.answer``."""

    _ensure_handlers()
    payload: dict[str, Any] = {
        "ts": time.time(),
        "trace": str(uuid.uuid4()),
        "kind": kind,
        "candidate_id": candidate_id,
        **fields,
    }
    _emit(_format_human(payload), is_json=False)
    if ENABLE_FILE_LOGS:
        _emit(json.dumps(payload, ensure_ascii=False, default=str), is_json=True)


__all__ = ["log_event"]
