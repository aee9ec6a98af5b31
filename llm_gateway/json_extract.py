"""Two-stage JSON recovery for free-form model replies.

Stage one parses the (fence-stripped) reply strictly. Stage two scans for the
first balanced ``[...]`` or ``{...}`` span and parses only that. Anything else
is a hard failure. The scan is bounded by ``MAX_SCAN_CHARS``.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from .llm_gateway import LlmGatewayError, strip_code_fences

MAX_SCAN_CHARS = 200_000

_PAIRS = {"[": "]", "{": "}"}


class JsonExtractionError(LlmGatewayError):
    """Raised when no JSON value of the expected shape can be recovered."""


def first_balanced_span(text: str, opener: str) -> Optional[str]:
    """Return the first balanced span starting with ``opener``.

    Brackets inside JSON string literals are ignored. Returns ``None`` when no
    opener exists or the span does not close within ``MAX_SCAN_CHARS``.
    """

    closer = _PAIRS[opener]
    start = text.find(opener)
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    limit = min(len(text), start + MAX_SCAN_CHARS)
    for index in range(start, limit):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def parse_json_value(text: str, expect: type) -> Any:
    """Parse ``text`` into a ``list`` or ``dict`` using the two-stage contract."""

    if expect not in (list, dict):
        raise ValueError("expect must be list or dict")
    cleaned = strip_code_fences(text or "")
    if not cleaned:
        raise JsonExtractionError("empty reply")
    try:
        value = json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError):
        value = None
    if isinstance(value, expect):
        return value

    span = first_balanced_span(cleaned, "[" if expect is list else "{")
    if span is None:
        kind = "array" if expect is list else "object"
        raise JsonExtractionError(f"No JSON {kind} found in response")
    try:
        value = json.loads(span)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise JsonExtractionError(f"Recovered span is not valid JSON: {exc}") from exc
    if not isinstance(value, expect):  # pragma: no cover - span opener guarantees the type
        raise JsonExtractionError("Recovered JSON has the wrong shape")
    return value
