"""Lexical answer scorer used when no provider can score an answer.

The score is built from a difficulty base, a length bonus, a code-sample
bonus, keyword coverage across six technical categories, a hedging penalty,
and question/answer word overlap. The function is pure: the same answer,
question and difficulty always produce the same result.
"""
from __future__ import annotations

import re
from typing import Dict, List, Sequence, Tuple

from agents.types import ScoreResult, round_half_up

METHOD = "heuristic"

_BASE_BY_DIFFICULTY: Dict[str, int] = {"easy": 15, "medium": 20, "hard": 25}
_DEFAULT_BASE = 15

# (exclusive upper bound on length, bonus)
_LENGTH_STEPS: Sequence[Tuple[int, int]] = ((10, 0), (50, 5), (150, 10), (300, 15))
_MAX_LENGTH_BONUS = 20

CODE_BONUS = 15
_CODE_PATTERNS = (
    re.compile(r"```[\s\S]*?```"),
    re.compile(r"function\s+\w+\s*\(", re.IGNORECASE),
    re.compile(r"const\s+\w+\s*="),
    re.compile(r"class\s+\w+", re.IGNORECASE),
    re.compile(r"[{}();]"),
    re.compile(r"\.then\s*\("),
    re.compile(r"async\s+function", re.IGNORECASE),
    re.compile(r"=>\s*\{"),
)

KEYWORD_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "javascript": ("async", "promise", "callback", "closure", "prototype", "hoisting", "scope"),
    "frontend": ("react", "jsx", "component", "hook", "state", "props", "virtual dom", "redux", "context"),
    "backend": ("node", "express", "middleware", "router", "api", "rest", "endpoint"),
    "database": ("mongodb", "sql", "query", "index", "schema", "collection", "document"),
    "performance": ("optimization", "caching", "lazy loading", "debounce", "throttle", "memoization"),
    "concepts": ("algorithm", "data structure", "complexity", "scalability", "architecture"),
}
_MAX_PER_CATEGORY = 5
_MULTI_CATEGORY_BONUS = 10

HEDGE_PHRASES: Tuple[str, ...] = (
    "i think",
    "maybe",
    "probably",
    "not sure",
    "don't know",
    "i don't know",
    "not sure about this",
    "maybe this",
    "probably this",
)
HEDGE_PENALTY = 15

_MAX_RELEVANCE_BONUS = 30
_RELEVANCE_PER_MATCH = 5
IRRELEVANCE_PENALTY = 20
_IRRELEVANCE_MIN_LENGTH = 20

# question-word fragment -> answer-word fragments treated as related
_EQUIVALENCES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("react", ("component",)),
    ("javascript", ("js", "script")),
    ("node", ("server",)),
    ("api", ("endpoint",)),
)

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)


def _base(difficulty: str) -> int:
    return _BASE_BY_DIFFICULTY.get((difficulty or "").lower(), _DEFAULT_BASE)


def _length_bonus(length: int) -> int:
    for bound, bonus in _LENGTH_STEPS:
        if length < bound:
            return bonus
    return _MAX_LENGTH_BONUS


def has_code(answer: str) -> bool:
    return any(pattern.search(answer) for pattern in _CODE_PATTERNS)


def keyword_hits(answer: str) -> Dict[str, int]:
    """Return hit counts for every category with at least one match."""

    lowered = answer.lower()
    hits: Dict[str, int] = {}
    for category, keywords in KEYWORD_CATEGORIES.items():
        count = sum(1 for keyword in keywords if keyword in lowered)
        if count:
            hits[category] = count
    return hits


def _keyword_bonus(hits: Dict[str, int]) -> int:
    bonus = sum(min(_MAX_PER_CATEGORY, count * 2) for count in hits.values())
    if len(hits) >= 2:
        bonus += _MULTI_CATEGORY_BONUS
    return bonus


def hedge_count(answer: str) -> int:
    lowered = answer.lower()
    return sum(1 for phrase in HEDGE_PHRASES if phrase in lowered)


def _words(text: str) -> List[str]:
    return [word for word in _NON_WORD.sub(" ", text.lower()).split() if len(word) > 3]


def _related(question_word: str, answer_word: str) -> bool:
    if answer_word in question_word or question_word in answer_word:
        return True
    for fragment, related in _EQUIVALENCES:
        if fragment in question_word and any(item in answer_word for item in related):
            return True
    return False


def relevance_matches(question: str, answer: str) -> int:
    """Count question words (duplicates included) with a related answer word."""

    answer_words = set(_words(answer))
    return sum(
        1
        for q_word in _words(question)
        if any(_related(q_word, a_word) for a_word in answer_words)
    )


def score(answer: str, question: str = "", difficulty: str = "easy") -> ScoreResult:
    """Score ``answer`` against ``question`` with lexical signals only."""

    clean_answer = (answer or "").strip()
    clean_question = (question or "").strip()
    difficulty = difficulty or ""
    if not clean_answer:
        return ScoreResult(score=0, reason="No answer provided", method=METHOD)

    length = len(clean_answer)
    total = _base(difficulty) + _length_bonus(length)

    code = has_code(clean_answer)
    if code:
        total += CODE_BONUS

    hits = keyword_hits(clean_answer)
    total += _keyword_bonus(hits)

    hedged = hedge_count(clean_answer) >= 2
    if hedged:
        total -= HEDGE_PENALTY

    matches = relevance_matches(clean_question, clean_answer)
    total += min(_MAX_RELEVANCE_BONUS, matches * _RELEVANCE_PER_MATCH)
    if matches == 0 and length > _IRRELEVANCE_MIN_LENGTH:
        total -= IRRELEVANCE_PENALTY

    final = max(0, min(100, round_half_up(total)))

    parts = [f"length ({length} chars)"]
    if code:
        parts.append("code examples")
    if hits:
        parts.append(f"technical keywords ({', '.join(hits)})")
    if hedged:
        parts.append("hedging penalty")
    parts.append(f"relevance ({matches} terms)")
    if matches == 0 and length > _IRRELEVANCE_MIN_LENGTH:
        parts.append("irrelevance penalty")
    parts.append(f"difficulty: {difficulty}")
    return ScoreResult(score=final, reason="Heuristic scoring: " + ", ".join(parts), method=METHOD)


__all__ = ["score", "has_code", "keyword_hits", "hedge_count", "relevance_matches", "KEYWORD_CATEGORIES"]
