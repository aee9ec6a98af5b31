"""Static question set used whenever no provider can generate questions."""
from __future__ import annotations

from typing import List

from agents.types import QuestionSkeleton

_EASY = (
    "What is the virtual DOM and why is it useful in React?",
    "Explain the difference between let, const, and var in JavaScript.",
)
_MEDIUM = (
    "How would you design state management for a medium-sized React application? "
    "Which libraries would you consider and why?",
    "Explain how you would secure a REST API built with Node.js and Express, "
    "including authentication and input validation.",
)
_HARD = (
    "Design an approach to scale a real-time collaboration feature for a React app "
    "(e.g., concurrent cursors). How would you handle consistency, latency, and failure?",
    "Given a performance bottleneck in a Node.js service under heavy CPU load, "
    "how would you diagnose and optimize it?",
)


def fallback_questions() -> List[QuestionSkeleton]:
    """Return a fresh copy of the six static questions, easy to hard."""

    questions: List[QuestionSkeleton] = []
    for difficulty, texts in (("easy", _EASY), ("medium", _MEDIUM), ("hard", _HARD)):
        questions.extend(QuestionSkeleton(text=text, difficulty=difficulty) for text in texts)
    return questions


__all__ = ["fallback_questions"]
