from __future__ import annotations  # Re-export provider adapters

from .base import ProviderAdapter, ProviderError, validate_questions
from .factory import ADAPTERS, build_adapters
from .gemini import GeminiAdapter
from .openai import OpenAIAdapter

__all__ = [
    "ADAPTERS",
    "GeminiAdapter",
    "OpenAIAdapter",
    "ProviderAdapter",
    "ProviderError",
    "build_adapters",
    "validate_questions",
]
