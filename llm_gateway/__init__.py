from __future__ import annotations  # Re-export llm_gateway public API

from .json_extract import JsonExtractionError, first_balanced_span, parse_json_value
from .llm_gateway import HttpClient, HttpResponse, LlmGatewayError, post_json, strip_code_fences

__all__ = [
    "HttpClient",
    "HttpResponse",
    "JsonExtractionError",
    "LlmGatewayError",
    "first_balanced_span",
    "parse_json_value",
    "post_json",
    "strip_code_fences",
]
