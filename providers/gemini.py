from __future__ import annotations  # Gemini generateContent adapter

from typing import Any, List

from llm_gateway import LlmGatewayError, post_json

from .base import ProviderAdapter


class GeminiAdapter(ProviderAdapter):  # API-key-authenticated models/{model}:generateContent route
    def _complete(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
        }
        data = post_json(
            f"{self.route.base_url}/models/{self.route.model}:generateContent",
            payload,
            headers={"x-goog-api-key": self.route.api_key},
            timeout=self.route.timeout_s,
            client=self.client,
            route_name=self.name,
        )
        return _extract_text(data)


def _extract_text(data: Any) -> str:  # Join the text parts of the first candidate
    parts: List[str] = []
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        content = candidates[0].get("content")
        raw_parts = content.get("parts") if isinstance(content, dict) else None
        for part in raw_parts if isinstance(raw_parts, list) else []:
            value = part.get("text") if isinstance(part, dict) else None
            if isinstance(value, str) and value.strip():
                parts.append(value.strip())
    text = "\n".join(parts).strip()
    if not text:
        raise LlmGatewayError("Empty response from Gemini")
    return text
