from __future__ import annotations  # OpenAI chat-completions adapter

from typing import Any

from llm_gateway import LlmGatewayError, post_json

from .base import ProviderAdapter


class OpenAIAdapter(ProviderAdapter):  # Bearer-authenticated /chat/completions route
    def _complete(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        payload = {
            "model": self.route.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        data = post_json(
            f"{self.route.base_url}/chat/completions",
            payload,
            headers={"Authorization": f"Bearer {self.route.api_key}"},
            timeout=self.route.timeout_s,
            client=self.client,
            route_name=self.name,
        )
        return _extract_content(data)


def _extract_content(data: Any) -> str:  # Pull choices[0].message.content out of the reply
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str) and content.strip():
                return content.strip()
    raise LlmGatewayError("Empty response from OpenAI")
