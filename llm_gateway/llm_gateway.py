from __future__ import annotations  # LLM request gateway module

import json
import logging
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)  # Module logger setup


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


def post_json(
    url: str,
    payload: Dict[str, Any],
    *,
    headers: Dict[str, str],
    timeout: float,
    client: Optional[HttpClient] = None,
    route_name: str = "",
) -> Any:  # POST a JSON body and return the decoded JSON reply
    request_headers = {"Content-Type": "application/json"}
    request_headers.update(headers)
    logger.info("LLM request send route=%s url=%s timeout=%.1fs", route_name, _redact(url), timeout)
    try:
        response, close_cb = _post(url, payload, request_headers, timeout, client)
    except Exception as exc:  # noqa: BLE001
        logger.error("LLM transport failure route=%s: %s", route_name, exc)
        raise LlmGatewayError(f"LLM transport failed: {exc}") from exc
    try:
        if response.status_code >= 400:
            logger.error("LLM error status route=%s status=%s", route_name, response.status_code)
            raise LlmGatewayError(f"LLM returned status {response.status_code}")
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            logger.error("Invalid JSON payload from LLM route=%s: %s", route_name, exc)
            raise LlmGatewayError("LLM payload was not JSON") from exc
    finally:
        _close_safely(close_cb)
    logger.info("LLM request done route=%s", route_name)
    return data


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        response = client.post(url, json=payload, headers=headers, timeout=timeout)
        return response, None
    import httpx

    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _redact(url: str) -> str:  # Drop query strings which may carry credentials
    return url.split("?", 1)[0]


def strip_code_fences(content: str) -> str:  # Remove common markdown fences from LLM output
    text = content.strip()
    if text.startswith("```"):
        lines = text.splitlines()
        if lines:
            lines = lines[1:]
            while lines and lines[0].strip() == "":
                lines = lines[1:]
            while lines and lines[-1].strip() == "":
                lines = lines[:-1]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines).strip()
    return text
