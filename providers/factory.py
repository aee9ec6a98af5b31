from __future__ import annotations  # Build adapters from configuration in fixed priority order

import logging
from typing import Dict, List, Optional, Type

from config.providers import EngineConfig
from llm_gateway import HttpClient

from .base import ProviderAdapter
from .gemini import GeminiAdapter
from .openai import OpenAIAdapter

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Type[ProviderAdapter]] = {
    "gemini": GeminiAdapter,
    "openai": OpenAIAdapter,
}


def build_adapters(cfg: EngineConfig, *, client: Optional[HttpClient] = None) -> List[ProviderAdapter]:  # One adapter per configured route
    adapters = [ADAPTERS[route.name](route, client=client) for route in cfg.providers]
    if adapters:
        logger.info("Providers configured: %s", ", ".join(adapter.name for adapter in adapters))
    else:
        logger.warning("No provider API keys found - using heuristic questions, scoring and summaries only")
    return adapters
