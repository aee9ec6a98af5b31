from __future__ import annotations  # Provider routing configuration

from pathlib import Path
from typing import List, Literal

from pydantic import BaseModel, Field

from .settings import Settings

ProviderKind = Literal["gemini", "openai"]

PROVIDER_PRIORITY: tuple[ProviderKind, ...] = ("gemini", "openai")


class ProviderRoute(BaseModel):  # One configured text-generation endpoint
    name: ProviderKind
    base_url: str
    model: str
    api_key: str = Field(min_length=1, repr=False)
    timeout_s: float = Field(default=30.0, ge=0.1)


class EngineConfig(BaseModel):  # Explicit provider configuration handed to the orchestrators
    providers: List[ProviderRoute] = Field(default_factory=list)
    default_role: str = "Full Stack (React/Node) developer"
    batch_delay_s: float = Field(default=0.5, ge=0.0)

    @property
    def heuristic_only(self) -> bool:
        return not self.providers


def build_engine_config(cfg: Settings) -> EngineConfig:  # Routes for every provider with a key, in priority order
    candidates = {
        "gemini": (cfg.GEMINI_API_KEY, cfg.GEMINI_BASE_URL, cfg.GEMINI_MODEL),
        "openai": (cfg.OPENAI_API_KEY, cfg.OPENAI_BASE_URL, cfg.OPENAI_MODEL),
    }
    routes: List[ProviderRoute] = []
    for name in PROVIDER_PRIORITY:
        api_key, base_url, model = candidates[name]
        if not api_key.strip():
            continue
        routes.append(
            ProviderRoute(
                name=name,
                base_url=base_url.rstrip("/"),
                model=model,
                api_key=api_key.strip(),
                timeout_s=cfg.PROVIDER_TIMEOUT_S,
            )
        )
    return EngineConfig(
        providers=routes,
        default_role=cfg.DEFAULT_ROLE,
        batch_delay_s=cfg.BATCH_SCORE_DELAY_S,
    )


def load_config(path: Path) -> EngineConfig:  # Load an explicit engine configuration from disk
    data = path.read_text(encoding="utf-8")
    cfg = EngineConfig.model_validate_json(data)
    order = {name: index for index, name in enumerate(PROVIDER_PRIORITY)}
    cfg.providers.sort(key=lambda route: order[route.name])
    return cfg
