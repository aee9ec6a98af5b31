from __future__ import annotations  # FastAPI server exposing the interview engine

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from candidate_management import CandidateDirectory
from config import EngineConfig, Settings, build_engine_config, settings
from interview_session.factory import build_engine
from llm_gateway import HttpClient
from providers import build_adapters
from storage.candidates import CandidateStore

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    *,
    engine_config: Optional[EngineConfig] = None,
    client: Optional[HttpClient] = None,
) -> FastAPI:  # Assemble adapters, orchestrators, store and routes
    app_settings = app_settings or settings
    cfg = engine_config or build_engine_config(app_settings)
    adapters = build_adapters(cfg, client=client)
    store = CandidateStore(app_settings.DB_PATH)

    app = FastAPI(title="Interview Engine API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.adapters = adapters
    app.state.engine = build_engine(cfg, adapters, store=store)
    app.state.directory = CandidateDirectory(store)
    app.include_router(router)
    logger.info("Interview engine ready mode=%s", "heuristic" if cfg.heuristic_only else "providers")
    return app


app = create_app()
