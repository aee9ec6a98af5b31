"""Configuration package for the interview engine."""
from .providers import PROVIDER_PRIORITY, EngineConfig, ProviderRoute, build_engine_config, load_config
from .settings import Settings, settings

__all__ = [
    "PROVIDER_PRIORITY",
    "EngineConfig",
    "ProviderRoute",
    "build_engine_config",
    "load_config",
    "Settings",
    "settings",
]
