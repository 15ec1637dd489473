"""
Configuration Management
========================

Configuration for the engine guard, parsers, schema cache and HTTP gate.
"""

from xsdguard.config.settings import (
    GuardConfig,
    EngineConfig,
    ParserConfig,
    CacheConfig,
    APIConfig,
    load_config,
    save_config,
    validate_config,
    get_config,
    set_config,
)

__all__ = [
    "GuardConfig",
    "EngineConfig",
    "ParserConfig",
    "CacheConfig",
    "APIConfig",
    "load_config",
    "save_config",
    "validate_config",
    "get_config",
    "set_config",
]
