"""
Engine Lifecycle
================

One-time initialization, exit-time teardown and call serialization
for the underlying XML engine.
"""

from xsdguard.engine.runtime import (
    EngineState,
    ensure_initialized,
    is_initialized,
    engine_session,
    engine_info,
)

__all__ = [
    "EngineState",
    "ensure_initialized",
    "is_initialized",
    "engine_session",
    "engine_info",
]
