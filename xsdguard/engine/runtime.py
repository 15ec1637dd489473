"""
Engine Runtime
==============

Process-wide lifecycle of the libxml2 engine behind lxml.

libxml2 keeps global state (dictionaries, error hooks, per-thread parser
contexts). This module owns the rules for touching it:

- ``ensure_initialized()`` sets the state up once per process, even when
  many threads arrive at the same time.
- Teardown is registered with ``atexit`` and runs at most once. There is
  no public way to tear down mid-run.
- ``engine_session()`` wraps every compile, parse and check. By default it
  holds one process-wide lock, so all engine work is serialized. That is a
  throughput ceiling, not a bug: thread safety of a given libxml2 build is
  not observable from here.
"""

import atexit
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, Optional, Tuple

from lxml import etree

from xsdguard.config.settings import EngineConfig
from xsdguard.errors import EngineStateError

logger = logging.getLogger(__name__)

ENGINE_LOGGER_NAME = "xsdguard.engine.libxml2"


@dataclass
class EngineState:
    """Snapshot of the initialized engine."""
    lxml_version: Tuple[int, ...]
    libxml_version: Tuple[int, ...]
    libxml_compiled_version: Tuple[int, ...]
    serialize_engine_calls: bool
    forward_engine_log: bool
    initialized_at: datetime
    torn_down: bool = False


_init_lock = threading.Lock()
_engine_lock = threading.RLock()
_state: Optional[EngineState] = None
# libxml2 error logs are per thread; tracks threads already forwarding.
_forwarding = threading.local()


def _forward_thread_log() -> None:
    if getattr(_forwarding, "installed", False):
        return
    etree.use_global_python_log(etree.PyErrorLog(ENGINE_LOGGER_NAME))
    _forwarding.installed = True


def _version(value: Tuple[int, ...]) -> str:
    return ".".join(str(part) for part in value)


def _initialize(config: EngineConfig) -> EngineState:
    state = EngineState(
        lxml_version=tuple(etree.LXML_VERSION),
        libxml_version=tuple(etree.LIBXML_VERSION),
        libxml_compiled_version=tuple(etree.LIBXML_COMPILED_VERSION),
        serialize_engine_calls=config.serialize_engine_calls,
        forward_engine_log=config.forward_engine_log,
        initialized_at=datetime.now(),
    )

    if state.libxml_version != state.libxml_compiled_version:
        logger.warning(
            f"libxml2 runtime {_version(state.libxml_version)} differs from "
            f"compile-time {_version(state.libxml_compiled_version)}"
        )

    if config.forward_engine_log:
        _forward_thread_log()

    atexit.register(_teardown, state)

    logger.debug(
        f"Engine initialized: lxml {_version(state.lxml_version)}, "
        f"libxml2 {_version(state.libxml_version)}, "
        f"serialized={state.serialize_engine_calls}"
    )
    return state


def _teardown(state: EngineState) -> None:
    # Runs from atexit only.
    with _engine_lock:
        if state.torn_down:
            return
        state.torn_down = True
        # A forwarding PyErrorLog keeps no entries and has no clear().
        if not state.forward_engine_log:
            etree.clear_error_log()
    logger.debug("Engine torn down")


def ensure_initialized(config: Optional[EngineConfig] = None) -> EngineState:
    """
    Initialize process-wide engine state if nobody has yet.

    Safe to call from any number of threads; exactly one performs the
    initialization and every caller returns only after it completed.

    Args:
        config: Engine settings. Only the first call's settings apply.

    Returns:
        The process-wide EngineState
    """
    global _state

    state = _state
    if state is None:
        with _init_lock:
            if _state is None:
                _state = _initialize(config or EngineConfig())
            state = _state
    elif config is not None and (
        config.serialize_engine_calls != state.serialize_engine_calls
        or config.forward_engine_log != state.forward_engine_log
    ):
        logger.debug("Engine already initialized; ignoring new engine settings")

    return state


def is_initialized() -> bool:
    return _state is not None


@contextmanager
def engine_session() -> Iterator[EngineState]:
    """
    Context for one unit of engine work (compile, parse or check).

    Re-entrant on the same thread, so a full pipeline may nest sessions.

    Raises:
        EngineStateError: If the engine was already torn down
    """
    state = ensure_initialized()
    if state.torn_down:
        raise EngineStateError("XML engine has been torn down; process is exiting")

    if state.forward_engine_log:
        _forward_thread_log()

    if not state.serialize_engine_calls:
        yield state
        return

    with _engine_lock:
        yield state


def engine_info() -> Dict[str, Any]:
    """Versions and mode of the engine, initializing it if needed."""
    state = ensure_initialized()
    return {
        "lxml_version": _version(state.lxml_version),
        "libxml_version": _version(state.libxml_version),
        "libxml_compiled_version": _version(state.libxml_compiled_version),
        "serialize_engine_calls": state.serialize_engine_calls,
        "forward_engine_log": state.forward_engine_log,
        "initialized_at": state.initialized_at.isoformat(),
    }
