"""
Compiled Schema Cache
=====================

Keeps recently compiled schemas so repeated validation against the same
XSD does not recompile it. Entries are keyed on the resolved path and the
file's modification time and size, so an edited schema is recompiled on
next use. Failed loads are never cached.
"""

import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Optional, Tuple, Union

from xsdguard.config.settings import get_config
from xsdguard.errors import Diagnostic, SchemaParseError
from xsdguard.schema.compiler import CompiledSchema, load_schema

logger = logging.getLogger(__name__)

_CacheKey = Tuple[str, int, int]


class SchemaCache:
    """
    Thread-safe LRU cache of CompiledSchema objects.

    Example:
        cache = SchemaCache(max_entries=8)
        schema = cache.get("schemas/order.xsd")
    """

    def __init__(self, max_entries: int = 16):
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, Tuple[_CacheKey, CompiledSchema]]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def _key(schema_path: Path) -> _CacheKey:
        try:
            stat = schema_path.stat()
        except OSError as exc:
            raise SchemaParseError(
                f"Cannot read schema {schema_path}: {exc.strerror or exc}",
                [Diagnostic.from_message(str(exc), filename=str(schema_path))],
            ) from exc
        return (str(schema_path), stat.st_mtime_ns, stat.st_size)

    def get(self, schema_path: Union[str, Path]) -> CompiledSchema:
        """
        Return the compiled schema for a path, compiling it if needed.

        Raises:
            SchemaParseError: File missing, unreadable or not well-formed
            SchemaCompilationError: File is not a valid schema
        """
        resolved = Path(schema_path).resolve()
        key = self._key(resolved)

        with self._lock:
            entry = self._entries.get(key[0])
            if entry is not None and entry[0] == key:
                self._entries.move_to_end(key[0])
                return entry[1]

        if entry is not None:
            logger.info(f"Schema changed on disk, recompiling: {resolved}")

        # Never wait on the engine lock while holding the cache lock.
        schema = load_schema(resolved)

        with self._lock:
            self._entries[key[0]] = (key, schema)
            self._entries.move_to_end(key[0])

            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted schema from cache: {evicted}")

            return schema

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, schema_path: object) -> bool:
        if not isinstance(schema_path, (str, Path)):
            return False
        try:
            key = self._key(Path(schema_path).resolve())
        except SchemaParseError:
            return False
        with self._lock:
            entry = self._entries.get(key[0])
            return entry is not None and entry[0] == key


_global_cache: Optional[SchemaCache] = None
_global_cache_lock = threading.Lock()


def get_schema_cache() -> SchemaCache:
    """Get or create the process-wide schema cache."""
    global _global_cache
    with _global_cache_lock:
        if _global_cache is None:
            _global_cache = SchemaCache(get_config().cache.max_entries)
        return _global_cache


def reset_schema_cache() -> None:
    """Drop the process-wide cache (useful for testing)."""
    global _global_cache
    with _global_cache_lock:
        _global_cache = None
