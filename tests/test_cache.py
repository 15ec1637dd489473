"""
Schema cache tests.

Run with: pytest tests/test_cache.py -v
"""

import os

import pytest

from xsdguard.config.settings import set_config
from xsdguard.errors import SchemaCompilationError, SchemaParseError
from xsdguard.schema.cache import SchemaCache, get_schema_cache, reset_schema_cache
from xsdguard.xml.parsing import parse_string

from samples import ORDER_XSD, UNRESOLVABLE_XSD, VALID_ORDER


class TestSchemaCache:
    """Tests for SchemaCache."""

    def test_hit_returns_same_object(self, order_xsd):
        cache = SchemaCache()
        assert cache.get(order_xsd) is cache.get(str(order_xsd))
        assert len(cache) == 1
        assert order_xsd in cache

    def test_changed_file_recompiles(self, order_xsd):
        """Editing the schema on disk invalidates the entry."""
        cache = SchemaCache()
        first = cache.get(order_xsd)

        order_xsd.write_text(ORDER_XSD.replace('type="xs:decimal"', 'type="xs:int"'), encoding="utf-8")
        stat = order_xsd.stat()
        os.utime(order_xsd, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        second = cache.get(order_xsd)
        assert second is not first
        assert first.is_valid(parse_string(VALID_ORDER))
        assert not second.is_valid(parse_string(VALID_ORDER))
        assert len(cache) == 1

    def test_contains_false_for_stale_entry(self, order_xsd):
        """A schema edited on disk is no longer reported as cached."""
        cache = SchemaCache()
        cache.get(order_xsd)
        assert order_xsd in cache

        order_xsd.write_text(ORDER_XSD + "\n", encoding="utf-8")
        assert order_xsd not in cache

    def test_contains_false_for_deleted_file(self, order_xsd):
        cache = SchemaCache()
        cache.get(order_xsd)
        order_xsd.unlink()
        assert order_xsd not in cache

    def test_lru_eviction(self, tmp_path):
        """The least recently used schema is evicted first."""
        paths = []
        for name in ("a", "b", "c"):
            path = tmp_path / f"{name}.xsd"
            path.write_text(ORDER_XSD, encoding="utf-8")
            paths.append(path)

        cache = SchemaCache(max_entries=2)
        cache.get(paths[0])
        cache.get(paths[1])
        cache.get(paths[0])
        cache.get(paths[2])

        assert paths[0] in cache
        assert paths[1] not in cache
        assert paths[2] in cache

    def test_missing_schema_raises(self, tmp_path):
        cache = SchemaCache()
        with pytest.raises(SchemaParseError):
            cache.get(tmp_path / "missing.xsd")
        assert len(cache) == 0

    def test_failed_compile_not_cached(self, tmp_path):
        path = tmp_path / "bad.xsd"
        path.write_text(UNRESOLVABLE_XSD, encoding="utf-8")
        cache = SchemaCache()
        with pytest.raises(SchemaCompilationError):
            cache.get(path)
        assert path not in cache

    def test_clear(self, order_xsd):
        cache = SchemaCache()
        cache.get(order_xsd)
        cache.clear()
        assert len(cache) == 0

    def test_contains_rejects_other_types(self):
        assert 42 not in SchemaCache()

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            SchemaCache(max_entries=0)


class TestGlobalCache:
    """Tests for the process-wide cache."""

    def test_singleton(self):
        assert get_schema_cache() is get_schema_cache()

    def test_reset(self, order_xsd):
        get_schema_cache().get(order_xsd)
        reset_schema_cache()
        assert len(get_schema_cache()) == 0

    def test_size_from_config(self, monkeypatch):
        monkeypatch.setenv("XSDGUARD_CACHE_SIZE", "3")
        set_config(None)
        reset_schema_cache()
        assert get_schema_cache().max_entries == 3
