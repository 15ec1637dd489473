"""
Schema Compilation
==================

Turns XSD sources into reusable CompiledSchema objects, with an
optional cache for schemas loaded from disk.
"""

from xsdguard.schema.compiler import (
    SchemaSource,
    SchemaParserContext,
    CompiledSchema,
    compile_schema,
    load_schema,
    load_schema_bytes,
)

from xsdguard.schema.cache import (
    SchemaCache,
    get_schema_cache,
    reset_schema_cache,
)

__all__ = [
    "SchemaSource",
    "SchemaParserContext",
    "CompiledSchema",
    "compile_schema",
    "load_schema",
    "load_schema_bytes",
    "SchemaCache",
    "get_schema_cache",
    "reset_schema_cache",
]
