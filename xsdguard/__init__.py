"""
xsdguard
========

A small pass/fail gate for validating XML documents against XSD schemas,
built on lxml (libxml2).

- Schema compilation (parse XSD, then compile to an immutable schema)
- Boolean validation from bytes, text, files or pre-parsed documents
- Process-wide engine lifecycle: one-time initialization, exit-time
  teardown, serialized engine access
- Compiled schema cache, configuration, CLI and HTTP front ends

Architecture
------------

    xsdguard/
    ├── engine/       - Engine initialization, teardown and locking
    ├── schema/       - SchemaSource -> SchemaParserContext -> CompiledSchema
    ├── xml/          - Parsers and document parsing
    ├── validation/   - Boolean validation entry points
    ├── config/       - Configuration management
    ├── errors.py     - Error taxonomy and diagnostics
    ├── cli.py        - Command-line gate
    └── api.py        - FastAPI gate

Usage
-----

    from xsdguard import load_schema, validate_string, validate

    schema = load_schema("order.xsd")
    validate_string(schema, "<Order><Id>1</Id><Amount>9.99</Amount></Order>")  # True

    validate("order.xml", "order.xsd")  # full pipeline, False if the XSD is bad

Schema problems can be inspected through ``load_schema``:

    try:
        load_schema("broken.xsd")
    except SchemaError as e:
        for diagnostic in e.diagnostics:
            print(diagnostic)
"""

__version__ = "1.0.0"

from xsdguard.errors import (
    Diagnostic,
    XSDGuardError,
    SchemaError,
    SchemaParseError,
    SchemaCompilationError,
    DocumentParseError,
    DocumentInvalidError,
    EngineStateError,
)

from xsdguard.engine.runtime import (
    ensure_initialized,
    engine_session,
    engine_info,
)

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

from xsdguard.validation.validator import (
    validate,
    validate_file,
    validate_buffer,
    validate_string,
    validate_with_parser,
    validate_document,
    parse_document,
)

from xsdguard.validation.xsd_validator import XSDValidator

from xsdguard.config.settings import (
    GuardConfig,
    load_config,
    get_config,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "Diagnostic",
    "XSDGuardError",
    "SchemaError",
    "SchemaParseError",
    "SchemaCompilationError",
    "DocumentParseError",
    "DocumentInvalidError",
    "EngineStateError",
    # Engine
    "ensure_initialized",
    "engine_session",
    "engine_info",
    # Schema
    "SchemaSource",
    "SchemaParserContext",
    "CompiledSchema",
    "compile_schema",
    "load_schema",
    "load_schema_bytes",
    "SchemaCache",
    "get_schema_cache",
    "reset_schema_cache",
    # Validation
    "validate",
    "validate_file",
    "validate_buffer",
    "validate_string",
    "validate_with_parser",
    "validate_document",
    "parse_document",
    "XSDValidator",
    # Config
    "GuardConfig",
    "load_config",
    "get_config",
]
