"""
Schema Compiler
===============

Two-phase XSD compilation:

1. ``SchemaParserContext.from_source`` reads the XSD text and parses it
   into a document (``SchemaParseError`` on failure).
2. ``SchemaParserContext.compile`` builds the grammar and hands back an
   immutable ``CompiledSchema`` (``SchemaCompilationError`` on failure).
   The context is consumed and cannot be compiled twice.

A ``CompiledSchema`` can be kept for the life of the process and used
for any number of validation calls.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from lxml import etree

from xsdguard.config.settings import ParserConfig
from xsdguard.engine.runtime import engine_session
from xsdguard.errors import (
    Diagnostic,
    DocumentInvalidError,
    DocumentParseError,
    SchemaCompilationError,
    SchemaParseError,
    diagnostics_from_log,
)
from xsdguard.xml.parsing import ParsedDocument, make_parser, parse_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaSource:
    """
    Where XSD text comes from: a file path or raw bytes.

    Use ``from_path`` or ``from_bytes`` rather than the constructor.
    """
    path: Optional[Path] = None
    data: Optional[bytes] = None
    base_url: Optional[str] = None

    def __post_init__(self):
        if (self.path is None) == (self.data is None):
            raise ValueError("SchemaSource needs exactly one of path or data")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'SchemaSource':
        return cls(path=Path(path))

    @classmethod
    def from_bytes(cls, data: bytes, base_url: Optional[str] = None) -> 'SchemaSource':
        return cls(data=bytes(data), base_url=base_url)

    @property
    def url(self) -> Optional[str]:
        """Base URL used to resolve relative xs:include / xs:import."""
        if self.path is not None:
            return str(self.path)
        return self.base_url

    def read(self) -> bytes:
        """Return the XSD bytes. Raises OSError for unreadable paths."""
        if self.data is not None:
            return self.data
        return self.path.read_bytes()

    def describe(self) -> str:
        if self.path is not None:
            return str(self.path)
        return self.base_url or f"<{len(self.data)} bytes>"


class CompiledSchema:
    """
    A successfully compiled XSD grammar.

    Only ``check``/``is_valid`` touch it after construction. The engine
    keeps a per-schema error log that each check overwrites; it is read
    inside the same engine session as the check itself.

    Example:
        schema = load_schema("order.xsd")
        document = parse_file("order.xml")
        if schema.is_valid(document):
            ...
    """

    def __init__(self, grammar: etree.XMLSchema, source: SchemaSource):
        self._grammar = grammar
        self._source = source

    @property
    def source(self) -> SchemaSource:
        return self._source

    def check(self, document: Any) -> None:
        """
        Check a parsed document against this schema.

        Args:
            document: ParsedDocument (or lxml element) to check

        Raises:
            DocumentInvalidError: If the document violates the schema
        """
        with engine_session():
            try:
                if self._grammar.validate(document):
                    return
                diagnostics = diagnostics_from_log(self._grammar.error_log)
            except etree.XMLSchemaValidateError as exc:
                raise DocumentInvalidError(
                    f"Schema validation could not run: {exc}",
                    diagnostics_from_log(getattr(exc, 'error_log', None)),
                ) from exc

        raise DocumentInvalidError(
            f"Document does not conform to {self._source.describe()}", diagnostics
        )

    def is_valid(self, document: Any) -> bool:
        """True if the document conforms to this schema."""
        try:
            self.check(document)
        except DocumentInvalidError:
            return False
        return True

    def __repr__(self) -> str:
        return f"<CompiledSchema {self._source.describe()}>"


class SchemaParserContext:
    """
    XSD source parsed into a document, not yet compiled.

    Owned by whoever created it; ``compile`` consumes it.
    """

    def __init__(self, source: SchemaSource, document: ParsedDocument):
        self._source = source
        self._document: Optional[ParsedDocument] = document

    @classmethod
    def from_source(cls, source: SchemaSource,
                    parser_config: Optional[ParserConfig] = None) -> 'SchemaParserContext':
        """
        Read and parse XSD text.

        Raises:
            SchemaParseError: If the source cannot be read or is not well-formed
        """
        try:
            data = source.read()
        except OSError as exc:
            raise SchemaParseError(
                f"Cannot read schema {source.describe()}: {exc.strerror or exc}",
                [Diagnostic.from_message(str(exc), filename=source.url)],
            ) from exc

        with engine_session():
            try:
                document = parse_bytes(data, parser=make_parser(parser_config), base_url=source.url)
            except DocumentParseError as exc:
                raise SchemaParseError(
                    f"Schema {source.describe()} is not well-formed XML",
                    exc.diagnostics,
                ) from exc

        return cls(source, document)

    @property
    def source(self) -> SchemaSource:
        return self._source

    @property
    def consumed(self) -> bool:
        return self._document is None

    def compile(self) -> CompiledSchema:
        """
        Build the schema grammar.

        Raises:
            SchemaCompilationError: If the XSD is not a valid schema
            RuntimeError: If this context was already compiled
        """
        if self._document is None:
            raise RuntimeError(f"Schema parser context for {self._source.describe()} already consumed")

        document, self._document = self._document, None

        with engine_session():
            try:
                grammar = etree.XMLSchema(document)
            except etree.XMLSchemaParseError as exc:
                diagnostics = diagnostics_from_log(exc.error_log)
                if not diagnostics:
                    diagnostics = [Diagnostic.from_message(str(exc), filename=self._source.url,
                                                           domain="SCHEMASP")]
                raise SchemaCompilationError(
                    f"Schema {self._source.describe()} failed to compile: {exc}",
                    diagnostics,
                ) from exc

        return CompiledSchema(grammar, self._source)


def compile_schema(source: SchemaSource,
                   parser_config: Optional[ParserConfig] = None) -> CompiledSchema:
    """
    Parse and compile a schema source.

    Args:
        source: Schema path or bytes
        parser_config: Settings for parsing the XSD text

    Returns:
        CompiledSchema

    Raises:
        SchemaParseError: XSD unreadable or not well-formed
        SchemaCompilationError: XSD is not a valid schema
    """
    with engine_session():
        context = SchemaParserContext.from_source(source, parser_config)
        schema = context.compile()

    logger.debug(f"Compiled schema {source.describe()}")
    return schema


def load_schema(schema_path: Union[str, Path]) -> CompiledSchema:
    """
    Load and compile an XSD file.

    Raises:
        SchemaParseError: File missing, unreadable or not well-formed
        SchemaCompilationError: File is not a valid schema
    """
    return compile_schema(SchemaSource.from_path(schema_path))


def load_schema_bytes(data: bytes, base_url: Optional[str] = None) -> CompiledSchema:
    """Compile XSD held in memory. ``base_url`` anchors relative includes."""
    return compile_schema(SchemaSource.from_bytes(data, base_url=base_url))
