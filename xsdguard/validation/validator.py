"""
XSD Validation Entry Points
===========================

Boolean pass/fail gates over a CompiledSchema. Each call runs the same
pipeline:

    START -> PARSING -> PARSED -> CHECKING -> VALID | INVALID
                     \\-> PARSE_FAILED

Only VALID returns True. Malformed XML, unreadable paths and schema
violations all return False and are logged at DEBUG; none of them raise.
Callers that need to know why a *schema* failed should call
``load_schema`` directly and inspect the exception's diagnostics.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from lxml import etree

from xsdguard.config.settings import ParserConfig, get_config
from xsdguard.engine.runtime import engine_session
from xsdguard.errors import DocumentInvalidError, DocumentParseError, SchemaError
from xsdguard.schema.cache import get_schema_cache
from xsdguard.schema.compiler import CompiledSchema, load_schema
from xsdguard.xml.parsing import (
    ParsedDocument,
    local_name,
    make_parser,
    parse_bytes,
    parse_file,
    parse_string,
)

logger = logging.getLogger(__name__)


def _check(schema: CompiledSchema, document: Any, context: str) -> bool:
    try:
        schema.check(document)
    except DocumentInvalidError as exc:
        logger.debug(f"{context}: INVALID ({len(exc.diagnostics)} problem(s))")
        for diagnostic in exc.diagnostics:
            logger.debug(f"  {diagnostic}")
        return False

    logger.debug(f"{context}: VALID")
    return True


def _parse_failed(exc: DocumentParseError, context: str) -> bool:
    logger.debug(f"{context}: PARSE_FAILED - {exc}")
    return False


def validate_document(schema: CompiledSchema, document: Any) -> bool:
    """
    Check an already parsed document.

    Args:
        schema: Compiled schema
        document: ParsedDocument or lxml element

    Returns:
        True if the document conforms
    """
    root = document.getroot() if isinstance(document, etree._ElementTree) else document
    return _check(schema, document, f"<{local_name(root)}>")


def validate_with_parser(schema: CompiledSchema, parser: etree.XMLParser, xml_bytes: bytes) -> bool:
    """
    Parse with a caller-supplied parser, then check.

    The parser may carry the caller's own settings (custom resolvers,
    blank-text handling, ...). It must not be used by another thread
    during the call.
    """
    with engine_session():
        try:
            document = parse_bytes(xml_bytes, parser=parser)
        except DocumentParseError as exc:
            return _parse_failed(exc, "<buffer>")
        return _check(schema, document, "<buffer>")


def validate_buffer(schema: CompiledSchema, xml_bytes: bytes,
                    config: Optional[ParserConfig] = None) -> bool:
    """Parse raw bytes with a fresh parser, then check."""
    config = config or get_config().parser
    with engine_session():
        try:
            document = parse_bytes(xml_bytes, parser=make_parser(config),
                                   max_bytes=config.max_document_bytes)
        except DocumentParseError as exc:
            return _parse_failed(exc, "<buffer>")
        return _check(schema, document, "<buffer>")


def validate_string(schema: CompiledSchema, xml_text: str,
                    config: Optional[ParserConfig] = None) -> bool:
    """Parse text (as UTF-8) with a fresh parser, then check."""
    config = config or get_config().parser
    with engine_session():
        try:
            document = parse_string(xml_text, parser=make_parser(config),
                                    max_bytes=config.max_document_bytes)
        except DocumentParseError as exc:
            return _parse_failed(exc, "<string>")
        return _check(schema, document, "<string>")


def validate_file(schema: CompiledSchema, xml_path: Union[str, Path],
                  config: Optional[ParserConfig] = None) -> bool:
    """Read and parse a file with a fresh parser, then check."""
    config = config or get_config().parser
    context = str(xml_path)
    with engine_session():
        try:
            document = parse_file(xml_path, parser=make_parser(config),
                                  max_bytes=config.max_document_bytes)
        except DocumentParseError as exc:
            return _parse_failed(exc, context)
        return _check(schema, document, context)


def validate(xml_path: Union[str, Path], schema_path: Union[str, Path],
             use_cache: bool = False, config: Optional[ParserConfig] = None) -> bool:
    """
    Full pipeline: load the schema, then validate the file against it.

    If the schema cannot be loaded the XML is never read and the result
    is False.

    Args:
        xml_path: XML document path
        schema_path: XSD path
        use_cache: Take the schema from the process-wide SchemaCache
        config: Parser settings for the document

    Returns:
        True if the document conforms
    """
    try:
        if use_cache:
            schema = get_schema_cache().get(schema_path)
        else:
            schema = load_schema(schema_path)
    except SchemaError as exc:
        logger.debug(f"{xml_path}: schema unavailable - {exc}")
        return False

    return validate_file(schema, xml_path, config=config)


def parse_document(xml: Union[bytes, str, Path],
                   config: Optional[ParserConfig] = None) -> ParsedDocument:
    """
    Parse bytes, text or a path into a ParsedDocument.

    ``str`` is treated as XML text; pass a ``Path`` for files.

    Raises:
        DocumentParseError: If parsing fails
    """
    config = config or get_config().parser
    parser = make_parser(config)
    if isinstance(xml, Path):
        return parse_file(xml, parser=parser, max_bytes=config.max_document_bytes)
    if isinstance(xml, str):
        return parse_string(xml, parser=parser, max_bytes=config.max_document_bytes)
    return parse_bytes(xml, parser=parser, max_bytes=config.max_document_bytes)
