"""
XML Parsing
===========

Turns bytes, text or files into a parsed document tree. All variants
funnel into ``parse_bytes`` so byte-identical content gives the same tree
regardless of how it arrived.

Parse failures raise ``DocumentParseError``; the boolean validators catch
it and report ``False``.
"""

import io
import logging
from pathlib import Path
from typing import Any, Optional, Union

from lxml import etree

from xsdguard.config.settings import ParserConfig
from xsdguard.engine.runtime import engine_session
from xsdguard.errors import Diagnostic, DocumentParseError, diagnostics_from_log

logger = logging.getLogger(__name__)

# lxml document tree; one per validation call, never shared.
ParsedDocument = etree._ElementTree


def local_name(element: Any) -> str:
    """
    Extract local name from element tag, stripping any namespace prefix.

    Example:
        >>> local_name(etree.Element("{urn:orders}Order"))
        'Order'
    """
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def make_parser(config: Optional[ParserConfig] = None) -> etree.XMLParser:
    """
    Create a fresh parser.

    Parsers are cheap and not safe to share between threads, so the
    convenience entry points create one per call.

    Args:
        config: Parser settings (defaults: no entity expansion, no network)

    Returns:
        New lxml XMLParser
    """
    config = config or ParserConfig()
    return etree.XMLParser(
        resolve_entities=config.resolve_entities,
        no_network=config.no_network,
        huge_tree=config.huge_tree,
        remove_comments=config.remove_comments,
        remove_blank_text=config.remove_blank_text,
    )


def _syntax_error(exc: etree.XMLSyntaxError, context: str) -> DocumentParseError:
    diagnostics = diagnostics_from_log(getattr(exc, 'error_log', None))
    if not diagnostics:
        diagnostics = [Diagnostic.from_message(str(exc), filename=context, domain="PARSER")]
    return DocumentParseError(f"{context} is not well-formed XML: {exc}", diagnostics)


def parse_bytes(data: bytes,
                parser: Optional[etree.XMLParser] = None,
                base_url: Optional[str] = None,
                max_bytes: int = 0) -> ParsedDocument:
    """
    Parse raw XML bytes into a document tree.

    Args:
        data: XML content
        parser: Parser to use; a fresh default parser if omitted
        base_url: Base URL for resolving relative references
        max_bytes: Reject input larger than this (0 = unlimited)

    Returns:
        Parsed document tree

    Raises:
        DocumentParseError: If the input is oversized or not well-formed
    """
    context = base_url or "<buffer>"

    if max_bytes and len(data) > max_bytes:
        raise DocumentParseError(
            f"{context} is {len(data)} bytes, limit is {max_bytes}",
            [Diagnostic.from_message("Document exceeds size limit", filename=base_url)],
        )

    with engine_session():
        if parser is None:
            parser = make_parser()
        try:
            return etree.parse(io.BytesIO(data), parser, base_url=base_url)
        except etree.XMLSyntaxError as exc:
            raise _syntax_error(exc, context) from exc


def parse_string(text: str,
                 parser: Optional[etree.XMLParser] = None,
                 base_url: Optional[str] = None,
                 max_bytes: int = 0) -> ParsedDocument:
    """Parse XML text. The text is encoded as UTF-8 before parsing."""
    try:
        data = text.encode('utf-8')
    except UnicodeEncodeError as exc:
        raise DocumentParseError(
            f"XML text cannot be encoded as UTF-8: {exc}",
            [Diagnostic.from_message(str(exc), filename=base_url, domain="ENCODING")],
        ) from exc
    return parse_bytes(data, parser=parser, base_url=base_url, max_bytes=max_bytes)


def parse_file(path: Union[str, Path],
               parser: Optional[etree.XMLParser] = None,
               max_bytes: int = 0) -> ParsedDocument:
    """
    Read and parse an XML file.

    Raises:
        DocumentParseError: If the file cannot be read or is not well-formed
    """
    path = Path(path)
    try:
        if max_bytes and path.stat().st_size > max_bytes:
            raise DocumentParseError(
                f"{path} is {path.stat().st_size} bytes, limit is {max_bytes}",
                [Diagnostic.from_message("Document exceeds size limit", filename=str(path))],
            )
        data = path.read_bytes()
    except OSError as exc:
        raise DocumentParseError(
            f"Cannot read XML file {path}: {exc.strerror or exc}",
            [Diagnostic.from_message(str(exc), filename=str(path))],
        ) from exc

    return parse_bytes(data, parser=parser, base_url=str(path), max_bytes=max_bytes)
