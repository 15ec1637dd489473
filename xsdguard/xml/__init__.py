"""
XML Parsing Utilities
=====================

Parser construction and document parsing shared by the validators.
"""

from xsdguard.xml.parsing import (
    ParsedDocument,
    local_name,
    make_parser,
    parse_bytes,
    parse_string,
    parse_file,
)

__all__ = [
    "ParsedDocument",
    "local_name",
    "make_parser",
    "parse_bytes",
    "parse_string",
    "parse_file",
]
