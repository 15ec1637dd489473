"""
Validation Framework
====================

Boolean XSD validation gates.

Components:
- validate / validate_file / validate_buffer / validate_string /
  validate_with_parser / validate_document: function entry points
- BaseValidator: Abstract base class for schema-bound validators
- XSDValidator: Validator bound to one compiled XSD
"""

from xsdguard.validation.validator import (
    validate,
    validate_file,
    validate_buffer,
    validate_string,
    validate_with_parser,
    validate_document,
    parse_document,
)

from xsdguard.validation.base import BaseValidator

from xsdguard.validation.xsd_validator import XSDValidator

__all__ = [
    "validate",
    "validate_file",
    "validate_buffer",
    "validate_string",
    "validate_with_parser",
    "validate_document",
    "parse_document",
    "BaseValidator",
    "XSDValidator",
]
