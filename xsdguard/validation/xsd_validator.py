"""
XSD Validator
=============

Object-style wrapper that binds one CompiledSchema.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from xsdguard.config.settings import ParserConfig
from xsdguard.schema.compiler import CompiledSchema, load_schema
from xsdguard.validation.base import BaseValidator
from xsdguard.validation.validator import (
    validate_buffer,
    validate_document,
    validate_file,
    validate_string,
)

logger = logging.getLogger(__name__)


class XSDValidator(BaseValidator):
    """
    Validator bound to a single XSD.

    Example:
        validator = XSDValidator(Path("order.xsd"))
        if not validator.validate_file(Path("order.xml")):
            reject()

    Raises:
        SchemaParseError / SchemaCompilationError: If the XSD cannot be loaded
    """

    def __init__(self, schema: Union[str, Path, CompiledSchema],
                 parser_config: Optional[ParserConfig] = None):
        if isinstance(schema, CompiledSchema):
            self._schema = schema
        else:
            self._schema = load_schema(schema)
            logger.info(f"Loaded XSD: {schema}")
        self._parser_config = parser_config

    @property
    def schema(self) -> CompiledSchema:
        return self._schema

    @property
    def schema_type(self) -> str:
        return "XSD"

    @property
    def schema_path(self) -> Optional[Path]:
        return self._schema.source.path

    def validate_file(self, file_path: Union[str, Path]) -> bool:
        return validate_file(self._schema, file_path, config=self._parser_config)

    def validate_bytes(self, data: bytes) -> bool:
        return validate_buffer(self._schema, data, config=self._parser_config)

    def validate_string(self, xml_string: str) -> bool:
        return validate_string(self._schema, xml_string, config=self._parser_config)

    def validate_element(self, element: Any) -> bool:
        return validate_document(self._schema, element)
