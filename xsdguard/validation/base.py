"""
Base Validation Classes
=======================

Abstract base class for schema-bound validators. Subclasses bind one
compiled schema and answer pass/fail for XML in any of the supported
source forms.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union


class BaseValidator(ABC):
    """
    Abstract base class for validators.

    Every method returns a plain bool and never raises for malformed
    or unreadable input.

    Example:
        class MyValidator(BaseValidator):
            def validate_file(self, file_path):
                ...
            def validate_bytes(self, data):
                ...
    """

    @abstractmethod
    def validate_file(self, file_path: Union[str, Path]) -> bool:
        """
        Validate a single file.

        Args:
            file_path: Path to the file to validate

        Returns:
            True if the file conforms
        """
        pass

    @abstractmethod
    def validate_bytes(self, data: bytes) -> bool:
        """
        Validate XML held in memory.

        Args:
            data: Raw XML bytes

        Returns:
            True if the content conforms
        """
        pass

    def validate_string(self, xml_string: str) -> bool:
        """Validate XML text. Encoded as UTF-8 and handed to ``validate_bytes``."""
        try:
            data = xml_string.encode('utf-8')
        except UnicodeEncodeError:
            return False
        return self.validate_bytes(data)

    def validate_element(self, element: Any) -> bool:
        """
        Validate an already parsed element or tree (optional to implement).
        """
        raise NotImplementedError("Element validation not supported by this validator")

    @property
    def schema_type(self) -> str:
        """Return the type of schema this validator uses (e.g., 'XSD')."""
        return "Unknown"

    @property
    def schema_path(self) -> Optional[Path]:
        """Return the path to the schema file (if applicable)."""
        return None
