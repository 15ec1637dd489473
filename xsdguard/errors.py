"""
Error Taxonomy
==============

Exceptions raised by the schema-loading path, and the ``Diagnostic``
records they carry. The boolean ``validate*`` entry points never let
these escape; they exist for callers that need to know *why* a schema
could not be loaded.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional


@dataclass(frozen=True)
class Diagnostic:
    """
    One problem reported by the XML engine.

    Attributes:
        message: Human readable description
        line: Line number (optional)
        column: Column number (optional)
        level: Severity name, e.g. 'ERROR' or 'WARNING'
        domain: Engine subsystem that reported it, e.g. 'PARSER', 'SCHEMASP'
        type_name: Engine error code name
        filename: Source file or URL (optional)
    """
    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    level: str = "ERROR"
    domain: str = ""
    type_name: str = ""
    filename: Optional[str] = None

    @classmethod
    def from_log_entry(cls, entry: Any) -> "Diagnostic":
        """Build a diagnostic from an lxml error log entry."""
        return cls(
            message=(entry.message or "").strip(),
            line=entry.line or None,
            column=entry.column or None,
            level=entry.level_name,
            domain=entry.domain_name,
            type_name=entry.type_name,
            filename=entry.filename or None,
        )

    @classmethod
    def from_message(cls, message: str, filename: Optional[str] = None,
                     domain: str = "IO") -> "Diagnostic":
        return cls(message=message, domain=domain, filename=filename)

    def __str__(self) -> str:
        location = self.filename or "<input>"
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        return f"{location}: {self.level}: {self.message}"


def diagnostics_from_log(error_log: Optional[Iterable[Any]]) -> List[Diagnostic]:
    """
    Convert an lxml ``_ListErrorLog`` (or any iterable of entries).

    Args:
        error_log: Error log to convert, may be None

    Returns:
        List of Diagnostic records, in engine order
    """
    if error_log is None:
        return []
    return [Diagnostic.from_log_entry(entry) for entry in error_log]


class XSDGuardError(Exception):
    """Base class for all xsdguard errors."""

    def __init__(self, message: str, diagnostics: Optional[List[Diagnostic]] = None):
        super().__init__(message)
        self.diagnostics: List[Diagnostic] = list(diagnostics or [])

    def describe(self) -> str:
        """Message followed by one line per diagnostic."""
        lines = [str(self)]
        lines.extend(f"  {diagnostic}" for diagnostic in self.diagnostics)
        return "\n".join(lines)


class SchemaError(XSDGuardError):
    """A schema could not be turned into a CompiledSchema."""


class SchemaParseError(SchemaError):
    """XSD source is unreadable or not well-formed XML."""


class SchemaCompilationError(SchemaError):
    """XSD is well-formed but is not a valid schema."""


class DocumentParseError(XSDGuardError):
    """XML document is unreadable, too large, or not well-formed."""


class DocumentInvalidError(XSDGuardError):
    """XML document is well-formed but violates the schema."""


class EngineStateError(XSDGuardError):
    """Engine objects requested after process-wide teardown."""
