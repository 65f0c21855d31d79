"""Errors raised by the presentation definition builder."""

from enum import Enum
from typing import Optional


class PresDefError(Exception):
    """Base class for presentation definition builder errors."""

    @property
    def message(self) -> str:
        """Accessor for the error message."""
        return str(self.args[0]).strip() if self.args else ""

    @property
    def reason(self) -> str:
        """Human readable reason for display."""
        return self.message


class ParseError(PresDefError):
    """Raised when definition text is not valid JSON."""


class StructuralErrorKind(str, Enum):
    """Structural problems a definition document can have."""

    MISSING_CONSTRAINTS = "missing_constraints"
    MISSING_TYPE_FIELD = "missing_type_field"


DEFAULT_REASONS = {
    StructuralErrorKind.MISSING_CONSTRAINTS: (
        "Presentation Definition must contain constraints with a list of fields"
    ),
    StructuralErrorKind.MISSING_TYPE_FIELD: (
        "Presentation Definition must contain a field with path '$.type' or '$.vct'"
    ),
}


class StructuralError(PresDefError):
    """Raised when a parsed definition lacks a required shape."""

    def __init__(self, kind: StructuralErrorKind, reason: Optional[str] = None):
        """Initialize a StructuralError."""
        super().__init__(reason or DEFAULT_REASONS[kind])
        self.kind = kind


class ProfileCodecError(PresDefError):
    """Raised when no codec can handle a credential profile."""
