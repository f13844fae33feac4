"""Structured errors for constraint parsing and export.

Two families of errors live here:
- Scalar/vector/pose errors raised by the low-level string parsers
- ConstraintParseError / ConstraintExportError raised by the constraint
  reader and writer

Every ConstraintParseError carries a ConstraintErrorKind plus the field and
constraint it concerns, so callers can decide to skip the element or abort
the whole document without inspecting message text.
"""

from enum import Enum


class ScalarParseError(ValueError):
    """Raised when a string cannot be read as a floating-point number."""


class VectorParseError(ValueError):
    """Raised when a string does not hold exactly three numbers."""


class PoseParseError(ValueError):
    """Raised when an origin element holds a malformed xyz or rpy."""


class ConstraintErrorKind(str, Enum):
    """Reason a constraint element was rejected."""

    MISSING_NAME = "missing_name"
    UNKNOWN_CLASS = "unknown_class"
    MISSING_ENDPOINT_ELEMENT = "missing_endpoint_element"
    MALFORMED_ORIGIN = "malformed_origin"
    MISSING_TYPE = "missing_type"
    UNKNOWN_TYPE = "unknown_type"
    MALFORMED_AXIS = "malformed_axis"
    MISSING_RATIO_VALUE = "missing_ratio_value"
    INVALID_RATIO_VALUE = "invalid_ratio_value"
    MISSING_GEAR_RATIO = "missing_gear_ratio"
    INVALID_GEAR_RATIO = "invalid_gear_ratio"
    DUPLICATE_NAME = "duplicate_name"


class ConstraintParseError(ValueError):
    """A constraint element violated its grammar.

    Attributes:
        kind: Which rule was violated
        constraint_name: Name of the offending constraint (None if unnamed)
        field: Record field or XML node the failure concerns
        detail: Human-readable description
    """

    def __init__(
        self,
        *,
        kind: ConstraintErrorKind,
        detail: str,
        constraint_name: str | None = None,
        field: str | None = None
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.constraint_name = constraint_name
        self.field = field
        super().__init__(self._format())

    def _format(self) -> str:
        where = f"constraint [{self.constraint_name}]" if self.constraint_name else "unnamed constraint"
        if self.field:
            where = f"{where}, field '{self.field}'"
        return f"{self.kind.value}: {self.detail} ({where})"


class ConstraintExportError(RuntimeError):
    """A record could not be written back to XML.

    Only raised for invariant violations (e.g. an enum value with no wire
    literal); a record produced by the reader always exports.
    """
