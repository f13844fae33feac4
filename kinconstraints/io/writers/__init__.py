"""Writers for constraint XML."""

from .constraint_writer import (
    BaseWriter,
    ConstraintXMLWriter,
    dumps_constraints,
    export_constraint,
    format_double,
    format_vector,
    write_constraints,
)

__all__ = [
    "BaseWriter",
    "ConstraintXMLWriter",
    "dumps_constraints",
    "export_constraint",
    "format_double",
    "format_vector",
    "write_constraints",
]
