"""IO module for kinconstraints.

Structure:
    io/
    ├── readers/     - Parse constraint elements and robot documents
    └── writers/     - Export records back to XML

Usage:
    from kinconstraints.io import parse_constraint, export_constraint

    result = parse_constraint(element=element)
    element = export_constraint(constraint=result.unwrap(), parent=robot)
"""

from .readers import (
    BaseReader,
    ConstraintXMLReader,
    load_constraints,
    loads_constraints,
    parse_constraint,
    parse_header,
    read_constraints,
)

from .writers import (
    BaseWriter,
    ConstraintXMLWriter,
    dumps_constraints,
    export_constraint,
    write_constraints,
)

__all__ = [
    # Readers
    "BaseReader",
    "ConstraintXMLReader",
    "load_constraints",
    "loads_constraints",
    "parse_constraint",
    "parse_header",
    "read_constraints",
    # Writers
    "BaseWriter",
    "ConstraintXMLWriter",
    "dumps_constraints",
    "export_constraint",
    "write_constraints",
]
