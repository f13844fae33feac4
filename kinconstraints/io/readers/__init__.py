"""Readers for constraint XML.

- attribute_reader: optional attribute / child lookups
- value_parsers: float, vector and origin parsing
- constraint_reader: header and variant body parsers for one element
- document_reader: every constraint of a robot document

Usage:
    from kinconstraints.io.readers import parse_constraint, load_constraints

    result = parse_constraint(element=element)
    constraints = load_constraints(filepath=Path("robot.urdf"))
"""

from .attribute_reader import (
    find_child,
    read_attribute,
    read_child_attribute,
)

from .value_parsers import (
    parse_pose,
    parse_vector3,
    str_to_double,
)

from .constraint_reader import (
    CONSTRAINT_TAGS,
    DOCUMENT_CONSTRAINT_TAGS,
    parse_constraint,
    parse_coupling_body,
    parse_header,
    parse_joint_body,
    parse_loop_body,
    resolve_constraint_class,
    resolve_endpoint_scheme,
    resolve_endpoint_tags,
    resolve_endpoints,
)

from .document_reader import (
    BaseReader,
    ConstraintXMLReader,
    load_constraints,
    loads_constraints,
    read_constraints,
)

__all__ = [
    "find_child",
    "read_attribute",
    "read_child_attribute",
    "parse_pose",
    "parse_vector3",
    "str_to_double",
    "CONSTRAINT_TAGS",
    "DOCUMENT_CONSTRAINT_TAGS",
    "parse_constraint",
    "parse_coupling_body",
    "parse_header",
    "parse_joint_body",
    "parse_loop_body",
    "resolve_constraint_class",
    "resolve_endpoint_scheme",
    "resolve_endpoint_tags",
    "resolve_endpoints",
    "BaseReader",
    "ConstraintXMLReader",
    "load_constraints",
    "loads_constraints",
    "read_constraints",
]
