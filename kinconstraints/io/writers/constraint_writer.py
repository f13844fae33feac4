"""Encode constraint records back into XML.

The output mirrors the shape the reader accepts, so exporting a record and
parsing the result yields an equal record. Export only reads the record.

Tags per variant:
- LoopConstraint -> <loop_joint>
- CouplingConstraint -> <coupling>
- JointConstraint -> <constraint>
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

import numpy as np
from lxml import etree
from pydantic import Field
from typing_extensions import assert_never

from kinconstraints.core.config import ConstraintWriterConfig
from kinconstraints.core.errors import ConstraintExportError
from kinconstraints.data.arbitrary_types_model import ArbitraryTypesModel
from kinconstraints.data.constraint_models import (
    ConstraintSet,
    CouplingConstraint,
    JointConstraint,
    LoopConstraint,
    LITERAL_BY_LOOP_JOINT_TYPE,
)
from kinconstraints.data.pose import Pose

logger = logging.getLogger(__name__)

AnyConstraint = LoopConstraint | CouplingConstraint | JointConstraint


def format_double(value: float) -> str:
    """Shortest string that reads back as the same float."""
    return repr(float(value))


def format_vector(vector: np.ndarray) -> str:
    """Whitespace-joined components."""
    return " ".join(format_double(component) for component in vector)


def _add_origin(*, parent: etree._Element, tag: str, pose: Pose) -> etree._Element:
    origin = etree.SubElement(parent, tag)
    origin.set("xyz", format_vector(pose.position))
    origin.set("rpy", format_vector(pose.rpy))
    return origin


def _add_endpoint(*, parent: etree._Element, tag: str, link_name: str | None) -> etree._Element:
    endpoint = etree.SubElement(parent, tag)
    if link_name is not None:
        endpoint.set("link", link_name)
    return endpoint


def export_constraint(
    *,
    constraint: AnyConstraint,
    parent: etree._Element | None = None,
    config: ConstraintWriterConfig | None = None
) -> etree._Element:
    """Build the XML element for one constraint.

    Args:
        constraint: Record to export
        parent: Element to attach to (None = detached element)
        config: Writer configuration (None = defaults)

    Returns:
        The new constraint element

    Raises:
        ConstraintExportError: If a loop type has no wire literal or the record type is unknown
    """
    config = config or ConstraintWriterConfig()
    predecessor_tag, successor_tag = config.endpoint_tags

    if isinstance(constraint, LoopConstraint):
        tag = "loop_joint"
    elif isinstance(constraint, CouplingConstraint):
        tag = "coupling"
    elif isinstance(constraint, JointConstraint):
        tag = "constraint"
    else:
        raise ConstraintExportError(f"No known class type for constraint {constraint!r}")

    element = etree.Element(tag) if parent is None else etree.SubElement(parent, tag)
    element.set("name", constraint.name)

    predecessor = _add_endpoint(parent=element, tag=predecessor_tag, link_name=constraint.predecessor_link_name)
    successor = _add_endpoint(parent=element, tag=successor_tag, link_name=constraint.successor_link_name)

    if isinstance(constraint, LoopConstraint):
        type_literal = LITERAL_BY_LOOP_JOINT_TYPE.get(constraint.type)
        if type_literal is None:
            raise ConstraintExportError(
                f"Loop constraint [{constraint.name}] has unmapped type {constraint.type!r}"
            )
        element.set("type", type_literal)
        _add_origin(parent=predecessor, tag="origin", pose=constraint.predecessor_to_constraint_origin_transform)
        _add_origin(parent=successor, tag="origin", pose=constraint.successor_to_constraint_origin_transform)
        if constraint.axis is not None:
            etree.SubElement(element, "axis").set("xyz", format_vector(constraint.axis))

    elif isinstance(constraint, CouplingConstraint):
        if constraint.ratio is not None:
            etree.SubElement(element, "ratio").set("value", format_double(constraint.ratio))

    elif isinstance(constraint, JointConstraint):
        predecessor_origin_tag, successor_origin_tag = config.endpoint_origin_tags
        element.set("gear_ratio", format_double(constraint.gear_ratio))
        etree.SubElement(element, "pos_axis").set("xyz", format_vector(constraint.position_axis))
        etree.SubElement(element, "rot_axis").set("xyz", format_vector(constraint.rotation_axis))
        _add_origin(
            parent=element,
            tag=predecessor_origin_tag,
            pose=constraint.predecessor_to_constraint_origin_transform,
        )
        _add_origin(
            parent=element,
            tag=successor_origin_tag,
            pose=constraint.successor_to_constraint_origin_transform,
        )

    else:
        assert_never(constraint)

    return element


def write_constraints(
    *,
    constraints: ConstraintSet | Iterable[AnyConstraint],
    robot_name: str | None = None,
    config: ConstraintWriterConfig | None = None
) -> etree._Element:
    """Build a `<robot>` element holding every constraint.

    Args:
        constraints: ConstraintSet or records in output order
        robot_name: Robot name attribute (None = ConstraintSet's, if any)
        config: Writer configuration (None = defaults)

    Returns:
        `<robot>` element
    """
    if isinstance(constraints, ConstraintSet):
        robot_name = robot_name or constraints.robot_name
        records = constraints.constraints
    else:
        records = list(constraints)

    root = etree.Element("robot")
    if robot_name is not None:
        root.set("name", robot_name)

    for constraint in records:
        export_constraint(constraint=constraint, parent=root, config=config)
    return root


def dumps_constraints(
    *,
    constraints: ConstraintSet | Iterable[AnyConstraint],
    robot_name: str | None = None,
    config: ConstraintWriterConfig | None = None
) -> str:
    """Serialize constraints as a `<robot>` XML document string."""
    config = config or ConstraintWriterConfig()
    root = write_constraints(constraints=constraints, robot_name=robot_name, config=config)
    return etree.tostring(root, pretty_print=config.pretty_print, encoding="unicode")


class BaseWriter(ArbitraryTypesModel, ABC):
    """Abstract base class for file writers."""

    last_write_path: Path | None = None

    @abstractmethod
    def write(self, *, filepath: Path, constraints: ConstraintSet) -> None:
        """Write constraints to file.

        Args:
            filepath: Path to output file
            constraints: Constraints to write
        """
        pass

    def ensure_directory(self, *, filepath: Path) -> None:
        """Ensure output directory exists."""
        filepath.parent.mkdir(parents=True, exist_ok=True)


class ConstraintXMLWriter(BaseWriter):
    """Writer for robot documents holding only constraints."""

    config: ConstraintWriterConfig = Field(default_factory=ConstraintWriterConfig)

    def write(self, *, filepath: Path, constraints: ConstraintSet) -> None:
        """Write constraints as a URDF-style XML document.

        Args:
            filepath: Path to output file
            constraints: Constraints to write
        """
        filepath = Path(filepath)
        self.ensure_directory(filepath=filepath)

        root = write_constraints(constraints=constraints, config=self.config)
        tree = etree.ElementTree(root)
        tree.write(str(filepath), pretty_print=self.config.pretty_print, xml_declaration=True, encoding="utf-8")

        self.last_write_path = filepath
        logger.info(f"Wrote {constraints.n_constraints} constraints to {filepath}")
