"""Typed constraint records.

A constraint is a named relationship between two link endpoints of a robot
model. Every record shares a header (name + two endpoint link names) and
carries one variant body:

- LoopConstraint: kinematic loop closure with per-endpoint transforms,
  a joint type and a motion axis
- CouplingConstraint: transmission coupling with an optional ratio
- JointConstraint: joint-like constraint with a gear ratio, two axes and
  per-endpoint transforms

The variants form a tagged union (`Constraint`) discriminated on
`class_type`, so a record only ever holds the fields valid for its kind.
"""

from enum import Enum, auto
from typing import Annotated, Literal

import numpy as np
from pydantic import model_validator, Field
from typing_extensions import Self

from kinconstraints.data.arbitrary_types_model import ArbitraryTypesModel
from kinconstraints.data.pose import Pose

DEFAULT_LOOP_AXIS = (1.0, 0.0, 0.0)
DEFAULT_JOINT_AXIS = (1.0, 1.0, 1.0)


class ConstraintClass(str, Enum):
    """Discriminator selecting the variant body of a constraint."""

    LOOP = "loop"
    COUPLING = "coupling"
    JOINT = "joint"


class LoopJointType(Enum):
    """Joint type of a loop constraint."""

    PLANAR = auto()
    REVOLUTE = auto()
    CONTINUOUS = auto()
    PRISMATIC = auto()
    FIXED = auto()


# Wire literals are case-sensitive
LOOP_JOINT_TYPE_BY_LITERAL: dict[str, LoopJointType] = {
    "planar": LoopJointType.PLANAR,
    "revolute": LoopJointType.REVOLUTE,
    "continuous": LoopJointType.CONTINUOUS,
    "prismatic": LoopJointType.PRISMATIC,
    "fixed": LoopJointType.FIXED,
}
LITERAL_BY_LOOP_JOINT_TYPE: dict[LoopJointType, str] = {
    joint_type: literal for literal, joint_type in LOOP_JOINT_TYPE_BY_LITERAL.items()
}


def _as_vector3(value: np.ndarray | tuple[float, float, float], *, field_name: str) -> np.ndarray:
    vector = np.asarray(value, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f"{field_name} must have shape (3,), got {vector.shape}")
    if not np.all(np.isfinite(vector)):
        raise ValueError(f"{field_name} must be finite, got {vector}")
    return vector


def _check_finite(value: float | None, *, field_name: str) -> None:
    if value is not None and not np.isfinite(value):
        raise ValueError(f"{field_name} must be finite, got {value}")


def _field_equal(a: object, b: object) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        if a is None or b is None:
            return False
        return bool(np.array_equal(a, b))
    return a == b


class ConstraintHeader(ArbitraryTypesModel):
    """Fields shared by every constraint variant.

    Attributes:
        name: Unique, non-empty identifier
        predecessor_link_name: Link on the predecessor (parent) side, None for an implicit root
        successor_link_name: Link on the successor (child) side
    """

    name: str = Field(min_length=1)
    predecessor_link_name: str | None = None
    successor_link_name: str | None = None

    @property
    def parent_link_name(self) -> str | None:
        return self.predecessor_link_name

    @property
    def child_link_name(self) -> str | None:
        return self.successor_link_name

    @property
    def header(self) -> "ConstraintHeader":
        """Header fields only, detached from any variant body."""
        return ConstraintHeader(
            name=self.name,
            predecessor_link_name=self.predecessor_link_name,
            successor_link_name=self.successor_link_name,
        )

    def __eq__(self, other: object) -> bool:
        """Same variant with equal fields; vectors compare element-wise, poses within tolerance."""
        if not isinstance(other, ConstraintHeader):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return all(
            _field_equal(getattr(self, field_name), getattr(other, field_name))
            for field_name in type(self).model_fields
        )


class LoopConstraint(ConstraintHeader):
    """Kinematic loop closure between two links.

    `axis` is None when `type` is FIXED: a fixed loop has no motion axis.
    """

    class_type: Literal[ConstraintClass.LOOP] = ConstraintClass.LOOP
    type: LoopJointType
    predecessor_to_constraint_origin_transform: Pose = Field(default_factory=Pose.identity)
    successor_to_constraint_origin_transform: Pose = Field(default_factory=Pose.identity)
    axis: np.ndarray | None = Field(default_factory=lambda: np.array(DEFAULT_LOOP_AXIS))

    @model_validator(mode="after")
    def validate_axis(self) -> Self:
        if self.type is LoopJointType.FIXED:
            self.axis = None
        elif self.axis is None:
            raise ValueError(f"Loop constraint [{self.name}] of type {self.type.name} requires an axis")
        else:
            self.axis = _as_vector3(self.axis, field_name="axis")
        return self


class CouplingConstraint(ConstraintHeader):
    """Transmission coupling between two links."""

    class_type: Literal[ConstraintClass.COUPLING] = ConstraintClass.COUPLING
    ratio: float | None = None

    @model_validator(mode="after")
    def validate_ratio(self) -> Self:
        _check_finite(self.ratio, field_name="ratio")
        return self


class JointConstraint(ConstraintHeader):
    """Joint-like constraint with an explicit gear ratio and two axes."""

    class_type: Literal[ConstraintClass.JOINT] = ConstraintClass.JOINT
    gear_ratio: float
    position_axis: np.ndarray = Field(default_factory=lambda: np.array(DEFAULT_JOINT_AXIS))
    rotation_axis: np.ndarray = Field(default_factory=lambda: np.array(DEFAULT_JOINT_AXIS))
    predecessor_to_constraint_origin_transform: Pose = Field(default_factory=Pose.identity)
    successor_to_constraint_origin_transform: Pose = Field(default_factory=Pose.identity)

    @model_validator(mode="after")
    def validate_axes(self) -> Self:
        _check_finite(self.gear_ratio, field_name="gear_ratio")
        self.position_axis = _as_vector3(self.position_axis, field_name="position_axis")
        self.rotation_axis = _as_vector3(self.rotation_axis, field_name="rotation_axis")
        return self


Constraint = Annotated[
    LoopConstraint | CouplingConstraint | JointConstraint,
    Field(discriminator="class_type"),
]


class ConstraintSet(ArbitraryTypesModel):
    """Constraints read from (or destined for) one robot document.

    Attributes:
        robot_name: Name attribute of the enclosing robot element
        constraints: Records in document order, names unique
    """

    robot_name: str | None = None
    constraints: list[Constraint] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_names(self) -> Self:
        seen: set[str] = set()
        for constraint in self.constraints:
            if constraint.name in seen:
                raise ValueError(f"Duplicate constraint name: {constraint.name}")
            seen.add(constraint.name)
        return self

    @property
    def names(self) -> list[str]:
        return [constraint.name for constraint in self.constraints]

    @property
    def n_constraints(self) -> int:
        return len(self.constraints)

    def get(self, *, name: str) -> LoopConstraint | CouplingConstraint | JointConstraint:
        """Look up a constraint by name.

        Raises:
            KeyError: If no constraint has this name
        """
        for constraint in self.constraints:
            if constraint.name == name:
                return constraint
        raise KeyError(f"No constraint named '{name}'")

    def by_class(
        self,
        *,
        class_type: ConstraintClass
    ) -> list[LoopConstraint | CouplingConstraint | JointConstraint]:
        """All constraints of one variant, in document order."""
        return [c for c in self.constraints if c.class_type == class_type]
