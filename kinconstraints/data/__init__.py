"""Data structures for constraint records.

Main Components:
- Pose: rigid transform (translation + quaternion)
- ConstraintHeader: name and endpoint link names shared by every variant
- LoopConstraint / CouplingConstraint / JointConstraint: variant records
- Constraint: tagged union of the variants, discriminated on class_type
- ConstraintSet: constraints of one robot document

Usage:
    from kinconstraints.data import LoopConstraint, LoopJointType

    loop = LoopConstraint(
        name="closure",
        predecessor_link_name="link_a",
        successor_link_name="link_b",
        type=LoopJointType.REVOLUTE,
    )
"""

from .pose import Pose

from .constraint_models import (
    Constraint,
    ConstraintClass,
    ConstraintHeader,
    ConstraintSet,
    CouplingConstraint,
    JointConstraint,
    LoopConstraint,
    LoopJointType,
    DEFAULT_JOINT_AXIS,
    DEFAULT_LOOP_AXIS,
    LITERAL_BY_LOOP_JOINT_TYPE,
    LOOP_JOINT_TYPE_BY_LITERAL,
)

__all__ = [
    "Pose",
    "Constraint",
    "ConstraintClass",
    "ConstraintHeader",
    "ConstraintSet",
    "CouplingConstraint",
    "JointConstraint",
    "LoopConstraint",
    "LoopJointType",
    "DEFAULT_JOINT_AXIS",
    "DEFAULT_LOOP_AXIS",
    "LITERAL_BY_LOOP_JOINT_TYPE",
    "LOOP_JOINT_TYPE_BY_LITERAL",
]
