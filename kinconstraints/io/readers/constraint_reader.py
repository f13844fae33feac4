"""Decode constraint elements into typed records.

Parsing runs in two stages over a single element:

1. Header: name and the two endpoint link names, shared by every variant
2. Body: one parser per variant (loop, coupling, joint) selected by the
   class discriminator

The stage functions (`parse_header`, `parse_loop_body`, ...) raise
ConstraintParseError on hard failures and append ParseNotice objects for
tolerated absences. `parse_constraint` runs both stages and folds the outcome
into a ConstraintParseResult.

Usage:
    from kinconstraints.io.readers import parse_constraint

    result = parse_constraint(element=element)
    if result.ok:
        constraint = result.constraint
"""

import numpy as np
from lxml import etree

from kinconstraints.core.config import ConstraintParserConfig, EndpointScheme, ENDPOINT_ORIGIN_TAGS, ENDPOINT_TAGS
from kinconstraints.core.errors import (
    ConstraintErrorKind,
    ConstraintParseError,
    PoseParseError,
    ScalarParseError,
    VectorParseError,
)
from kinconstraints.core.result import ConstraintParseResult, NoticeLevel, ParseNotice
from kinconstraints.data.constraint_models import (
    ConstraintClass,
    ConstraintHeader,
    CouplingConstraint,
    DEFAULT_JOINT_AXIS,
    DEFAULT_LOOP_AXIS,
    JointConstraint,
    LoopConstraint,
    LoopJointType,
    LOOP_JOINT_TYPE_BY_LITERAL,
)
from kinconstraints.data.pose import Pose
from kinconstraints.io.readers.attribute_reader import find_child, read_attribute
from kinconstraints.io.readers.value_parsers import parse_pose, parse_vector3, str_to_double

CONSTRAINT_CLASS_BY_TAG: dict[str, ConstraintClass | None] = {
    "loop_joint": ConstraintClass.LOOP,
    "loop": ConstraintClass.LOOP,
    "coupling": ConstraintClass.COUPLING,
    "transmission": ConstraintClass.COUPLING,
    # Generic tag: class comes from the `class` attribute
    "constraint": None,
}

CONSTRAINT_TAGS: tuple[str, ...] = tuple(CONSTRAINT_CLASS_BY_TAG)

# ros_control <transmission> elements share the tag; only explicit parse_constraint calls read them
DOCUMENT_CONSTRAINT_TAGS: tuple[str, ...] = tuple(tag for tag in CONSTRAINT_TAGS if tag != "transmission")


def _notice(notices: list[ParseNotice] | None, *, level: NoticeLevel, message: str, field: str | None = None) -> None:
    if notices is not None:
        notices.append(ParseNotice(level=level, message=message, field=field))


def resolve_endpoint_tags(
    *,
    element: etree._Element,
    config: ConstraintParserConfig | None = None
) -> tuple[str, str]:
    """Endpoint tag pair to read for this element.

    Args:
        element: Constraint element
        config: Parser configuration (None = defaults)

    Returns:
        (predecessor_tag, successor_tag)
    """
    scheme = resolve_endpoint_scheme(element=element, config=config)
    return ENDPOINT_TAGS[scheme]


def resolve_endpoint_scheme(
    *,
    element: etree._Element,
    config: ConstraintParserConfig | None = None
) -> EndpointScheme:
    """Endpoint scheme of this element, shared by endpoints and joint origins.

    In auto mode any of predecessor, successor, predecessor_origin or
    successor_origin selects predecessor/successor; otherwise parent/child.
    """
    config = config or ConstraintParserConfig()
    if config.endpoint_scheme != "auto":
        return config.endpoint_scheme

    tags = ENDPOINT_TAGS["predecessor_successor"] + ENDPOINT_ORIGIN_TAGS["predecessor_successor"]
    for tag in tags:
        if find_child(element=element, tag=tag) is not None:
            return "predecessor_successor"
    return "parent_child"


def resolve_endpoints(
    *,
    element: etree._Element,
    constraint_name: str,
    config: ConstraintParserConfig | None = None,
    notices: list[ParseNotice] | None = None
) -> tuple[str | None, str | None]:
    """Read both endpoint link names.

    A missing endpoint element leaves the name unset silently (implicit
    kinematic root). An endpoint element without a `link` attribute also
    leaves it unset, with an info notice.

    Returns:
        (predecessor_link_name, successor_link_name)
    """
    link_names: list[str | None] = []
    for tag in resolve_endpoint_tags(element=element, config=config):
        endpoint = find_child(element=element, tag=tag)
        if endpoint is None:
            link_names.append(None)
            continue

        link_name = read_attribute(element=endpoint, name="link")
        if link_name is None:
            _notice(
                notices,
                level="info",
                message=f"no {tag} link name specified for Constraint link [{constraint_name}]. this might be the root?",
                field=f"{tag}_link_name",
            )
        link_names.append(link_name)

    return link_names[0], link_names[1]


def parse_header(
    *,
    element: etree._Element,
    config: ConstraintParserConfig | None = None,
    notices: list[ParseNotice] | None = None
) -> ConstraintHeader:
    """Parse the name and endpoints common to every constraint.

    Raises:
        ConstraintParseError: MISSING_NAME if the name attribute is absent or empty
    """
    name = read_attribute(element=element, name="name")
    if not name:
        raise ConstraintParseError(
            kind=ConstraintErrorKind.MISSING_NAME,
            detail="unnamed constraint found",
            field="name",
        )

    predecessor, successor = resolve_endpoints(
        element=element,
        constraint_name=name,
        config=config,
        notices=notices,
    )
    return ConstraintHeader(
        name=name,
        predecessor_link_name=predecessor,
        successor_link_name=successor,
    )


def resolve_constraint_class(
    *,
    element: etree._Element,
    constraint_class: ConstraintClass | None = None
) -> ConstraintClass:
    """Select the variant body parser for an element.

    An explicit `constraint_class` wins. Otherwise the tag decides; the
    generic `constraint` tag reads its optional `class` attribute and
    defaults to JOINT.

    Raises:
        ConstraintParseError: UNKNOWN_CLASS for an unknown tag or class literal
    """
    if constraint_class is not None:
        return constraint_class

    name = read_attribute(element=element, name="name")
    tag = element.tag if isinstance(element.tag, str) else ""
    if tag not in CONSTRAINT_CLASS_BY_TAG:
        raise ConstraintParseError(
            kind=ConstraintErrorKind.UNKNOWN_CLASS,
            detail=f"element <{tag}> is not a constraint",
            constraint_name=name,
        )

    tag_class = CONSTRAINT_CLASS_BY_TAG[tag]
    if tag_class is not None:
        return tag_class

    class_literal = read_attribute(element=element, name="class")
    if class_literal is None:
        return ConstraintClass.JOINT

    try:
        return ConstraintClass(class_literal)
    except ValueError as e:
        raise ConstraintParseError(
            kind=ConstraintErrorKind.UNKNOWN_CLASS,
            detail=f"unknown constraint class '{class_literal}'",
            constraint_name=name,
            field="class",
        ) from e


def _read_origin(
    *,
    element: etree._Element,
    tag: str,
    field: str,
    constraint_name: str,
    notices: list[ParseNotice] | None
) -> Pose:
    origin = find_child(element=element, tag=tag)
    if origin is None:
        _notice(
            notices,
            level="debug",
            message=f"no <{tag}> for [{field}] of constraint [{constraint_name}], using identity transform",
            field=field,
        )
        return Pose.identity()

    try:
        return parse_pose(origin)
    except PoseParseError as e:
        raise ConstraintParseError(
            kind=ConstraintErrorKind.MALFORMED_ORIGIN,
            detail=str(e),
            constraint_name=constraint_name,
            field=field,
        ) from e


def _read_axis(
    *,
    element: etree._Element,
    tag: str,
    field: str,
    default: tuple[float, float, float],
    constraint_name: str,
    notices: list[ParseNotice] | None
) -> np.ndarray:
    axis = find_child(element=element, tag=tag)
    if axis is None:
        _notice(
            notices,
            level="debug",
            message=f"no <{tag}> element for constraint [{constraint_name}], defaulting to ({' '.join(str(v) for v in default)})",
            field=field,
        )
        return np.array(default)

    xyz = read_attribute(element=axis, name="xyz")
    if xyz is None:
        _notice(
            notices,
            level="debug",
            message=f"<{tag}> of constraint [{constraint_name}] has no xyz, keeping default",
            field=field,
        )
        return np.array(default)

    try:
        return parse_vector3(xyz)
    except VectorParseError as e:
        raise ConstraintParseError(
            kind=ConstraintErrorKind.MALFORMED_AXIS,
            detail=f"Malformed {field} [{xyz}]: {e}",
            constraint_name=constraint_name,
            field=field,
        ) from e


def parse_loop_body(
    *,
    element: etree._Element,
    header: ConstraintHeader,
    config: ConstraintParserConfig | None = None,
    notices: list[ParseNotice] | None = None
) -> LoopConstraint:
    """Parse a loop constraint body on top of an already parsed header.

    Both endpoint elements must exist here, even though their `link`
    attribute may not. Axis parsing is skipped entirely for fixed loops.

    Raises:
        ConstraintParseError: MISSING_ENDPOINT_ELEMENT, MALFORMED_ORIGIN,
            MISSING_TYPE, UNKNOWN_TYPE or MALFORMED_AXIS
    """
    name = header.name
    transforms: list[Pose] = []
    for tag, field in zip(
        resolve_endpoint_tags(element=element, config=config),
        ("predecessor_to_constraint_origin_transform", "successor_to_constraint_origin_transform"),
    ):
        endpoint = find_child(element=element, tag=tag)
        if endpoint is None:
            raise ConstraintParseError(
                kind=ConstraintErrorKind.MISSING_ENDPOINT_ELEMENT,
                detail=f"loop constraint has no <{tag}> element",
                constraint_name=name,
                field=tag,
            )
        transforms.append(
            _read_origin(element=endpoint, tag="origin", field=field, constraint_name=name, notices=notices)
        )

    type_literal = read_attribute(element=element, name="type")
    if type_literal is None:
        raise ConstraintParseError(
            kind=ConstraintErrorKind.MISSING_TYPE,
            detail="loop constraint has no type",
            constraint_name=name,
            field="type",
        )

    joint_type = LOOP_JOINT_TYPE_BY_LITERAL.get(type_literal)
    if joint_type is None:
        raise ConstraintParseError(
            kind=ConstraintErrorKind.UNKNOWN_TYPE,
            detail=f"loop constraint has unknown type [{type_literal}]",
            constraint_name=name,
            field="type",
        )

    axis: np.ndarray | None = None
    if joint_type is not LoopJointType.FIXED:
        axis = _read_axis(
            element=element,
            tag="axis",
            field="axis",
            default=DEFAULT_LOOP_AXIS,
            constraint_name=name,
            notices=notices,
        )

    return LoopConstraint(
        name=name,
        predecessor_link_name=header.predecessor_link_name,
        successor_link_name=header.successor_link_name,
        type=joint_type,
        predecessor_to_constraint_origin_transform=transforms[0],
        successor_to_constraint_origin_transform=transforms[1],
        axis=axis,
    )


def parse_coupling_body(
    *,
    element: etree._Element,
    header: ConstraintHeader,
    notices: list[ParseNotice] | None = None
) -> CouplingConstraint:
    """Parse a coupling constraint body.

    A missing `ratio` element leaves the ratio unset.

    Raises:
        ConstraintParseError: MISSING_RATIO_VALUE or INVALID_RATIO_VALUE
    """
    name = header.name
    ratio: float | None = None

    ratio_element = find_child(element=element, tag="ratio")
    if ratio_element is None:
        _notice(
            notices,
            level="debug",
            message=f"no <ratio> for coupling constraint [{name}], ratio left unset",
            field="ratio",
        )
    else:
        value = read_attribute(element=ratio_element, name="value")
        if value is None:
            raise ConstraintParseError(
                kind=ConstraintErrorKind.MISSING_RATIO_VALUE,
                detail="ratio element has no value attribute",
                constraint_name=name,
                field="ratio",
            )
        try:
            ratio = str_to_double(value)
        except ScalarParseError as e:
            raise ConstraintParseError(
                kind=ConstraintErrorKind.INVALID_RATIO_VALUE,
                detail=f"ratio value ({value}) is not a valid float",
                constraint_name=name,
                field="ratio",
            ) from e

    return CouplingConstraint(
        name=name,
        predecessor_link_name=header.predecessor_link_name,
        successor_link_name=header.successor_link_name,
        ratio=ratio,
    )


def parse_joint_body(
    *,
    element: etree._Element,
    header: ConstraintHeader,
    config: ConstraintParserConfig | None = None,
    notices: list[ParseNotice] | None = None
) -> JointConstraint:
    """Parse a joint constraint body.

    Raises:
        ConstraintParseError: MISSING_GEAR_RATIO, INVALID_GEAR_RATIO,
            MALFORMED_AXIS or MALFORMED_ORIGIN
    """
    name = header.name

    gear_ratio_str = read_attribute(element=element, name="gear_ratio")
    if gear_ratio_str is None:
        raise ConstraintParseError(
            kind=ConstraintErrorKind.MISSING_GEAR_RATIO,
            detail="joint constraint has no gear_ratio",
            constraint_name=name,
            field="gear_ratio",
        )
    try:
        gear_ratio = str_to_double(gear_ratio_str)
    except ScalarParseError as e:
        raise ConstraintParseError(
            kind=ConstraintErrorKind.INVALID_GEAR_RATIO,
            detail=f"gear_ratio ({gear_ratio_str}) is not a valid float",
            constraint_name=name,
            field="gear_ratio",
        ) from e

    # Each axis checks its own element
    position_axis = _read_axis(
        element=element,
        tag="pos_axis",
        field="position_axis",
        default=DEFAULT_JOINT_AXIS,
        constraint_name=name,
        notices=notices,
    )
    rotation_axis = _read_axis(
        element=element,
        tag="rot_axis",
        field="rotation_axis",
        default=DEFAULT_JOINT_AXIS,
        constraint_name=name,
        notices=notices,
    )

    scheme = resolve_endpoint_scheme(element=element, config=config)
    predecessor_origin_tag, successor_origin_tag = ENDPOINT_ORIGIN_TAGS[scheme]
    predecessor_transform = _read_origin(
        element=element,
        tag=predecessor_origin_tag,
        field="predecessor_to_constraint_origin_transform",
        constraint_name=name,
        notices=notices,
    )
    successor_transform = _read_origin(
        element=element,
        tag=successor_origin_tag,
        field="successor_to_constraint_origin_transform",
        constraint_name=name,
        notices=notices,
    )

    return JointConstraint(
        name=name,
        predecessor_link_name=header.predecessor_link_name,
        successor_link_name=header.successor_link_name,
        gear_ratio=gear_ratio,
        position_axis=position_axis,
        rotation_axis=rotation_axis,
        predecessor_to_constraint_origin_transform=predecessor_transform,
        successor_to_constraint_origin_transform=successor_transform,
    )


def parse_constraint(
    *,
    element: etree._Element,
    constraint_class: ConstraintClass | None = None,
    config: ConstraintParserConfig | None = None
) -> ConstraintParseResult:
    """Parse one constraint element (header, then variant body).

    Args:
        element: Constraint element (`constraint`, `loop_joint`, `coupling`, ...)
        constraint_class: Force a variant (None = infer from tag / `class`)
        config: Parser configuration (None = defaults)

    Returns:
        ConstraintParseResult with either the record or the error, plus notices
    """
    notices: list[ParseNotice] = []
    try:
        header = parse_header(element=element, config=config, notices=notices)
        resolved_class = resolve_constraint_class(element=element, constraint_class=constraint_class)

        if resolved_class is ConstraintClass.LOOP:
            constraint = parse_loop_body(element=element, header=header, config=config, notices=notices)
        elif resolved_class is ConstraintClass.COUPLING:
            constraint = parse_coupling_body(element=element, header=header, notices=notices)
        else:
            constraint = parse_joint_body(element=element, header=header, config=config, notices=notices)
    except ConstraintParseError as error:
        return ConstraintParseResult(error=error, notices=notices)

    return ConstraintParseResult(constraint=constraint, notices=notices)
