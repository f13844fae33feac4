"""String and origin-element parsers shared by the constraint reader.

- str_to_double(): one float, locale independent
- parse_vector3(): three whitespace-separated floats
- parse_pose(): an origin element (xyz + rpy) into a Pose
"""

import numpy as np
from lxml import etree

from kinconstraints.core.errors import PoseParseError, ScalarParseError, VectorParseError
from kinconstraints.data.pose import Pose


def str_to_double(text: str) -> float:
    """Parse a string as a finite float.

    Rejects empty strings, non-ASCII digits, digit-group underscores and
    non-finite tokens ("nan", "inf"), none of which a URDF number may contain.

    Args:
        text: String to parse

    Returns:
        Parsed value

    Raises:
        ScalarParseError: If the string is not a finite number
    """
    stripped = text.strip()
    if not stripped or not stripped.isascii() or "_" in stripped:
        raise ScalarParseError(f"Failed converting string to double: '{text}'")

    try:
        value = float(stripped)
    except ValueError as e:
        raise ScalarParseError(f"Failed converting string to double: '{text}'") from e

    if not np.isfinite(value):
        raise ScalarParseError(f"Failed converting string to double: '{text}' is not finite")
    return value


def parse_vector3(text: str) -> np.ndarray:
    """Parse "x y z" into a (3,) array.

    Args:
        text: Whitespace-separated numbers

    Returns:
        (3,) float array

    Raises:
        VectorParseError: If there are not exactly three valid numbers
    """
    parts = text.split()
    if len(parts) != 3:
        raise VectorParseError(f"Parser found {len(parts)} elements but 3 expected while parsing vector [{text}]")

    try:
        return np.array([str_to_double(part) for part in parts])
    except ScalarParseError as e:
        raise VectorParseError(f"Unable to parse component of vector [{text}]: {e}") from e


def parse_pose(origin: etree._Element) -> Pose:
    """Parse an origin element into a Pose.

    Missing `xyz` / `rpy` attributes default to zero.

    Args:
        origin: Element carrying optional `xyz` and `rpy` attributes

    Returns:
        Pose

    Raises:
        PoseParseError: If either attribute is malformed
    """
    xyz = np.zeros(3)
    rpy = np.zeros(3)

    xyz_str = origin.get("xyz")
    if xyz_str is not None:
        try:
            xyz = parse_vector3(xyz_str)
        except VectorParseError as e:
            raise PoseParseError(f"Malformed origin xyz [{xyz_str}]: {e}") from e

    rpy_str = origin.get("rpy")
    if rpy_str is not None:
        try:
            rpy = parse_vector3(rpy_str)
        except VectorParseError as e:
            raise PoseParseError(f"Malformed origin rpy [{rpy_str}]: {e}") from e

    return Pose.from_xyz_rpy(xyz=xyz, rpy=rpy)
