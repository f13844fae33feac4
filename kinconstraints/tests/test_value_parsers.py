"""Tests for scalar, vector and origin parsing."""

import numpy as np
import pytest

from kinconstraints.core.errors import PoseParseError, ScalarParseError, VectorParseError
from kinconstraints.io.readers.value_parsers import parse_pose, parse_vector3, str_to_double


class TestStrToDouble:
    """Test scalar parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("1.5", 1.5),
        ("-2", -2.0),
        ("1e-3", 0.001),
        ("  0.25 ", 0.25),
    ])
    def test_valid(self, text: str, expected: float) -> None:
        """Should parse plain numbers."""
        assert str_to_double(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "1.0x", "nan", "inf", "1_000", "1 2", "\u0661\u0662"])
    def test_invalid(self, text: str) -> None:
        """Should reject anything that is not a single finite ASCII number."""
        with pytest.raises(ScalarParseError):
            str_to_double(text)


class TestParseVector3:
    """Test vector parsing."""

    def test_valid(self) -> None:
        """Should parse three numbers with any whitespace."""
        vector = parse_vector3("1  -2\t3.5")
        assert np.allclose(vector, [1.0, -2.0, 3.5])
        assert vector.shape == (3,)

    def test_wrong_count(self) -> None:
        """Should reject two or four components."""
        with pytest.raises(VectorParseError):
            parse_vector3("1 2")
        with pytest.raises(VectorParseError):
            parse_vector3("1 2 3 4")

    def test_non_numeric_component(self) -> None:
        """Should reject a non-numeric component."""
        with pytest.raises(VectorParseError, match="Unable to parse"):
            parse_vector3("1 two 3")


class TestParsePose:
    """Test origin parsing."""

    def test_defaults_to_identity(self, make_element) -> None:
        """Should treat missing xyz and rpy as zero."""
        pose = parse_pose(make_element("<origin/>"))
        assert pose.is_identity

    def test_xyz_and_rpy(self, make_element) -> None:
        """Should read translation and fixed-axis rotation."""
        pose = parse_pose(make_element('<origin xyz="1 2 3" rpy="0 0 1.5707963267948966"/>'))

        assert np.allclose(pose.position, [1.0, 2.0, 3.0])
        assert np.allclose(pose.rpy, [0.0, 0.0, np.pi / 2])
        # Rotating x by +90 degrees about z gives y
        assert np.allclose(pose.rotation.apply([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])

    def test_malformed_xyz(self, make_element) -> None:
        """Should fail on malformed xyz."""
        with pytest.raises(PoseParseError, match="xyz"):
            parse_pose(make_element('<origin xyz="1 2"/>'))

    def test_malformed_rpy(self, make_element) -> None:
        """Should fail on malformed rpy."""
        with pytest.raises(PoseParseError, match="rpy"):
            parse_pose(make_element('<origin rpy="a b c"/>'))
