"""Rigid transforms locating a constraint frame relative to a link frame."""

import numpy as np
from pydantic import model_validator, Field
from scipy.spatial.transform import Rotation
from typing_extensions import Self

from kinconstraints.data.arbitrary_types_model import ArbitraryTypesModel


class Pose(ArbitraryTypesModel):
    """Rigid pose (translation + rotation).

    Attributes:
        position: (3,) translation in meters
        orientation: (4,) unit quaternion [x, y, z, w] (scipy convention)
    """

    position: np.ndarray = Field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = Field(default_factory=lambda: np.array([0.0, 0.0, 0.0, 1.0]))

    @model_validator(mode="after")
    def validate_shapes(self) -> Self:
        """Validate shapes and normalize the quaternion."""
        self.position = np.asarray(self.position, dtype=float)
        self.orientation = np.asarray(self.orientation, dtype=float)

        if self.position.shape != (3,):
            raise ValueError(f"Position must have shape (3,), got {self.position.shape}")

        if self.orientation.shape != (4,):
            raise ValueError(f"Orientation must have shape (4,), got {self.orientation.shape}")

        if not (np.all(np.isfinite(self.position)) and np.all(np.isfinite(self.orientation))):
            raise ValueError("Pose must be finite")

        norm = np.linalg.norm(self.orientation)
        if norm < 1e-10:
            raise ValueError("Orientation quaternion has zero length")
        self.orientation = self.orientation / norm
        return self

    @classmethod
    def identity(cls) -> "Pose":
        """Pose with zero translation and no rotation."""
        return cls()

    @classmethod
    def from_xyz_rpy(cls, *, xyz: np.ndarray, rpy: np.ndarray) -> "Pose":
        """Build a pose from a translation and fixed-axis roll/pitch/yaw.

        Args:
            xyz: (3,) translation
            rpy: (3,) roll, pitch, yaw in radians about the fixed X, Y, Z axes

        Returns:
            Pose
        """
        quat = Rotation.from_euler("xyz", np.asarray(rpy, dtype=float)).as_quat()
        return cls(position=np.asarray(xyz, dtype=float), orientation=quat)

    @property
    def rotation(self) -> Rotation:
        return Rotation.from_quat(self.orientation)

    @property
    def rpy(self) -> np.ndarray:
        """(3,) fixed-axis roll, pitch, yaw in radians."""
        return self.rotation.as_euler("xyz")

    @property
    def is_identity(self) -> bool:
        return self.is_close(other=Pose.identity())

    def __eq__(self, other: object) -> bool:
        """Poses are equal when they match within `is_close` tolerance."""
        if not isinstance(other, Pose):
            return NotImplemented
        return self.is_close(other=other)

    def is_close(self, *, other: "Pose", atol: float = 1e-9) -> bool:
        """Compare two poses, treating q and -q as the same rotation.

        Args:
            other: Pose to compare against
            atol: Absolute tolerance

        Returns:
            True if translation and rotation match within tolerance
        """
        if not np.allclose(self.position, other.position, atol=atol):
            return False
        dot = abs(float(np.dot(self.orientation, other.orientation)))
        return bool(np.isclose(dot, 1.0, atol=atol))

    def as_matrix(self) -> np.ndarray:
        """(4, 4) homogeneous transform."""
        matrix = np.eye(4)
        matrix[:3, :3] = self.rotation.as_matrix()
        matrix[:3, 3] = self.position
        return matrix
