"""
Dynamic Object Representation.

A ``DynamicObject`` is one estimated or ground-truth 3D box at one instant.
It is immutable; every processing stage builds new values instead of
modifying objects in place.

Equality:
=========

Two objects compare equal when their timestamp, frame id, position,
orientation and label are equal. Size, velocity, confidence, point count and
instance id do not take part. This weak equality is what false-negative
detection relies on: a ground truth is "found" when some true positive
refers to an object that is equal to it in this sense.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..geometry import (
    box_footprint,
    distance_points,
    distance_points_bev,
    normalize_angle,
    quaternion_to_euler,
    quaternion_to_rotation,
)
from .frame_id import FrameID
from .label import Label

Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]


def _as_tuple(values: Sequence[float], length: int, name: str) -> tuple:
    array = np.asarray(values, dtype=np.float64).flatten()
    if array.shape != (length,):
        raise ValueError(f"{name} must have {length} elements, got {array.shape}")
    return tuple(float(v) for v in array)


@dataclass(frozen=True)
class ObjectState:
    """Kinematic state of an object."""

    position: Vector3
    orientation: Quaternion
    size: Vector3
    velocity: Optional[Vector3] = None


@dataclass(frozen=True, eq=False)
class DynamicObject:
    """
    3D object box with metadata.

    Attributes:
        timestamp: Timestamp in microseconds.
        frame_id: Coordinate frame of position and orientation.
        position: Box center [x, y, z] in meters.
        orientation: Unit quaternion [w, x, y, z].
        size: [length, width, height] in meters.
        label: Object class.
        confidence: Detection confidence (1.0 for ground truth).
        velocity: Optional velocity [vx, vy, vz].
        pointcloud_num: Number of points inside the box (ground truth only).
        uuid: Optional instance id.
    """

    timestamp: int
    frame_id: FrameID
    position: Vector3
    orientation: Quaternion
    size: Vector3
    label: Label
    confidence: float = 1.0
    velocity: Optional[Vector3] = None
    pointcloud_num: Optional[int] = None
    uuid: Optional[str] = None

    def __post_init__(self):
        """Normalize vectors to float tuples and validate their lengths."""
        object.__setattr__(self, "position", _as_tuple(self.position, 3, "position"))
        object.__setattr__(self, "orientation", _as_tuple(self.orientation, 4, "orientation"))
        object.__setattr__(self, "size", _as_tuple(self.size, 3, "size"))
        if self.velocity is not None:
            object.__setattr__(self, "velocity", _as_tuple(self.velocity, 3, "velocity"))

    def _key(self) -> tuple:
        return (self.timestamp, self.frame_id, self.position, self.orientation, self.label)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DynamicObject):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return (
            f"frame_id: {self.frame_id}, position: {self.position}, "
            f"orientation: {self.orientation}, size: {self.size}, "
            f"velocity: {self.velocity}, confidence: {self.confidence}, "
            f"label: {self.label}, uuid: {self.uuid}"
        )

    def state(self) -> ObjectState:
        return ObjectState(
            position=self.position,
            orientation=self.orientation,
            size=self.size,
            velocity=self.velocity,
        )

    @property
    def label_name(self) -> str:
        return str(self.label)

    @property
    def area(self) -> float:
        """BEV area, length * width."""
        return self.size[0] * self.size[1]

    @property
    def volume(self) -> float:
        return self.area * self.size[2]

    @property
    def z_min(self) -> float:
        return self.position[2] - 0.5 * self.size[2]

    @property
    def z_max(self) -> float:
        return self.position[2] + 0.5 * self.size[2]

    def distance(self) -> float:
        """Distance from the frame origin."""
        return distance_points(self.position, (0.0, 0.0, 0.0))

    def distance_bev(self) -> float:
        return distance_points_bev(self.position, (0.0, 0.0, 0.0))

    def distance_from(self, point: Sequence[float]) -> float:
        return distance_points(self.position, point)

    def distance_bev_from(self, point: Sequence[float]) -> float:
        return distance_points_bev(self.position, point)

    def euler(self) -> Tuple[float, float, float]:
        """(roll, pitch, yaw) in radians."""
        return quaternion_to_euler(self.orientation)

    def heading(self) -> float:
        """Yaw angle in [-pi, pi]."""
        return normalize_angle(self.euler()[2])

    def rotation_matrix(self) -> np.ndarray:
        return quaternion_to_rotation(self.orientation)

    def footprint(self) -> np.ndarray:
        """Ground-plane corners (4, 3) of the box."""
        return box_footprint(self.position, self.orientation, self.size)
