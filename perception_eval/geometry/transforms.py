"""
Rotation and Distance Primitives.

Pure functions shared by every matching strategy. Nothing here holds state.

Quaternion Convention:
======================

Orientations are unit quaternions stored scalar-first, ``[w, x, y, z]``.
``scipy.spatial.transform.Rotation`` expects scalar-last ``[x, y, z, w]``,
so every conversion goes through ``_to_scipy``.

For a unit quaternion q = (w, x, y, z) the rotation matrix is:

        | 1-2(y²+z²)   2(xy-wz)    2(xz+wy)  |
    R = | 2(xy+wz)     1-2(x²+z²)  2(yz-wx)  |
        | 2(xz-wy)     2(yz+wx)    1-2(x²+y²)|

Heading (yaw) is the first angle of the intrinsic Z-Y-X decomposition and
lies in [-pi, pi], so a half turn about z is representable.

Distances:
==========

    3D:   d = sqrt((x1-x2)² + (y1-y2)² + (z1-z2)²)
    BEV:  d = sqrt((x1-x2)² + (y1-y2)²)
"""

from typing import Sequence, Tuple

import numpy as np
from scipy.spatial.transform import Rotation


def _to_scipy(q: Sequence[float]) -> Rotation:
    w, x, y, z = q
    return Rotation.from_quat([x, y, z, w])


def quaternion_to_rotation(q: Sequence[float]) -> np.ndarray:
    """
    Convert a quaternion into a 3x3 rotation matrix.

    Args:
        q: Quaternion in [w, x, y, z] order.

    Returns:
        np.ndarray: Rotation matrix (3, 3).

    Example:
        >>> quaternion_to_rotation([1.0, 0.0, 0.0, 0.0])
        array([[1., 0., 0.],
               [0., 1., 0.],
               [0., 0., 1.]])
    """
    return _to_scipy(q).as_matrix()


def quaternion_to_euler(q: Sequence[float]) -> Tuple[float, float, float]:
    """
    Convert a quaternion into euler angles.

    Args:
        q: Quaternion in [w, x, y, z] order.

    Returns:
        (roll, pitch, yaw) in radians.
    """
    yaw, pitch, roll = _to_scipy(q).as_euler("ZYX")
    return float(roll), float(pitch), float(yaw)


def quaternion_to_yaw(q: Sequence[float]) -> float:
    """Heading angle around the z axis, in [-pi, pi]."""
    return quaternion_to_euler(q)[2]


def normalize_angle(angle: float) -> float:
    """
    Wrap an angle into [-pi, pi].

    Args:
        angle: Angle in radians.

    Returns:
        Equivalent angle in [-pi, pi].
    """
    if angle > np.pi:
        return angle - 2.0 * np.pi
    if angle < -np.pi:
        return angle + 2.0 * np.pi
    return angle


def distance_points(point1: Sequence[float], point2: Sequence[float]) -> float:
    """
    Euclidean distance between two 3D points.

    Example:
        >>> distance_points([1.0, 1.0, 1.0], [2.0, 2.0, 2.0])  # sqrt(3)
        1.7320508075688772
    """
    return float(np.linalg.norm(np.asarray(point1, dtype=np.float64) - np.asarray(point2, dtype=np.float64)))


def distance_points_bev(point1: Sequence[float], point2: Sequence[float]) -> float:
    """Euclidean distance between two points, ignoring z."""
    p1 = np.asarray(point1, dtype=np.float64)[:2]
    p2 = np.asarray(point2, dtype=np.float64)[:2]
    return float(np.linalg.norm(p1 - p2))
