"""
Geometry primitives for object boxes.

Functions:
    quaternion_to_rotation: Quaternion [w, x, y, z] to 3x3 rotation matrix.
    quaternion_to_euler: Quaternion to (roll, pitch, yaw).
    quaternion_to_yaw: Heading angle of a quaternion.
    normalize_angle: Wrap an angle into [-pi, pi].
    distance_points: 3D Euclidean distance.
    distance_points_bev: BEV (xy) Euclidean distance.
    box_footprint: Ground-plane corners of an oriented box.
    footprint_polygon: Shapely polygon of footprint corners.
    get_point_left_right: Rotation-independent ordering of two corners.
    nearest_corner_pair: Two corners nearest to the origin, as (left, right).
    vertical_overlap: Intersection length of two vertical spans.
"""

from .transforms import (
    quaternion_to_rotation,
    quaternion_to_euler,
    quaternion_to_yaw,
    normalize_angle,
    distance_points,
    distance_points_bev,
)
from .footprint import (
    box_footprint,
    footprint_polygon,
    get_point_left_right,
    nearest_corner_pair,
    vertical_overlap,
)

__all__ = [
    "quaternion_to_rotation",
    "quaternion_to_euler",
    "quaternion_to_yaw",
    "normalize_angle",
    "distance_points",
    "distance_points_bev",
    "box_footprint",
    "footprint_polygon",
    "get_point_left_right",
    "nearest_corner_pair",
    "vertical_overlap",
]
