"""
Box Footprint Geometry.

An object box is described by its center, orientation and size
``(length, width, height)``. Length runs along the object's x axis
(the heading direction), width along its y axis.

Footprint Corners:
==================

In the object frame the four ground-plane corners are:

    c0 = ( l/2,  w/2, 0)    front-left
    c1 = (-l/2,  w/2, 0)    rear-left
    c2 = (-l/2, -w/2, 0)    rear-right
    c3 = ( l/2, -w/2, 0)    front-right

and in the reference frame:

    C_i = R @ c_i + center

The BEV polygon is (C_0..C_3) projected onto the xy plane.

Vertical Extent:
================

A box spans [z - h/2, z + h/2]. The vertical overlap of two boxes is the
length of the intersection of their spans, 0 when they are disjoint.
"""

from typing import Sequence, Tuple

import numpy as np
from shapely.geometry import Polygon

from .transforms import quaternion_to_rotation


def box_footprint(
    position: Sequence[float],
    orientation: Sequence[float],
    size: Sequence[float],
) -> np.ndarray:
    """
    Compute the 4 ground-plane corners of an oriented box.

    Args:
        position: Box center [x, y, z].
        orientation: Quaternion [w, x, y, z].
        size: [length, width, height].

    Returns:
        np.ndarray: Corners (4, 3), counter-clockwise seen from above.

    Example:
        >>> box_footprint([1.0, 1.0, 0.0], [1.0, 0.0, 0.0, 0.0], [2.0, 2.0, 1.0])
        array([[2., 2., 0.],
               [0., 2., 0.],
               [0., 0., 0.],
               [2., 0., 0.]])
    """
    half_l = 0.5 * size[0]
    half_w = 0.5 * size[1]
    local = np.array([
        [half_l, half_w, 0.0],
        [-half_l, half_w, 0.0],
        [-half_l, -half_w, 0.0],
        [half_l, -half_w, 0.0],
    ])

    R = quaternion_to_rotation(orientation)
    center = np.asarray(position, dtype=np.float64)

    return local @ R.T + center


def footprint_polygon(corners: np.ndarray) -> Polygon:
    """Shapely polygon of footprint corners (BEV coordinates only)."""
    return Polygon(np.asarray(corners)[:, :2])


def get_point_left_right(
    point1: np.ndarray,
    point2: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Order two points as (left, right) with the sign of their 2D cross product.

    The ordering depends only on where the points lie, not on the order in
    which the box corners were generated, so two boxes yield comparable pairs
    regardless of their orientation.

    Args:
        point1: Point [x, y, ...].
        point2: Point [x, y, ...].

    Returns:
        (left, right) points.

    Example:
        >>> left, right = get_point_left_right(np.array([1.0, 1.0]), np.array([2.0, 2.0]))
        >>> left, right  # cross product is 0, so the points are swapped
        (array([2., 2.]), array([1., 1.]))
    """
    cross_product = point1[0] * point2[1] - point1[1] * point2[0]
    if cross_product < 0.0:
        return point1, point2
    return point2, point1


def nearest_corner_pair(corners: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Pick the two footprint corners closest to the origin, as (left, right).

    Args:
        corners: Footprint corners (4, 3).

    Returns:
        (left, right) corners.
    """
    corners = np.asarray(corners)
    distances = np.linalg.norm(corners[:, :2], axis=1)
    # Stable sort keeps corner order deterministic on equal distances
    order = np.argsort(distances, kind="stable")
    return get_point_left_right(corners[order[0]], corners[order[1]])


def vertical_overlap(
    z_min1: float,
    z_max1: float,
    z_min2: float,
    z_max2: float,
) -> float:
    """
    Length of the intersection of two vertical spans.

    Example:
        >>> vertical_overlap(0.0, 2.0, 1.0, 3.0)
        1.0
        >>> vertical_overlap(0.0, 1.0, 2.0, 3.0)
        0.0
    """
    return max(0.0, min(z_max1, z_max2) - max(z_min1, z_min2))
