"""
Matching Strategies for Estimated / Ground-Truth Object Pairs.

Each ``MatchingMode`` scores a candidate pair and decides whether the pair
matches for a given threshold.

Matching Modes:
---------------

- **CenterDistance**: Euclidean 3D distance between box centers.
  Lower is better; match iff score < threshold.

- **PlaneDistance**: For each box take the two footprint corners nearest to
  the origin and order them (left, right) with the cross-product rule. The
  score is the root mean square of the BEV distances between the left
  corners and between the right corners:

      score = sqrt((d(L_est, L_gt)² + d(R_est, R_gt)²) / 2)

  Lower is better; match iff score < threshold.

- **Iou2d**: BEV footprint intersection over union:

      IoU = A_inter / (A_est + A_gt - A_inter)

  Higher is better; match iff threshold < score.

- **Iou3d**: Volume intersection over union, with the volume intersection
  taken as BEV intersection area times vertical span overlap:

      V_inter = A_inter * overlap_z
      IoU = V_inter / (V_est + V_gt - V_inter)

  Higher is better; match iff threshold < score.

A zero union yields 0.0, never NaN.
"""

from enum import Enum

import numpy as np

from ..geometry import (
    distance_points_bev,
    footprint_polygon,
    nearest_corner_pair,
    vertical_overlap,
)
from ..objects import DynamicObject


class MatchingMode(Enum):
    """Closed set of matching criteria."""

    CENTER_DISTANCE = "Center Distance"
    PLANE_DISTANCE = "Plane Distance"
    IOU_2D = "IoU 2D"
    IOU_3D = "IoU 3D"

    def __str__(self) -> str:
        return self.value

    @property
    def lower_is_better(self) -> bool:
        return self in (MatchingMode.CENTER_DISTANCE, MatchingMode.PLANE_DISTANCE)


def center_distance(estimated_object: DynamicObject, ground_truth_object: DynamicObject) -> float:
    """Euclidean distance between the centers of two boxes."""
    return estimated_object.distance_from(ground_truth_object.position)


def plane_distance(estimated_object: DynamicObject, ground_truth_object: DynamicObject) -> float:
    """
    RMS distance between the nearest footprint corner pairs of two boxes.

    Args:
        estimated_object: Estimated box.
        ground_truth_object: Ground-truth box.

    Returns:
        Distance in meters.
    """
    est_left, est_right = nearest_corner_pair(estimated_object.footprint())
    gt_left, gt_right = nearest_corner_pair(ground_truth_object.footprint())

    distance_left = distance_points_bev(est_left, gt_left)
    distance_right = distance_points_bev(est_right, gt_right)

    return float(np.sqrt((distance_left ** 2 + distance_right ** 2) / 2.0))


def _intersection_area(estimated_object: DynamicObject, ground_truth_object: DynamicObject) -> float:
    est_polygon = footprint_polygon(estimated_object.footprint())
    gt_polygon = footprint_polygon(ground_truth_object.footprint())
    return float(est_polygon.intersection(gt_polygon).area)


def iou_2d(estimated_object: DynamicObject, ground_truth_object: DynamicObject) -> float:
    """
    BEV intersection over union of two boxes.

    Returns:
        IoU in [0, 1].
    """
    intersection = _intersection_area(estimated_object, ground_truth_object)
    union = estimated_object.area + ground_truth_object.area - intersection

    if union <= 0:
        return 0.0

    return intersection / union


def iou_3d(estimated_object: DynamicObject, ground_truth_object: DynamicObject) -> float:
    """
    Volume intersection over union of two boxes.

    Returns:
        IoU in [0, 1].
    """
    intersection_area = _intersection_area(estimated_object, ground_truth_object)
    overlap_z = vertical_overlap(
        estimated_object.z_min,
        estimated_object.z_max,
        ground_truth_object.z_min,
        ground_truth_object.z_max,
    )
    intersection = intersection_area * overlap_z
    union = estimated_object.volume + ground_truth_object.volume - intersection

    if union <= 0:
        return 0.0

    return intersection / union


def calculate_score(
    matching_mode: MatchingMode,
    estimated_object: DynamicObject,
    ground_truth_object: DynamicObject,
) -> float:
    """
    Score a pair of objects with the given matching mode.

    Args:
        matching_mode: Matching criterion.
        estimated_object: Estimated box.
        ground_truth_object: Ground-truth box.

    Returns:
        Matching score (distance in meters or IoU).
    """
    if matching_mode is MatchingMode.CENTER_DISTANCE:
        return center_distance(estimated_object, ground_truth_object)
    if matching_mode is MatchingMode.PLANE_DISTANCE:
        return plane_distance(estimated_object, ground_truth_object)
    if matching_mode is MatchingMode.IOU_2D:
        return iou_2d(estimated_object, ground_truth_object)
    if matching_mode is MatchingMode.IOU_3D:
        return iou_3d(estimated_object, ground_truth_object)
    raise ValueError(f"Unknown matching mode: {matching_mode}")


def is_better_score(matching_mode: MatchingMode, score: float, reference: float) -> bool:
    """Whether ``score`` is strictly better than ``reference`` for this mode."""
    if matching_mode.lower_is_better:
        return score < reference
    return reference < score


def is_match(
    matching_mode: MatchingMode,
    estimated_object: DynamicObject,
    ground_truth_object: DynamicObject,
    threshold: float,
) -> bool:
    """
    Decide whether a pair matches under a threshold.

    Distance modes match when the score is below the threshold, IoU modes
    when the score is above it.
    """
    score = calculate_score(matching_mode, estimated_object, ground_truth_object)
    return is_better_score(matching_mode, score, threshold)
