"""Object filtering by label, position, point count and instance id."""

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..objects import DynamicObject, Label, get_label_threshold

if TYPE_CHECKING:
    from ..eval.config import FilterParams

logger = logging.getLogger(__name__)


def is_target_object(
    obj: DynamicObject,
    target_labels: Sequence[Label],
    max_x_positions: Sequence[float],
    max_y_positions: Sequence[float],
    min_point_numbers: Optional[Sequence[int]] = None,
    target_uuids: Optional[Sequence[str]] = None,
) -> bool:
    """
    Decide whether an object takes part in the evaluation.

    Args:
        obj: Object to test.
        target_labels: Evaluated labels.
        max_x_positions: Largest |x| per label.
        max_y_positions: Largest |y| per label.
        min_point_numbers: Smallest point count per label (ground truth only).
        target_uuids: Instance ids to keep (ground truth only).

    Returns:
        True when the object is kept.
    """
    if obj.label not in target_labels:
        return False

    max_x = get_label_threshold(obj.label, target_labels, max_x_positions)
    max_y = get_label_threshold(obj.label, target_labels, max_y_positions)
    if not (abs(obj.position[0]) < max_x and abs(obj.position[1]) < max_y):
        return False

    if min_point_numbers is not None and obj.pointcloud_num is not None:
        min_points = get_label_threshold(obj.label, target_labels, min_point_numbers)
        if obj.pointcloud_num < min_points:
            return False

    if target_uuids is not None and obj.uuid is not None:
        if obj.uuid not in target_uuids:
            return False

    return True


def filter_objects(
    objects: Sequence[DynamicObject],
    is_gt: bool,
    filter_params: "FilterParams",
) -> List[DynamicObject]:
    """
    Keep the objects that pass ``filter_params``.

    Point-count and instance-id conditions apply to ground truths only.

    Args:
        objects: Objects of one frame.
        is_gt: Whether ``objects`` are ground truths.
        filter_params: Filtering parameters.

    Returns:
        Kept objects, in input order.
    """
    kept = [
        obj
        for obj in objects
        if is_target_object(
            obj,
            filter_params.target_labels,
            filter_params.max_x_positions,
            filter_params.max_y_positions,
            filter_params.min_point_numbers if is_gt else None,
            filter_params.target_uuids if is_gt else None,
        )
    ]

    logger.debug(
        f"Kept {len(kept)}/{len(objects)} {'ground truth' if is_gt else 'estimated'} objects"
    )
    return kept
