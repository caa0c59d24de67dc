"""
Greedy One-to-One Assignment.

Pairs every estimation of a frame with at most one ground truth.

Algorithm:
----------
1. Build the N x M ``ScoreTable`` (label-incompatible cells are ineligible).
2. Walk the estimations in input order. For each, pick the best eligible
   ground-truth column that has not been consumed yet (smallest score for
   distance modes, largest for IoU modes; ties go to the lowest column).
3. Record the pair and mark the column consumed. Columns are tracked by
   their stable index; nothing is removed from the input lists.
4. Estimations with no eligible column left become false positives and are
   appended after the paired results, in input order.

Every estimation appears in exactly one result.
"""

import logging
from typing import List, Sequence, Set

from ..matching import MatchingMode, ScoreTable
from ..objects import DynamicObject
from .perception_result import PerceptionResult

logger = logging.getLogger(__name__)


def get_fp_perception_results(
    estimated_objects: Sequence[DynamicObject],
) -> List[PerceptionResult]:
    """Wrap every estimation as a false positive."""
    return [PerceptionResult(est, None) for est in estimated_objects]


def get_perception_results(
    estimated_objects: Sequence[DynamicObject],
    ground_truth_objects: Sequence[DynamicObject],
    matching_mode: MatchingMode = MatchingMode.CENTER_DISTANCE,
) -> List[PerceptionResult]:
    """
    Assign estimations to ground truths.

    Args:
        estimated_objects: Filtered estimations of one frame.
        ground_truth_objects: Filtered ground truths of the same frame.
        matching_mode: Criterion used to rank candidate pairs.

    Returns:
        List of results, one per estimation.
    """
    if len(estimated_objects) == 0:
        return []

    if len(ground_truth_objects) == 0:
        return get_fp_perception_results(estimated_objects)

    score_table = ScoreTable.build(estimated_objects, ground_truth_objects, matching_mode)

    results: List[PerceptionResult] = []
    unmatched: List[DynamicObject] = []
    consumed: Set[int] = set()

    for est_idx, est in enumerate(estimated_objects):
        gt_idx = score_table.best_index(est_idx, consumed)
        if gt_idx is None:
            unmatched.append(est)
            continue

        results.append(PerceptionResult(est, ground_truth_objects[gt_idx]))
        consumed.add(gt_idx)

    results.extend(get_fp_perception_results(unmatched))

    logger.debug(
        f"Assigned {len(estimated_objects) - len(unmatched)} pairs, "
        f"{len(unmatched)} unmatched estimations ({matching_mode})"
    )

    return results
