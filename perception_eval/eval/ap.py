"""
Average Precision (AP) and Heading-weighted AP (APH).

Computes AP / APH for one label from its results, in the order the results
were produced. No confidence sort is applied, so the score depends on the
submission order of the frames and on the assignment order within a frame.

Algorithm:
----------
1. For each result i, in order:
       tp[i] = tp_value(result)   if the pair matches under the threshold
       fp[i] = 1                  otherwise
   and accumulate both into running sums.

2. TP values:
       AP:   1.0 for any matched pair
       APH:  1 - heading_error / pi, clamped to [0, 1], where
             heading_error = |yaw_est - yaw_gt| wrapped into [0, pi]
             (2*pi - diff when diff > pi)

3. Curve:
       precision[i] = running_tp[i] / (i + 1)
       recall[i]    = running_tp[i] / num_gt      (0 when num_gt == 0)

4. Envelope: start from the last (precision, recall) point, scan backward
   and keep a point only when its precision is strictly greater than the
   largest precision kept so far. The envelope is closed by an anchor at
   recall 0 carrying the last kept precision.

5. AP = sum_i  max_precision[i] * (max_recall[i] - max_recall[i + 1])

Degenerate Case:
----------------
No results and no ground truths for the label: AP is NaN, meaning
"undefined for this label". It is reported as-is.
With results but no ground truths, recall stays 0 and AP is 0.0.
With ground truths but no results, AP is 0.0.
"""

import logging
from enum import Enum
from typing import Sequence, Tuple

import numpy as np

from ..matching import MatchingMode
from ..result import PerceptionResult

logger = logging.getLogger(__name__)


class TPMetrics(Enum):
    """Value a matched pair contributes to the running TP sum."""

    AP = "AP"
    APH = "APH"

    def __str__(self) -> str:
        return self.value

    def get_value(self, result: PerceptionResult) -> float:
        """
        TP value of a result.

        Args:
            result: Matched result.

        Returns:
            Value in [0, 1]; 0.0 without a ground truth.
        """
        if result.ground_truth_object is None:
            return 0.0

        if self is TPMetrics.AP:
            return 1.0

        return heading_tp_value(
            result.estimated_object.heading(),
            result.ground_truth_object.heading(),
        )


def heading_tp_value(estimated_heading: float, ground_truth_heading: float) -> float:
    """
    Heading accuracy weight of a matched pair.

    Args:
        estimated_heading: Estimated yaw [rad].
        ground_truth_heading: Ground-truth yaw [rad].

    Returns:
        1.0 for identical headings, 0.0 for opposite headings.
    """
    diff_heading = abs(estimated_heading - ground_truth_heading)

    if diff_heading > np.pi:
        diff_heading = 2.0 * np.pi - diff_heading

    return float(np.clip(1.0 - diff_heading / np.pi, 0.0, 1.0))


def is_degenerate(num_results: int, num_ground_truth: int) -> bool:
    """No results and no ground truths: AP is undefined."""
    return num_results == 0 and num_ground_truth == 0


def calculate_tp_fp(
    results: Sequence[PerceptionResult],
    matching_mode: MatchingMode,
    threshold: float,
    tp_metrics: TPMetrics = TPMetrics.AP,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Running TP and FP sums over the results.

    Args:
        results: Results of one label, in submission order.
        matching_mode: Matching criterion.
        threshold: Threshold of the label.
        tp_metrics: TP value variant.

    Returns:
        (tp_list, fp_list) cumulative arrays of length len(results).
    """
    num_results = len(results)
    tp_list = np.zeros(num_results)
    fp_list = np.zeros(num_results)

    for i, result in enumerate(results):
        if result.is_result_correct(matching_mode, threshold):
            tp_list[i] = tp_metrics.get_value(result)
        else:
            fp_list[i] = 1.0

    return np.cumsum(tp_list), np.cumsum(fp_list)


def calculate_precision_recall(
    tp_list: np.ndarray,
    num_ground_truth: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Precision and recall at every position of the running TP sum.

    Args:
        tp_list: Cumulative TP values.
        num_ground_truth: Ground-truth count of the label.

    Returns:
        (precision_list, recall_list).
    """
    tp_list = np.asarray(tp_list, dtype=np.float64)
    precision_list = tp_list / np.arange(1, len(tp_list) + 1)

    if num_ground_truth > 0:
        recall_list = tp_list / num_ground_truth
    else:
        recall_list = np.zeros_like(tp_list)

    return precision_list, recall_list


def interpolate_precision_recall(
    precision_list: Sequence[float],
    recall_list: Sequence[float],
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Non-decreasing precision envelope, ordered from the highest recall down.

    Besides the backward running maximum, the envelope gets a final point at
    recall 0 carrying the last kept precision. Without it the segment from
    recall 0 to the first kept recall would be missing from the integral,
    and a single perfect detection would score 0 instead of 1.

    Args:
        precision_list: Precision per position.
        recall_list: Recall per position.

    Returns:
        (max_precision_list, max_recall_list), empty for an empty curve.
    """
    if len(precision_list) == 0:
        return np.array([]), np.array([])

    max_precision_list = [precision_list[-1]]
    max_recall_list = [recall_list[-1]]

    for i in reversed(range(len(precision_list) - 1)):
        if precision_list[i] > max_precision_list[-1]:
            max_precision_list.append(precision_list[i])
            max_recall_list.append(recall_list[i])

    # Close the envelope at recall 0
    max_precision_list.append(max_precision_list[-1])
    max_recall_list.append(0.0)

    return np.array(max_precision_list), np.array(max_recall_list)


def calculate_ap(
    max_precision_list: Sequence[float],
    max_recall_list: Sequence[float],
) -> float:
    """
    Integrate the precision envelope over recall.

    Args:
        max_precision_list: Envelope precision, highest recall first.
        max_recall_list: Envelope recall, highest recall first.

    Returns:
        Area under the envelope; 0.0 for an empty envelope.
    """
    ap = 0.0
    for i in range(len(max_precision_list) - 1):
        ap += max_precision_list[i] * (max_recall_list[i] - max_recall_list[i + 1])
    return float(ap)


class Ap:
    """
    AP or APH of one label under one matching mode and threshold.

    Attributes:
        tp_metrics: TP value variant.
        matching_mode: Matching criterion.
        threshold: Threshold of the label.
        num_ground_truth: Ground-truth count of the label.
        tp_list / fp_list: Running TP / FP sums.
        precision_list / recall_list: PR curve.
        max_precision_list / max_recall_list: Envelope.
        ap: Score, NaN when undefined.
    """

    def __init__(
        self,
        tp_metrics: TPMetrics,
        results: Sequence[PerceptionResult],
        num_ground_truth: int,
        matching_mode: MatchingMode,
        threshold: float,
    ):
        """
        Compute the score.

        Args:
            tp_metrics: TP value variant.
            results: Results of the label, in submission order.
            num_ground_truth: Ground-truth count of the label.
            matching_mode: Matching criterion.
            threshold: Threshold of the label.
        """
        self.tp_metrics = tp_metrics
        self.matching_mode = matching_mode
        self.threshold = threshold
        self.num_ground_truth = num_ground_truth
        self.num_results = len(results)

        self.tp_list, self.fp_list = calculate_tp_fp(results, matching_mode, threshold, tp_metrics)
        self.precision_list, self.recall_list = calculate_precision_recall(
            self.tp_list, num_ground_truth
        )
        self.max_precision_list, self.max_recall_list = interpolate_precision_recall(
            self.precision_list, self.recall_list
        )

        if is_degenerate(self.num_results, num_ground_truth):
            self.ap = float("nan")
        else:
            self.ap = calculate_ap(self.max_precision_list, self.max_recall_list)

    def __repr__(self) -> str:
        return (
            f"Ap({self.tp_metrics}, {self.matching_mode}, threshold={self.threshold}, "
            f"results={self.num_results}, gt={self.num_ground_truth}, ap={self.ap:.4f})"
        )
