"""
Frame-level TP / FP / FN Separation.

Classification Rules:
---------------------
- **TP**: the result has a ground truth and the pair matches under the
  threshold of the estimation's label.
- **FP**: any other result whose label is a target label.
- Results whose label is not a target label are dropped from both sets.
- **FN**: ground truths of the frame that no TP result refers to, using the
  weak equality of ``DynamicObject``.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ..data import FrameGroundTruth
from ..matching import MatchingMode
from ..objects import DynamicObject, Label, get_label_threshold
from .perception_result import PerceptionResult

logger = logging.getLogger(__name__)


def separate_tp_fp(
    results: Sequence[PerceptionResult],
    target_labels: Sequence[Label],
    thresholds: Sequence[float],
    matching_mode: MatchingMode,
) -> Tuple[List[PerceptionResult], List[PerceptionResult]]:
    """
    Split results into true positives and false positives.

    Args:
        results: Results of one frame.
        target_labels: Evaluated labels.
        thresholds: Thresholds index-aligned with ``target_labels``.
        matching_mode: Matching criterion.

    Returns:
        (tp_results, fp_results), each in input order.
    """
    tp_results: List[PerceptionResult] = []
    fp_results: List[PerceptionResult] = []

    for result in results:
        threshold = get_label_threshold(
            result.estimated_object.label, target_labels, thresholds
        )
        if threshold is None:
            logger.debug(f"Skip result with non-target label: {result.estimated_object.label}")
            continue

        if result.is_result_correct(matching_mode, threshold):
            tp_results.append(result)
        else:
            fp_results.append(result)

    return tp_results, fp_results


def get_false_negatives(
    tp_results: Sequence[PerceptionResult],
    ground_truth_objects: Sequence[DynamicObject],
) -> List[DynamicObject]:
    """
    Ground truths not referenced by any true positive.

    Args:
        tp_results: True-positive results.
        ground_truth_objects: Filtered ground truths of the frame.

    Returns:
        Missed ground truths, in ground-truth order.
    """
    matched = {result.ground_truth_object for result in tp_results}
    return [gt for gt in ground_truth_objects if gt not in matched]


def divide_results_by_label(
    results: Sequence[PerceptionResult],
    target_labels: Sequence[Label],
) -> Dict[Label, List[PerceptionResult]]:
    """Group results by estimation label, keeping input order within a label."""
    results_by_label: Dict[Label, List[PerceptionResult]] = OrderedDict(
        (label, []) for label in target_labels
    )
    for result in results:
        label = result.estimated_object.label
        if label in results_by_label:
            results_by_label[label].append(result)
    return results_by_label


def count_objects_by_label(
    objects: Sequence[DynamicObject],
    target_labels: Sequence[Label],
) -> Dict[Label, int]:
    """Number of objects per target label."""
    counts: Dict[Label, int] = OrderedDict((label, 0) for label in target_labels)
    for obj in objects:
        if obj.label in counts:
            counts[obj.label] += 1
    return counts


@dataclass(frozen=True)
class PerceptionFrameResult:
    """
    Results of one frame and their TP / FP / FN classification.

    Attributes:
        results: All results of the frame, one per estimation.
        frame_ground_truth: Filtered ground truth of the frame.
        matching_mode: Mode used for the TP / FP decision.
        tp_results: True positives.
        fp_results: False positives.
        fn_objects: Missed ground truths.
    """

    results: Tuple[PerceptionResult, ...]
    frame_ground_truth: FrameGroundTruth
    matching_mode: MatchingMode
    tp_results: Tuple[PerceptionResult, ...]
    fp_results: Tuple[PerceptionResult, ...]
    fn_objects: Tuple[DynamicObject, ...]

    @classmethod
    def build(
        cls,
        results: Sequence[PerceptionResult],
        frame_ground_truth: FrameGroundTruth,
        target_labels: Sequence[Label],
        thresholds: Sequence[float],
        matching_mode: MatchingMode = MatchingMode.CENTER_DISTANCE,
    ) -> "PerceptionFrameResult":
        """
        Classify the results of one frame.

        Args:
            results: Assignment results of the frame.
            frame_ground_truth: Filtered ground truth of the frame.
            target_labels: Evaluated labels.
            thresholds: Thresholds index-aligned with ``target_labels``.
            matching_mode: Matching criterion for the TP decision.

        Returns:
            PerceptionFrameResult instance.
        """
        tp_results, fp_results = separate_tp_fp(results, target_labels, thresholds, matching_mode)
        fn_objects = get_false_negatives(tp_results, frame_ground_truth.objects)

        return cls(
            results=tuple(results),
            frame_ground_truth=frame_ground_truth,
            matching_mode=matching_mode,
            tp_results=tuple(tp_results),
            fp_results=tuple(fp_results),
            fn_objects=tuple(fn_objects),
        )

    @property
    def timestamp(self) -> int:
        return self.frame_ground_truth.timestamp

    @property
    def num_tp(self) -> int:
        return len(self.tp_results)

    @property
    def num_fp(self) -> int:
        return len(self.fp_results)

    @property
    def num_fn(self) -> int:
        return len(self.fn_objects)

    def __str__(self) -> str:
        return (
            f"timestamp: {self.timestamp}, results: {len(self.results)}, "
            f"TP: {self.num_tp}, FP: {self.num_fp}, FN: {self.num_fn}"
        )
