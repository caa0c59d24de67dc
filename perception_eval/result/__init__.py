"""
Perception results: assignment and frame-level classification.

Classes:
    PerceptionResult: (estimation, optional ground truth) pair.
    PerceptionFrameResult: One frame's results with TP / FP / FN sets.

Functions:
    get_perception_results: Greedy one-to-one assignment.
    separate_tp_fp: Split results into TP and FP.
    get_false_negatives: Ground truths missed by the TP results.
    divide_results_by_label: Group results per target label.
    count_objects_by_label: Count objects per target label.
"""

from .perception_result import PerceptionResult
from .assignment import get_perception_results, get_fp_perception_results
from .frame_result import (
    PerceptionFrameResult,
    separate_tp_fp,
    get_false_negatives,
    divide_results_by_label,
    count_objects_by_label,
)

__all__ = [
    "PerceptionResult",
    "get_perception_results",
    "get_fp_perception_results",
    "PerceptionFrameResult",
    "separate_tp_fp",
    "get_false_negatives",
    "divide_results_by_label",
    "count_objects_by_label",
]
