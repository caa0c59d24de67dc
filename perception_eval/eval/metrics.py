"""
Detection Metrics Aggregation.

Runs the AP / APH computation for every target label under each of the
four matching modes and collects the scores into one report.

Report Layout:
--------------
One table per matching mode::

    [Center Distance] mAP: 0.7500, mAPH: 0.7000
    | Label     | Car    | Pedestrian |
    | :-------- | :----- | :--------- |
    | Threshold | 1.0    | 1.0        |
    | AP        | 0.7500 | nan        |
    | APH       | 0.7000 | nan        |

mAP / mAPH average the labels whose score is defined; a label whose score is
NaN (no results and no ground truths) is shown as ``nan`` and left out of the
mean.
"""

import math
from typing import Any, Dict, List, Mapping, Sequence

from ..matching import MatchingMode
from ..objects import Label
from ..result import PerceptionResult
from ..utils.logger import LoggerMixin
from .ap import Ap, TPMetrics
from .config import EvaluationTask, MetricsConfig
from .error import UnsupportedTaskError


def mean_defined(values: Sequence[float]) -> float:
    """Mean of the non-NaN values, NaN when there are none."""
    defined = [v for v in values if not math.isnan(v)]
    if not defined:
        return float("nan")
    return sum(defined) / len(defined)


def _format_table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [
        max(len(header[col]), *(len(row[col]) for row in rows))
        for col in range(len(header))
    ]
    lines = [
        "| " + " | ".join(cell.ljust(w) for cell, w in zip(header, widths)) + " |",
        "| " + " | ".join(":" + "-" * (w - 1) for w in widths) + " |",
    ]
    for row in rows:
        lines.append("| " + " | ".join(cell.ljust(w) for cell, w in zip(row, widths)) + " |")
    return "\n".join(lines)


class DetectionMetricsScore:
    """
    AP and APH of every target label under one matching mode.

    Attributes:
        matching_mode: Matching criterion.
        target_labels: Evaluated labels.
        thresholds: Thresholds index-aligned with ``target_labels``.
        aps: One ``Ap`` (AP variant) per label.
        aphs: One ``Ap`` (APH variant) per label.
    """

    def __init__(
        self,
        results_by_label: Mapping[Label, Sequence[PerceptionResult]],
        num_gt_by_label: Mapping[Label, int],
        target_labels: Sequence[Label],
        matching_mode: MatchingMode,
        thresholds: Sequence[float],
    ):
        """
        Compute AP and APH per label.

        Args:
            results_by_label: Results per label, in submission order.
            num_gt_by_label: Ground-truth count per label.
            target_labels: Evaluated labels.
            matching_mode: Matching criterion.
            thresholds: Thresholds index-aligned with ``target_labels``.
        """
        if len(thresholds) != len(target_labels):
            raise ValueError(
                f"thresholds must have one value per target label: "
                f"expected {len(target_labels)}, got {len(thresholds)}"
            )

        self.matching_mode = matching_mode
        self.target_labels = list(target_labels)
        self.thresholds = list(thresholds)

        self.aps: List[Ap] = []
        self.aphs: List[Ap] = []

        for label, threshold in zip(self.target_labels, self.thresholds):
            results = results_by_label.get(label, [])
            num_gt = num_gt_by_label.get(label, 0)

            self.aps.append(Ap(TPMetrics.AP, results, num_gt, matching_mode, threshold))
            self.aphs.append(Ap(TPMetrics.APH, results, num_gt, matching_mode, threshold))

    @property
    def ap_scores(self) -> List[float]:
        return [ap.ap for ap in self.aps]

    @property
    def aph_scores(self) -> List[float]:
        return [aph.ap for aph in self.aphs]

    @property
    def map(self) -> float:
        return mean_defined(self.ap_scores)

    @property
    def maph(self) -> float:
        return mean_defined(self.aph_scores)

    def to_dict(self) -> Dict[str, Any]:
        """Scores keyed by label name."""
        return {
            "matching_mode": str(self.matching_mode),
            "mAP": self.map,
            "mAPH": self.maph,
            "labels": {
                str(label): {"threshold": threshold, "AP": ap, "APH": aph}
                for label, threshold, ap, aph in zip(
                    self.target_labels, self.thresholds, self.ap_scores, self.aph_scores
                )
            },
        }

    def __str__(self) -> str:
        header = ["Label"] + [str(label) for label in self.target_labels]
        rows = [
            ["Threshold"] + [f"{t}" for t in self.thresholds],
            ["AP"] + [f"{v:.4f}" for v in self.ap_scores],
            ["APH"] + [f"{v:.4f}" for v in self.aph_scores],
        ]
        title = f"[{self.matching_mode}] mAP: {self.map:.4f}, mAPH: {self.maph:.4f}"
        return title + "\n" + _format_table(header, rows)


class MetricsScore(LoggerMixin):
    """
    Complete metrics report: one ``DetectionMetricsScore`` per matching mode.
    """

    def __init__(self, config: MetricsConfig):
        """
        Initialize an empty report.

        Args:
            config: Task and thresholds.
        """
        self.config = config
        self.detection_scores: Dict[MatchingMode, DetectionMetricsScore] = {}

    def evaluate(
        self,
        results_by_label: Mapping[Label, Sequence[PerceptionResult]],
        num_gt_by_label: Mapping[Label, int],
    ) -> "MetricsScore":
        """
        Compute the metrics of the configured task.

        Args:
            results_by_label: Results per label, in submission order.
            num_gt_by_label: Ground-truth count per label.

        Returns:
            self

        Raises:
            UnsupportedTaskError: The task is not detection.
        """
        if self.config.evaluation_task is EvaluationTask.DETECTION:
            self.evaluate_detection(results_by_label, num_gt_by_label)
            return self

        raise UnsupportedTaskError(self.config.evaluation_task)

    def evaluate_detection(
        self,
        results_by_label: Mapping[Label, Sequence[PerceptionResult]],
        num_gt_by_label: Mapping[Label, int],
    ) -> None:
        """Compute AP / APH for all four matching modes."""
        for matching_mode in MatchingMode:
            score = DetectionMetricsScore(
                results_by_label,
                num_gt_by_label,
                self.config.target_labels,
                matching_mode,
                self.config.thresholds(matching_mode),
            )
            self.detection_scores[matching_mode] = score
            self.logger.debug(f"{matching_mode}: mAP={score.map:.4f}, mAPH={score.maph:.4f}")

    def __getitem__(self, matching_mode: MatchingMode) -> DetectionMetricsScore:
        return self.detection_scores[matching_mode]

    def to_dict(self) -> Dict[str, Any]:
        return {
            str(mode): score.to_dict() for mode, score in self.detection_scores.items()
        }

    def __str__(self) -> str:
        return "\n\n".join(str(score) for score in self.detection_scores.values())
