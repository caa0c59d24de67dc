"""
Perception Evaluation Manager.

Feeds frames through filtering, assignment and TP / FP / FN separation, and
accumulates per-label results for the final metrics.

Pipeline per frame:
    estimations ──► filter ──┐
                             ├──► assignment ──► frame result ──► accumulators
    ground truth ──► filter ─┘

Frames must be submitted in order: the AP curves are built from the results
in submission order, so the same frames in another order can give another
score.
"""

from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from ..data import FrameGroundTruth, filter_objects, get_current_frame
from ..matching import MatchingMode
from ..objects import DynamicObject, Label
from ..result import (
    PerceptionFrameResult,
    PerceptionResult,
    count_objects_by_label,
    divide_results_by_label,
    get_perception_results,
)
from ..utils.logger import LoggerMixin, add_file_handler
from .config import PerceptionEvaluationConfig
from .metrics import MetricsScore


class PerceptionEvaluationManager(LoggerMixin):
    """
    Evaluate perception results frame by frame.

    Example:
        >>> manager = PerceptionEvaluationManager(config, frame_ground_truths)
        >>> for timestamp, estimated_objects in stream:
        ...     frame = manager.get_frame_ground_truth(timestamp)
        ...     if frame is not None:
        ...         manager.add_frame_result(estimated_objects, frame)
        >>> print(manager.get_metrics_score())
    """

    def __init__(
        self,
        config: PerceptionEvaluationConfig,
        frame_ground_truths: Sequence[FrameGroundTruth] = (),
    ):
        """
        Initialize the manager.

        Args:
            config: Evaluation settings.
            frame_ground_truths: Ground-truth frames available for lookup.
        """
        self.config = config
        self.frame_ground_truths = list(frame_ground_truths)

        if config.log_dir is not None:
            add_file_handler(config.log_dir / "output.log", level="DEBUG")

        self.reset()

    def reset(self) -> None:
        """Drop all accumulated frames."""
        self.frame_results: List[PerceptionFrameResult] = []
        self.results_by_label: Dict[Label, List[PerceptionResult]] = OrderedDict(
            (label, []) for label in self.config.target_labels
        )
        self.num_gt_by_label: Dict[Label, int] = OrderedDict(
            (label, 0) for label in self.config.target_labels
        )

    @property
    def target_labels(self) -> List[Label]:
        return self.config.target_labels

    def get_frame_ground_truth(self, timestamp: int) -> Optional[FrameGroundTruth]:
        """Ground-truth frame nearest to ``timestamp``, or None."""
        return get_current_frame(self.frame_ground_truths, timestamp)

    def add_frame_result(
        self,
        estimated_objects: Sequence[DynamicObject],
        frame_ground_truth: FrameGroundTruth,
    ) -> PerceptionFrameResult:
        """
        Evaluate one frame and accumulate its results.

        Args:
            estimated_objects: Estimations of the frame.
            frame_ground_truth: Ground truth of the frame.

        Returns:
            The frame's TP / FP / FN classification.
        """
        filter_params = self.config.filter_params

        estimated_objects = filter_objects(estimated_objects, is_gt=False, filter_params=filter_params)
        ground_truth_objects = filter_objects(
            frame_ground_truth.objects, is_gt=True, filter_params=filter_params
        )
        filtered_frame = frame_ground_truth.with_objects(ground_truth_objects)

        results = get_perception_results(estimated_objects, ground_truth_objects)

        frame_result = PerceptionFrameResult.build(
            results,
            filtered_frame,
            self.target_labels,
            self.config.metrics_params.thresholds(MatchingMode.CENTER_DISTANCE),
            MatchingMode.CENTER_DISTANCE,
        )
        self.frame_results.append(frame_result)

        for label, label_results in divide_results_by_label(results, self.target_labels).items():
            self.results_by_label[label].extend(label_results)
        for label, count in count_objects_by_label(ground_truth_objects, self.target_labels).items():
            self.num_gt_by_label[label] += count

        self.logger.debug(str(frame_result))
        return frame_result

    def get_metrics_score(self) -> MetricsScore:
        """
        Compute metrics over every frame added so far.

        Raises:
            UnsupportedTaskError: The configured task is not detection.
        """
        self.logger.info(f"Computing metrics over {len(self.frame_results)} frames")
        return MetricsScore(self.config.metrics_config).evaluate(
            self.results_by_label, self.num_gt_by_label
        )
