"""
Evaluation Configuration.

All configuration is validated when it is built, before any frame is
processed:

- label names must be known to the label converter and name distinct
  labels;
- every per-label list (positions, point counts, thresholds) must have one
  entry per target label. A scalar is broadcast to every label.

Scenario File Layout:
---------------------
The ``evaluation_config_dict`` block of a scenario file holds::

    Evaluation:
      Datasets:
        - path/to/dataset:
            Version: annotation
      PerceptionEvaluationConfig:
        evaluation_config_dict:
          evaluation_task: detection
          frame_id: base_link
          target_labels: [car, bicycle, pedestrian, motorbike]
          max_x_position: 100.0
          max_y_position: 100.0
          min_point_number: 0
          target_uuids: null
          center_distance_threshold: 1.0
          plane_distance_threshold: 2.0
          iou_2d_threshold: 0.5
          iou_3d_threshold: 0.5
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..matching import MatchingMode
from ..objects import FrameID, Label, LabelConverter, convert_labels
from ..utils.config_loader import get_nested, load_config

Number = Union[int, float]


class EvaluationTask(Enum):
    """Evaluation tasks a scenario can request."""

    DETECTION = "detection"
    TRACKING = "tracking"
    PREDICTION = "prediction"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, name: str) -> "EvaluationTask":
        """Parse ``"Detection"`` / ``"detection"`` style names."""
        for task in cls:
            if name.lower() == task.value:
                return task
        raise ValueError(f"Unknown evaluation task: {name}. Valid: {[t.value for t in cls]}")


def _to_labels(target_labels: Sequence[Union[str, Label]], label_prefix: str) -> List[Label]:
    converter = LabelConverter(label_prefix, strict=True)
    names = [label for label in target_labels if not isinstance(label, Label)]
    converted = iter(convert_labels(names, converter))
    labels = [label if isinstance(label, Label) else next(converted) for label in target_labels]

    # Aliases such as "car" and "vehicle.car" resolve to the same label
    duplicates = sorted({str(label) for label in labels if labels.count(label) > 1})
    if duplicates:
        raise ValueError(f"Target labels must be unique, duplicated: {duplicates}")
    return labels


def _broadcast(
    value: Optional[Union[Number, Sequence[Number]]],
    num_labels: int,
    name: str,
) -> Optional[list]:
    """Expand a scalar to one value per label, or check a list's length."""
    if value is None:
        return None

    if isinstance(value, (int, float)):
        return [value] * num_labels

    values = list(value)
    if len(values) != num_labels:
        raise ValueError(
            f"{name} must have one value per target label: "
            f"expected {num_labels}, got {len(values)}"
        )
    return values


@dataclass(frozen=True)
class FilterParams:
    """
    Parameters for filtering objects before matching.

    Attributes:
        target_labels: Evaluated labels.
        max_x_positions: Largest |x| per label [m].
        max_y_positions: Largest |y| per label [m].
        min_point_numbers: Smallest ground-truth point count per label.
        target_uuids: Ground-truth instance ids to keep.
    """

    target_labels: List[Label]
    max_x_positions: List[float]
    max_y_positions: List[float]
    min_point_numbers: Optional[List[int]] = None
    target_uuids: Optional[List[str]] = None

    @classmethod
    def build(
        cls,
        target_labels: Sequence[Union[str, Label]],
        max_x_position: Union[Number, Sequence[Number]],
        max_y_position: Union[Number, Sequence[Number]],
        min_point_number: Optional[Union[int, Sequence[int]]] = None,
        target_uuids: Optional[Sequence[str]] = None,
        label_prefix: str = "autoware",
    ) -> "FilterParams":
        """
        Build and validate filter parameters.

        Args:
            target_labels: Label names or labels.
            max_x_position: Scalar or per-label list.
            max_y_position: Scalar or per-label list.
            min_point_number: Scalar, per-label list or None.
            target_uuids: Instance ids or None.
            label_prefix: Label alias table.

        Returns:
            FilterParams instance.
        """
        labels = _to_labels(target_labels, label_prefix)
        num_labels = len(labels)

        return cls(
            target_labels=labels,
            max_x_positions=[float(v) for v in _broadcast(max_x_position, num_labels, "max_x_position")],
            max_y_positions=[float(v) for v in _broadcast(max_y_position, num_labels, "max_y_position")],
            min_point_numbers=_broadcast(min_point_number, num_labels, "min_point_number"),
            target_uuids=list(target_uuids) if target_uuids is not None else None,
        )


@dataclass(frozen=True)
class MetricsParams:
    """
    Per-label thresholds of the four matching modes.

    Every list is index-aligned with ``target_labels``.
    """

    target_labels: List[Label]
    center_distance_thresholds: List[float]
    plane_distance_thresholds: List[float]
    iou2d_thresholds: List[float]
    iou3d_thresholds: List[float]

    @classmethod
    def build(
        cls,
        target_labels: Sequence[Union[str, Label]],
        center_distance_threshold: Union[Number, Sequence[Number]],
        plane_distance_threshold: Union[Number, Sequence[Number]],
        iou2d_threshold: Union[Number, Sequence[Number]],
        iou3d_threshold: Union[Number, Sequence[Number]],
        label_prefix: str = "autoware",
    ) -> "MetricsParams":
        """
        Build and validate metrics parameters.

        Args:
            target_labels: Label names or labels.
            center_distance_threshold: Scalar or per-label list [m].
            plane_distance_threshold: Scalar or per-label list [m].
            iou2d_threshold: Scalar or per-label list.
            iou3d_threshold: Scalar or per-label list.
            label_prefix: Label alias table.

        Returns:
            MetricsParams instance.
        """
        labels = _to_labels(target_labels, label_prefix)
        num_labels = len(labels)

        def thresholds(value, name):
            return [float(v) for v in _broadcast(value, num_labels, name)]

        return cls(
            target_labels=labels,
            center_distance_thresholds=thresholds(center_distance_threshold, "center_distance_threshold"),
            plane_distance_thresholds=thresholds(plane_distance_threshold, "plane_distance_threshold"),
            iou2d_thresholds=thresholds(iou2d_threshold, "iou_2d_threshold"),
            iou3d_thresholds=thresholds(iou3d_threshold, "iou_3d_threshold"),
        )

    def thresholds(self, matching_mode: MatchingMode) -> List[float]:
        """Threshold list of a matching mode."""
        return {
            MatchingMode.CENTER_DISTANCE: self.center_distance_thresholds,
            MatchingMode.PLANE_DISTANCE: self.plane_distance_thresholds,
            MatchingMode.IOU_2D: self.iou2d_thresholds,
            MatchingMode.IOU_3D: self.iou3d_thresholds,
        }[matching_mode]


@dataclass(frozen=True)
class MetricsConfig:
    """What the metrics aggregator needs: the task and the thresholds."""

    evaluation_task: EvaluationTask
    metrics_params: MetricsParams

    @property
    def target_labels(self) -> List[Label]:
        return self.metrics_params.target_labels

    def thresholds(self, matching_mode: MatchingMode) -> List[float]:
        return self.metrics_params.thresholds(matching_mode)


@dataclass(frozen=True)
class PerceptionEvaluationConfig:
    """
    Complete evaluation settings.

    Attributes:
        evaluation_task: Task to evaluate.
        frame_id: Frame objects are expressed in.
        filter_params: Object filtering parameters.
        metrics_params: Matching thresholds.
        dataset_path: Dataset root, if any.
        version: Dataset version, if any.
        result_dir: Directory for outputs such as the log, if any.
    """

    evaluation_task: EvaluationTask
    frame_id: FrameID
    filter_params: FilterParams
    metrics_params: MetricsParams
    dataset_path: Optional[Path] = None
    version: Optional[str] = None
    result_dir: Optional[Path] = None

    @property
    def log_dir(self) -> Optional[Path]:
        return self.result_dir / "log" if self.result_dir is not None else None

    @property
    def metrics_config(self) -> MetricsConfig:
        return MetricsConfig(self.evaluation_task, self.metrics_params)

    @property
    def target_labels(self) -> List[Label]:
        return self.metrics_params.target_labels

    @classmethod
    def from_dict(
        cls,
        params: Dict[str, Any],
        result_dir: Optional[Union[str, Path]] = None,
        dataset_path: Optional[Union[str, Path]] = None,
        version: Optional[str] = None,
    ) -> "PerceptionEvaluationConfig":
        """
        Build a config from an ``evaluation_config_dict`` mapping.

        Args:
            params: Evaluation parameters.
            result_dir: Output directory.
            dataset_path: Dataset root.
            version: Dataset version.

        Returns:
            PerceptionEvaluationConfig instance.
        """
        label_prefix = params.get("label_prefix", "autoware")
        target_labels = params["target_labels"]

        filter_params = FilterParams.build(
            target_labels,
            max_x_position=params["max_x_position"],
            max_y_position=params["max_y_position"],
            min_point_number=params.get("min_point_number"),
            target_uuids=params.get("target_uuids"),
            label_prefix=label_prefix,
        )
        metrics_params = MetricsParams.build(
            target_labels,
            center_distance_threshold=params["center_distance_threshold"],
            plane_distance_threshold=params["plane_distance_threshold"],
            iou2d_threshold=params["iou_2d_threshold"],
            iou3d_threshold=params["iou_3d_threshold"],
            label_prefix=label_prefix,
        )

        return cls(
            evaluation_task=EvaluationTask.from_str(params["evaluation_task"]),
            frame_id=FrameID.from_str(params.get("frame_id", "base_link")),
            filter_params=filter_params,
            metrics_params=metrics_params,
            dataset_path=Path(dataset_path) if dataset_path is not None else None,
            version=version,
            result_dir=Path(result_dir) if result_dir is not None else None,
        )

    @classmethod
    def from_scenario(
        cls,
        scenario_path: Union[str, Path],
        result_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "PerceptionEvaluationConfig":
        """
        Build a config from a scenario YAML file.

        Args:
            scenario_path: Path to the scenario file.
            result_dir: Output directory.
            overrides: Values merged over the scenario's
                ``evaluation_config_dict`` block.

        Returns:
            PerceptionEvaluationConfig instance.
        """
        if overrides:
            overrides = {"Evaluation": {"PerceptionEvaluationConfig": {"evaluation_config_dict": overrides}}}
        scenario = load_config(scenario_path, overrides=overrides)

        params = get_nested(scenario, "Evaluation.PerceptionEvaluationConfig.evaluation_config_dict")
        if params is None:
            raise KeyError(
                f"Missing Evaluation.PerceptionEvaluationConfig.evaluation_config_dict in {scenario_path}"
            )

        dataset_path = None
        version = None
        datasets = get_nested(scenario, "Evaluation.Datasets", default=[])
        if datasets:
            dataset_path, dataset = next(iter(datasets[0].items()))
            version = (dataset or {}).get("Version")

        return cls.from_dict(
            params,
            result_dir=result_dir,
            dataset_path=dataset_path,
            version=version,
        )
