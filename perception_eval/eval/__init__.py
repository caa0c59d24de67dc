"""Evaluation configuration, AP / APH scoring and the evaluation manager."""

from .config import (
    EvaluationTask,
    FilterParams,
    MetricsParams,
    MetricsConfig,
    PerceptionEvaluationConfig,
)
from .error import MetricsError, UnsupportedTaskError
from .ap import Ap, TPMetrics
from .metrics import DetectionMetricsScore, MetricsScore
from .manager import PerceptionEvaluationManager

__all__ = [
    "EvaluationTask",
    "FilterParams",
    "MetricsParams",
    "MetricsConfig",
    "PerceptionEvaluationConfig",
    "MetricsError",
    "UnsupportedTaskError",
    "Ap",
    "TPMetrics",
    "DetectionMetricsScore",
    "MetricsScore",
    "PerceptionEvaluationManager",
]
