"""Errors raised by metrics aggregation."""


class MetricsError(Exception):
    """Base class for metrics errors."""


class UnsupportedTaskError(MetricsError):
    """Raised when metrics are requested for a task that has no scorer."""

    def __init__(self, evaluation_task):
        self.evaluation_task = evaluation_task
        super().__init__(f"Metrics are not implemented for task: {evaluation_task}")
