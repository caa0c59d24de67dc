"""Per-frame ground truth containers."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..objects import DynamicObject

logger = logging.getLogger(__name__)

# Maximum timestamp gap accepted when looking up a frame [ms]
TIME_THRESHOLD_MS = 75


@dataclass(frozen=True)
class FrameGroundTruth:
    """
    Ground-truth objects of one frame.

    Attributes:
        timestamp: Frame timestamp in microseconds.
        objects: Ground-truth objects in annotation order.
    """

    timestamp: int
    objects: Tuple[DynamicObject, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "objects", tuple(self.objects))

    def __len__(self) -> int:
        return len(self.objects)

    def __str__(self) -> str:
        return f"timestamp: {self.timestamp}, num objects: {len(self.objects)}"

    def with_objects(self, objects: Sequence[DynamicObject]) -> "FrameGroundTruth":
        """Copy of this frame holding ``objects``."""
        return FrameGroundTruth(timestamp=self.timestamp, objects=tuple(objects))


def get_current_frame(
    frame_ground_truths: Sequence[FrameGroundTruth],
    timestamp: int,
    time_threshold_ms: float = TIME_THRESHOLD_MS,
) -> Optional[FrameGroundTruth]:
    """
    Find the frame nearest in time to ``timestamp``.

    Args:
        frame_ground_truths: Candidate frames.
        timestamp: Target timestamp in microseconds.
        time_threshold_ms: Largest accepted gap in milliseconds.

    Returns:
        The nearest frame, or None when none is within the threshold.
    """
    if len(frame_ground_truths) == 0:
        logger.warning(f"No frame ground truth available for timestamp: {timestamp}")
        return None

    diffs_ms = [abs(frame.timestamp - timestamp) / 1000.0 for frame in frame_ground_truths]
    min_index = min(range(len(diffs_ms)), key=diffs_ms.__getitem__)
    min_diff_ms = diffs_ms[min_index]

    if min_diff_ms < time_threshold_ms:
        return frame_ground_truths[min_index]

    logger.warning(
        f"Could not find corresponding FrameGroundTruth for timestamp: {timestamp}, "
        f"because {min_diff_ms:.1f} [ms] > {time_threshold_ms} [ms]"
    )
    return None
