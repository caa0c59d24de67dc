"""Estimation / ground-truth pairs."""

from dataclasses import dataclass
from typing import Optional

from ..matching import MatchingMode, calculate_score, is_match
from ..objects import DynamicObject


@dataclass(frozen=True)
class PerceptionResult:
    """
    One estimation paired with its assigned ground truth.

    A missing ground truth marks the estimation as a false positive.

    Attributes:
        estimated_object: Estimated object.
        ground_truth_object: Assigned ground truth, or None.
    """

    estimated_object: DynamicObject
    ground_truth_object: Optional[DynamicObject] = None

    @property
    def is_false_positive(self) -> bool:
        return self.ground_truth_object is None

    def is_label_correct(self) -> bool:
        if self.ground_truth_object is None:
            return False
        return self.estimated_object.label == self.ground_truth_object.label

    def matching_score(self, matching_mode: MatchingMode) -> Optional[float]:
        """Score of the pair, or None without a ground truth."""
        if self.ground_truth_object is None:
            return None
        return calculate_score(matching_mode, self.estimated_object, self.ground_truth_object)

    def is_result_correct(self, matching_mode: MatchingMode, threshold: float) -> bool:
        """
        Whether the pair matches under a threshold.

        Args:
            matching_mode: Matching criterion.
            threshold: Threshold for the estimation's label.

        Returns:
            False when there is no ground truth.
        """
        if self.ground_truth_object is None:
            return False
        return is_match(matching_mode, self.estimated_object, self.ground_truth_object, threshold)
