"""Estimation x ground-truth score table."""

from dataclasses import dataclass
from typing import Collection, Optional, Sequence

import numpy as np

from ..objects import DynamicObject
from .strategy import MatchingMode, calculate_score, is_better_score


@dataclass(frozen=True, eq=False)
class ScoreTable:
    """
    Dense N x M table of matching scores.

    Rows are estimations, columns ground truths. Cells whose labels differ
    are NaN and never eligible.

    Attributes:
        scores: Score matrix (N, M).
        matching_mode: Mode the scores were computed with.
    """

    scores: np.ndarray
    matching_mode: MatchingMode

    @classmethod
    def build(
        cls,
        estimated_objects: Sequence[DynamicObject],
        ground_truth_objects: Sequence[DynamicObject],
        matching_mode: MatchingMode = MatchingMode.CENTER_DISTANCE,
    ) -> "ScoreTable":
        """
        Score every label-compatible (estimation, ground truth) pair.

        Args:
            estimated_objects: Estimations (rows).
            ground_truth_objects: Ground truths (columns).
            matching_mode: Scoring criterion.

        Returns:
            ScoreTable instance.
        """
        scores = np.full((len(estimated_objects), len(ground_truth_objects)), np.nan)

        for i, est in enumerate(estimated_objects):
            for j, gt in enumerate(ground_truth_objects):
                if est.label == gt.label:
                    scores[i, j] = calculate_score(matching_mode, est, gt)

        scores.setflags(write=False)
        return cls(scores=scores, matching_mode=matching_mode)

    @property
    def shape(self):
        return self.scores.shape

    def is_eligible(self, row: int, col: int) -> bool:
        return not np.isnan(self.scores[row, col])

    def best_index(self, row: int, consumed: Collection[int] = ()) -> Optional[int]:
        """
        Best eligible column of a row, skipping consumed columns.

        The best score is the smallest one for distance modes and the largest
        one for IoU modes. Ties resolve to the lowest column index, so equally
        scored ground truths are taken in input order rather than the last
        one seen winning.

        Args:
            row: Row (estimation) index.
            consumed: Column indices already assigned.

        Returns:
            Column index, or None when no column is eligible.
        """
        best_col = None
        best_score = None

        for col, score in enumerate(self.scores[row]):
            if col in consumed or not self.is_eligible(row, col):
                continue
            if best_score is None or is_better_score(self.matching_mode, score, best_score):
                best_col = col
                best_score = score

        return best_col
