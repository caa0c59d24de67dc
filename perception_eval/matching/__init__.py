"""
Matching strategies and score tables.

Classes:
    MatchingMode: CenterDistance, PlaneDistance, Iou2d, Iou3d.
    ScoreTable: Estimation x ground-truth score matrix.

Functions:
    calculate_score: Score a pair with a matching mode.
    is_match: Threshold a pair with a matching mode.
    is_better_score: Direction-aware score comparison.
"""

from .strategy import (
    MatchingMode,
    calculate_score,
    is_match,
    is_better_score,
    center_distance,
    plane_distance,
    iou_2d,
    iou_3d,
)
from .score_table import ScoreTable

__all__ = [
    "MatchingMode",
    "calculate_score",
    "is_match",
    "is_better_score",
    "center_distance",
    "plane_distance",
    "iou_2d",
    "iou_3d",
    "ScoreTable",
]
