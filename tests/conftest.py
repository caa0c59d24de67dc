"""Shared fixtures for the evaluation tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

TIMESTAMP = 1_000_000


@pytest.fixture
def make_object():
    """Factory for DynamicObject with sensible defaults."""
    from perception_eval.objects import DynamicObject, FrameID, Label

    def _make(
        position=(0.0, 0.0, 0.0),
        orientation=(1.0, 0.0, 0.0, 0.0),
        size=(2.0, 2.0, 2.0),
        label=Label.CAR,
        timestamp=TIMESTAMP,
        **kwargs,
    ):
        return DynamicObject(
            timestamp=timestamp,
            frame_id=FrameID.BASE_LINK,
            position=position,
            orientation=orientation,
            size=size,
            label=label,
            **kwargs,
        )

    return _make


@pytest.fixture
def evaluation_params():
    """``evaluation_config_dict`` block of a detection scenario."""
    return {
        "evaluation_task": "detection",
        "frame_id": "base_link",
        "target_labels": ["car", "pedestrian"],
        "max_x_position": 100.0,
        "max_y_position": 100.0,
        "min_point_number": 0,
        "target_uuids": None,
        "center_distance_threshold": 1.0,
        "plane_distance_threshold": 1.0,
        "iou_2d_threshold": 0.5,
        "iou_3d_threshold": 0.5,
    }


@pytest.fixture
def evaluation_config(evaluation_params):
    from perception_eval.eval import PerceptionEvaluationConfig

    return PerceptionEvaluationConfig.from_dict(evaluation_params)
